"""ExchangeSelector: choosing rack tiles to swap for fresh ones."""

import logging
from typing import Callable, List, Optional
from pydantic import BaseModel, ConfigDict

from .composer import MoveComposer
from .models import SubmissionResult


logger = logging.getLogger(__name__)


class ExchangeSelector(BaseModel):
    """
    Exchange mode of the composer's rack.

    The mode flag and the selection are stored on the composer, so a word
    and an exchange can never be in progress at the same time.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    composer: MoveComposer

    @property
    def active(self) -> bool:
        return self.composer.exchanging

    @property
    def selection(self) -> List[int]:
        return list(self.composer.exchange_selection)

    def start(self) -> bool:
        """Enter exchange mode. Rejected while a word is being composed."""
        if self.composer.word:
            logger.debug("Exchange not started: word in progress")
            return False
        self.composer.clear()
        self.composer.exchanging = True
        self.composer.exchange_selection = []
        return True

    def toggle(self, index: int) -> bool:
        """Select or deselect a rack tile."""
        if not self.active or not 0 <= index < len(self.composer.rack):
            return False
        selection = self.composer.exchange_selection
        if index in selection:
            self.composer.exchange_selection = [i for i in selection if i != index]
        else:
            self.composer.exchange_selection = [*selection, index]
        return True

    def cancel(self) -> None:
        """Leave exchange mode and drop the selection."""
        self.composer.exchanging = False
        self.composer.exchange_selection = []

    def selected_letters(self) -> List[str]:
        """Letters under the selected indices. Stale indices are skipped."""
        letters = []
        for index in self.composer.exchange_selection:
            letter = self.composer.rack.letter_at(index)
            if letter is not None:
                letters.append(letter)
        return letters

    def confirm(self, submit: Callable[[List[str]], SubmissionResult]) -> Optional[SubmissionResult]:
        """
        Hand the selected letters to `submit`.

        Returns None without calling `submit` when not in exchange mode or
        when no selected index resolves to a tile. On acceptance the mode
        and selection are cleared; on rejection both are kept.
        """
        if not self.active:
            return None
        letters = self.selected_letters()
        if not letters:
            return None

        result = submit(letters)
        if result.accepted:
            self.cancel()
        return result
