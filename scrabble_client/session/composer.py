"""
MoveComposer: the in-progress move of the acting player.

Accepts letters from three input channels (rack clicks, drag-and-drop,
keyboard) and keeps the move in one shape: a contiguous run of letters
extending from the anchor in one fixed direction. Impossible input is
ignored rather than reported; the presentation layer is expected to
disable the matching affordances.
"""

import logging
from typing import List, Dict, Optional, Literal, Set
from pydantic import BaseModel, Field

from ..composer.models import (
    BoardSnapshot,
    RackSnapshot,
    Cell,
    Direction,
    ValidationVerdict,
    DEFAULT_DIRECTION,
)
from ..composer.grid import offset, target_cells, direction_towards
from ..composer.parsing import normalize_letter
from ..composer.verify import compute_verdict


logger = logging.getLogger(__name__)

Phase = Literal["empty", "anchored", "direction_pending", "direction_fixed", "exchange"]


class MoveComposer(BaseModel):
    """
    Holds the single in-progress move and the rack it draws from.

    Attributes:
        board: Last board snapshot received from the server
        rack: Rack of the acting player
        anchor: Cell of the first letter, if chosen
        direction: Placement direction, None while undetermined
        word: Composed letters (uppercase)
        letter_sources: Rack index per letter, None for unsourced letters
        exchanging: Whether the rack is in exchange mode
        exchange_selection: Rack indices marked for exchange
    """

    board: Optional[BoardSnapshot] = None
    rack: RackSnapshot = Field(default_factory=RackSnapshot)
    anchor: Optional[Cell] = None
    direction: Optional[Direction] = None
    word: str = ""
    letter_sources: List[Optional[int]] = Field(default_factory=list)
    exchanging: bool = False
    exchange_selection: List[int] = Field(default_factory=list)

    @property
    def phase(self) -> Phase:
        """Current state of the composition state machine."""
        if self.exchanging:
            return "exchange"
        if not self.word:
            return "anchored" if self.anchor is not None else "empty"
        if len(self.word) == 1:
            return "direction_pending"
        return "direction_fixed"

    @property
    def used_rack_indices(self) -> Set[int]:
        """
        Rack slots committed to the current word.

        Sourced letters contribute their own index. Unsourced letters claim
        the first free rack tile holding the same letter, if any.
        """
        used = {i for i in self.letter_sources if i is not None}
        for letter, source in zip(self.word, self.letter_sources):
            if source is None:
                index = self._free_index_for(letter, used)
                if index is not None:
                    used.add(index)
        return used

    # --- anchor and direction ---

    def set_anchor(self, x: int, y: int) -> bool:
        """Move the anchor. Only allowed before the first letter is placed."""
        if self.exchanging or self.word:
            logger.debug("Anchor change to (%d, %d) ignored: word in progress", x, y)
            return False
        self.anchor = Cell(x, y)
        return True

    def set_direction(self, direction: Direction) -> bool:
        """Choose the direction explicitly while the word has at most one letter."""
        if self.exchanging or len(self.word) > 1:
            return False
        self.direction = direction
        return True

    def flip_direction(self) -> bool:
        """Toggle between row and column while the direction is still open."""
        if self.exchanging:
            return False
        current = self.direction or DEFAULT_DIRECTION
        return self.set_direction("col" if current == "row" else "row")

    # --- appending letters ---

    def append_from_rack(self, index: int) -> bool:
        """Append the tile at a rack index. Each tile can be used once per move."""
        if self.exchanging:
            return False
        resolved = self._resolve_index(None, index)
        if resolved is None:
            logger.debug("Rack index %d rejected", index)
            return False
        self._append(resolved)
        return True

    def append_from_keyboard(self, letter: str) -> bool:
        """Append the first free rack tile holding `letter`."""
        if self.exchanging:
            return False
        resolved = self._resolve_index(letter, None)
        if resolved is None:
            logger.debug("No free rack tile for %r", letter)
            return False
        self._append(resolved)
        return True

    def place_at_cell(self, x: int, y: int, letter: str = "", rack_index: Optional[int] = None) -> bool:
        """
        Drop a letter on a board cell.

        - Empty word: the cell becomes the anchor and the letter is appended.
        - One letter: only the cell right of or below the anchor is accepted;
          it fixes the direction to row or column.
        - Two or more letters: only the next cell along the direction is
          accepted. Gaps and re-ordering are rejected.

        Returns True if the letter was placed.
        """
        if self.exchanging:
            return False

        resolved = self._resolve_index(letter, rack_index)
        if resolved is None:
            return False

        if self.anchor is None or not self.word:
            self.anchor = Cell(x, y)
            self._append(resolved)
            return True

        if len(self.word) == 1:
            direction = direction_towards(self.anchor, x, y)
            if direction is None:
                logger.debug("Drop at (%d, %d) not adjacent to anchor %s", x, y, self.anchor)
                return False
            self.direction = direction
            self._append(resolved)
            return True

        expected = offset(self.anchor, self.direction, len(self.word))
        if (x, y) != expected:
            logger.debug("Drop at (%d, %d) rejected, next cell is %s", x, y, expected)
            return False
        self._append(resolved)
        return True

    def set_word(self, text: str) -> bool:
        """Replace the word with free text. Letters are not tied to rack slots."""
        if self.exchanging:
            return False
        self.word = "".join(ch.upper() for ch in text if ch.isalpha())
        self.letter_sources = [None] * len(self.word)
        if len(self.word) > 1 and self.direction is None:
            self.direction = DEFAULT_DIRECTION
        return True

    # --- undo ---

    def backspace(self) -> bool:
        """Remove the last letter. The direction stays as it was."""
        if not self.word:
            return False
        self.word = self.word[:-1]
        self.letter_sources = self.letter_sources[:-1]
        return True

    def clear(self) -> None:
        """Reset the move: anchor, direction and word."""
        self.anchor = None
        self.direction = None
        self.word = ""
        self.letter_sources = []

    # --- snapshots and validation ---

    def receive_snapshot(self, board: BoardSnapshot, rack: RackSnapshot, new_turn: bool = False) -> None:
        """
        Install fresh snapshots from the server.

        On a new turn the composition and exchange state are reset, keeping
        the anchor. Otherwise the move is kept as is and checked against the
        new rack at the next verdict.
        """
        self.board = board
        self.rack = rack
        if new_turn:
            anchor = self.anchor
            self.clear()
            self.anchor = anchor
            self.exchanging = False
            self.exchange_selection = []

    def target_cells(self) -> List[Cell]:
        """Cells the composed word occupies, including off-board ones."""
        if self.anchor is None:
            return []
        return target_cells(self.anchor, self.direction, len(self.word))

    def verdict(self) -> ValidationVerdict:
        """Check the move against the current board and rack."""
        return compute_verdict(self.board, self.rack, self.anchor, self.direction, self.word)

    def get_state(self) -> Dict:
        """
        Get the composer state as a dictionary.

        Useful for display and logging.
        """
        return {
            "phase": self.phase,
            "anchor": tuple(self.anchor) if self.anchor else None,
            "direction": self.direction,
            "word": self.word,
            "letter_sources": list(self.letter_sources),
            "exchanging": self.exchanging,
            "exchange_selection": list(self.exchange_selection),
        }

    # --- internals ---

    def _free_index_for(self, letter: str, used: Set[int]) -> Optional[int]:
        for i, tile in enumerate(self.rack.letters):
            if i not in used and tile == letter:
                return i
        return None

    def _resolve_index(self, letter: Optional[str], rack_index: Optional[int]) -> Optional[int]:
        """Rack slot for the next letter, or None if it cannot be supplied."""
        sourced = {i for i in self.letter_sources if i is not None}
        if rack_index is not None:
            if rack_index in sourced or self.rack.letter_at(rack_index) is None:
                return None
            return rack_index

        upper = normalize_letter(letter)
        if upper is None:
            return None
        return self._free_index_for(upper, sourced)

    def _append(self, index: int) -> None:
        self.word += self.rack.letters[index].upper()
        self.letter_sources = [*self.letter_sources, index]
        if len(self.word) > 1 and self.direction is None:
            self.direction = DEFAULT_DIRECTION
