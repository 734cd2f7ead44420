"""
GameSession: one player's connection to one game.

Ties the move composer and exchange selector to the game service. Requests
that fail in transport or are rejected by the server end up in `error`;
nothing here raises to the presentation layer.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field
import requests

from ..composer.models import BoardSnapshot, RackSnapshot, ValidationVerdict, DEFAULT_DIRECTION
from ..composer.parsing import parse_drop_payload, parse_key
from .api_client import GameServiceClient, GameServiceError
from .composer import MoveComposer
from .exchange import ExchangeSelector
from .models import ClientConfig, GameSnapshot, SubmissionResult


logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (GameServiceError, requests.RequestException)


class GameSession(BaseModel):
    """
    One client's view of one game.

    Owns the composer and exchange selector, keeps the latest snapshot
    from the server, and turns submission results and transport failures
    into state the presentation layer can show.

    Attributes:
        client: HTTP client for the game service
        config: Client configuration
        game_id: Id of the loaded game
        snapshot: Latest state fetched from the server
        composer: The in-progress move
        exchange: Exchange mode over the composer's rack
        error: Last message to show the player, if any
        pending: True while a request to the server is in flight
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    client: GameServiceClient
    config: ClientConfig = Field(default_factory=ClientConfig)
    game_id: Optional[str] = None
    snapshot: Optional[GameSnapshot] = None
    composer: MoveComposer = Field(default_factory=MoveComposer)
    exchange: Optional[ExchangeSelector] = None
    error: Optional[str] = None
    pending: bool = False

    def model_post_init(self, __context) -> None:
        """Bind the exchange selector to this session's composer."""
        if self.exchange is None:
            self.exchange = ExchangeSelector(composer=self.composer)

    @classmethod
    def create(cls, config: Optional[ClientConfig] = None, **config_kwargs: Any) -> "GameSession":
        """
        Factory method to create a session with a configured HTTP client.

        Args:
            config: Optional ClientConfig instance
            **config_kwargs: Config parameters if config not provided

        Returns:
            A GameSession with no game loaded yet
        """
        if config is None:
            config = ClientConfig(**config_kwargs)
        client = GameServiceClient(base_url=config.base_url, timeout=config.timeout)
        return cls(client=client, config=config, game_id=config.game_id)

    # --- read accessors ---

    @property
    def board(self) -> Optional[BoardSnapshot]:
        return self.snapshot.board if self.snapshot else None

    @property
    def rack(self) -> RackSnapshot:
        return self.snapshot.current_rack if self.snapshot else RackSnapshot()

    def verdict(self) -> ValidationVerdict:
        return self.composer.verdict()

    # --- loading ---

    def new_game(self, players: Optional[int] = None) -> Optional[str]:
        """Create a game on the server and load it."""
        try:
            game_id = self.client.new_game(players or self.config.players)
        except TRANSPORT_ERRORS as e:
            self._fail("Could not create game", e)
            return None
        self.load(game_id)
        return game_id

    def load(self, game_id: str) -> bool:
        """Switch to a game and fetch its state."""
        if game_id != self.game_id:
            self.snapshot = None
            self.composer.clear()
            self.exchange.cancel()
        self.game_id = game_id
        return self.refresh()

    def refresh(self, own_move: bool = False) -> bool:
        """
        Fetch the latest game state and hand it to the composer.

        A changed board or acting player counts as a new turn, which resets
        the composition (the anchor is kept). `own_move` marks a refresh
        that follows this player's accepted submission.
        """
        if not self.game_id:
            return False

        previous = self.snapshot
        self.pending = True
        try:
            snapshot = self.client.fetch_snapshot(
                self.game_id,
                layout=previous.layout if previous else None,
            )
        except TRANSPORT_ERRORS as e:
            self._fail("Could not load game", e)
            return False
        finally:
            self.pending = False

        new_turn = (
            own_move
            or previous is None
            or previous.board != snapshot.board
            or previous.current_player != snapshot.current_player
        )
        self.snapshot = snapshot
        self.error = None
        self.composer.receive_snapshot(snapshot.board, snapshot.current_rack, new_turn=new_turn)

        if self.config.center_anchor and self.composer.anchor is None and not self.composer.exchanging:
            center = snapshot.board.center
            self.composer.set_anchor(center.x, center.y)

        logger.info(
            "Loaded game %s: player %d to move, %d tiles in rack",
            self.game_id, snapshot.current_player, len(snapshot.current_rack),
        )
        return True

    # --- composition input ---

    def set_anchor(self, x: int, y: int) -> bool:
        """Board cell clicked: clears the last message and moves the anchor."""
        self.error = None
        return self.composer.set_anchor(x, y)

    def place_at_cell(self, x: int, y: int, letter: str = "", rack_index: Optional[int] = None) -> bool:
        placed = self.composer.place_at_cell(x, y, letter, rack_index)
        if placed:
            self.error = None
        return placed

    def handle_drop(self, x: int, y: int, data: Mapping[str, Any]) -> bool:
        """Drag-and-drop onto (x, y) with raw transfer data. Occupied cells refuse drops."""
        if self.board is not None and self.board.letter_at(x, y) is not None:
            logger.debug("Drop at (%d, %d) ignored: cell already holds a tile", x, y)
            return False
        command = parse_drop_payload(x, y, data)
        if command is None:
            return False
        return self.place_at_cell(command.x, command.y, command.letter, command.source_rack_index)

    def handle_key(self, key: str) -> bool:
        """Dispatch a key press. Returns True if it changed anything."""
        command = parse_key(key)
        if command is None:
            return False

        if command.kind == "letter":
            return self.composer.append_from_keyboard(command.letter)
        if command.kind == "backspace":
            return self.composer.backspace()
        if command.kind == "cancel":
            if self.composer.exchanging:
                self.exchange.cancel()
            else:
                self.composer.clear()
            self.error = None
            return True
        if command.kind == "submit":
            if self.composer.exchanging:
                return self.confirm_exchange() is not None
            return self.submit_move() is not None
        if command.kind == "flip":
            return self.composer.flip_direction()
        return self.composer.set_direction(command.kind)

    # --- submissions ---

    def submit_move(self) -> Optional[SubmissionResult]:
        """
        Send the composed move to the server.

        Does nothing unless a game is loaded and the move passes the local
        checks. On acceptance the composer is cleared and the game refreshed;
        on rejection the move is kept and the reason stored in `error`.
        """
        composer = self.composer
        if not self.game_id or composer.anchor is None or not composer.word:
            return None
        if not composer.verdict().ok:
            return None

        anchor = composer.anchor
        direction = composer.direction or DEFAULT_DIRECTION
        result = self._submit(
            lambda: self.client.submit_move(self.game_id, anchor.x, anchor.y, composer.word, direction),
            "Invalid move",
        )
        if result is not None and result.accepted:
            composer.clear()
            self.refresh(own_move=True)
        return result

    def skip_turn(self) -> Optional[SubmissionResult]:
        """Give up the turn. Any partial move is dropped first."""
        if not self.game_id:
            return None
        self.composer.clear()
        self.exchange.cancel()

        result = self._submit(lambda: self.client.submit_skip_turn(self.game_id), "Skip failed")
        if result is not None and result.accepted:
            self.refresh(own_move=True)
        return result

    def set_nickname(self, player: int, nickname: str) -> Optional[SubmissionResult]:
        """Store a player's nickname on the server."""
        nickname = nickname.strip()
        if not self.game_id or not nickname:
            return None
        result = self._submit(
            lambda: self.client.set_nickname(self.game_id, player, nickname),
            "Nickname not saved",
        )
        if result is not None and result.accepted:
            self.refresh()
        return result

    def start_exchange(self) -> bool:
        return self.exchange.start()

    def toggle_exchange(self, index: int) -> bool:
        return self.exchange.toggle(index)

    def cancel_exchange(self) -> None:
        self.exchange.cancel()

    def confirm_exchange(self) -> Optional[SubmissionResult]:
        """Send the selected tiles for exchange."""
        if not self.game_id:
            return None
        result = self._submit(
            lambda: self.exchange.confirm(lambda letters: self.client.submit_exchange(self.game_id, letters)),
            "Exchange failed",
        )
        if result is not None and result.accepted:
            self.refresh(own_move=True)
        return result

    def _submit(
        self,
        call: Callable[[], Optional[SubmissionResult]],
        default_error: str,
    ) -> Optional[SubmissionResult]:
        self.pending = True
        self.error = None
        try:
            result = call()
        except TRANSPORT_ERRORS as e:
            self._fail(default_error, e)
            return None
        finally:
            self.pending = False

        if result is not None and not result.accepted:
            self.error = result.reason or default_error
            logger.info("Server rejected request: %s", self.error)
        return result

    def _fail(self, context: str, exc: Exception) -> None:
        logger.warning("%s: %s", context, exc)
        self.error = str(exc) or context

    def get_state(self) -> Dict:
        """
        Get the session state as a dictionary.

        Useful for display and logging.
        """
        verdict = self.verdict()
        return {
            "game_id": self.game_id,
            "current_player": self.snapshot.current_player if self.snapshot else None,
            "rack": list(self.rack.letters),
            "composer": self.composer.get_state(),
            "verdict_ok": verdict.ok,
            "missing": verdict.missing_labels,
            "error": self.error,
            "pending": self.pending,
        }
