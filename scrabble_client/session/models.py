"""
Pydantic models for the session layer.

This module contains the data models (configuration, server responses,
snapshots) used by the session layer. The stateful classes (MoveComposer,
ExchangeSelector, GameServiceClient, GameSession) live in their own files.
"""

import os
from typing import List, Dict, Optional, Literal
from pydantic import AliasChoices, BaseModel, Field, ConfigDict

from ..composer.models import BoardSnapshot, RackSnapshot, Direction


DEFAULT_BASE_URL = "http://127.0.0.1:5000"

SubmissionStatus = Literal["ok", "failed"]


def default_base_url() -> str:
    """Server URL from SCRABBLE_API_URL, falling back to the local default."""
    return os.environ.get("SCRABBLE_API_URL") or DEFAULT_BASE_URL


class SubmissionResult(BaseModel):
    """
    Server answer to a move, exchange, skip or nickname request.

    Nickname answers carry the outcome under `status` instead of `result`.
    """
    result: SubmissionStatus = Field(validation_alias=AliasChoices("result", "status"))
    error_description: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.result == "ok"

    @property
    def reason(self) -> Optional[str]:
        """Rejection reason reported by the server, if any."""
        return None if self.accepted else self.error_description


class LogEvent(BaseModel):
    """A single entry of the game's move history."""
    model_config = ConfigDict(extra='allow')

    type: str
    player: Optional[int] = None
    time_epoch: Optional[float] = None
    message: Optional[str] = None
    word: Optional[str] = None
    x: Optional[int] = None
    y: Optional[int] = None
    direction: Optional[Direction] = None
    points: Optional[int] = None
    number_of_letters: Optional[int] = None

    def describe(self) -> str:
        """Human-readable detail line (coordinates are 1-based)."""
        if self.type == "word_placement" and self.word is not None and self.x is not None and self.y is not None:
            arrow = {"row": "→", "col": "↓"}.get(self.direction or "", "")
            detail = f"{self.word} [{self.x + 1},{self.y + 1}] {arrow}".rstrip()
            if self.points is not None:
                detail += f" +{self.points}"
            return detail
        if self.type == "turn_skipped":
            return "Turn skipped"
        if self.type == "letters_replaced":
            count = self.number_of_letters if self.number_of_letters is not None else "?"
            return f"Exchanged {count} letters"
        return self.message or ""


class GameSnapshot(BaseModel):
    """Everything fetched from the server in one refresh."""
    game_id: str
    board: BoardSnapshot
    num_players: int = 0
    current_player: int = 0
    racks: Dict[int, RackSnapshot] = Field(default_factory=dict)
    points: Dict[int, int] = Field(default_factory=dict)
    letter_values: Dict[str, int] = Field(default_factory=dict)
    layout: Optional[List[List[Optional[str]]]] = None
    log: List[LogEvent] = Field(default_factory=list)
    nicknames: Dict[int, str] = Field(default_factory=dict)

    @property
    def current_rack(self) -> RackSnapshot:
        """Rack of the player whose turn it is."""
        return self.racks.get(self.current_player, RackSnapshot())

    def player_name(self, player: int) -> str:
        """Nickname of a player, or "Player N" (1-based) when none is set."""
        return self.nicknames.get(player) or f"Player {player + 1}"


class ClientConfig(BaseModel):
    """Configuration for a client run."""
    base_url: str = Field(default_factory=default_base_url)
    timeout: float = Field(default=10.0, gt=0)
    game_id: Optional[str] = None
    players: int = Field(default=2, ge=2, le=4)
    center_anchor: bool = False
    log_level: str = "WARNING"
