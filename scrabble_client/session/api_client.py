"""
HTTP client for the remote game service.

The server owns the board, racks, scores and turn order. This module maps
its JSON endpoints onto typed snapshots and submission results; anything
other than a 2xx answer is raised as GameServiceError.
"""

import logging
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
import requests

from ..composer.models import BoardSnapshot, RackSnapshot, Direction
from .models import SubmissionResult, LogEvent, GameSnapshot, default_base_url


logger = logging.getLogger(__name__)


class GameServiceError(Exception):
    """The game server answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message or f"HTTP {status_code}")
        self.status_code = status_code


class GameServiceClient(BaseModel):
    """
    Client for the remote game service.

    Thin wrapper over the server's HTTP endpoints. The server is the source
    of truth for the board, racks, scoring and turn order.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    base_url: str = Field(default_factory=default_base_url)
    timeout: float = 10.0
    http: requests.Session = Field(default_factory=requests.Session)

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            GameServiceError: If the server answers with an error status
            requests.RequestException: On connection problems or timeouts
        """
        url = f"{self.base_url.rstrip('/')}{path}"
        logger.debug("%s %s params=%s", method, url, params)

        response = self.http.request(
            method,
            url,
            params=params,
            headers={"Cache-Control": "no-store"},
            timeout=self.timeout,
        )
        if not response.ok:
            logger.warning("%s %s failed with HTTP %s", method, path, response.status_code)
            raise GameServiceError(response.status_code, response.text)
        return response.json()

    # --- game lifecycle ---

    def new_game(self, players: int = 2) -> str:
        """Create a game and return its id."""
        data = self._request("GET", "/new-game", {"players": players})
        return str(data["game_id"])

    # --- reads ---

    def fetch_board(self, game_id: str) -> BoardSnapshot:
        data = self._request("GET", f"/g/{game_id}/board")
        return BoardSnapshot(cells=data["board"])

    def fetch_board_layout(self) -> List[List[Optional[str]]]:
        """Bonus square layout (TW/DW/TL/DL or null per cell)."""
        data = self._request("GET", "/board-layout")
        return data["board_layout"]

    def fetch_num_players(self, game_id: str) -> int:
        data = self._request("GET", f"/g/{game_id}/number-of-players")
        return int(data["number_of_players"])

    def fetch_current_player(self, game_id: str) -> int:
        data = self._request("GET", f"/g/{game_id}/current-player")
        return int(data["current_player"])

    def fetch_rack(self, game_id: str, player: int) -> RackSnapshot:
        data = self._request("GET", f"/g/{game_id}/p/{player}/hand")
        return RackSnapshot(letters=data["hand"])

    def fetch_points(self, game_id: str) -> Dict[int, int]:
        data = self._request("GET", f"/g/{game_id}/player-points")
        return {i: int(p) for i, p in enumerate(data["player_points"])}

    def fetch_letter_values(self) -> Dict[str, int]:
        """Tile values. The server may wrap them in a `letter_values` object."""
        data = self._request("GET", "/letter-values")
        if isinstance(data, dict) and isinstance(data.get("letter_values"), dict):
            data = data["letter_values"]
        return {str(k).upper(): int(v) for k, v in data.items()}

    def fetch_log(self, game_id: str) -> List[LogEvent]:
        data = self._request("GET", f"/g/{game_id}/log")
        return [LogEvent(**event) for event in data.get("log", [])]

    def fetch_nicknames(self, game_id: str) -> Dict[int, str]:
        """Nicknames by player index. Players without one are left out."""
        data = self._request("GET", f"/g/{game_id}/player-nicknames")
        names = data.get("player_nicknames") or []
        return {i: name.strip() for i, name in enumerate(names) if name and name.strip()}

    def fetch_snapshot(self, game_id: str, layout: Optional[List[List[Optional[str]]]] = None) -> GameSnapshot:
        """
        Fetch the full game state in one go.

        Args:
            game_id: Game to fetch
            layout: Previously fetched bonus layout; fetched when None

        Returns:
            GameSnapshot with board, racks of all players, scores, log and nicknames
        """
        if layout is None:
            layout = self.fetch_board_layout()

        num_players = self.fetch_num_players(game_id)
        racks = {i: self.fetch_rack(game_id, i) for i in range(num_players)}

        return GameSnapshot(
            game_id=game_id,
            board=self.fetch_board(game_id),
            num_players=num_players,
            current_player=self.fetch_current_player(game_id),
            racks=racks,
            points=self.fetch_points(game_id),
            letter_values=self.fetch_letter_values(),
            layout=layout,
            log=self.fetch_log(game_id),
            nicknames=self.fetch_nicknames(game_id),
        )

    # --- submissions ---

    def submit_move(self, game_id: str, x: int, y: int, word: str, direction: Direction) -> SubmissionResult:
        data = self._request(
            "POST",
            f"/g/{game_id}/place-word",
            {"x": x, "y": y, "w": word, "d": direction},
        )
        return SubmissionResult(**data)

    def submit_exchange(self, game_id: str, letters: List[str]) -> SubmissionResult:
        data = self._request("POST", f"/g/{game_id}/replace-letters", {"letters": "".join(letters)})
        return SubmissionResult(**data)

    def submit_skip_turn(self, game_id: str) -> SubmissionResult:
        data = self._request("POST", f"/g/{game_id}/skip-turn")
        return SubmissionResult(**data)

    def set_nickname(self, game_id: str, player: int, nickname: str) -> SubmissionResult:
        data = self._request("POST", f"/g/{game_id}/p/{player}/set-nickname", {"n": nickname})
        return SubmissionResult(**data)
