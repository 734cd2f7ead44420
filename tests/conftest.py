"""Shared fixtures: an in-memory game service and a session bound to it."""

from typing import Dict, List, Optional

import pytest

from scrabble_client.composer import BoardSnapshot, RackSnapshot
from scrabble_client.session import (
    GameServiceClient,
    GameSession,
    GameSnapshot,
    SubmissionResult,
)


OK = SubmissionResult(result="ok")


class FakeGameService(GameServiceClient):
    """Game service double that serves snapshots from its own fields."""

    board: List[List[str]] = [["."] * 15 for _ in range(15)]
    racks: Dict[int, List[str]] = {0: ["C", "A", "T", "S", "Q"], 1: ["D", "O", "G"]}
    current_player: int = 0
    move_result: SubmissionResult = OK
    exchange_result: SubmissionResult = OK
    skip_result: SubmissionResult = OK
    nickname_result: SubmissionResult = OK
    points: Dict[int, int] = {}
    letter_values: Dict[str, int] = {}
    layout: Optional[List[List[Optional[str]]]] = None
    nicknames: Dict[int, str] = {}
    error: Optional[Exception] = None
    calls: List[tuple] = []
    fetches: int = 0

    def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    def new_game(self, players: int = 2) -> str:
        self._maybe_fail()
        self.calls.append(("new_game", players))
        return "g-new"

    def fetch_snapshot(self, game_id, layout=None) -> GameSnapshot:
        self._maybe_fail()
        self.fetches += 1
        return GameSnapshot(
            game_id=game_id,
            board=BoardSnapshot(cells=self.board),
            num_players=len(self.racks),
            current_player=self.current_player,
            racks={i: RackSnapshot(letters=r) for i, r in self.racks.items()},
            points=self.points,
            letter_values=self.letter_values,
            layout=layout if layout is not None else self.layout,
            nicknames=self.nicknames,
        )

    def submit_move(self, game_id, x, y, word, direction) -> SubmissionResult:
        self._maybe_fail()
        self.calls.append(("move", game_id, x, y, word, direction))
        return self.move_result

    def submit_exchange(self, game_id, letters) -> SubmissionResult:
        self._maybe_fail()
        self.calls.append(("exchange", game_id, letters))
        return self.exchange_result

    def submit_skip_turn(self, game_id) -> SubmissionResult:
        self._maybe_fail()
        self.calls.append(("skip", game_id))
        return self.skip_result

    def set_nickname(self, game_id, player, nickname) -> SubmissionResult:
        self._maybe_fail()
        self.calls.append(("nickname", game_id, player, nickname))
        if self.nickname_result.accepted:
            self.nicknames = {**self.nicknames, player: nickname}
        return self.nickname_result


@pytest.fixture
def service() -> FakeGameService:
    return FakeGameService(base_url="http://test")


@pytest.fixture
def session(service) -> GameSession:
    session = GameSession(client=service)
    assert session.load("g1") is True
    return session


