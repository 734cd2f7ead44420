"""Stateful client session for the word-placement game."""

from .models import (
    SubmissionResult,
    SubmissionStatus,
    LogEvent,
    GameSnapshot,
    ClientConfig,
    DEFAULT_BASE_URL,
)
from .composer import MoveComposer, Phase
from .exchange import ExchangeSelector
from .api_client import GameServiceClient, GameServiceError
from .game_session import GameSession

__all__ = [
    "SubmissionResult",
    "SubmissionStatus",
    "LogEvent",
    "GameSnapshot",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "MoveComposer",
    "Phase",
    "ExchangeSelector",
    "GameServiceClient",
    "GameServiceError",
    "GameSession",
]
