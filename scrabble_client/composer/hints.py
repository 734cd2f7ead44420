"""User-facing guidance derived from a validation verdict."""

from typing import List

from .models import ValidationVerdict


NO_MOVE_HINT = "Pick a start cell, a direction and build a word."
NO_FIT_HINT = "The word does not fit on the board."
CONFLICT_HINT = "The word collides with letters already on the board."


def describe_verdict(verdict: ValidationVerdict) -> List[str]:
    """
    Explain why a composed move cannot be submitted yet.

    Messages come in a fixed order: fit, conflicts, missing tiles.
    Returns a single prompt when nothing has been composed, and an
    empty list when the move is ok.
    """
    if not verdict.has_move:
        return [NO_MOVE_HINT]

    hints: List[str] = []
    if not verdict.fits:
        hints.append(NO_FIT_HINT)
    if verdict.conflicts:
        hints.append(CONFLICT_HINT)
    if verdict.missing_letters:
        hints.append(f"Missing tiles: {', '.join(verdict.missing_labels)}")

    return hints
