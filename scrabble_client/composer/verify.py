"""
Client-side validation of a composed move.

Checks, against the last known board and the acting player's rack:
1. Fit (every target cell lies on the board)
2. Conflicts (occupied target cells must already hold the same letter)
3. Missing letters (newly placed letters must come from distinct rack tiles)

The verdict is advisory. The server still checks dictionary words, board
connectivity and turn order, and may reject a move reported as ok here.
"""

from typing import Dict, List, Optional

from .models import BoardSnapshot, RackSnapshot, Cell, Direction, ValidationVerdict
from .grid import target_cells


def compute_verdict(
    board: Optional[BoardSnapshot],
    rack: RackSnapshot,
    anchor: Optional[Cell],
    direction: Optional[Direction],
    word: str,
) -> ValidationVerdict:
    """
    Validate a composed move. Pure function of its arguments.

    Returns a ValidationVerdict with:
    - has_move: False when there is no board, anchor or word (nothing to check)
    - fits: True if every letter lands on the board
    - conflicts: True if any occupied cell holds a different letter
    - missing_letters: letter -> count the rack cannot supply
    """
    if board is None or anchor is None or not word:
        return ValidationVerdict(has_move=False)

    word = word.upper()
    fits = True
    conflicts = False

    # Rack is consumed without replacement across the whole word
    pool: List[str] = list(rack.letters)
    missing: Dict[str, int] = {}

    for cell, letter in zip(target_cells(anchor, direction, len(word)), word):
        if not board.in_bounds(cell.x, cell.y):
            fits = False
            continue

        existing = board.letter_at(cell.x, cell.y)
        if existing is not None:
            # Building through an existing tile consumes nothing from the rack
            if existing != letter:
                conflicts = True
            continue

        if letter in pool:
            pool.remove(letter)
        else:
            missing[letter] = missing.get(letter, 0) + 1

    return ValidationVerdict(
        has_move=True,
        fits=fits,
        conflicts=conflicts,
        missing_letters=missing,
    )
