"""Cell arithmetic along a placement direction and board rendering."""

from typing import Dict, List, Optional

from .models import BoardSnapshot, Cell, Direction, DEFAULT_DIRECTION, EMPTY_CELL


def offset(anchor: Cell, direction: Optional[Direction], steps: int) -> Cell:
    """Cell reached by moving `steps` cells from the anchor along a direction."""
    if (direction or DEFAULT_DIRECTION) == "row":
        return Cell(anchor.x + steps, anchor.y)
    return Cell(anchor.x, anchor.y + steps)


def target_cells(anchor: Cell, direction: Optional[Direction], length: int) -> List[Cell]:
    """Cells a word of `length` letters occupies when laid from the anchor."""
    if length <= 1:
        return [anchor] if length == 1 else []
    return [offset(anchor, direction, i) for i in range(length)]


def direction_towards(anchor: Cell, x: int, y: int) -> Optional[Direction]:
    """Direction fixed by a second letter at (x, y), or None if not adjacent."""
    if x == anchor.x + 1 and y == anchor.y:
        return "row"
    if x == anchor.x and y == anchor.y + 1:
        return "col"
    return None


def preview_letters(
    board: BoardSnapshot,
    anchor: Optional[Cell],
    direction: Optional[Direction],
    word: str,
) -> Dict[Cell, str]:
    """Letters of the composed word keyed by cell, skipping off-board cells."""
    if anchor is None or not word:
        return {}
    return {
        cell: letter
        for cell, letter in zip(target_cells(anchor, direction, len(word)), word)
        if board.in_bounds(cell.x, cell.y)
    }


BONUS_MARKERS = {"TW": "#", "DW": "+", "TL": "*", "DL": ":"}
BONUS_LEGEND = "Bonus: # triple word  + double word  * triple letter  : double letter"


def bonus_at(layout: Optional[List[List[Optional[str]]]], x: int, y: int) -> Optional[str]:
    """Bonus code (TW/DW/TL/DL) of a cell, or None when the layout has none."""
    if not layout or y >= len(layout) or x >= len(layout[y]):
        return None
    code = layout[y][x]
    return code.upper() if code else None


def render_board(
    board: BoardSnapshot,
    anchor: Optional[Cell] = None,
    direction: Optional[Direction] = None,
    word: str = "",
    layout: Optional[List[List[Optional[str]]]] = None,
) -> str:
    """
    Render the board as text with the in-progress move overlaid.

    Placed tiles are uppercase, previewed letters are lowercase, and the
    anchor cell is bracketed. Empty bonus squares show the marker from
    BONUS_MARKERS. Row and column labels are 1-based.
    """
    preview = preview_letters(board, anchor, direction, word)

    header = "    " + "".join(f"{x + 1:>3}" for x in range(board.width))
    lines = [header]
    for y in range(board.height):
        parts = [f"{y + 1:>3} "]
        for x in range(board.width):
            cell = Cell(x, y)
            placed = board.letter_at(x, y)
            if placed:
                text = placed
            elif cell in preview:
                text = preview[cell].lower()
            else:
                text = BONUS_MARKERS.get(bonus_at(layout, x, y), EMPTY_CELL)
            if anchor is not None and cell == anchor:
                parts.append(f"[{text}]")
            else:
                parts.append(f" {text} ")
        lines.append("".join(parts))

    return "\n".join(lines)
