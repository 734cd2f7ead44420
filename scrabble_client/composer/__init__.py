"""Move composition primitives and client-side validation."""

from .models import (
    Direction,
    Cell,
    BoardSnapshot,
    RackSnapshot,
    ValidationVerdict,
    PlacementCommand,
    KeyCommand,
    EMPTY_CELL,
    DEFAULT_DIRECTION,
)
from .verify import compute_verdict
from .grid import (
    offset,
    target_cells,
    direction_towards,
    preview_letters,
    bonus_at,
    render_board,
    BONUS_LEGEND,
)
from .parsing import normalize_letter, parse_rack_index, parse_drop_payload, parse_key
from .hints import describe_verdict

__all__ = [
    # Validation
    "compute_verdict",
    "describe_verdict",
    # Models
    "Direction",
    "Cell",
    "BoardSnapshot",
    "RackSnapshot",
    "ValidationVerdict",
    "PlacementCommand",
    "KeyCommand",
    "EMPTY_CELL",
    "DEFAULT_DIRECTION",
    # Grid utilities
    "offset",
    "target_cells",
    "direction_towards",
    "preview_letters",
    "bonus_at",
    "render_board",
    "BONUS_LEGEND",
    # Boundary parsing
    "normalize_letter",
    "parse_rack_index",
    "parse_drop_payload",
    "parse_key",
]
