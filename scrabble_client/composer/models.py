"""Data models for move composition and client-side validation."""

from typing import List, Dict, Optional, Literal, NamedTuple
from pydantic import BaseModel, Field, ConfigDict, field_validator


Direction = Literal["row", "col"]
KeyKind = Literal["letter", "backspace", "cancel", "submit", "flip", "row", "col"]

EMPTY_CELL = "."
DEFAULT_DIRECTION: Direction = "row"


class Cell(NamedTuple):
    """A board coordinate (x = column, y = row)."""
    x: int
    y: int


class BoardSnapshot(BaseModel):
    """Board as last received from the server. Cells are '.' or a letter."""
    model_config = ConfigDict(frozen=True)

    cells: List[List[str]] = Field(default_factory=list)

    @field_validator("cells", mode="before")
    @classmethod
    def _normalize_cells(cls, value):
        rows = []
        for row in value or []:
            rows.append([
                EMPTY_CELL if cell is None or not str(cell).strip() else str(cell).strip().upper()
                for cell in row
            ])
        if rows and any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("Board rows must all have the same length")
        return rows

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def center(self) -> Cell:
        return Cell(self.width // 2, self.height // 2)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def letter_at(self, x: int, y: int) -> Optional[str]:
        """Letter at (x, y), or None if the cell is empty or off the board."""
        if not self.in_bounds(x, y):
            return None
        cell = self.cells[y][x]
        return None if cell == EMPTY_CELL else cell

    def is_empty(self, x: int, y: int) -> bool:
        return self.letter_at(x, y) is None

    @classmethod
    def empty(cls, width: int = 15, height: Optional[int] = None) -> "BoardSnapshot":
        """A board with no tiles on it."""
        return cls(cells=[[EMPTY_CELL] * width for _ in range(height or width)])


class RackSnapshot(BaseModel):
    """Tiles held by the acting player. Each index is a distinct tile."""
    model_config = ConfigDict(frozen=True)

    letters: List[str] = Field(default_factory=list)

    @field_validator("letters", mode="before")
    @classmethod
    def _uppercase(cls, value):
        return [str(letter).upper() for letter in value or []]

    def __len__(self) -> int:
        return len(self.letters)

    def letter_at(self, index: int) -> Optional[str]:
        """Letter at a rack index, or None when the index holds no tile."""
        if 0 <= index < len(self.letters):
            return self.letters[index] or None
        return None


class ValidationVerdict(BaseModel):
    """Result of checking a composed move against the board and rack."""
    has_move: bool = False
    fits: bool = True
    conflicts: bool = False
    missing_letters: Dict[str, int] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.has_move and self.fits and not self.conflicts and not self.missing_letters

    @property
    def missing_labels(self) -> List[str]:
        """Missing tiles formatted for display, e.g. ['A×1', 'E×2']."""
        return [f"{letter}×{count}" for letter, count in self.missing_letters.items()]


class PlacementCommand(BaseModel):
    """A letter dropped onto a board cell, optionally from a known rack slot."""
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    letter: str = Field("", max_length=1)
    source_rack_index: Optional[int] = Field(None, ge=0)


class KeyCommand(BaseModel):
    """A key press translated into a composer command."""
    kind: KeyKind
    letter: Optional[str] = None
