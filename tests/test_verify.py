"""
Test suite for client-side move validation.

Covers:
- Empty moves (no anchor, no word)
- Fit (board bounds, board size taken from the snapshot)
- Conflicts (building through existing tiles)
- Missing letters (rack consumed without replacement)
"""

import pytest
from scrabble_client.composer import (
    compute_verdict,
    BoardSnapshot,
    RackSnapshot,
    Cell,
    ValidationVerdict,
)


def board_with(size: int = 15, **tiles: str) -> BoardSnapshot:
    """Empty board with tiles given as x_y='L' keyword arguments."""
    cells = [["."] * size for _ in range(size)]
    for key, letter in tiles.items():
        x, y = (int(v) for v in key.lstrip("c").split("_"))
        cells[y][x] = letter
    return BoardSnapshot(cells=cells)


def rack(*letters: str) -> RackSnapshot:
    return RackSnapshot(letters=list(letters))


class TestEmptyMove:
    """Test cases for moves with nothing to check."""

    def test_no_anchor(self):
        """Without an anchor there is no move."""
        verdict = compute_verdict(board_with(), rack("A"), None, "row", "A")
        assert verdict.has_move is False
        assert verdict.ok is False

    def test_no_word(self):
        """Without letters there is no move."""
        verdict = compute_verdict(board_with(), rack("A"), Cell(7, 7), "row", "")
        assert verdict.has_move is False
        assert verdict.ok is False

    def test_no_board(self):
        """Before the first snapshot nothing can be checked."""
        verdict = compute_verdict(None, rack("A"), Cell(7, 7), "row", "A")
        assert verdict.has_move is False

    def test_empty_move_reports_no_failures(self):
        """An empty move is not ok, but no failure flags are set."""
        verdict = compute_verdict(board_with(), rack(), None, None, "")
        assert verdict.fits is True
        assert verdict.conflicts is False
        assert verdict.missing_letters == {}


class TestFits:
    """Test cases for board bounds."""

    def test_word_overflows_row(self):
        """Anchor (13,7), row, 4 letters reaches x=16 on a 15x15 board."""
        verdict = compute_verdict(board_with(), rack("C", "A", "T", "S"), Cell(13, 7), "row", "CATS")
        assert verdict.fits is False
        assert verdict.ok is False

    def test_word_fits_at_edge(self):
        """Anchor (13,7), row, 2 letters ends on the last column."""
        verdict = compute_verdict(board_with(), rack("A", "T"), Cell(13, 7), "row", "AT")
        assert verdict.fits is True
        assert verdict.ok is True

    def test_word_overflows_column(self):
        """Column words are checked against the board height."""
        verdict = compute_verdict(board_with(), rack("C", "A", "T"), Cell(0, 13), "col", "CAT")
        assert verdict.fits is False

    def test_board_size_from_snapshot(self):
        """A smaller board is not treated as 15x15."""
        small = board_with(size=5)
        verdict = compute_verdict(small, rack("C", "A", "T"), Cell(3, 0), "row", "CAT")
        assert verdict.fits is False

    def test_anchor_off_board(self):
        """A single letter on an off-board anchor does not fit."""
        verdict = compute_verdict(board_with(), rack("A"), Cell(15, 0), None, "A")
        assert verdict.fits is False

    def test_single_letter_with_undetermined_direction(self):
        """A one-letter move only checks the anchor cell."""
        verdict = compute_verdict(board_with(), rack("A"), Cell(14, 14), None, "A")
        assert verdict.fits is True
        assert verdict.ok is True

    def test_off_board_cells_do_not_consume_rack(self):
        """Letters that fall off the board are not counted as missing."""
        verdict = compute_verdict(board_with(), rack("A"), Cell(14, 0), "row", "AB")
        assert verdict.fits is False
        assert verdict.missing_letters == {}


class TestConflicts:
    """Test cases for crossing existing tiles."""

    def test_matching_letter_is_not_a_conflict(self):
        """Building through (3,3)='B' with 'B' at that position is fine."""
        board = board_with(c3_3="B")
        verdict = compute_verdict(board, rack("A", "E"), Cell(2, 3), "row", "ABE")
        assert verdict.conflicts is False
        assert verdict.ok is True

    def test_mismatched_letter_is_a_conflict(self):
        """Placing 'C' where 'B' lies is a conflict."""
        board = board_with(c3_3="B")
        verdict = compute_verdict(board, rack("A", "C", "E"), Cell(2, 3), "row", "ACE")
        assert verdict.conflicts is True
        assert verdict.ok is False

    def test_conflict_in_column(self):
        """Conflicts are found along columns too."""
        board = board_with(c3_3="B")
        verdict = compute_verdict(board, rack("C", "A", "T"), Cell(3, 1), "col", "CAT")
        assert verdict.conflicts is True

    def test_lowercase_board_letters_match(self):
        """Board letters are compared case-insensitively."""
        board = board_with(c3_3="b")
        verdict = compute_verdict(board, rack("A", "E"), Cell(2, 3), "row", "ABE")
        assert verdict.conflicts is False


class TestMissingLetters:
    """Test cases for rack supply."""

    def test_rack_covers_repeated_letters(self):
        """Rack AAT supplies AAT over three empty cells."""
        verdict = compute_verdict(board_with(), rack("A", "A", "T"), Cell(5, 5), "row", "AAT")
        assert verdict.missing_letters == {}
        assert verdict.ok is True

    def test_repeated_letter_needs_distinct_tiles(self):
        """Rack AAT is one A short for AAA."""
        verdict = compute_verdict(board_with(), rack("A", "A", "T"), Cell(5, 5), "row", "AAA")
        assert verdict.missing_letters == {"A": 1}
        assert verdict.ok is False

    def test_existing_tile_consumes_nothing(self):
        """A letter already on the board needs no rack tile."""
        board = board_with(c6_5="A")
        verdict = compute_verdict(board, rack("A", "T"), Cell(5, 5), "row", "AAT")
        assert verdict.missing_letters == {}
        assert verdict.ok is True

    def test_counts_accumulate_per_letter(self):
        """Several shortfalls are counted per letter."""
        verdict = compute_verdict(board_with(), rack("X"), Cell(0, 0), "row", "EEL")
        assert verdict.missing_letters == {"E": 2, "L": 1}
        assert verdict.missing_labels == ["E×2", "L×1"]

    def test_empty_rack(self):
        """A rack emptied by a refresh reports every letter missing."""
        verdict = compute_verdict(board_with(), rack(), Cell(0, 0), "row", "AT")
        assert verdict.missing_letters == {"A": 1, "T": 1}


class TestVerdictModel:
    """Test cases for the verdict model itself."""

    def test_ok_requires_every_check(self):
        """ok is the conjunction of all checks."""
        assert ValidationVerdict(has_move=True).ok is True
        assert ValidationVerdict(has_move=True, fits=False).ok is False
        assert ValidationVerdict(has_move=True, conflicts=True).ok is False
        assert ValidationVerdict(has_move=True, missing_letters={"Q": 1}).ok is False

    @pytest.mark.parametrize("word", ["cat", "CAT", "Cat"])
    def test_word_case_ignored(self, word):
        """Lowercase words are validated as uppercase."""
        verdict = compute_verdict(board_with(), rack("C", "A", "T"), Cell(0, 0), "row", word)
        assert verdict.ok is True
