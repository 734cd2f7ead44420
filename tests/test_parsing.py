"""Test boundary parsing of drop payloads and key names."""

import pytest
from pydantic import ValidationError

from scrabble_client.composer import (
    normalize_letter,
    parse_rack_index,
    parse_drop_payload,
    parse_key,
    PlacementCommand,
)


class TestNormalizeLetter:
    """Test cases for single-letter normalisation."""

    @pytest.mark.parametrize("value,expected", [
        ("a", "A"),
        ("Z", "Z"),
        (" e ", "E"),
        ("", None),
        ("ab", None),
        ("1", None),
        (None, None),
        (7, None),
    ])
    def test_normalize(self, value, expected):
        """Only single letters survive normalisation."""
        assert normalize_letter(value) == expected


class TestParseRackIndex:
    """Test cases for rack indices carried as text."""

    @pytest.mark.parametrize("value,expected", [
        ("0", 0),
        ("6", 6),
        (" 3 ", 3),
        (2, 2),
        ("-1", None),
        (-1, None),
        ("", None),
        ("abc", None),
        ("1.5", None),
        (None, None),
        (True, None),
    ])
    def test_parse(self, value, expected):
        """Rack indices must be non-negative integers."""
        assert parse_rack_index(value) == expected


class TestParseDropPayload:
    """Test cases for drag-and-drop transfer data."""

    def test_full_payload(self):
        """Index and letter are both carried."""
        command = parse_drop_payload(4, 7, {"rackIndex": "2", "letter": "e"})
        assert command == PlacementCommand(x=4, y=7, letter="E", source_rack_index=2)

    def test_payload_without_letter(self):
        """The letter is optional."""
        command = parse_drop_payload(0, 0, {"rackIndex": "0"})
        assert command.letter == ""
        assert command.source_rack_index == 0

    def test_missing_index_is_ignored(self):
        """A payload without index is dropped."""
        assert parse_drop_payload(4, 7, {"letter": "E"}) is None

    def test_garbage_index_is_ignored(self):
        """A non-numeric index is dropped."""
        assert parse_drop_payload(4, 7, {"rackIndex": "NaN"}) is None

    def test_negative_cell_is_ignored(self):
        """Negative coordinates are dropped."""
        assert parse_drop_payload(-1, 7, {"rackIndex": "1"}) is None

    def test_command_rejects_negative_values(self):
        """The typed command itself refuses negative coordinates."""
        with pytest.raises(ValidationError):
            PlacementCommand(x=-1, y=0)


class TestParseKey:
    """Test cases for keyboard input."""

    @pytest.mark.parametrize("key,kind", [
        ("Backspace", "backspace"),
        ("Escape", "cancel"),
        ("Enter", "submit"),
        ("Tab", "flip"),
        ("ArrowRight", "row"),
        ("ArrowDown", "col"),
    ])
    def test_bound_keys(self, key, kind):
        """Named keys map to commands."""
        assert parse_key(key).kind == kind

    def test_letter_key(self):
        """Letter keys are uppercased."""
        command = parse_key("q")
        assert command.kind == "letter"
        assert command.letter == "Q"

    @pytest.mark.parametrize("key", ["Shift", "1", " ", "F5", "ArrowUp", ""])
    def test_unbound_keys(self, key):
        """Other keys map to nothing."""
        assert parse_key(key) is None
