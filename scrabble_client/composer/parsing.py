"""Parsing of raw presentation-layer input into typed commands."""

from typing import Any, Mapping, Optional

from .models import KeyCommand, PlacementCommand


# Key names follow the DOM KeyboardEvent.key values
KEY_BINDINGS = {
    "Backspace": "backspace",
    "Escape": "cancel",
    "Enter": "submit",
    "Tab": "flip",
    "ArrowRight": "row",
    "ArrowDown": "col",
}


def normalize_letter(value: Any) -> Optional[str]:
    """Return a single uppercase letter, or None if `value` is not one."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    if len(value) != 1 or not value.isalpha():
        return None
    return value.upper()


def parse_rack_index(value: Any) -> Optional[int]:
    """Parse a rack index carried as text (or int). Negative values are rejected."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not value.isdigit():
        return None
    return int(value)


def parse_drop_payload(x: int, y: int, data: Mapping[str, Any]) -> Optional[PlacementCommand]:
    """
    Turn drag-and-drop transfer data into a PlacementCommand.

    The transfer data carries the rack slot as a string under "rackIndex"
    and optionally the letter under "letter". Drops without a usable rack
    index are ignored (returns None).
    """
    if x < 0 or y < 0:
        return None

    rack_index = parse_rack_index(data.get("rackIndex"))
    if rack_index is None:
        return None

    return PlacementCommand(
        x=x,
        y=y,
        letter=normalize_letter(data.get("letter")) or "",
        source_rack_index=rack_index,
    )


def parse_key(key: str) -> Optional[KeyCommand]:
    """Map a key name to a KeyCommand, or None for keys with no binding."""
    if key in KEY_BINDINGS:
        return KeyCommand(kind=KEY_BINDINGS[key])

    letter = normalize_letter(key)
    if letter is not None and len(key) == 1:
        return KeyCommand(kind="letter", letter=letter)

    return None
