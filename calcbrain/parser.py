"""Input parsing, number formatting and program serialization.

This module handles:
- Turning user tokens into program entries (operands or operator symbols)
- Formatting float results for display
- Converting programs to and from the untyped property-list form
- JSON encoding of programs for save/restore across sessions
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from . import config
from .types import Operand, Operator, ProgramEntry, ValidationError


def parse_token(token: str) -> ProgramEntry:
    """Parse a single input token.

    Args:
        token: Token text (e.g., "3.5", "+", "π")

    Returns:
        Operand for anything ``float()`` accepts, Operator otherwise

    Raises:
        ValidationError: If the token is empty
    """
    text = token.strip()
    if not text:
        raise ValidationError("Empty token", code="EMPTY_TOKEN")
    try:
        return Operand(float(text))
    except ValueError:
        return Operator(text)


def tokenize(text: str) -> list[ProgramEntry]:
    """Split whitespace-separated input into program entries.

    Example:
        >>> tokenize("3 + 4 =")
        [Operand(value=3.0), Operator(symbol='+'), Operand(value=4.0), Operator(symbol='=')]
    """
    return [parse_token(token) for token in text.split()]


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with the given number of significant digits.

    Args:
        val: Numeric value to format
        precision: Significant digits (default: config.OUTPUT_PRECISION)

    Returns:
        Formatted string ("3", "0.5", "3.14159265359", "inf", "nan")
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        return fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        return str(val)


def _is_number(item: Any) -> bool:
    return isinstance(item, (int, float)) and not isinstance(item, bool)


def to_entry(item: Any) -> ProgramEntry | None:
    """Convert a typed or untyped item to a program entry, or None if malformed."""
    if isinstance(item, (Operand, Operator)):
        return item
    if _is_number(item):
        return Operand(float(item))
    if isinstance(item, str):
        return Operator(item)
    return None


def to_property_list(program: Iterable[ProgramEntry]) -> list[float | str]:
    """Flatten a program into a list of plain floats and strings."""
    items: list[float | str] = []
    for entry in program:
        if isinstance(entry, Operand):
            items.append(entry.value)
        else:
            items.append(entry.symbol)
    return items


def from_property_list(items: Iterable[Any]) -> list[ProgramEntry]:
    """Convert a property list back into program entries.

    Entries that are neither numbers nor strings are dropped.
    """
    entries = []
    for item in items:
        entry = to_entry(item)
        if entry is not None:
            entries.append(entry)
    return entries


def dumps_program(program: Iterable[ProgramEntry]) -> str:
    """Encode a program as a JSON array."""
    return json.dumps(to_property_list(program), ensure_ascii=False)


def loads_program(text: str) -> list[ProgramEntry]:
    """Decode a JSON array produced by ``dumps_program``.

    Raises:
        ValidationError: If the text is not a JSON array or is too long
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ValidationError(f"Invalid program JSON: {e}", code="INVALID_PROGRAM")
    if not isinstance(data, list):
        raise ValidationError(
            "Program must be a JSON array", code="INVALID_PROGRAM"
        )
    if len(data) > config.MAX_PROGRAM_LENGTH:
        raise ValidationError(
            f"Program too long ({len(data)} entries, max {config.MAX_PROGRAM_LENGTH})",
            code="TOO_LONG",
        )
    return from_property_list(data)
