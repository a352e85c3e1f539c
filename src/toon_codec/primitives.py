"""Scalar literal codec, cell and key escaping, and the CSV-cell scanner."""

import math
import re
from typing import List, Optional

from .constants import (
    CLOSE_BRACE,
    CLOSE_BRACKET,
    COLON,
    COMMA,
    DOUBLE_QUOTE,
    FALSE_LITERAL,
    LIST_ITEM_MARKER,
    LIST_ITEM_PREFIX,
    MAX_INTEGRAL_FLOAT,
    NEWLINE,
    NULL_LITERAL,
    OPEN_BRACE,
    OPEN_BRACKET,
    ROOT_TABLE_KEY,
    TRUE_LITERAL,
)
from .types import JsonPrimitive

NUMBER_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")

# Keys are written raw when they match this, quoted otherwise
SAFE_KEY_RE = re.compile(r"[A-Za-z_][\w.\-]*")
KEY_PATTERN = r'"(?:[^"]|"")*"|[A-Za-z_][\w.\-]*'

_QUOTE_TRIGGERS = (COMMA, NEWLINE, COLON, DOUBLE_QUOTE)


def format_scalar(value: JsonPrimitive) -> str:
    """Render a scalar as literal text, without cell escaping.

    Numbers use one canonical form that ``parse_scalar`` reads back to an
    equal value: integers and integral floats below 1e16 as plain digits,
    every other float as its shortest round-trippable ``repr``. Non-finite
    floats have no literal and render as ``null``.
    """
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return NULL_LITERAL
        if value.is_integer() and abs(value) < MAX_INTEGRAL_FLOAT:
            return str(int(value))
        return repr(value)
    return str(value)


def parse_scalar(token: str) -> JsonPrimitive:
    """Parse a single literal token back into a scalar.

    Args:
        token: Literal text; surrounding whitespace is ignored

    Returns:
        None, bool, int, float or str
    """
    token = token.strip()
    if token == NULL_LITERAL:
        return None
    if token == TRUE_LITERAL:
        return True
    if token == FALSE_LITERAL:
        return False
    if NUMBER_RE.fullmatch(token):
        if any(ch in token for ch in ".eE"):
            return float(token)
        return int(token)
    return unescape_cell(token)


def needs_quotes(text: str) -> bool:
    """Return True if ``text`` has to be quoted to survive as a cell."""
    if any(ch in text for ch in _QUOTE_TRIGGERS):
        return True
    if text.startswith((OPEN_BRACKET, OPEN_BRACE)):
        return True
    # Would be trimmed, or lost, when the cell is read back
    if text == "" or text != text.strip():
        return True
    # Would be taken for a list item marker
    if text == LIST_ITEM_MARKER or text.startswith(LIST_ITEM_PREFIX):
        return True
    # Would be read back as null, a boolean or a number
    return not isinstance(parse_scalar(text), str)


def escape_cell(text: str) -> str:
    if not needs_quotes(text):
        return text
    return DOUBLE_QUOTE + text.replace(DOUBLE_QUOTE, DOUBLE_QUOTE * 2) + DOUBLE_QUOTE


def unescape_cell(text: str) -> str:
    """Inverse of ``escape_cell``: strip the quotes and collapse doubled ones."""
    if len(text) >= 2 and text.startswith(DOUBLE_QUOTE) and text.endswith(DOUBLE_QUOTE):
        return text[1:-1].replace(DOUBLE_QUOTE * 2, DOUBLE_QUOTE)
    return text


def encode_primitive(value: JsonPrimitive) -> str:
    """Encode a scalar as a field: literals raw, strings through ``escape_cell``."""
    if isinstance(value, str):
        return escape_cell(value)
    return format_scalar(value)


def encode_key(key: str) -> str:
    """Encode an object key or column name.

    ``table`` is always quoted so that a keyed tabular header can never be
    mistaken for a root one.
    """
    if SAFE_KEY_RE.fullmatch(key) and key != ROOT_TABLE_KEY:
        return key
    return DOUBLE_QUOTE + key.replace(DOUBLE_QUOTE, DOUBLE_QUOTE * 2) + DOUBLE_QUOTE


def decode_key(raw: str) -> str:
    return unescape_cell(raw.strip())


def split_cells(text: str) -> List[str]:
    """Split a comma-delimited line into raw cells.

    A double quote toggles the quoted state and a comma outside quotes ends
    the current cell. Quotes are kept in the returned cells so that
    ``parse_scalar`` can tell the string ``"30"`` from the number ``30``; a
    doubled quote toggles twice and therefore stays inside its field.

    Args:
        text: Row or inline list text

    Returns:
        Raw cell texts, untrimmed
    """
    cells: List[str] = []
    current: List[str] = []
    in_quotes = False

    for ch in text:
        if ch == DOUBLE_QUOTE:
            in_quotes = not in_quotes
            current.append(ch)
        elif ch == COMMA and not in_quotes:
            cells.append("".join(current))
            current = []
        else:
            current.append(ch)

    cells.append("".join(current))
    return cells


def parse_cells(text: str) -> List[JsonPrimitive]:
    return [parse_scalar(cell) for cell in split_cells(text)]


def join_encoded_values(values: List[str]) -> str:
    return COMMA.join(values)


def format_header(key: Optional[str], length: int, fields: Optional[List[str]] = None) -> str:
    """Format an array header.

    Args:
        key: Optional key name; None for a root header
        length: Array length
        fields: Optional column names for tabular arrays

    Returns:
        Header such as ``tags[3]:``, ``[3]:``, ``users[2]{id,name}:`` or
        ``table[2]{id,name}:``
    """
    if key is None:
        prefix = ROOT_TABLE_KEY if fields else ""
    else:
        prefix = encode_key(key)

    header = f"{prefix}{OPEN_BRACKET}{length}{CLOSE_BRACKET}"
    if fields:
        header += OPEN_BRACE + join_encoded_values([encode_key(field) for field in fields]) + CLOSE_BRACE
    return header + COLON
