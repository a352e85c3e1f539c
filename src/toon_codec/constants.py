"""Literals and structural characters of the TOON text format."""

from typing import Final

# List markers
LIST_ITEM_MARKER: Final[str] = "-"
LIST_ITEM_PREFIX: Final[str] = "- "

# Structural characters
COMMA: Final[str] = ","
COLON: Final[str] = ":"
SPACE: Final[str] = " "
NEWLINE: Final[str] = "\n"
DOUBLE_QUOTE: Final[str] = '"'

OPEN_BRACKET: Final[str] = "["
CLOSE_BRACKET: Final[str] = "]"
OPEN_BRACE: Final[str] = "{"
CLOSE_BRACE: Final[str] = "}"

# Literals
NULL_LITERAL: Final[str] = "null"
TRUE_LITERAL: Final[str] = "true"
FALSE_LITERAL: Final[str] = "false"
EMPTY_ARRAY_LITERAL: Final[str] = "[]"
EMPTY_OBJECT_LITERAL: Final[str] = "{}"

# Header word for a tabular array at the document root
ROOT_TABLE_KEY: Final[str] = "table"

DEFAULT_INDENT: Final[int] = 2

# Integral floats at or above this magnitude keep their exponent form
MAX_INTEGRAL_FLOAT: Final[float] = 1e16
