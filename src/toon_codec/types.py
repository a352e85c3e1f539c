"""Type definitions for toon_codec."""

from typing import Any, Dict, List, TypedDict, Union

# JSON-compatible types
JsonPrimitive = Union[str, int, float, bool, None]
JsonObject = Dict[str, Any]
JsonArray = List[Any]
JsonValue = Union[JsonPrimitive, JsonArray, JsonObject]


class EncodeOptions(TypedDict, total=False):
    """Options for TOON encoding.

    Attributes:
        indent: Number of spaces per indentation level (default: 2)
    """

    indent: int


class DecodeOptions(TypedDict, total=False):
    """Options for TOON decoding.

    Attributes:
        strict: Raise ToonDecodeError on unrecognised lines and on
            declared lengths that do not match (default: False)
    """

    strict: bool


class ResolvedEncodeOptions:
    """Resolved encoding options with defaults applied."""

    def __init__(self, indent: int = 2) -> None:
        if indent < 1:
            raise ValueError(f"indent must be a positive number of spaces, got {indent}")
        self.indent = indent


class ResolvedDecodeOptions:
    """Resolved decoding options with defaults applied."""

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict


# Depth type for tracking indentation level
Depth = int
