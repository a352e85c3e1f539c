"""
toon_codec - Token-Oriented Object Notation for Python

A compact, indentation-based text encoding of JSON data with a matching
line-oriented decoder, plus helpers to measure how much smaller the TOON
text is than the equivalent JSON.
"""

__version__ = "0.2.0"

from .decoder import decode, ToonDecodeError
from .encoder import encode
from .export import ExportArtifact, render_export, write_export
from .primitives import escape_cell, format_scalar, parse_scalar, unescape_cell
from .stats import Comparison, TokenStats, calculate_token_stats, compare, verify_round_trip
from .types import DecodeOptions, EncodeOptions, JsonValue

__all__ = [
    "encode",
    "decode",
    "ToonDecodeError",
    "EncodeOptions",
    "DecodeOptions",
    "JsonValue",
    "format_scalar",
    "parse_scalar",
    "escape_cell",
    "unescape_cell",
    "calculate_token_stats",
    "verify_round_trip",
    "compare",
    "TokenStats",
    "Comparison",
    "render_export",
    "write_export",
    "ExportArtifact",
]
