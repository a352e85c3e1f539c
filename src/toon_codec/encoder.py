"""Core TOON encoding functionality."""

import logging
from typing import Any, Optional

from .constants import DEFAULT_INDENT
from .encoders import encode_root
from .normalize import normalize_value
from .types import EncodeOptions, ResolvedEncodeOptions
from .writer import LineWriter

logger = logging.getLogger(__name__)


def encode(value: Any, options: Optional[EncodeOptions] = None) -> str:
    """Encode a value into TOON format.

    Args:
        value: The value to encode (must be JSON-serializable after
            normalization, and acyclic)
        options: Optional encoding options

    Returns:
        TOON-formatted string
    """
    normalized = normalize_value(value)
    resolved_options = resolve_options(options)
    writer = LineWriter(resolved_options.indent)
    encode_root(normalized, resolved_options, writer, 0)
    logger.debug("Encoded %s into %d TOON lines", type(normalized).__name__, len(writer))
    return writer.to_string()


def resolve_options(options: Optional[EncodeOptions]) -> ResolvedEncodeOptions:
    """Resolve encoding options with defaults.

    Args:
        options: Optional user-provided options

    Returns:
        Resolved options with defaults applied
    """
    if options is None:
        return ResolvedEncodeOptions()

    return ResolvedEncodeOptions(indent=options.get("indent", DEFAULT_INDENT))
