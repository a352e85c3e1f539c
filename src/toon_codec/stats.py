"""Size statistics and round-trip verification."""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from .decoder import ToonDecodeError, decode
from .encoder import encode
from .normalize import normalize_value
from .types import EncodeOptions, JsonValue

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4


@dataclass(frozen=True)
class TokenStats:
    """Character counts and rough token estimates for a JSON/TOON pair."""

    json_chars: int
    toon_chars: int
    savings_percent: int
    est_tokens_json: int
    est_tokens_toon: int


@dataclass(frozen=True)
class Comparison:
    json_text: str
    toon_text: str
    stats: TokenStats
    verified: bool


def calculate_token_stats(json_text: str, toon_text: str) -> TokenStats:
    """Compare the size of a JSON text with its TOON encoding.

    Token counts are estimated at four characters per token. The savings
    percentage is rounded half up and is 0 for an empty JSON text.
    """
    json_chars = len(json_text)
    toon_chars = len(toon_text)
    if json_chars:
        savings_percent = math.floor((json_chars - toon_chars) / json_chars * 100 + 0.5)
    else:
        savings_percent = 0

    return TokenStats(
        json_chars=json_chars,
        toon_chars=toon_chars,
        savings_percent=savings_percent,
        est_tokens_json=math.ceil(json_chars / CHARS_PER_TOKEN),
        est_tokens_toon=math.ceil(toon_chars / CHARS_PER_TOKEN),
    )


def values_equal(left: JsonValue, right: JsonValue) -> bool:
    """Deep equality that ignores key order but keeps booleans apart from numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, dict):
        return (
            isinstance(right, dict)
            and left.keys() == right.keys()
            and all(values_equal(value, right[key]) for key, value in left.items())
        )
    if isinstance(left, list):
        return (
            isinstance(right, list)
            and len(left) == len(right)
            and all(values_equal(a, b) for a, b in zip(left, right))
        )
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    return type(left) is type(right) and left == right


def verify_round_trip(value: Any, text: Optional[str] = None, options: Optional[EncodeOptions] = None) -> bool:
    """Check that decoding the TOON text of ``value`` gives ``value`` back.

    This never raises: a mismatch or a decoding error is logged and
    reported as False.

    Args:
        value: Original value
        text: Its TOON encoding; produced with ``options`` when omitted
        options: Encoding options used when ``text`` is omitted

    Returns:
        True if the decoded value is deep-equal to the (normalized) original
    """
    normalized = normalize_value(value)
    if text is None:
        text = encode(normalized, options)

    try:
        decoded = decode(text, {"strict": True})
    except ToonDecodeError as exc:
        logger.error("Round-trip verification failed to decode: %s", exc)
        return False

    if values_equal(decoded, normalized):
        return True
    logger.warning("Round-trip verification mismatch: original=%r decoded=%r", normalized, decoded)
    return False


def compare(value: Any, options: Optional[EncodeOptions] = None) -> Comparison:
    """Encode ``value`` both ways, measure the savings and verify the TOON text."""
    normalized = normalize_value(value)
    json_text = json.dumps(normalized, indent=2, ensure_ascii=False)
    toon_text = encode(normalized, options)
    return Comparison(
        json_text=json_text,
        toon_text=toon_text,
        stats=calculate_token_stats(json_text, toon_text),
        verified=verify_round_trip(normalized, toon_text),
    )
