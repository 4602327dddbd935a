"""
config.py
=========
Runtime configuration for the itinerary converter.

Values come from the environment (optionally seeded from a ``.env`` file via
python-dotenv) and are read once at import.  Per-call options are plain dicts;
``normalize_options`` turns whatever the caller sent into the canonical
snake_case shape used by the converter.
"""

import logging
import os
import re
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from errors import ConversionError

load_dotenv()

# ==================== CONFIG ====================
DEFAULT_BOOKING_CLASS = os.getenv("DEFAULT_BOOKING_CLASS", "J")
DEFAULT_SEGMENT_STATUS = os.getenv("DEFAULT_SEGMENT_STATUS", "SS1")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Bounded lookaheads (lines).  Keep them small: every scan must terminate on
# its own, and a wide window lets one segment absorb the next one's data.
FIELD_LOOKAHEAD = int(os.getenv("FIELD_LOOKAHEAD", "8"))
TRAILER_WINDOW = int(os.getenv("TRAILER_WINDOW", "4"))
HEADER_JOIN_LIMIT = int(os.getenv("HEADER_JOIN_LIMIT", "3"))

DIRECTIONS = ("all", "outbound", "inbound")

# camelCase spellings used by the browser extension settings
_OPTION_ALIASES = {
    "bookingClass": "booking_class",
    "segmentStatus": "segment_status",
    "segmentRange": "segment_range",
    "journeyIndex": "journey_index",
    "autoCabin": "auto_cabin",
    "baseYear": "base_year",
    "yearOverride": "base_year",
}


# ==================== LOGGING ====================
_log = logging.getLogger("itinerary")
_log.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))


class Logger:
    """Centralized logging with levels"""

    @staticmethod
    def debug(msg: str):
        _log.debug(msg)

    @staticmethod
    def info(msg: str):
        _log.info(msg)

    @staticmethod
    def warning(msg: str):
        _log.warning(msg)

    @staticmethod
    def error(msg: str):
        _log.error(msg)


# ==================== OPTIONS ====================
def sanitize_booking_class(value: Any) -> str:
    clean = re.sub(r"[^A-Z]", "", str(value or "").upper())[:1]
    return clean or DEFAULT_BOOKING_CLASS


def sanitize_segment_status(value: Any) -> str:
    if value == "":
        return ""
    clean = re.sub(r"[^A-Z0-9]", "", str(value or "").upper())[:3]
    return clean or DEFAULT_SEGMENT_STATUS


def parse_year(value: Any) -> Optional[int]:
    try:
        year = int(value)
    except (TypeError, ValueError):
        return None
    if 1900 <= year <= 2100:
        return year
    return None


def normalize_options(options: Optional[Dict] = None) -> Dict:
    """
    Return a fresh, fully populated options dict.

    Raises ConversionError for a direction outside all/outbound/inbound or a
    malformed range/journey selection.
    """
    raw: Dict = {}
    for key, value in (options or {}).items():
        raw[_OPTION_ALIASES.get(key, key)] = value

    direction = str(raw.get("direction") or "all").strip().lower()
    if direction not in DIRECTIONS:
        raise ConversionError("invalid_direction", f"Unknown direction '{raw.get('direction')}'")

    segment_range = raw.get("segment_range")
    if segment_range is not None:
        try:
            start, end = segment_range
            segment_range = (int(start), int(end))
        except (TypeError, ValueError):
            raise ConversionError("invalid_range", f"Segment range must be two integers, got {segment_range!r}")

    journey_index = raw.get("journey_index")
    if journey_index is not None:
        try:
            journey_index = int(journey_index)
        except (TypeError, ValueError):
            raise ConversionError("invalid_journey", f"Journey index must be an integer, got {journey_index!r}")

    auto_cabin = raw.get("auto_cabin")
    if isinstance(auto_cabin, str) and not auto_cabin.strip():
        auto_cabin = None

    return {
        "booking_class": sanitize_booking_class(raw.get("booking_class")),
        "segment_status": sanitize_segment_status(raw.get("segment_status")),
        "direction": direction,
        "segment_range": segment_range,
        "journey_index": journey_index,
        "auto_cabin": auto_cabin or None,
        "detailed": bool(raw.get("detailed", False)),
        "base_year": parse_year(raw.get("base_year")),
    }
