"""
rbd.py
======
Booking-class (RBD) resolver: carrier + marketed cabin → one reservation letter.

Resolution runs an ordered list of strategies (airline table, generic table,
fixed per-cabin default).  Each strategy answers with a letter, ``None`` (a
definitive "no result") or ``NO_MATCH`` (let the next strategy try).

Short-haul segments are downgraded before lookup: FIRST→BUSINESS and
PREMIUM→ECONOMY.  A segment is short-haul when it lasts at most
``STRICT_SHORT_HAUL_MINUTES``, or at most ``SHORT_HAUL_LIMIT_MINUTES`` with both
airports in the same region.  Unknown durations count as long-haul.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from mappings import DEFAULT_REFERENCE, ReferenceData

FIRST = "FIRST"
BUSINESS = "BUSINESS"
PREMIUM = "PREMIUM"
ECONOMY = "ECONOMY"

SHORT_HAUL_LIMIT_MINUTES = 360
STRICT_SHORT_HAUL_MINUTES = 210

# ══════════════════════════════════════════════════════════════════════════════
#  TABLES
# ══════════════════════════════════════════════════════════════════════════════

GENERIC_RBD_BY_CABIN: Dict[str, List[str]] = {
    FIRST:    ["F", "A", "P"],
    BUSINESS: ["J", "C", "D", "I", "Z", "R", "U", "P"],
    PREMIUM:  ["W", "P", "U", "E", "A", "R", "O"],
    ECONOMY:  ["Y", "B", "M", "H", "Q", "K", "L", "V", "S", "N", "O", "T", "U", "E", "G", "X"],
}

RBD_BY_AIRLINE: Dict[str, Dict[str, List[str]]] = {
    # ===== NORTH AMERICA =====
    "AA": {FIRST: list("FA"), BUSINESS: list("JICDR"), PREMIUM: list("WP"), ECONOMY: list("YBMHQKLVSNOTUEGX")},
    "DL": {BUSINESS: list("JCDIZ"), PREMIUM: list("PAFG"), ECONOMY: list("YBMHQKLVSTUWXEN")},
    "UA": {BUSINESS: list("JCDZPI"), PREMIUM: list("OAR"), ECONOMY: list("YBMHQKLVSTUWXGEN")},
    "AC": {BUSINESS: list("JCDZP"), PREMIUM: list("OEA"), ECONOMY: list("YBMHQKLVSTUW")},
    "B6": {BUSINESS: list("JCDI"), ECONOMY: list("YBMHQKLVSNOGEX")},

    # ===== EUROPE =====
    "LH": {FIRST: list("FA"), BUSINESS: list("JCDZP"), PREMIUM: list("EGN"), ECONOMY: list("YBHKLMQSTUVW")},
    "BA": {FIRST: list("FA"), BUSINESS: list("JCDIR"), PREMIUM: list("WET"), ECONOMY: list("YBHKLMNSVQOG")},
    "AF": {FIRST: list("FP"), BUSINESS: list("JCDIZ"), PREMIUM: list("WAT"), ECONOMY: list("YBMHKQVNRLGE")},
    "KL": {BUSINESS: list("JCDIZ"), PREMIUM: list("WOZ"), ECONOMY: list("YBMHKQLTEUN")},
    "TK": {BUSINESS: list("CDKZJ"), ECONOMY: list("YBMHAESLOQTV")},
    "SK": {BUSINESS: list("CDJZ")},
    "LX": {FIRST: list("FA"), BUSINESS: list("JCDZP"), PREMIUM: list("NEG"), ECONOMY: list("YBHKMQSTUVW")},
    "SN": {BUSINESS: list("JCDZ"), PREMIUM: list("GEN"), ECONOMY: list("YBMHQVUWSTLK")},
    "LO": {BUSINESS: list("ZDC"), PREMIUM: list("PAR"), ECONOMY: list("YBMHKQTVLSOU")},
    "IB": {BUSINESS: list("JCDI"), PREMIUM: list("WP"), ECONOMY: list("YBHKMLVSNOQ")},
    "OS": {BUSINESS: list("JCDZ"), PREMIUM: list("GEN"), ECONOMY: list("YBMHQVWSTLKE")},
    "TP": {BUSINESS: list("CDZJR"), ECONOMY: list("YBMHQVSKLOGWU")},

    # ===== MIDDLE EAST / ASIA-PACIFIC =====
    "QR": {FIRST: list("PFA"), BUSINESS: list("JCDIR"), ECONOMY: list("YBHKMLVSNQTO")},
    "EK": {FIRST: list("FAP"), BUSINESS: list("JCIO"), PREMIUM: list("WE"), ECONOMY: list("YBMUKQLTVXH")},
    "SQ": {FIRST: list("FA"), BUSINESS: list("JCDUZ"), PREMIUM: list("STPRL"), ECONOMY: list("YBEMHWQNVKGOXI")},
    "NH": {FIRST: list("FA"), BUSINESS: list("JCDZP"), PREMIUM: list("GEN"), ECONOMY: list("YBMUHQVWSLTK")},
    "JL": {FIRST: list("FA"), BUSINESS: list("JCDXI"), PREMIUM: list("WE"), ECONOMY: list("YBHKMLVSOQN")},
}

CABIN_FALLBACK: Dict[str, str] = {FIRST: "F", BUSINESS: "J", PREMIUM: "N", ECONOMY: "Y"}

_SHORT_HAUL_DOWNGRADE = {FIRST: BUSINESS, PREMIUM: ECONOMY}


@dataclass(frozen=True)
class RBDTables:
    """Injectable letter tables; the module-level ones are the defaults."""

    by_airline: Mapping[str, Mapping[str, Sequence[str]]] = field(default_factory=lambda: RBD_BY_AIRLINE)
    generic: Mapping[str, Sequence[str]] = field(default_factory=lambda: GENERIC_RBD_BY_CABIN)
    fallback: Mapping[str, str] = field(default_factory=lambda: CABIN_FALLBACK)
    reference: ReferenceData = DEFAULT_REFERENCE


DEFAULT_TABLES = RBDTables()


# ══════════════════════════════════════════════════════════════════════════════
#  CABIN NORMALISATION
# ══════════════════════════════════════════════════════════════════════════════

_CABIN_SYNONYMS = (
    (FIRST, {"FIRST", "FIRST CLASS", "F"}, r"\bFIRST\b"),
    (BUSINESS, {"BUSINESS", "BUSINESS CLASS", "BIZ", "BUS", "J", "UPPER CLASS", "POLARIS", "MINT"},
     r"\bBUSINESS\b"),
    (PREMIUM, {"PREMIUM", "PREMIUM ECONOMY", "PREMIUM ECONOMY CLASS", "PREMIUM SELECT",
               "PREMIUM PLUS", "PREMIUM CABIN", "W"}, r"\bPREMIUM\b"),
    (ECONOMY, {"ECONOMY", "ECONOMY CLASS", "COACH", "MAIN CABIN", "STANDARD", "Y"},
     r"\b(?:ECONOMY|COACH)\b"),
)


def normalize_cabin(value) -> Optional[str]:
    """
    Free-text cabin name → FIRST / BUSINESS / PREMIUM / ECONOMY.

    Empty input gives None; anything unrecognised is treated as ECONOMY.
    """
    if value is None:
        return None
    collapsed = re.sub(r"\s+", " ", str(value).strip().upper())
    if not collapsed:
        return None
    for cabin, names, pattern in _CABIN_SYNONYMS:
        if collapsed in names or re.search(pattern, collapsed):
            return cabin
    return ECONOMY


def is_short_haul(duration_minutes: Optional[float], origin: str = "", dest: str = "",
                  tables: RBDTables = DEFAULT_TABLES) -> bool:
    if duration_minutes is None or duration_minutes < 0:
        return False
    if duration_minutes <= STRICT_SHORT_HAUL_MINUTES:
        return True
    if duration_minutes > SHORT_HAUL_LIMIT_MINUTES:
        return False
    origin_region = tables.reference.region(origin)
    dest_region = tables.reference.region(dest)
    return bool(origin_region) and origin_region == dest_region


def effective_cabin(cabin: Optional[str], duration_minutes: Optional[float] = None,
                    origin: str = "", dest: str = "", tables: RBDTables = DEFAULT_TABLES) -> Optional[str]:
    """Normalised cabin after the short-haul downgrade."""
    requested = normalize_cabin(cabin)
    if requested and is_short_haul(duration_minutes, origin, dest, tables):
        return _SHORT_HAUL_DOWNGRADE.get(requested, requested)
    return requested


# ══════════════════════════════════════════════════════════════════════════════
#  RESOLUTION STRATEGIES
# ══════════════════════════════════════════════════════════════════════════════

NO_MATCH = object()


def _from_airline(carrier: str, requested: str, cabin: str, tables: RBDTables):
    table = tables.by_airline.get(carrier)
    if table is None:
        return NO_MATCH
    letters = table.get(cabin)
    if letters:
        return letters[0]
    # configured carrier without the downgraded cabin: the generic table answers
    if cabin != requested:
        return NO_MATCH
    return None


def _from_generic(carrier: str, requested: str, cabin: str, tables: RBDTables):
    letters = tables.generic.get(cabin)
    return letters[0] if letters else NO_MATCH


def _from_fallback(carrier: str, requested: str, cabin: str, tables: RBDTables):
    return tables.fallback.get(cabin, NO_MATCH)


STRATEGIES: List[Callable] = [_from_airline, _from_generic, _from_fallback]


def resolve_booking_class(carrier: str, cabin, duration_minutes: Optional[float] = None,
                          origin: str = "", dest: str = "",
                          tables: RBDTables = DEFAULT_TABLES) -> Optional[str]:
    """
    Preferred booking letter for ``carrier`` in ``cabin``.

    Returns None when the cabin is empty or when the carrier is configured
    but does not sell the requested cabin at all.

        resolve_booking_class("LH", "business")      → "J"
        resolve_booking_class("B6", "FIRST")         → None
        resolve_booking_class("ZZ", "BUSINESS")      → "J"
        resolve_booking_class("AA", "Premium", 150)  → "Y"
    """
    requested = normalize_cabin(cabin)
    if not requested:
        return None
    target = effective_cabin(requested, duration_minutes, origin, dest, tables)
    code = (carrier or "").strip().upper()
    for strategy in STRATEGIES:
        answer = strategy(code, requested, target, tables)
        if answer is not NO_MATCH:
            return answer
    return None
