"""
sanitizer.py
============
Raw page text → ordered list of atomic fact lines.

Every line is classified by ``LINE_RULES``, a table of (kind, predicate)
pairs evaluated top to bottom; the first predicate that accepts the line
wins.  New heuristics are added as rows, not as branches.

The sanitizer never raises: unknown lines pass through as ``OTHER``.
"""

import re
from typing import Callable, List, Optional, Tuple

from config import HEADER_JOIN_LIMIT, Logger
from dates import DurationCalculator, FlightDate, FlightTime

# ── Line kinds ────────────────────────────────────────────────────────────────
SECTION_HEADER = "section_header"
JOURNEY_HEADER = "journey_header"
ROUTE_HEADER = "route_header"
DEPARTS = "departs"
ARRIVES = "arrives"
TIME = "time"
DURATION = "duration"
AIRPORT = "airport"
NOISE = "noise"
EQUIPMENT = "equipment"
CABIN = "cabin"
OTHER = "other"

HEADER_KINDS = (SECTION_HEADER, JOURNEY_HEADER)
_UNSPLIT_KINDS = (SECTION_HEADER, JOURNEY_HEADER, ROUTE_HEADER)

# ══════════════════════════════════════════════════════════════════════════════
#  REGEX PATTERNS
# ══════════════════════════════════════════════════════════════════════════════

RE_SECTION_HEADER = re.compile(r"^(?:Departure|Depart|Return|Outbound|Inbound)\b(?!\s*\()", re.I)
RE_JOURNEY_HEADER = re.compile(r"^Flight\s+(?P<number>\d{1,2})\b(?!\s*:?\s*\d)", re.I)
RE_ROUTE_HEADER = re.compile(
    r"""
    \((?P<origin>[A-Z]{3})\)\s*
    (?:to|→|->|–|—|-)\s*
    [^()]*\((?P<dest>[A-Z]{3})\)
    (?:\s*(?:on|,|•|·)?\s*(?P<when>.+))?
    """,
    re.VERBOSE,
)
RE_DEPARTS = re.compile(r"^Depart(?:s|ing)\b", re.I)
RE_ARRIVES = re.compile(r"^Arriv(?:es|ing|al)\b", re.I)
RE_AIRPORT = re.compile(r"\(([A-Z]{3})\)")
RE_LONE_AIRPORT = re.compile(r"^\(([A-Z]{3})\)$")
RE_CABIN = re.compile(
    r"""
    ^(?P<name>(?:Basic\s+|Premium\s+)?Economy|Premium(?:\s+(?:Select|Plus|Cabin))?|Business(?:\s+Class)?
      |First(?:\s+Class)?|Main\s+Cabin|Coach|Upper\s+Class|Polaris|Mint)\b
    [^()]*(?:\((?P<letter>[A-Z]{1,2})\))?\s*$
    """,
    re.VERBOSE | re.I,
)

_NOISE_PATTERNS = [
    re.compile(r"^Overnight\b", re.I),
    re.compile(r"\bLong layover\b", re.I),
    re.compile(r"^Change planes\b", re.I),
    re.compile(r"^Operated by\b", re.I),
    re.compile(r"^Self[-\s]?transfer\b", re.I),
    re.compile(r"\bWi-?Fi\b", re.I),
    re.compile(r"\bLimited seats\b", re.I),
    re.compile(r"^[$€£₹]\s?\d"),
    re.compile(r"\bper\s*person\b", re.I),
    re.compile(r"^CO2", re.I),
    re.compile(r"\bemissions\b", re.I),
    re.compile(r"^(?:Bags?|Seats?|Select)$", re.I),
]

_EQUIPMENT_PATTERNS = [
    re.compile(r"^(?:Airbus|Boeing|Embraer|Bombardier|Canadair|ATR|De\s+Havilland|Dash\s*8|Sukhoi|COMAC|Dreamliner)\b", re.I),
    re.compile(r"^(?:A3[1-8]\d|A220|7[0-8]7|E-?1[79]\d|CRJ\s?\d{3})(?:[-\s]\w+)*$", re.I),
]

# Clock time, optionally followed by a "+1" day marker
_RANGE_TOKEN = re.compile(rf"(?:{FlightTime.CLOCK_TOKEN.pattern})(?:\s*\(?\+\d\)?)?", re.I)
_RANGE_JOINER = re.compile(r"\s(?:-|–|—|to)\s|[–—]|(?<=[mM\d])-(?=\d)")

_SEPARATORS = r"•·|"
_RE_SEPARATOR_RUN = re.compile(rf"[{_SEPARATORS}](?:\s*[{_SEPARATORS}])+")
_RE_SEPARATOR_SPLIT = re.compile(rf"\s*[{_SEPARATORS}]\s*")

_WEEKDAYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")
_MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")


# ══════════════════════════════════════════════════════════════════════════════
#  CLASSIFICATION
# ══════════════════════════════════════════════════════════════════════════════

def _is_equipment(line: str) -> bool:
    return any(p.search(line) for p in _EQUIPMENT_PATTERNS)


def _is_noise(line: str) -> bool:
    return any(p.search(line) for p in _NOISE_PATTERNS)


LINE_RULES: List[Tuple[str, Callable[[str], bool]]] = [
    (SECTION_HEADER, lambda line: bool(RE_SECTION_HEADER.match(line))),
    (JOURNEY_HEADER, lambda line: bool(RE_JOURNEY_HEADER.match(line))),
    (ROUTE_HEADER,   lambda line: bool(RE_ROUTE_HEADER.search(line))),
    (DEPARTS,        lambda line: bool(RE_DEPARTS.match(line))),
    (ARRIVES,        lambda line: bool(RE_ARRIVES.match(line))),
    (TIME,           lambda line: FlightTime.parse(line) is not None),
    (DURATION,       lambda line: DurationCalculator.parse_duration_text(line) is not None),
    # an airport code keeps a line alive even when it also reads as noise
    (AIRPORT,        lambda line: bool(RE_AIRPORT.search(line))),
    (NOISE,          _is_noise),
    (EQUIPMENT,      _is_equipment),
    (CABIN,          lambda line: bool(RE_CABIN.match(line))),
]


def classify_line(line: str) -> str:
    for kind, predicate in LINE_RULES:
        if predicate(line):
            return kind
    return OTHER


def airport_code(line: str) -> Optional[str]:
    m = RE_AIRPORT.search(line or "")
    return m.group(1) if m else None


def cabin_of(line: str) -> Tuple[str, str]:
    """``"Economy (Y)"`` → ``("Economy", "Y")``; empty strings when absent."""
    m = RE_CABIN.match(line or "")
    if not m:
        return "", ""
    return m.group("name"), (m.group("letter") or "")[:1]


def _is_date_fragment(line: str) -> bool:
    """True for lines holding nothing but weekday/month words, a day or a year."""
    tokens = [t for t in re.split(r"[\s,.]+", line.strip()) if t]
    if not tokens or len(tokens) > 4:
        return False
    for token in tokens:
        low = token.lower()
        if low[:3] in _WEEKDAYS or low[:3] in _MONTHS:
            if not low.isalpha():
                return False
            continue
        if re.fullmatch(r"(?:[0-3]?\d(?:st|nd|rd|th)?|(?:19|20)\d\d)", low):
            continue
        return False
    return True


# ==================== TEXT SANITIZER ====================
class TextSanitizer:
    """Normalise and re-segment copied itinerary text"""

    @staticmethod
    def clean(raw_text: str, join_limit: int = HEADER_JOIN_LIMIT) -> List[str]:
        lines: List[str] = []
        for raw in (raw_text or "").splitlines():
            line = TextSanitizer._normalize(raw)
            if not line:
                continue
            for part in TextSanitizer._split_clauses(line):
                lines.extend(TextSanitizer._split_time_range(part))

        kept = [line for line in lines if classify_line(line) != NOISE]
        if len(kept) != len(lines):
            Logger.debug(f"Sanitizer dropped {len(lines) - len(kept)} noise line(s)")

        kept = TextSanitizer._merge_lone_airports(kept)
        return TextSanitizer._join_bare_headers(kept, join_limit)

    @staticmethod
    def _normalize(raw: str) -> str:
        line = raw.replace("\u00a0", " ").replace("\u200b", "")
        line = re.sub(r"\s+", " ", line).strip()
        line = _RE_SEPARATOR_RUN.sub(lambda m: m.group(0)[0], line)
        return line.strip(f" {_SEPARATORS}")

    @staticmethod
    def _split_clauses(line: str) -> List[str]:
        if classify_line(line) in _UNSPLIT_KINDS:
            return [line]
        return [part for part in _RE_SEPARATOR_SPLIT.split(line) if part]

    @staticmethod
    def _split_time_range(line: str) -> List[str]:
        """``"11:51 am – 5:55 pm"`` → ``["11:51 am", "5:55 pm"]``, leftover text kept in place."""
        tokens = list(_RANGE_TOKEN.finditer(line))
        if len(tokens) < 2 or not _RANGE_JOINER.search(line) or classify_line(line) in _UNSPLIT_KINDS:
            return [line]
        head = line[:tokens[0].start()].strip(" ,;:-–—")
        tail = line[tokens[-1].end():].strip(" ,;:-–—")
        parts = [head] if head else []
        parts.extend(re.sub(r"[()]", "", t.group(0)).strip() for t in tokens)
        if tail:
            parts.append(tail)
        return parts

    @staticmethod
    def _merge_lone_airports(lines: List[str]) -> List[str]:
        merged: List[str] = []
        for line in lines:
            if merged and RE_LONE_AIRPORT.match(line) and not RE_AIRPORT.search(merged[-1]) \
                    and classify_line(merged[-1]) == OTHER:
                merged[-1] = f"{merged[-1]} {line}"
            else:
                merged.append(line)
        return merged

    @staticmethod
    def _join_bare_headers(lines: List[str], join_limit: int) -> List[str]:
        out: List[str] = []
        i = 0
        while i < len(lines):
            line = lines[i]
            if classify_line(line) in HEADER_KINDS and FlightDate.parse(line) is None:
                combined = line
                for k in range(1, join_limit + 1):
                    if i + k >= len(lines) or not _is_date_fragment(lines[i + k]):
                        break
                    combined = f"{combined} {lines[i + k]}"
                    if FlightDate.parse(combined) is not None:
                        line = combined
                        i += k
                        break
            out.append(line)
            i += 1
        return out
