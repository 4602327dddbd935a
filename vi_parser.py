"""
vi_parser.py
============
Parser for the VI* flight-information display of a reservation terminal.

    FLIGHT  DATE  SEGMENT DPTR  ARVL    MLS  EQP  ELPD MILES SM
     1 AA  293 22OCT DEL JFK 1130P  605A¥1 LS   789 16.05  7318  N
    CABIN-PREMIUM ECONOMY
     2 AA 2813 23OCT JFK AUS 1132A  237P   F    738  4.05  1521  N
    CABIN-ECONOMY

Supports:
  - carrier + optional ``*`` + number, with or without a space
  - ``¥N`` / ``+N`` arrival day markers glued to the arrival time
  - ``H.MM`` elapsed time column → segment duration
  - ``CABIN-<name>`` lines (attach to the previous segment lacking a cabin,
    otherwise to the next segment)
  - year inference moving forward across the itinerary
"""

import re
from datetime import date, timedelta
from typing import List, Optional

from config import Logger
from dates import MONTH_INDEX, DOW_ROTATION, DateContext, FlightTime, today
from models import Segment

# ══════════════════════════════════════════════════════════════════════════════
#  REGEX PATTERNS
# ══════════════════════════════════════════════════════════════════════════════

_MON = r"JAN|FEB|MAR|APR|MAY|JUN|JUL|AUG|SEP|OCT|NOV|DEC"

# ── Segment line ──────────────────────────────────────────────────────────────
#  1 AA  293 22OCT DEL JFK 1130P  605A¥1 LS   789 16.05  7318  N
#  2 LH  944 15FEB FRA FLR 0130P 0255P 320 1.42
_RE_VI_SEGMENT = re.compile(
    rf"""
    ^\s*(?P<index>\d{{1,2}})\s+
    (?P<airline>[A-Z0-9]{{2}})\s*\*?\s*(?P<number>\d{{1,4}}[A-Z]?)\s+
    (?P<day>\d{{1,2}})(?P<month>{_MON})\s+
    (?P<dep_ap>[A-Z]{{3}})\s+(?P<arr_ap>[A-Z]{{3}})\s+
    (?P<dep_time>\d{{3,4}}[AP])\s+
    (?P<arr_time>\d{{3,4}}[AP])
    (?:\s*(?:¥|\+)\s*(?P<offset>\d))?
    (?P<rest>.*)$
    """,
    re.VERBOSE | re.I,
)

_RE_CABIN = re.compile(r"^\s*CABIN-(?P<cabin>.+?)\s*$", re.I)
_RE_ELAPSED = re.compile(r"(?<![\d.])(?P<hours>\d{1,2})\.(?P<minutes>[0-5]\d)(?![\d.])")


def _calendar_context(on: date) -> DateContext:
    return DateContext(on, DOW_ROTATION[on.weekday()])


def _elapsed_minutes(rest: str) -> Optional[int]:
    m = _RE_ELAPSED.search(rest or "")
    if not m:
        return None
    return int(m.group("hours")) * 60 + int(m.group("minutes"))


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


# ==================== VI PARSER ====================
class VIParser:
    """Turn VI* display text into Segment records"""

    @staticmethod
    def parse(raw_text: str, base_year: Optional[int] = None, now: Optional[date] = None) -> List[Segment]:
        rows = VIParser._extract_rows(raw_text or "")
        if not rows:
            return []
        VIParser._assign_years(rows, base_year, now or today())

        segments: List[Segment] = []
        for row in rows:
            if row.get("dep_on") is None:
                Logger.warning(f"Skipping VI* segment {row['airline']}{row['number']} with invalid date")
                continue
            dep = _calendar_context(row["dep_on"])
            arr = _calendar_context(dep.on + timedelta(days=row["offset"])) if row["offset"] else None
            segments.append(Segment(
                airline_code=row["airline"],
                number=row["number"],
                dep_airport=row["dep_ap"],
                arr_airport=row["arr_ap"],
                dep_gds=FlightTime.to_gds(row["dep_minutes"]),
                arr_gds=FlightTime.to_gds(row["arr_minutes"]),
                dep_date=dep.code,
                dep_dow=dep.dow,
                arr_date=arr.label if arr else "",
                direction="",
                header_ref=dep,
                dep_minutes=row["dep_minutes"],
                arr_minutes=row["arr_minutes"],
                dep_on=dep.on,
                arr_offset=row["offset"],
                cabin=row.get("cabin", ""),
                duration_minutes=row["elapsed"],
            ))
        Logger.info(f"VI* parser produced {len(segments)} segment(s)")
        return segments

    @staticmethod
    def _extract_rows(raw_text: str) -> List[dict]:
        rows: List[dict] = []
        pending_cabin = ""
        for line in raw_text.replace("\r\n", "\n").split("\n"):
            cabin = _RE_CABIN.match(line)
            if cabin:
                name = cabin.group("cabin")
                if rows and not rows[-1].get("cabin"):
                    rows[-1]["cabin"] = name
                else:
                    pending_cabin = name
                continue

            m = _RE_VI_SEGMENT.match(line)
            if not m:
                continue
            dep_minutes = FlightTime.from_gds(m.group("dep_time"))
            arr_minutes = FlightTime.from_gds(m.group("arr_time"))
            if dep_minutes is None or arr_minutes is None:
                Logger.debug(f"Unreadable VI* times in: {line.strip()}")
                continue
            row = {
                "airline": m.group("airline").upper(),
                "number": m.group("number").upper(),
                "day": int(m.group("day")),
                "month": MONTH_INDEX[m.group("month").upper()],
                "dep_ap": m.group("dep_ap").upper(),
                "arr_ap": m.group("arr_ap").upper(),
                "dep_minutes": dep_minutes,
                "arr_minutes": arr_minutes,
                "offset": int(m.group("offset") or 0),
                "elapsed": _elapsed_minutes(m.group("rest")),
            }
            if pending_cabin:
                row["cabin"], pending_cabin = pending_cabin, ""
            rows.append(row)
        return rows

    @staticmethod
    def _assign_years(rows: List[dict], base_year: Optional[int], now: date):
        """
        First segment: ``base_year``, else this year, or next year when that
        occurrence is closer to today.  Later segments move forward one year at
        a time until they no longer precede the latest arrival.
        """
        year = base_year or now.year
        first = rows[0]
        dep_on = _safe_date(year, first["month"], first["day"])
        if dep_on and base_year is None and dep_on < now:
            upcoming = _safe_date(year + 1, first["month"], first["day"])
            if upcoming and abs((upcoming - now).days) < abs((dep_on - now).days):
                year, dep_on = year + 1, upcoming
        first["dep_on"] = dep_on
        latest_arrival = dep_on + timedelta(days=first["offset"]) if dep_on else None

        for row in rows[1:]:
            candidate = _safe_date(year, row["month"], row["day"])
            if candidate and latest_arrival:
                while candidate < latest_arrival:
                    year += 1
                    candidate = _safe_date(year, row["month"], row["day"])
                    if candidate is None:
                        break
            row["dep_on"] = candidate
            if candidate:
                arrival = candidate + timedelta(days=row["offset"])
                if latest_arrival is None or arrival > latest_arrival:
                    latest_arrival = arrival
