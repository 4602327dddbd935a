"""
segment_collector.py
====================
Per-section state machine that turns sanitized lines into Segment records.

    SEEK_FLIGHT → dep time → dep airport → arr time → arr airport
                → trailer (Arrives date, cabin letter) → emit → SEEK_FLIGHT

The running date lives in an immutable ``ParseContext`` that every sub-scan
takes and returns; nothing is kept on the collector between calls.

Date priority, highest first:
  1. route header date ("Seattle (SEA) to Barcelona (BCN) on Sun, Apr 12")
  2. "Departs <date>" override
  3. "Arrives <date>" after a segment, which also seeds the next segment
  4. forward rollover when a departure clock is earlier than the previous
     arrival clock inside the same journey
A journey header or a new section clears the previous arrival, so rollover
never leaks across journeys.  The date is never moved backwards except by an
explicit header.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, NamedTuple, Optional, Tuple

from config import FIELD_LOOKAHEAD, TRAILER_WINDOW, Logger
from dates import DateContext, DayOffsetCalculator, DurationCalculator, FlightDate, FlightTime
from mappings import DEFAULT_REFERENCE, UNKNOWN_CARRIER, ReferenceData
from models import JourneyMarker, Section, Segment
from sanitizer import (
    AIRPORT, ARRIVES, CABIN, DEPARTS, DURATION, JOURNEY_HEADER, OTHER, RE_JOURNEY_HEADER,
    RE_ROUTE_HEADER, ROUTE_HEADER, SECTION_HEADER, TIME, airport_code, cabin_of, classify_line,
)

# ══════════════════════════════════════════════════════════════════════════════
#  FLIGHT LINE PATTERNS
# ══════════════════════════════════════════════════════════════════════════════

_RE_NAME_NUMBER = re.compile(r"^(?P<name>[A-Za-z][A-Za-z .&'’-]*?)\s+(?P<number>\d{1,4})$")
_RE_BARE_NUMBER = re.compile(r"^\d{1,4}$")
_RE_DESIGNATOR_LINE = re.compile(r"^(?P<code>[A-Z0-9]{2}[A-Z]?)\s?\*?(?P<number>\d{1,4})$")
_RE_DESIGNATOR_EMBEDDED = re.compile(r"(?<![A-Za-z0-9-])(?P<code>[A-Z0-9]{2})\s?(?P<number>\d{1,4})(?![A-Za-z0-9-])")
_RE_OPERATED_BY = re.compile(r"\s*(?:[,(]\s*)?operated by\b.*$", re.I)
_RE_AIRLINE_LIKE = re.compile(
    r"\b(?:Air|Airlines?|Airways|Aviation|Aero\w*|Jet\w*|Express|Wings|Fly\w*)\b", re.I
)
_RE_EQUIPMENT_PHRASE = re.compile(
    r"\b(?:Airbus|Boeing|Embraer|Bombardier|Canadair|ATR|De\s+Havilland)\s+[\w-]+"
    r"|\b(?:A3[1-8]\d|A220|7[0-8]7|E-?1[79]\d|CRJ\s?\d{3})(?:-\d+)?\w*",
    re.I,
)


class FlightMatch(NamedTuple):
    airline_code: str
    number: str
    lines: int                           # how many lines the designator occupied


@dataclass(frozen=True)
class ParseContext:
    date: Optional[DateContext] = None
    route_origin: str = ""
    route_dest: str = ""
    last_arrival: Optional[int] = None   # arrival clock (minutes) of the previous segment in this journey
    base_year: Optional[int] = None

    @property
    def reference_day(self) -> Optional[date]:
        return self.date.on if self.date else None


@dataclass
class CollectResult:
    segments: List[Segment] = field(default_factory=list)
    markers: List[JourneyMarker] = field(default_factory=list)


# ==================== SEGMENT COLLECTOR ====================
class SegmentCollector:
    """Walk each section's lines and emit fully resolved segments"""

    def __init__(self, reference: ReferenceData = DEFAULT_REFERENCE,
                 lookahead: int = FIELD_LOOKAHEAD, trailer_window: int = TRAILER_WINDOW):
        self.reference = reference
        self.lookahead = lookahead
        self.trailer_window = trailer_window

    # ── public ────────────────────────────────────────────────────────────────
    def collect(self, sections: List[Section], base_year: Optional[int] = None) -> CollectResult:
        result = CollectResult()
        ctx = ParseContext(base_year=base_year)
        for section in sections:
            # a new section clears rollover; its header date wins when present
            ctx = replace(ctx, last_arrival=None)
            if section.header_date:
                ctx = replace(ctx, date=section.header_date)
            ctx = self._collect_section(section, ctx, result)
        return result

    # ── flight recognition ────────────────────────────────────────────────────
    def match_flight(self, lines: List[str], i: int) -> Optional[FlightMatch]:
        """Recognise a flight designator at ``lines[i]``."""
        line = _RE_OPERATED_BY.sub("", lines[i]).strip()
        if not line:
            return None

        m = _RE_NAME_NUMBER.match(line)
        if m:
            code = self._carrier_for_name(m.group("name"))
            if code:
                return FlightMatch(code, m.group("number"), 1)

        if i + 1 < len(lines) and _RE_BARE_NUMBER.match(lines[i + 1].strip()):
            code = self._carrier_for_name(line)
            if code:
                return FlightMatch(code, lines[i + 1].strip(), 2)

        m = _RE_DESIGNATOR_LINE.match(line)
        if m and re.search(r"[A-Z]", m.group("code")):
            return FlightMatch(m.group("code"), m.group("number"), 1)

        dense = _RE_EQUIPMENT_PHRASE.sub(" ", line)
        for m in _RE_DESIGNATOR_EMBEDDED.finditer(dense):
            code = m.group("code")
            if re.search(r"[A-Z]", code) and self.reference.is_carrier_code(code):
                return FlightMatch(code, m.group("number"), 1)
        return None

    def _carrier_for_name(self, name: str) -> Optional[str]:
        words = name.split()
        # "Air Canada Rouge" → "Air Canada", "Iberia Express" → "Iberia"
        for cut in range(len(words), 0, -1):
            code = self.reference.airline_code(" ".join(words[:cut]))
            if code:
                return code
        if _RE_AIRLINE_LIKE.search(name):
            Logger.debug(f"Unknown airline '{name}', using {UNKNOWN_CARRIER}")
            return UNKNOWN_CARRIER
        return None

    # ── context updates ───────────────────────────────────────────────────────
    def _on_journey_header(self, line: str, ctx: ParseContext, markers: List[JourneyMarker],
                           next_index: int) -> ParseContext:
        m = RE_JOURNEY_HEADER.match(line)
        header_date = FlightDate.parse(line, reference=ctx.reference_day, base_year=ctx.base_year)
        markers.append(JourneyMarker(start_index=next_index, number=int(m.group("number")), header_date=header_date))
        return replace(ctx, date=header_date or ctx.date, last_arrival=None)

    def _on_route_header(self, line: str, ctx: ParseContext) -> ParseContext:
        m = RE_ROUTE_HEADER.search(line)
        ctx = replace(ctx, route_origin=m.group("origin"), route_dest=m.group("dest"))
        when = m.group("when") or ""
        header_date = FlightDate.parse(when, reference=ctx.reference_day, base_year=ctx.base_year)
        if header_date:
            ctx = replace(ctx, date=header_date, last_arrival=None)
        return ctx

    def _on_departs(self, line: str, ctx: ParseContext) -> ParseContext:
        override = FlightDate.parse(line, reference=ctx.reference_day, base_year=ctx.base_year)
        if override:
            ctx = replace(ctx, date=override, last_arrival=None)
        return ctx

    # ── section walk ──────────────────────────────────────────────────────────
    def _collect_section(self, section: Section, ctx: ParseContext, result: CollectResult) -> ParseContext:
        lines = section.lines
        i = 0
        while i < len(lines):
            kind = classify_line(lines[i])
            if kind == JOURNEY_HEADER:
                ctx = self._on_journey_header(lines[i], ctx, result.markers, len(result.segments))
            elif kind == ROUTE_HEADER:
                ctx = self._on_route_header(lines[i], ctx)
            elif kind == DEPARTS:
                ctx = self._on_departs(lines[i], ctx)
            elif kind == OTHER:
                flight = self.match_flight(lines, i)
                if flight:
                    attempt = self._collect_segment(lines, i, flight, ctx, section.kind or "", len(result.segments))
                    if attempt:
                        segment, ctx, markers, i = attempt
                        result.markers.extend(markers)
                        result.segments.append(segment)
                        Logger.debug(f"Segment {len(result.segments)}: {segment.designator} "
                                     f"{segment.dep_airport}-{segment.arr_airport} {segment.dep_date}")
                        continue
                    Logger.debug(f"Discarded incomplete flight {flight.airline_code}{flight.number} at line {i}")
            i += 1
        return ctx

    def _collect_segment(self, lines: List[str], start: int, flight: FlightMatch, ctx: ParseContext,
                         direction: str, next_index: int
                         ) -> Optional[Tuple[Segment, ParseContext, List[JourneyMarker], int]]:
        """One attempt; None when any positional field is missing.  Markers seen are returned, not stored."""
        markers: List[JourneyMarker] = []
        fields = {}
        duration: Optional[int] = None
        arrives: Optional[DateContext] = None
        cabin, letter = "", ""

        k = start + flight.lines
        # fields are taken in page order only; a time range followed by an airport
        # pair ("11:51 am – 5:55 pm", "Seattle (SEA) · Chicago (ORD)") yields nothing
        for want in ("dep_time", "dep_airport", "arr_time", "arr_airport"):
            found = None
            end = min(k + self.lookahead, len(lines))
            while k < end:
                line = lines[k]
                kind = classify_line(line)
                k += 1
                if kind == JOURNEY_HEADER:
                    if fields:
                        return None
                    # header squeezed between the designator and its data
                    ctx = self._on_journey_header(line, ctx, markers, next_index)
                    continue
                if kind == SECTION_HEADER:
                    return None
                if kind == ROUTE_HEADER:
                    ctx = self._on_route_header(line, ctx)
                    continue
                if kind == DEPARTS:
                    ctx = self._on_departs(line, ctx)
                    continue
                if kind == OTHER and self.match_flight(lines, k - 1):
                    return None
                if kind == DURATION and "dep_time" in fields and duration is None:
                    duration = DurationCalculator.parse_duration_text(line)
                elif kind == ARRIVES and arrives is None:
                    arrives = FlightDate.parse(line, reference=ctx.reference_day, base_year=ctx.base_year)
                elif kind == CABIN and not cabin:
                    cabin, letter = cabin_of(line)
                elif kind == TIME and want in ("dep_time", "arr_time"):
                    found = FlightTime.parse(line)
                elif kind == AIRPORT and want in ("dep_airport", "arr_airport"):
                    found = airport_code(line)
                if found:
                    break
            if not found:
                return None
            fields[want] = found

        # trailer: Arrives date and cabin letter, stopped by anything that starts new data
        for j in range(k, min(k + self.trailer_window, len(lines))):
            line = lines[j]
            kind = classify_line(line)
            if kind in (SECTION_HEADER, JOURNEY_HEADER, ROUTE_HEADER, DEPARTS, TIME):
                break
            if kind == OTHER and self.match_flight(lines, j):
                break
            if kind == ARRIVES and arrives is None:
                arrives = FlightDate.parse(line, reference=ctx.reference_day, base_year=ctx.base_year)
            elif kind == CABIN and not letter:
                cabin, letter = cabin_of(line)

        segment, ctx = self._build_segment(flight, fields, ctx, direction, duration, arrives, cabin, letter)
        return segment, ctx, markers, k

    # ── dates ─────────────────────────────────────────────────────────────────
    def _build_segment(self, flight: FlightMatch, fields: dict, ctx: ParseContext, direction: str,
                       duration: Optional[int], arrives: Optional[DateContext], cabin: str, letter: str
                       ) -> Tuple[Segment, ParseContext]:
        dep_minutes, dep_gds, _ = fields["dep_time"]
        arr_minutes, arr_gds, plus_days = fields["arr_time"]
        dep_airport, arr_airport = fields["dep_airport"], fields["arr_airport"]

        day = ctx.date
        if day and ctx.last_arrival is not None and dep_minutes < ctx.last_arrival:
            day = day.advance(1)

        if arrives and day and arrives.on < day.on:
            Logger.debug(f"Ignoring arrival date {arrives.label} before departure {day.label}")
            arrives = None

        if arrives and day:
            arr_offset = (arrives.on - day.on).days
        elif plus_days:
            arr_offset = max(0, plus_days)
        else:
            arr_offset = DayOffsetCalculator.calculate(dep_minutes, arr_minutes, duration, dep_airport,
                                                       arr_airport, day.on if day else None, self.reference)

        if duration is None and day:
            duration = DurationCalculator.flight_minutes(dep_minutes, arr_minutes, arr_offset, dep_airport,
                                                         arr_airport, day.on, self.reference)

        segment = Segment(
            airline_code=flight.airline_code,
            number=flight.number,
            dep_airport=dep_airport,
            arr_airport=arr_airport,
            dep_gds=dep_gds,
            arr_gds=arr_gds,
            dep_date=day.code if day else "",
            dep_dow=day.dow if day else None,
            arr_date=arrives.label if arrives else "",
            booking_class=letter,
            direction=direction,
            route_origin=ctx.route_origin,
            route_dest=ctx.route_dest,
            header_ref=day,
            dep_minutes=dep_minutes,
            arr_minutes=arr_minutes,
            dep_on=day.on if day else None,
            arr_offset=arr_offset,
            cabin=cabin,
            duration_minutes=duration,
        )

        next_day = arrives if arrives else (day.advance(arr_offset) if day else None)
        return segment, replace(ctx, date=next_day, last_arrival=arr_minutes)
