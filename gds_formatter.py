"""
gds_formatter.py
================
Render segments as reservation-terminal commands.

*I itinerary line (one per segment, renumbered from 1):

     1 IB4067J   12APR S    SEAORD*SS1    1151A   555P /DCIB /E
     2 IB4382J   12APR S    ORDBCN*SS1     655P  1030A 13APR M /DCIB /E

Availability command (one line):

    112APRSEABCN12AORD¥IB¥IB                 plain
    112APRSEABCN1151AORD-60¥IB¥IB            detailed (dep time + layovers)
"""

from typing import Dict, List, Sequence

from config import Logger
from dates import DurationCalculator
from errors import ConversionError
from models import Journey, Preview, Segment
from rbd import DEFAULT_TABLES, RBDTables, resolve_booking_class

ALL = "all"
_DAY_MINUTES = 24 * 60


# ==================== BOOKING LETTER ====================
def booking_letter(segment: Segment, options: Dict, tables: RBDTables = DEFAULT_TABLES) -> str:
    """
    Explicit letter on the segment first, then the auto-cabin resolution,
    then the configured default.
    """
    if segment.booking_class:
        return segment.booking_class
    auto_cabin = options.get("auto_cabin")
    if auto_cabin:
        cabin = segment.cabin if auto_cabin is True else auto_cabin
        if cabin:
            letter = resolve_booking_class(segment.airline_code, cabin, segment.duration_minutes,
                                           segment.dep_airport, segment.arr_airport, tables)
            if letter:
                return letter
            Logger.debug(f"No {cabin} letter for {segment.airline_code}, using default")
    return options["booking_class"]


# ==================== *I LINES ====================
def format_segment_line(seq: int, segment: Segment, letter: str, status: str, multi: bool) -> str:
    flight_field = f"{segment.designator}{letter}".ljust(10)
    date_field = f"{segment.dep_date} {segment.dep_dow or ''}".strip().ljust(11)
    indicator = f"{'*' if multi else ' '}{status}" if status else ""
    city_field = f"{segment.dep_airport}{segment.arr_airport}{indicator}".ljust(13)
    line = f"{seq:>2} {flight_field}{date_field}{city_field}{segment.dep_gds:>6} {segment.arr_gds:>6}".rstrip()
    if segment.arr_date:
        line += f" {segment.arr_date}"
    return f"{line} /DC{segment.airline_code} /E"


def format_itinerary(segments: Sequence[Segment], options: Dict, tables: RBDTables = DEFAULT_TABLES) -> str:
    if not segments:
        raise ConversionError("no_segments", "No segments to format")
    missing = [i + 1 for i, s in enumerate(segments) if not s.dep_date]
    if missing:
        raise ConversionError("missing_departure_date",
                              f"No departure date for segment(s) {', '.join(map(str, missing))}")
    multi = len(segments) > 1
    status = options["segment_status"]
    # built completely before returning: a failure above leaves nothing half-written
    lines = [format_segment_line(seq, segment, booking_letter(segment, options, tables), status, multi)
             for seq, segment in enumerate(segments, start=1)]
    return "\n".join(lines)


# ==================== AVAILABILITY ====================
def layover_minutes(arriving: Segment, departing: Segment) -> int:
    if arriving.arr_on is not None and departing.dep_on is not None:
        return DurationCalculator.layover_minutes(arriving.arr_minutes, arriving.arr_on,
                                                  departing.dep_minutes, departing.dep_on)
    return (departing.dep_minutes - arriving.arr_minutes) % _DAY_MINUTES


def build_availability(segments: Sequence[Segment], detailed: bool = False) -> str:
    """
    ``1<day><MON><origin><dest>`` + ``12A<transit>/<transit>`` + ``¥<carrier>`` per segment.

    Detailed mode replaces the transit clause with the first departure time
    and ``<transit>-<layover minutes>`` pairs.
    """
    if not segments:
        raise ConversionError("no_segments", "No segments for availability")
    first, last = segments[0], segments[-1]
    if len(first.dep_date or "") < 5 or not first.dep_airport or not last.arr_airport:
        raise ConversionError("missing_availability_fields",
                              "First/last segment lacks a departure date or airport")

    day, month = int(first.dep_date[:2]), first.dep_date[2:5]
    command = f"1{day}{month}{first.dep_airport}{last.arr_airport}"
    connections = list(zip(segments, segments[1:]))
    if detailed:
        command += first.dep_gds
        command += "/".join(f"{a.arr_airport}-{layover_minutes(a, b)}" for a, b in connections)
    elif connections:
        command += "12A" + "/".join(a.arr_airport for a, _ in connections)
    return command + "".join(f"¥{s.airline_code}" for s in segments)


# ==================== SELECTION ====================
def select_segments(preview: Preview, options: Dict) -> List[Segment]:
    """
    Apply journey index (1-based), else segment range (0-based, inclusive,
    clamped), then the direction filter.
    """
    segments = list(preview.segments)
    journey_index = options.get("journey_index")
    segment_range = options.get("segment_range")

    if journey_index is not None:
        if not 1 <= journey_index <= len(preview.journeys):
            raise ConversionError("invalid_journey",
                                  f"Journey {journey_index} not in 1..{len(preview.journeys)}")
        journey = preview.journeys[journey_index - 1]
        segments = segments[journey.start_idx:journey.end_idx + 1]
    elif segment_range is not None:
        start, end = segment_range
        if end < start:
            raise ConversionError("invalid_range", f"Range {start}..{end} is reversed")
        start, end = max(start, 0), min(end, len(segments) - 1)
        if start > end:
            raise ConversionError("invalid_range", f"Range {segment_range} is empty after clamping")
        segments = segments[start:end + 1]

    direction = options.get("direction", ALL)
    if direction != ALL:
        segments = [s for s in segments if s.direction == direction]
        if not segments:
            raise ConversionError("no_segments_for_direction", f"No {direction} segments")
    return segments


def journey_segments(preview: Preview, journey: Journey) -> List[Segment]:
    return list(preview.segments[journey.start_idx:journey.end_idx + 1])


def availability_per_journey(preview: Preview, options: Dict) -> List[Dict]:
    direction = options.get("direction", ALL)
    entries = []
    for journey in preview.journeys:
        segments = journey_segments(preview, journey)
        if direction != ALL and not any(s.direction == direction for s in segments):
            continue
        entries.append({
            "label": journey.label,
            "journey_index": journey.index_hint,
            "command": build_availability(segments, options.get("detailed", False)),
        })
    if not entries:
        raise ConversionError("no_segments_for_direction", f"No {direction} journeys")
    return entries
