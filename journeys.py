"""
journeys.py
===========
Group the flat segment list into journeys (continuous chains of connections).

Passes, in order:
  1. explicit:   every "Flight N" header opens a journey at its segment index
  2. date gaps:  with at most one explicit journey, cut wherever consecutive
                 departure ordinals are more than one day apart or the
                 route header changes
  3. proximity:  merge neighbours whose boundary ordinals are ≤ 1 day apart,
                 unless their route headers differ
  4. continuity: split wherever an arrival airport is not the next departure
Journeys are then renumbered 1..N.
"""

from dataclasses import replace
from typing import List, Optional, Sequence

from config import Logger
from dates import MONTH_INDEX
from models import INBOUND, OUTBOUND, Journey, JourneyMarker, Preview, Segment

# Day-of-year offset for the first of each month (non-leap year)
MONTH_OFFSETS = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
_YEAR_DAYS = 365


def day_ordinals(segments: Sequence[Segment]) -> List[Optional[int]]:
    """
    Approximate day numbers for each departure, always moving forward:
    a date that would fall before its predecessor is pushed into the next year.
    """
    ordinals: List[Optional[int]] = []
    previous: Optional[int] = None
    for segment in segments:
        code = segment.dep_date or ""
        month = MONTH_INDEX.get(code[2:5]) if len(code) >= 5 and code[:2].isdigit() else None
        if month is None:
            ordinals.append(previous)
            continue
        ordinal = MONTH_OFFSETS[month - 1] + int(code[:2])
        if previous is not None:
            while ordinal < previous:
                ordinal += _YEAR_DAYS
        ordinals.append(ordinal)
        previous = ordinal
    return ordinals


def _gap(ordinals: List[Optional[int]], left: int, right: int) -> Optional[int]:
    a, b = ordinals[left], ordinals[right]
    if a is None or b is None:
        return None
    return b - a


def _route_changed(segments: Sequence[Segment], left: int, right: int) -> bool:
    """True when both segments sit under route headers and the headers differ"""
    a = (segments[left].route_origin, segments[left].route_dest)
    b = (segments[right].route_origin, segments[right].route_dest)
    return all(a) and all(b) and a != b


def _make(segments: Sequence[Segment], start: int, end: int, explicit: bool = False,
          header_date=None) -> Journey:
    return Journey(start_idx=start, end_idx=end, origin=segments[start].dep_airport,
                   dest=segments[end].arr_airport, explicit=explicit, header_date=header_date)


# ==================== JOURNEY GROUPER ====================
class JourneyGrouper:
    """Derive, merge and split journeys over the cross-section segment list"""

    @staticmethod
    def explicit_journeys(segments: Sequence[Segment], markers: Sequence[JourneyMarker]) -> List[Journey]:
        n = len(segments)
        starts = {}
        for marker in markers:
            if marker.start_index < n:
                starts.setdefault(marker.start_index, marker)
        if not starts:
            return []
        ordered = sorted(starts)
        journeys: List[Journey] = []
        if ordered[0] > 0:
            journeys.append(_make(segments, 0, ordered[0] - 1))
        for pos, start in enumerate(ordered):
            end = ordered[pos + 1] - 1 if pos + 1 < len(ordered) else n - 1
            journeys.append(_make(segments, start, end, explicit=True, header_date=starts[start].header_date))
        return journeys

    @staticmethod
    def derive_by_dates(segments: Sequence[Segment], ordinals: List[Optional[int]]) -> List[Journey]:
        journeys: List[Journey] = []
        start = 0
        for i in range(1, len(segments)):
            gap = _gap(ordinals, i - 1, i)
            if (gap is not None and gap > 1) or _route_changed(segments, i - 1, i):
                journeys.append(_make(segments, start, i - 1))
                start = i
        journeys.append(_make(segments, start, len(segments) - 1))
        return journeys

    @staticmethod
    def merge_close(segments: Sequence[Segment], journeys: List[Journey],
                    ordinals: List[Optional[int]]) -> List[Journey]:
        merged: List[Journey] = []
        for journey in journeys:
            if merged:
                last = merged[-1]
                gap = _gap(ordinals, last.end_idx, journey.start_idx)
                if gap is not None and gap <= 1 and not _route_changed(segments, last.end_idx,
                                                                         journey.start_idx):
                    merged[-1] = _make(segments, last.start_idx, journey.end_idx,
                                       explicit=last.explicit or journey.explicit,
                                       header_date=last.header_date or journey.header_date)
                    continue
            merged.append(journey)
        return merged

    @staticmethod
    def split_discontinuous(segments: Sequence[Segment], journeys: List[Journey]) -> List[Journey]:
        result: List[Journey] = []
        for journey in journeys:
            start = journey.start_idx
            first = True
            for i in range(journey.start_idx, journey.end_idx):
                if segments[i].arr_airport != segments[i + 1].dep_airport:
                    result.append(_make(segments, start, i, explicit=journey.explicit and first,
                                        header_date=journey.header_date if first else None))
                    start = i + 1
                    first = False
            result.append(_make(segments, start, journey.end_idx, explicit=journey.explicit and first,
                                header_date=journey.header_date if first else None))
        return result

    @staticmethod
    def group(segments: Sequence[Segment], markers: Sequence[JourneyMarker] = ()) -> List[Journey]:
        if not segments:
            return []
        ordinals = day_ordinals(segments)
        journeys = JourneyGrouper.explicit_journeys(segments, markers)
        explicit_count = sum(1 for j in journeys if j.explicit)
        if explicit_count <= 1 and len(segments) > 1:
            derived = JourneyGrouper.derive_by_dates(segments, ordinals)
            if explicit_count == 1:
                marker = next(j for j in journeys if j.explicit)
                for j in derived:
                    if j.start_idx == marker.start_idx:
                        j.explicit, j.header_date = True, marker.header_date
            journeys = derived
        elif not journeys:
            journeys = [_make(segments, 0, len(segments) - 1)]

        journeys = JourneyGrouper.merge_close(segments, journeys, ordinals)
        journeys = JourneyGrouper.split_discontinuous(segments, journeys)
        for number, journey in enumerate(journeys, start=1):
            journey.index_hint = number
        return journeys

    @staticmethod
    def is_multi_city(journeys: Sequence[Journey], markers: Sequence[JourneyMarker] = ()) -> bool:
        declared = len({m.number for m in markers})
        if declared > 1 or len(journeys) > 2:
            return True
        if len(journeys) == 2:
            first, second = journeys
            return not (second.origin == first.dest and second.dest == first.origin)
        return False


# ==================== DIRECTION ====================
def _turnaround(segments: Sequence[Segment], start: int, end: int) -> int:
    """Index inside [start, end] after the longest layover; ``end`` when nothing is measurable."""
    best, best_wait = end, -1
    for i in range(start + 1, end + 1):
        prev, cur = segments[i - 1], segments[i]
        if prev.arr_on is None or cur.dep_on is None:
            continue
        wait = (cur.dep_on - prev.arr_on).days * 24 * 60 + cur.dep_minutes - prev.arr_minutes
        if wait > best_wait:
            best, best_wait = i, wait
    return best


def assign_directions(segments: Sequence[Segment], journeys: Sequence[Journey]) -> List[Segment]:
    """
    Fill in direction for segments that came from an unlabeled section.

    The first departure is "home".  The first later segment arriving home
    closes the trip; the inbound part starts with that segment's journey, or,
    when the whole trip is one journey, after its longest layover.
    """
    unlabeled = [i for i, s in enumerate(segments) if not s.direction]
    if not unlabeled:
        return list(segments)
    home = segments[unlabeled[0]].dep_airport
    inbound_from = None
    for i in unlabeled[1:]:
        if segments[i].arr_airport == home:
            owner = next((j for j in journeys if j.start_idx <= i <= j.end_idx), None)
            if owner and owner.start_idx > unlabeled[0]:
                inbound_from = owner.start_idx
            else:
                inbound_from = _turnaround(segments, unlabeled[0], i)
            break

    result = []
    for i, segment in enumerate(segments):
        if segment.direction:
            result.append(segment)
            continue
        direction = INBOUND if inbound_from is not None and i >= inbound_from else OUTBOUND
        result.append(replace(segment, direction=direction))
    if inbound_from is not None:
        Logger.debug(f"Inbound inferred from segment {inbound_from + 1}")
    return result


def build_preview(segments: Sequence[Segment], markers: Sequence[JourneyMarker] = ()) -> Preview:
    journeys = JourneyGrouper.group(segments, markers)
    directed = assign_directions(segments, journeys)
    return Preview(segments=directed, journeys=journeys,
                   multi_city=JourneyGrouper.is_multi_city(journeys, markers))
