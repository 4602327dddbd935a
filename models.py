from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional

from dates import DateContext

OUTBOUND = "outbound"
INBOUND = "inbound"

# ==================== MODELS ====================

@dataclass
class Segment:
    """One flown leg.  Only built once all four positional fields are known."""
    airline_code: str
    number: str
    dep_airport: str
    arr_airport: str
    dep_gds: str
    arr_gds: str
    dep_date: str                        # "03OCT"
    dep_dow: Optional[str] = None        # weekday letter
    arr_date: str = ""                   # "13APR M", only from an explicit arrival date
    booking_class: str = ""              # explicit letter, else resolved at format time
    direction: str = OUTBOUND
    route_origin: str = ""
    route_dest: str = ""
    header_ref: Optional[DateContext] = None

    # calendar detail kept for journey grouping, durations and layovers
    dep_minutes: int = 0
    arr_minutes: int = 0
    dep_on: Optional[date] = None
    arr_offset: int = 0
    cabin: str = ""
    duration_minutes: Optional[int] = None

    @property
    def designator(self) -> str:
        if len(self.number) < 4:
            return f"{self.airline_code} {self.number}"
        return f"{self.airline_code}{self.number}"

    @property
    def arr_on(self) -> Optional[date]:
        if self.dep_on is None:
            return None
        return self.dep_on + timedelta(days=self.arr_offset)

    def to_dict(self):
        return {
            'airline_code': self.airline_code,
            'number': self.number,
            'dep_airport': self.dep_airport,
            'arr_airport': self.arr_airport,
            'dep_gds': self.dep_gds,
            'arr_gds': self.arr_gds,
            'dep_date': self.dep_date,
            'dep_dow': self.dep_dow,
            'arr_date': self.arr_date,
            'booking_class': self.booking_class,
            'direction': self.direction,
            'route_origin': self.route_origin,
            'route_dest': self.route_dest,
            'header_ref': self.header_ref.label if self.header_ref else None,
            'cabin': self.cabin,
            'duration_minutes': self.duration_minutes,
        }


@dataclass
class Journey:
    start_idx: int
    end_idx: int
    origin: str
    dest: str
    explicit: bool = False
    index_hint: int = 0
    header_date: Optional[DateContext] = None

    @property
    def label(self) -> str:
        return f"{self.index_hint} {self.origin}-{self.dest}"

    def to_dict(self):
        return {
            'start_idx': self.start_idx,
            'end_idx': self.end_idx,
            'origin': self.origin,
            'dest': self.dest,
            'explicit': self.explicit,
            'index_hint': self.index_hint,
            'header_date': self.header_date.label if self.header_date else None,
            'label': self.label,
        }


@dataclass(frozen=True)
class JourneyMarker:
    """A "Flight N" header: the next emitted segment opens journey ``number``."""
    start_index: int
    number: int
    header_date: Optional[DateContext] = None


@dataclass
class Section:
    kind: Optional[str]                  # outbound / inbound / None when no header was seen
    header_date: Optional[DateContext] = None
    lines: List[str] = field(default_factory=list)


@dataclass
class Preview:
    segments: List[Segment]
    journeys: List[Journey]
    multi_city: bool = False

    def to_dict(self):
        return {
            'segments': [s.to_dict() for s in self.segments],
            'journeys': [j.to_dict() for j in self.journeys],
            'multi_city': self.multi_city,
        }
