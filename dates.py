"""
dates.py
========
Calendar helpers shared by the text and VI* parsers.

    DateContext           one calendar day + optional day-of-week letter
    FlightDate            "Sun, Apr 12" / "12 Apr" / "12APR" → DateContext
    FlightTime            "6:55 pm" / "18:55" → minutes + GDS clock ("655P")
    DurationCalculator    pytz based UTC offsets, block times, layovers
    DayOffsetCalculator   arrival day offset from duration and timezones

Years never reach the output; they only drive month lengths and leap days.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

import pytz

from config import Logger
from mappings import DEFAULT_REFERENCE, ReferenceData

MONTHS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")
MONTH_INDEX = {name: i + 1 for i, name in enumerate(MONTHS)}

# Reservation-system weekday letters
DOW_CODE = {"SUN": "S", "MON": "M", "TUE": "T", "WED": "W", "THU": "Q", "FRI": "F", "SAT": "J"}
DOW_ROTATION = "MTWQFJS"

# A header date this far behind the previous one is read as next year
_YEAR_WRAP_DAYS = 180


def today() -> date:
    return date.today()


# ==================== DATE CONTEXT ====================
@dataclass(frozen=True)
class DateContext:
    on: date
    dow: Optional[str] = None

    @property
    def code(self) -> str:
        """Day + month, e.g. ``03OCT``."""
        return f"{self.on.day:02d}{MONTHS[self.on.month - 1]}"

    @property
    def label(self) -> str:
        """Day + month + weekday letter when known, e.g. ``13APR M``."""
        return f"{self.code} {self.dow}" if self.dow else self.code

    def advance(self, days: int) -> "DateContext":
        if not days:
            return self
        dow = self.dow
        if dow and dow in DOW_ROTATION:
            dow = DOW_ROTATION[(DOW_ROTATION.index(dow) + days) % 7]
        return DateContext(self.on + timedelta(days=days), dow)


# ==================== FLIGHT DATE ====================
class FlightDate:
    """Parse the human-readable dates found in headers and "Arrives" lines"""

    _MONTH = r"(?P<month>Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"
    _DOW = r"(?:(?P<dow>Sun|Mon|Tue|Wed|Thu|Fri|Sat)[a-z]*\.?,?\s+)?"
    _DAY = r"(?P<day>[12]\d|3[01]|0?[1-9])(?:st|nd|rd|th)?"
    _YEAR = r"(?:,?\s+(?P<year>(?:19|20)\d{2}))?"

    _DATE_PATTERNS = [
        # Sun, Apr 12 / April 12, 2026
        re.compile(rf"{_DOW}\b{_MONTH}\s+{_DAY}\b{_YEAR}", re.I),
        # Sun, 12 Apr / 12 April 2026
        re.compile(rf"{_DOW}\b{_DAY}\s+{_MONTH}(?![a-z]){_YEAR}", re.I),
        # GDS glued: 12APR / 12APR26
        re.compile(r"\b(?P<day>[0-3]?\d)(?P<month>JAN|FEB|MAR|APR|MAY|JUN|JUL|AUG|SEP|OCT|NOV|DEC)(?P<year>\d{2})?\b"),
    ]

    @staticmethod
    def _pick_year(month: int, day: int, reference: Optional[date], base_year: Optional[int]) -> Optional[int]:
        year = reference.year if reference else (base_year or today().year)
        if month == 2 and day == 29:
            while not _is_leap(year):
                year += 1
            return year
        try:
            candidate = date(year, month, day)
        except ValueError:
            return None
        if reference and (reference - candidate).days > _YEAR_WRAP_DAYS:
            year += 1
        return year

    @staticmethod
    def parse(text: str, reference: Optional[date] = None, base_year: Optional[int] = None) -> Optional[DateContext]:
        """
        First date found in ``text``, or None.

        Without an explicit year the year comes from ``reference`` (the date
        in effect before this one) and moves forward across a year end;
        with no reference it is ``base_year`` or the current year.
        """
        if not text:
            return None
        for pattern in FlightDate._DATE_PATTERNS:
            m = pattern.search(text)
            if not m:
                continue
            month = MONTH_INDEX[m.group("month")[:3].upper()]
            day = int(m.group("day"))
            groups = m.groupdict()
            raw_year = groups.get("year")
            if raw_year:
                year = int(raw_year) if len(raw_year) == 4 else 2000 + int(raw_year)
            else:
                year = FlightDate._pick_year(month, day, reference, base_year)
            if year is None:
                continue
            try:
                on = date(year, month, day)
            except ValueError:
                Logger.debug(f"Ignoring impossible date '{m.group(0)}'")
                continue
            dow = groups.get("dow")
            return DateContext(on, DOW_CODE.get(dow[:3].upper()) if dow else None)
        return None


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


# ==================== FLIGHT TIME ====================
class FlightTime:
    """Clock strings to minutes after midnight and the GDS 12-hour form"""

    CLOCK_12 = r"(?:1[0-2]|0?[1-9]):[0-5]\d\s*[ap]\.?m\.?"
    CLOCK_24 = r"(?:[01]?\d|2[0-3]):[0-5]\d(?!\s*[ap]\.?m)"
    CLOCK_TOKEN = re.compile(rf"\b(?:{CLOCK_12}|{CLOCK_24})", re.I)

    _RE_TIME_LINE = re.compile(
        r"""
        ^\s*(?P<hour>\d{1,2}):(?P<minute>[0-5]\d)\s*
        (?P<ampm>[ap])?\.?(?:m\.?)?\s*
        (?:\(?\s*(?P<plus>[+-]\d)\s*(?:days?)?\s*\)?)?\s*$
        """,
        re.VERBOSE | re.I,
    )

    @staticmethod
    def parse(line: str) -> Optional[Tuple[int, str, int]]:
        """
        ``"6:55 pm"`` → ``(1135, "655P", 0)``; ``"10:30 am +1"`` → ``(630, "1030A", 1)``.

        The whole line must be a clock time; anything else gives None.
        """
        m = FlightTime._RE_TIME_LINE.match(line or "")
        if not m:
            return None
        hour, minute = int(m.group("hour")), int(m.group("minute"))
        ampm = (m.group("ampm") or "").upper()
        if ampm:
            if not 1 <= hour <= 12:
                return None
            if ampm == "P" and hour != 12:
                hour += 12
            if ampm == "A" and hour == 12:
                hour = 0
        elif hour > 23:
            return None
        minutes = hour * 60 + minute
        plus = int(m.group("plus")) if m.group("plus") else 0
        return minutes, FlightTime.to_gds(minutes), plus

    @staticmethod
    def to_gds(minutes: int) -> str:
        hour, minute = divmod(minutes % (24 * 60), 60)
        suffix = "P" if hour >= 12 else "A"
        return f"{(hour + 11) % 12 + 1}{minute:02d}{suffix}"

    @staticmethod
    def from_gds(token: str) -> Optional[int]:
        """``"1130P"`` / ``"0605A"`` / ``"605A"`` → minutes after midnight."""
        m = re.match(r"^(\d{1,2})(\d{2})([AP])$", (token or "").strip().upper())
        if not m:
            return None
        hour, minute = int(m.group(1)), int(m.group(2))
        if not 1 <= hour <= 12 or minute > 59:
            return None
        hour %= 12
        if m.group(3) == "P":
            hour += 12
        return hour * 60 + minute


# ==================== DURATION CALCULATOR ====================
class DurationCalculator:
    """Block time and layover arithmetic with timezone support"""

    _DURATION_PATTERNS = [
        re.compile(r"^\s*(?:(\d+)\s*h(?:rs?|ours?)?)\s*(?:(\d+)\s*m(?:in(?:utes?)?)?)?\s*$", re.I),
        re.compile(r"^\s*(\d+):(\d{2})\s*(?:hrs?|hours?)\s*$", re.I),
        re.compile(r"^\s*()(\d+)\s*m(?:in(?:utes?)?)?\s*$", re.I),
    ]

    @staticmethod
    def parse_duration_text(text: str) -> Optional[int]:
        """``"10h 25m"`` → 625.  The line must hold nothing but the duration."""
        for pattern in DurationCalculator._DURATION_PATTERNS:
            m = pattern.match(text or "")
            if m:
                hours = int(m.group(1)) if m.group(1) else 0
                minutes = int(m.group(2)) if m.group(2) else 0
                return hours * 60 + minutes
        return None

    @staticmethod
    def utc_offset_minutes(airport: str, on: date, reference: ReferenceData = DEFAULT_REFERENCE) -> Optional[int]:
        tz_name = reference.timezone(airport)
        if not tz_name:
            Logger.debug(f"Missing timezone for '{airport}'")
            return None
        try:
            tz = pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            Logger.warning(f"Unknown timezone '{tz_name}' for {airport}")
            return None
        local_noon = tz.localize(datetime(on.year, on.month, on.day, 12, 0))
        return int(local_noon.utcoffset().total_seconds() // 60)

    @staticmethod
    def flight_minutes(dep_minutes: int, arr_minutes: int, arr_offset: int, dep_airport: str,
                       arr_airport: str, on: date, reference: ReferenceData = DEFAULT_REFERENCE) -> Optional[int]:
        """Elapsed minutes between two local clock times, None without both timezones."""
        dep_tz = DurationCalculator.utc_offset_minutes(dep_airport, on, reference)
        arr_tz = DurationCalculator.utc_offset_minutes(arr_airport, on, reference)
        if dep_tz is None or arr_tz is None:
            return None
        elapsed = arr_offset * 24 * 60 + arr_minutes - dep_minutes - (arr_tz - dep_tz)
        return elapsed if elapsed > 0 else None

    @staticmethod
    def layover_minutes(arr_minutes: int, arr_on: date, dep_minutes: int, dep_on: date) -> int:
        return (dep_on - arr_on).days * 24 * 60 + dep_minutes - arr_minutes


# ==================== DAY OFFSET CALCULATOR ====================
class DayOffsetCalculator:
    """How many calendar days separate departure and arrival"""

    @staticmethod
    def calculate(dep_minutes: int, arr_minutes: int, duration_minutes: Optional[int] = None,
                  dep_airport: str = "", arr_airport: str = "", on: Optional[date] = None,
                  reference: ReferenceData = DEFAULT_REFERENCE) -> int:
        if duration_minutes and on is not None:
            dep_tz = DurationCalculator.utc_offset_minutes(dep_airport, on, reference)
            arr_tz = DurationCalculator.utc_offset_minutes(arr_airport, on, reference)
            if dep_tz is not None and arr_tz is not None:
                arrival_local = dep_minutes + duration_minutes + (arr_tz - dep_tz)
                drift = abs(arrival_local % (24 * 60) - arr_minutes)
                # only trust the duration when it lands on the printed arrival clock
                if min(drift, 24 * 60 - drift) <= 60:
                    return max(0, arrival_local // (24 * 60))
                Logger.debug(f"Duration {duration_minutes}m disagrees with {dep_airport}->{arr_airport} clock times")
        return 1 if arr_minutes < dep_minutes else 0
