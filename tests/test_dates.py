from datetime import date

import pytest

from dates import DateContext, DayOffsetCalculator, DurationCalculator, FlightDate, FlightTime


class TestFlightDate:
    def test_month_first_with_weekday(self):
        parsed = FlightDate.parse("Sun, Apr 12", base_year=2026)
        assert parsed.on == date(2026, 4, 12)
        assert parsed.dow == "S"
        assert parsed.label == "12APR S"

    def test_day_first_with_year(self):
        parsed = FlightDate.parse("12 April 2026")
        assert parsed.on == date(2026, 4, 12)
        assert parsed.dow is None
        assert parsed.label == "12APR"

    def test_gds_form(self):
        assert FlightDate.parse("12APR26").on == date(2026, 4, 12)

    def test_year_moves_forward_from_reference(self):
        assert FlightDate.parse("Jan 4", reference=date(2026, 12, 28)).on == date(2027, 1, 4)
        assert FlightDate.parse("Apr 27", reference=date(2026, 4, 12)).on == date(2026, 4, 27)

    def test_leap_day_picks_next_leap_year(self):
        assert FlightDate.parse("Feb 29", base_year=2026).on == date(2028, 2, 29)

    @pytest.mark.parametrize("text", ["", None, "no date here", "Feb 30"])
    def test_unparseable(self, text):
        assert FlightDate.parse(text, base_year=2026) is None

    def test_advance_rotates_weekday_letter(self):
        ctx = DateContext(date(2026, 4, 12), "S")
        assert ctx.advance(1).label == "13APR M"
        assert ctx.advance(0) is ctx
        assert DateContext(date(2026, 4, 18), "J").advance(1).dow == "S"


class TestFlightTime:
    @pytest.mark.parametrize("line, expected", [
        ("6:55 pm", (1135, "655P", 0)),
        ("11:51 am", (711, "1151A", 0)),
        ("12:05 am", (5, "1205A", 0)),
        ("12:30 pm", (750, "1230P", 0)),
        ("10:30 am +1", (630, "1030A", 1)),
        ("18:55", (1135, "655P", 0)),
    ])
    def test_parse(self, line, expected):
        assert FlightTime.parse(line) == expected

    def test_parse_requires_whole_line(self):
        assert FlightTime.parse("6:55 pm Chicago") is None
        assert FlightTime.parse("13:00 pm") is None

    def test_from_gds(self):
        assert FlightTime.from_gds("0750P") == 1190
        assert FlightTime.from_gds("605A") == 365
        assert FlightTime.from_gds("1200P") == 720
        assert FlightTime.from_gds("1300P") is None


class TestDurations:
    @pytest.mark.parametrize("text, minutes", [
        ("10h 25m", 625),
        ("2 hr 5 min", 125),
        ("45 min", 45),
        ("2:30 hrs", 150),
        ("Seattle", None),
    ])
    def test_parse_duration_text(self, text, minutes):
        assert DurationCalculator.parse_duration_text(text) == minutes

    def test_flight_minutes_uses_timezones(self):
        # SEA is UTC-7 and ORD UTC-5 in April
        assert DurationCalculator.flight_minutes(711, 1075, 0, "SEA", "ORD", date(2026, 4, 12)) == 244

    def test_flight_minutes_unknown_airport(self):
        assert DurationCalculator.flight_minutes(711, 1075, 0, "SEA", "XXX", date(2026, 4, 12)) is None

    def test_layover_minutes(self):
        assert DurationCalculator.layover_minutes(1075, date(2026, 4, 12), 1135, date(2026, 4, 12)) == 60
        assert DurationCalculator.layover_minutes(1410, date(2026, 10, 5), 60, date(2026, 10, 6)) == 90


class TestDayOffset:
    def test_clock_comparison_without_duration(self):
        assert DayOffsetCalculator.calculate(1350, 845) == 1
        assert DayOffsetCalculator.calculate(711, 1075) == 0

    def test_duration_crossing_date_line(self):
        # HNL 1:00 pm + 8h15m lands at NRT 4:15 pm the next day
        assert DayOffsetCalculator.calculate(780, 975, 495, "HNL", "NRT", date(2026, 5, 1)) == 1
        assert DayOffsetCalculator.calculate(780, 975) == 0
