from datetime import date

import pytest

from config import normalize_options
from dates import DateContext
from errors import ConversionError
from gds_formatter import (
    booking_letter, build_availability, format_itinerary, format_segment_line, select_segments,
)
from models import INBOUND, OUTBOUND, Journey, Preview, Segment


def seg(carrier, number, dep, arr, on=date(2026, 4, 12), dep_gds="1151A", arr_gds="555P", dow="S",
        dep_minutes=711, arr_minutes=1075, offset=0, direction=OUTBOUND, **extra):
    return Segment(
        airline_code=carrier, number=number, dep_airport=dep, arr_airport=arr,
        dep_gds=dep_gds, arr_gds=arr_gds, dep_date=DateContext(on).code, dep_dow=dow,
        direction=direction, dep_minutes=dep_minutes, arr_minutes=arr_minutes, dep_on=on,
        arr_offset=offset, **extra
    )


@pytest.fixture
def opts():
    return normalize_options({"bookingClass": "J", "segmentStatus": "SS1"})


class TestSegmentLine:
    def test_four_digit_flight(self):
        line = format_segment_line(1, seg("IB", "4067", "SEA", "ORD"), "J", "SS1", True)
        assert line == " 1 IB4067J   12APR S    SEAORD*SS1    1151A   555P /DCIB /E"

    def test_short_flight_number_and_arrival_date(self):
        segment = seg("AA", "949", "ORD", "BCN", dep_gds="655P", arr_gds="1030A", arr_date="13APR M")
        line = format_segment_line(2, segment, "Y", "SS1", True)
        assert line.startswith(" 2 AA 949Y   12APR S    ORDBCN*SS1")
        assert line.endswith("655P  1030A 13APR M /DCAA /E")

    def test_single_segment_has_no_multi_marker(self):
        line = format_segment_line(1, seg("IB", "4067", "SEA", "ORD"), "J", "SS1", False)
        assert "SEAORD SS1" in line

    def test_empty_status_drops_indicator(self):
        line = format_segment_line(1, seg("IB", "4067", "SEA", "ORD"), "J", "", True)
        assert "SEAORD " in line
        assert "*" not in line

    def test_two_digit_sequence(self):
        assert format_segment_line(12, seg("IB", "4067", "SEA", "ORD"), "J", "SS1", True).startswith("12 IB4067J")


class TestItinerary:
    def test_renumbers_from_one(self, opts):
        segments = [seg("IB", "1756", "SVQ", "MAD"), seg("IB", "8049", "MAD", "ORD")]
        lines = format_itinerary(segments, opts).splitlines()
        assert [line[:2] for line in lines] == [" 1", " 2"]

    def test_no_segments(self, opts):
        with pytest.raises(ConversionError) as err:
            format_itinerary([], opts)
        assert err.value.reason == "no_segments"

    def test_missing_departure_date_fails_whole_output(self, opts):
        undated = seg("IB", "8049", "MAD", "ORD")
        undated.dep_date = ""
        with pytest.raises(ConversionError) as err:
            format_itinerary([seg("IB", "1756", "SVQ", "MAD"), undated], opts)
        assert err.value.reason == "missing_departure_date"
        assert "2" in err.value.message


class TestBookingLetter:
    def test_explicit_letter_wins(self, opts):
        segment = seg("AA", "100", "JFK", "LAX", booking_class="K", cabin="Business")
        assert booking_letter(segment, dict(opts, auto_cabin=True)) == "K"

    def test_auto_cabin_uses_segment_cabin(self, opts):
        segment = seg("AA", "100", "DEL", "JFK", cabin="Premium Economy", duration_minutes=965)
        assert booking_letter(segment, dict(opts, auto_cabin=True)) == "W"

    def test_auto_cabin_forced_cabin(self, opts):
        segment = seg("BA", "178", "JFK", "LHR", duration_minutes=420)
        assert booking_letter(segment, dict(opts, auto_cabin="First")) == "F"

    def test_falls_back_to_default(self, opts):
        assert booking_letter(seg("AA", "100", "JFK", "LAX"), dict(opts, auto_cabin=True)) == "J"
        assert booking_letter(seg("B6", "100", "JFK", "LAX", cabin="First", duration_minutes=400),
                              dict(opts, auto_cabin=True)) == "J"
        assert booking_letter(seg("AA", "100", "JFK", "LAX", cabin="Business"), opts) == "J"


class TestAvailability:
    def test_three_segments(self):
        segments = [seg("X", "1", "AAA", "BBB"), seg("Y", "2", "BBB", "CCC"), seg("Z", "3", "CCC", "DDD")]
        assert build_availability(segments) == "112APRAAADDD12ABBB/CCC¥X¥Y¥Z"

    def test_nonstop_has_no_transit_clause(self):
        assert build_availability([seg("AA", "100", "JFK", "LAX", on=date(2026, 7, 1))]) == "11JULJFKLAX¥AA"

    def test_detailed_adds_time_and_layovers(self):
        segments = [
            seg("LH", "464", "JFK", "FRA", on=date(2026, 2, 14), dep_gds="750P", arr_gds="910A",
                dep_minutes=1190, arr_minutes=550, offset=1),
            seg("LH", "944", "FRA", "FLR", on=date(2026, 2, 15), dep_gds="1150A", arr_gds="130P",
                dep_minutes=710, arr_minutes=810),
        ]
        assert build_availability(segments, detailed=True) == "114FEBJFKFLR750PFRA-160¥LH¥LH"

    def test_missing_fields(self):
        undated = seg("AA", "100", "JFK", "LAX")
        undated.dep_date = ""
        with pytest.raises(ConversionError) as err:
            build_availability([undated])
        assert err.value.reason == "missing_availability_fields"

    def test_empty(self):
        with pytest.raises(ConversionError):
            build_availability([])


class TestSelection:
    @pytest.fixture
    def preview(self):
        segments = [
            seg("IB", "4067", "SEA", "ORD"), seg("IB", "4382", "ORD", "BCN"),
            seg("IB", "1756", "SVQ", "MAD", direction=INBOUND), seg("IB", "4951", "MAD", "SEA", direction=INBOUND),
        ]
        journeys = [Journey(0, 1, "SEA", "BCN", index_hint=1), Journey(2, 3, "SVQ", "SEA", index_hint=2)]
        return Preview(segments, journeys, multi_city=True)

    def numbers(self, segments):
        return [s.number for s in segments]

    def test_everything_by_default(self, preview):
        assert self.numbers(select_segments(preview, normalize_options())) == ["4067", "4382", "1756", "4951"]

    def test_journey_index(self, preview):
        chosen = select_segments(preview, normalize_options({"journeyIndex": 2}))
        assert self.numbers(chosen) == ["1756", "4951"]

    def test_journey_index_beats_range(self, preview):
        chosen = select_segments(preview, normalize_options({"journeyIndex": 1, "segmentRange": [2, 3]}))
        assert self.numbers(chosen) == ["4067", "4382"]

    def test_range_is_clamped(self, preview):
        chosen = select_segments(preview, normalize_options({"segmentRange": [1, 10]}))
        assert self.numbers(chosen) == ["4382", "1756", "4951"]

    def test_direction(self, preview):
        chosen = select_segments(preview, normalize_options({"direction": "inbound"}))
        assert self.numbers(chosen) == ["1756", "4951"]

    @pytest.mark.parametrize("options, reason", [
        ({"journeyIndex": 3}, "invalid_journey"),
        ({"journeyIndex": 0}, "invalid_journey"),
        ({"segmentRange": [3, 1]}, "invalid_range"),
        ({"segmentRange": [7, 9]}, "invalid_range"),
        ({"journeyIndex": 1, "direction": "inbound"}, "no_segments_for_direction"),
    ])
    def test_invalid_selection(self, preview, options, reason):
        with pytest.raises(ConversionError) as err:
            select_segments(preview, normalize_options(options))
        assert err.value.reason == reason
