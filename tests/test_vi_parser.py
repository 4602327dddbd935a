from datetime import date

import pytest

from converter import ConversionError, convert_vi_to_i, parse_vi_preview, vi_availability_commands
from vi_parser import VIParser


class TestVIParser:
    def test_rows_cabins_and_elapsed_time(self, vi_premium_text):
        first, second = VIParser.parse(vi_premium_text, base_year=2026)
        assert (first.airline_code, first.number, first.dep_airport, first.arr_airport) == ("AA", "293", "DEL", "JFK")
        assert (first.dep_gds, first.arr_gds) == ("1130P", "605A")
        assert first.dep_date == "22OCT"
        assert first.dep_dow == "Q"
        assert first.arr_offset == 1
        assert first.arr_date == "23OCT F"
        assert first.cabin == "PREMIUM ECONOMY"
        assert first.duration_minutes == 965
        assert second.number == "2813"
        assert second.cabin == "ECONOMY"
        assert second.arr_date == ""
        assert second.duration_minutes == 245

    def test_star_designator_and_plus_offset(self):
        (segment,) = VIParser.parse(" 1 UA*1234 05JAN EWR SFO 0930P 0105A+1", base_year=2027)
        assert (segment.airline_code, segment.number) == ("UA", "1234")
        assert segment.arr_offset == 1
        assert segment.arr_date == "06JAN W"

    def test_cabin_before_rows_attaches_to_next(self):
        text = "CABIN-BUSINESS\n 1 LH 400 05JAN FRA JFK 1000A 1250P"
        assert VIParser.parse(text, base_year=2027)[0].cabin == "BUSINESS"

    def test_year_crosses_into_next_year(self):
        text = " 1 AA 100 30DEC JFK LAX 0800A 1130A\n 2 AA 200 02JAN LAX JFK 0100P 0930P"
        first, second = VIParser.parse(text, base_year=2026)
        assert first.dep_on == date(2026, 12, 30)
        assert second.dep_on == date(2027, 1, 2)

    def test_year_prefers_closest_occurrence(self):
        text = " 1 AA 100 05JAN JFK LAX 0800A 1130A\n 2 AA 200 10JAN LAX JFK 0100P 0930P"
        first, second = VIParser.parse(text, now=date(2026, 12, 20))
        assert first.dep_on == date(2027, 1, 5)
        assert second.dep_on == date(2027, 1, 10)

    def test_unrelated_text_gives_nothing(self):
        assert VIParser.parse("FLIGHT  DATE  SEGMENT DPTR  ARVL\nnothing here") == []


def test_vi_to_itinerary_with_auto_cabin(vi_premium_text):
    result = convert_vi_to_i(vi_premium_text, {"baseYear": 2026, "autoCabin": True})
    lines = result["text"].split("\n")
    assert lines[0].startswith(" 1 AA 293W   22OCT Q    DELJFK*SS1")
    assert lines[0].endswith("605A 23OCT F /DCAA /E")
    assert lines[1].startswith(" 2 AA2813Y   23OCT F    JFKAUS*SS1")
    assert [s["booking_class"] for s in result["segments"]] == ["W", "Y"]
    assert [j["label"] for j in result["journeys"]] == ["1 DEL-AUS"]


def test_vi_default_booking_class(vi_premium_text):
    result = convert_vi_to_i(vi_premium_text, {"baseYear": 2026})
    assert [s["booking_class"] for s in result["segments"]] == ["J", "J"]


def test_vi_round_trip_availability(vi_round_trip_text):
    entries = vi_availability_commands(vi_round_trip_text, {"baseYear": 2026})
    assert [e["command"] for e in entries] == ["11JULJFKLAX¥AA", "15JULLAXJFK¥AA"]
    preview = parse_vi_preview(vi_round_trip_text, {"baseYear": 2026})
    assert [s.direction for s in preview.segments] == ["outbound", "inbound"]
    assert not preview.multi_city


def test_vi_detailed_availability(vi_connection_text):
    (entry,) = vi_availability_commands(vi_connection_text, {"baseYear": 2026, "detailed": True})
    assert entry["command"] == "114FEBJFKFLR750PFRA-160¥LH¥LH"


def test_vi_without_segments():
    with pytest.raises(ConversionError) as err:
        convert_vi_to_i("VI*AA293/22OCT")
    assert err.value.reason == "no_segments"
