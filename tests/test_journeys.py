from datetime import date

from dates import DateContext
from journeys import JourneyGrouper, assign_directions, build_preview, day_ordinals
from models import INBOUND, OUTBOUND, Journey, JourneyMarker, Segment


def seg(dep, arr, on, dep_minutes=480, arr_minutes=600, offset=0, direction="", carrier="AA"):
    day = DateContext(on)
    return Segment(
        airline_code=carrier, number="100", dep_airport=dep, arr_airport=arr,
        dep_gds="", arr_gds="", dep_date=day.code, direction=direction,
        dep_minutes=dep_minutes, arr_minutes=arr_minutes, dep_on=on, arr_offset=offset,
    )


def spans(journeys):
    return [(j.start_idx, j.end_idx) for j in journeys]


def test_day_ordinals_move_forward_across_year_end():
    segments = [seg("JFK", "LHR", date(2026, 12, 30)), seg("LHR", "JFK", date(2027, 1, 2))]
    assert day_ordinals(segments) == [364, 367]


def test_round_trip_splits_on_date_gap():
    segments = [seg("JFK", "LAX", date(2026, 7, 1)), seg("LAX", "JFK", date(2026, 7, 5))]
    journeys = JourneyGrouper.group(segments)
    assert spans(journeys) == [(0, 0), (1, 1)]
    assert [j.label for j in journeys] == ["1 JFK-LAX", "2 LAX-JFK"]
    assert not JourneyGrouper.is_multi_city(journeys)


def test_next_day_connection_stays_in_one_journey():
    segments = [seg("JFK", "ORD", date(2026, 7, 1)), seg("ORD", "LAX", date(2026, 7, 2))]
    assert spans(JourneyGrouper.group(segments)) == [(0, 1)]


def test_discontinuous_airports_split_journey():
    segments = [seg("JFK", "LAX", date(2026, 7, 1)), seg("SFO", "JFK", date(2026, 7, 1))]
    journeys = JourneyGrouper.group(segments)
    assert spans(journeys) == [(0, 0), (1, 1)]
    # open jaw: the second journey does not mirror the first
    assert JourneyGrouper.is_multi_city(journeys)


def test_route_change_splits_same_day_segments():
    first = seg("JFK", "BOS", date(2026, 7, 1))
    second = seg("BOS", "JFK", date(2026, 7, 1))
    first.route_origin, first.route_dest = "JFK", "BOS"
    second.route_origin, second.route_dest = "BOS", "JFK"
    journeys = JourneyGrouper.group([first, second])
    assert spans(journeys) == [(0, 0), (1, 1)]
    assert [j.label for j in journeys] == ["1 JFK-BOS", "2 BOS-JFK"]


def test_same_route_header_keeps_connection_together():
    first = seg("SEA", "ORD", date(2026, 4, 12))
    second = seg("ORD", "BCN", date(2026, 4, 12))
    for segment in (first, second):
        segment.route_origin, segment.route_dest = "SEA", "BCN"
    assert spans(JourneyGrouper.group([first, second])) == [(0, 1)]


def test_explicit_journeys_a_day_apart_merge():
    segments = [seg("JFK", "ORD", date(2026, 7, 1)), seg("ORD", "LAX", date(2026, 7, 2))]
    journeys = JourneyGrouper.group(segments, [JourneyMarker(0, 1), JourneyMarker(1, 2)])
    assert spans(journeys) == [(0, 1)]
    assert journeys[0].explicit


def test_explicit_journeys_two_days_apart_stay_separate():
    segments = [seg("JFK", "ORD", date(2026, 7, 1)), seg("ORD", "LAX", date(2026, 7, 3))]
    journeys = JourneyGrouper.group(segments, [JourneyMarker(0, 1), JourneyMarker(1, 2)])
    assert spans(journeys) == [(0, 0), (1, 1)]


def test_explicit_markers_open_journeys():
    segments = [
        seg("SEA", "ORD", date(2026, 4, 12)), seg("ORD", "BCN", date(2026, 4, 12)),
        seg("SVQ", "MAD", date(2026, 4, 27)), seg("MAD", "SEA", date(2026, 4, 27)),
    ]
    markers = [JourneyMarker(0, 1), JourneyMarker(2, 2)]
    journeys = JourneyGrouper.group(segments, markers)
    assert spans(journeys) == [(0, 1), (2, 3)]
    assert all(j.explicit for j in journeys)
    assert [j.index_hint for j in journeys] == [1, 2]
    assert JourneyGrouper.is_multi_city(journeys, markers)


def test_single_segment_is_one_journey():
    journeys = JourneyGrouper.group([seg("JFK", "LAX", date(2026, 7, 1))])
    assert spans(journeys) == [(0, 0)]
    assert JourneyGrouper.group([]) == []


def test_three_journeys_are_multi_city():
    journeys = [Journey(0, 0, "JFK", "LAX"), Journey(1, 1, "LAX", "SFO"), Journey(2, 2, "SFO", "JFK")]
    assert JourneyGrouper.is_multi_city(journeys)


class TestDirections:
    def test_return_journey_is_inbound(self):
        segments = [seg("JFK", "LAX", date(2026, 7, 1)), seg("LAX", "JFK", date(2026, 7, 5))]
        preview = build_preview(segments)
        assert [s.direction for s in preview.segments] == [OUTBOUND, INBOUND]

    def test_single_journey_turns_around_at_longest_layover(self):
        segments = [
            seg("JFK", "ORD", date(2026, 7, 1), 480, 600),
            seg("ORD", "LAX", date(2026, 7, 1), 660, 840),
            seg("LAX", "ORD", date(2026, 7, 2), 540, 780),
            seg("ORD", "JFK", date(2026, 7, 2), 840, 1020),
        ]
        journeys = JourneyGrouper.group(segments)
        assert spans(journeys) == [(0, 3)]
        directed = assign_directions(segments, journeys)
        assert [s.direction for s in directed] == [OUTBOUND, OUTBOUND, INBOUND, INBOUND]

    def test_one_way_is_all_outbound(self):
        segments = [seg("JFK", "ORD", date(2026, 7, 1)), seg("ORD", "LAX", date(2026, 7, 1), 660, 840)]
        assert {s.direction for s in build_preview(segments).segments} == {OUTBOUND}

    def test_labeled_segments_are_untouched(self):
        segments = [seg("JFK", "LAX", date(2026, 7, 1), direction=INBOUND)]
        assert assign_directions(segments, JourneyGrouper.group(segments))[0].direction == INBOUND
