import pytest

IBERIA_ROUND_TRIP = "\n".join([
    "Depart • Sun, Apr 12",
    "Flight 1 • Sun, Apr 12",
    "Iberia 4067 · Operated by American Airlines",
    "11:51 am",
    "Seattle (SEA)",
    "5:55 pm",
    "Chicago (ORD)",
    "Change planes in Chicago (ORD)",
    "Iberia 4382 · Operated by American Airlines",
    "6:55 pm",
    "Chicago (ORD)",
    "10:30 am",
    "Barcelona (BCN)",
    "Arrives Mon, Apr 13",
    "Return • Mon, Apr 27",
    "Flight 2 • Mon, Apr 27",
    "Iberia 1756",
    "1:15 pm",
    "Seville (SVQ)",
    "2:25 pm",
    "Madrid (MAD)",
    "Iberia 8049",
    "4:40 pm",
    "Madrid (MAD)",
    "6:50 pm",
    "Chicago (ORD)",
    "Iberia 4951",
    "8:25 pm",
    "Chicago (ORD)",
    "11:05 pm",
    "Seattle (SEA)",
])

# Return section without a date of its own
ARRIVAL_CARRIES_OVER = "\n".join([
    "Departure • Mon, Oct 5",
    "Delta 100",
    "6:00 pm",
    "New York (JFK)",
    "9:10 pm",
    "Atlanta (ATL)",
    "Delta 200",
    "10:30 pm",
    "Atlanta (ATL)",
    "2:05 pm",
    "Paris (CDG)",
    "Arrives Tue, Oct 6",
    "Return",
    "Air France 8",
    "4:00 pm",
    "Paris (CDG)",
    "6:10 pm",
    "New York (JFK)",
])

OVERNIGHT_CONNECTION = "\n".join([
    "Departure • Mon, Oct 5",
    "Delta 10",
    "8:00 pm",
    "New York (JFK)",
    "11:30 pm",
    "Miami (MIA)",
    "Delta 20",
    "1:00 am",
    "Miami (MIA)",
    "6:00 am",
    "Lima (LIM)",
])

SAME_DAY_RETURN = "\n".join([
    "Departure • Mon, Oct 5",
    "Delta 100",
    "6:00 pm",
    "New York (JFK)",
    "7:30 am",
    "Paris (CDG)",
    "Arrives Tue, Oct 6",
    "Return • Tue, Oct 6",
    "Air France 8",
    "6:00 am",
    "Paris (CDG)",
    "8:15 am",
    "London (LHR)",
])

VI_PREMIUM = "\n".join([
    "FLIGHT  DATE  SEGMENT DPTR  ARVL    MLS  EQP  ELPD MILES SM",
    " 1 AA  293 22OCT DEL JFK 1130P  605A¥1 LS   789 16.05  7318  N",
    "CABIN-PREMIUM ECONOMY",
    " 2 AA 2813 23OCT JFK AUS 1132A  237P   F    738  4.05  1521  N",
    "CABIN-ECONOMY",
])

VI_ROUND_TRIP = "\n".join([
    " 1 AA  100 01JUL JFK LAX 0800A 1130A",
    " 2 AA  200 05JUL LAX JFK 0100P 0930P",
])

VI_CONNECTION = "\n".join([
    " 1 LH 464 14FEB JFK FRA 0750P 0910A¥1",
    " 2 LH 944 15FEB FRA FLR 1150A 0130P",
])


@pytest.fixture
def iberia_text():
    return IBERIA_ROUND_TRIP


@pytest.fixture
def arrival_carries_over_text():
    return ARRIVAL_CARRIES_OVER


@pytest.fixture
def overnight_text():
    return OVERNIGHT_CONNECTION


@pytest.fixture
def same_day_return_text():
    return SAME_DAY_RETURN


@pytest.fixture
def vi_premium_text():
    return VI_PREMIUM


@pytest.fixture
def vi_round_trip_text():
    return VI_ROUND_TRIP


@pytest.fixture
def vi_connection_text():
    return VI_CONNECTION


@pytest.fixture
def options():
    return {"baseYear": 2026}
