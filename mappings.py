# Static reference data for the itinerary converter (airlines, airport timezones, regions)
# Read-only after import; pass a ReferenceData instance to the parser to substitute tables.

import re
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

UNKNOWN_CARRIER = "YY"

AIRLINE_CODES = {
    # ===== NORTH AMERICA =====
    "AA": "American Airlines", "DL": "Delta Air Lines", "UA": "United Airlines",
    "WN": "Southwest Airlines", "AS": "Alaska Airlines", "B6": "JetBlue",
    "NK": "Spirit Airlines", "F9": "Frontier Airlines", "G4": "Allegiant Air",
    "HA": "Hawaiian Airlines", "SY": "Sun Country Airlines", "MX": "Breeze Airways",
    "AC": "Air Canada", "WS": "WestJet", "TS": "Air Transat", "PD": "Porter Airlines",
    "AM": "Aeromexico", "Y4": "Volaris", "VB": "VivaAerobus", "CM": "Copa Airlines",

    # ===== SOUTH AMERICA =====
    "LA": "LATAM Airlines", "AV": "Avianca", "AR": "Aerolineas Argentinas",
    "G3": "GOL", "AD": "Azul", "H2": "SKY Airline", "JA": "JetSMART",

    # ===== EUROPE =====
    "BA": "British Airways", "LH": "Lufthansa", "AF": "Air France", "KL": "KLM",
    "IB": "Iberia", "AZ": "ITA Airways", "LX": "SWISS", "OS": "Austrian Airlines",
    "SN": "Brussels Airlines", "SK": "SAS", "AY": "Finnair", "TP": "TAP Air Portugal",
    "LO": "LOT Polish Airlines", "EI": "Aer Lingus", "VS": "Virgin Atlantic",
    "FI": "Icelandair", "DY": "Norwegian", "FR": "Ryanair", "U2": "easyJet",
    "W6": "Wizz Air", "VY": "Vueling", "EW": "Eurowings", "DE": "Condor",
    "A3": "Aegean Airlines", "UX": "Air Europa", "TK": "Turkish Airlines",
    "PC": "Pegasus Airlines", "JU": "Air Serbia", "OU": "Croatia Airlines",

    # ===== MIDDLE EAST & AFRICA =====
    "EK": "Emirates", "QR": "Qatar Airways", "EY": "Etihad Airways", "WY": "Oman Air",
    "GF": "Gulf Air", "SV": "Saudia", "MS": "EgyptAir", "RJ": "Royal Jordanian",
    "FZ": "flydubai", "LY": "El Al", "ET": "Ethiopian Airlines", "KQ": "Kenya Airways",
    "SA": "South African Airways", "AT": "Royal Air Maroc",

    # ===== ASIA-PACIFIC =====
    "SQ": "Singapore Airlines", "CX": "Cathay Pacific", "TG": "Thai Airways",
    "MH": "Malaysia Airlines", "GA": "Garuda Indonesia", "PR": "Philippine Airlines",
    "VN": "Vietnam Airlines", "KE": "Korean Air", "OZ": "Asiana Airlines",
    "JL": "Japan Airlines", "NH": "ANA", "ZG": "ZIPAIR", "MM": "Peach",
    "CA": "Air China", "MU": "China Eastern", "CZ": "China Southern", "HU": "Hainan Airlines",
    "CI": "China Airlines", "BR": "EVA Air", "JX": "STARLUX Airlines",
    "AI": "Air India", "6E": "IndiGo", "UL": "SriLankan Airlines",
    "AK": "AirAsia", "D7": "AirAsia X", "TR": "Scoot", "VJ": "VietJet Air",
    "QF": "Qantas", "VA": "Virgin Australia", "JQ": "Jetstar", "NZ": "Air New Zealand",
    "FJ": "Fiji Airways",
}

# Display names that differ from AIRLINE_CODES (marketing names, short forms)
AIRLINE_NAME_ALIASES = {
    "AMERICAN": "AA", "DELTA": "DL", "UNITED": "UA", "SOUTHWEST": "WN",
    "ALASKA": "AS", "JETBLUE AIRWAYS": "B6", "SPIRIT": "NK", "FRONTIER": "F9",
    "HAWAIIAN": "HA", "SUN COUNTRY": "SY", "AEROMÉXICO": "AM", "COPA": "CM",
    "LATAM": "LA", "GOL LINHAS AEREAS": "G3", "AZUL BRAZILIAN AIRLINES": "AD",
    "KLM ROYAL DUTCH AIRLINES": "KL", "ITA": "AZ", "SWISS INTERNATIONAL AIR LINES": "LX",
    "AUSTRIAN": "OS", "SAS SCANDINAVIAN AIRLINES": "SK", "SCANDINAVIAN AIRLINES": "SK",
    "TAP PORTUGAL": "TP", "TAP": "TP", "LOT": "LO", "NORWEGIAN AIR SHUTTLE": "DY",
    "EASYJET": "U2", "WIZZ": "W6", "TURKISH": "TK", "ETIHAD": "EY", "SAUDIA AIRLINES": "SV",
    "EL AL ISRAEL AIRLINES": "LY", "ETHIOPIAN": "ET", "ROYAL AIR MAROC": "AT",
    "ALL NIPPON AIRWAYS": "NH", "ZIPAIR TOKYO": "ZG", "PEACH AVIATION": "MM",
    "CHINA EASTERN AIRLINES": "MU", "CHINA SOUTHERN AIRLINES": "CZ", "EVA AIRWAYS": "BR",
    "STARLUX": "JX", "AIRASIA X": "D7", "THAI": "TG", "QANTAS AIRWAYS": "QF",
    "JETSTAR AIRWAYS": "JQ", "VIRGIN": "VS",
}

# IANA timezones, used for timezone-aware segment durations
AIRPORT_TZ_MAP = {
    # ===== NORTH AMERICA =====
    "ATL": "America/New_York", "BOS": "America/New_York", "BWI": "America/New_York",
    "CLT": "America/New_York", "DCA": "America/New_York", "DTW": "America/Detroit",
    "EWR": "America/New_York", "FLL": "America/New_York", "IAD": "America/New_York",
    "JFK": "America/New_York", "LGA": "America/New_York", "MCO": "America/New_York",
    "MIA": "America/New_York", "PHL": "America/New_York", "PIT": "America/New_York",
    "RDU": "America/New_York", "TPA": "America/New_York", "CVG": "America/New_York",
    "AUS": "America/Chicago", "BNA": "America/Chicago", "DFW": "America/Chicago",
    "DAL": "America/Chicago", "IAH": "America/Chicago", "HOU": "America/Chicago",
    "MCI": "America/Chicago", "MDW": "America/Chicago", "MSP": "America/Chicago",
    "MSY": "America/Chicago", "ORD": "America/Chicago", "SAT": "America/Chicago",
    "STL": "America/Chicago", "DEN": "America/Denver", "SLC": "America/Denver",
    "ABQ": "America/Denver", "PHX": "America/Phoenix", "LAS": "America/Los_Angeles",
    "LAX": "America/Los_Angeles", "OAK": "America/Los_Angeles", "PDX": "America/Los_Angeles",
    "SAN": "America/Los_Angeles", "SEA": "America/Los_Angeles", "SFO": "America/Los_Angeles",
    "SJC": "America/Los_Angeles", "SNA": "America/Los_Angeles", "ANC": "America/Anchorage",
    "HNL": "Pacific/Honolulu", "OGG": "Pacific/Honolulu", "YYZ": "America/Toronto",
    "YUL": "America/Toronto", "YOW": "America/Toronto", "YVR": "America/Vancouver",
    "YYC": "America/Edmonton", "YEG": "America/Edmonton", "MEX": "America/Mexico_City",
    "CUN": "America/Cancun", "PTY": "America/Panama", "SJU": "America/Puerto_Rico",

    # ===== SOUTH AMERICA =====
    "BOG": "America/Bogota", "LIM": "America/Lima", "SCL": "America/Santiago",
    "EZE": "America/Argentina/Buenos_Aires", "GRU": "America/Sao_Paulo",
    "GIG": "America/Sao_Paulo", "UIO": "America/Guayaquil", "MVD": "America/Montevideo",

    # ===== EUROPE =====
    "LHR": "Europe/London", "LGW": "Europe/London", "MAN": "Europe/London",
    "EDI": "Europe/London", "DUB": "Europe/Dublin", "KEF": "Atlantic/Reykjavik",
    "LIS": "Europe/Lisbon", "OPO": "Europe/Lisbon", "MAD": "Europe/Madrid",
    "BCN": "Europe/Madrid", "SVQ": "Europe/Madrid", "PMI": "Europe/Madrid",
    "CDG": "Europe/Paris", "ORY": "Europe/Paris", "NCE": "Europe/Paris",
    "AMS": "Europe/Amsterdam", "BRU": "Europe/Brussels", "FRA": "Europe/Berlin",
    "MUC": "Europe/Berlin", "BER": "Europe/Berlin", "HAM": "Europe/Berlin",
    "DUS": "Europe/Berlin", "ZRH": "Europe/Zurich", "GVA": "Europe/Zurich",
    "VIE": "Europe/Vienna", "FCO": "Europe/Rome", "MXP": "Europe/Rome",
    "VCE": "Europe/Rome", "NAP": "Europe/Rome", "FLR": "Europe/Rome",
    "CPH": "Europe/Copenhagen", "ARN": "Europe/Stockholm", "OSL": "Europe/Oslo",
    "HEL": "Europe/Helsinki", "WAW": "Europe/Warsaw", "KRK": "Europe/Warsaw",
    "PRG": "Europe/Prague", "BUD": "Europe/Budapest", "ATH": "Europe/Athens",
    "IST": "Europe/Istanbul", "OTP": "Europe/Bucharest", "SOF": "Europe/Sofia",

    # ===== MIDDLE EAST & AFRICA =====
    "DXB": "Asia/Dubai", "AUH": "Asia/Dubai", "DOH": "Asia/Qatar",
    "RUH": "Asia/Riyadh", "JED": "Asia/Riyadh", "AMM": "Asia/Amman",
    "TLV": "Asia/Jerusalem", "CAI": "Africa/Cairo", "ADD": "Africa/Addis_Ababa",
    "NBO": "Africa/Nairobi", "JNB": "Africa/Johannesburg", "CPT": "Africa/Johannesburg",
    "CMN": "Africa/Casablanca", "LOS": "Africa/Lagos", "ACC": "Africa/Accra",

    # ===== ASIA-PACIFIC =====
    "DEL": "Asia/Kolkata", "BOM": "Asia/Kolkata", "BLR": "Asia/Kolkata",
    "HYD": "Asia/Kolkata", "CCU": "Asia/Kolkata", "MAA": "Asia/Kolkata",
    "SIN": "Asia/Singapore", "KUL": "Asia/Kuala_Lumpur", "BKK": "Asia/Bangkok",
    "DMK": "Asia/Bangkok", "HKT": "Asia/Bangkok", "SGN": "Asia/Ho_Chi_Minh",
    "HAN": "Asia/Bangkok", "CGK": "Asia/Jakarta", "DPS": "Asia/Makassar",
    "MNL": "Asia/Manila", "HKG": "Asia/Hong_Kong", "TPE": "Asia/Taipei",
    "PEK": "Asia/Shanghai", "PKX": "Asia/Shanghai", "PVG": "Asia/Shanghai",
    "SHA": "Asia/Shanghai", "CAN": "Asia/Shanghai", "ICN": "Asia/Seoul",
    "GMP": "Asia/Seoul", "NRT": "Asia/Tokyo", "HND": "Asia/Tokyo", "KIX": "Asia/Tokyo",
    "ITM": "Asia/Tokyo", "NGO": "Asia/Tokyo", "FUK": "Asia/Tokyo", "CTS": "Asia/Tokyo",
    "SYD": "Australia/Sydney", "MEL": "Australia/Melbourne", "BNE": "Australia/Brisbane",
    "PER": "Australia/Perth", "ADL": "Australia/Adelaide", "AKL": "Pacific/Auckland",
    "CHC": "Pacific/Auckland", "NAN": "Pacific/Fiji",
}

# Coarse regions for the short-haul rule: NAM, SAM, EUR, MEA, APAC
AIRPORT_REGION_HINTS = {
    **{code: "NAM" for code in (
        "ABQ", "ANC", "ATL", "AUS", "BHM", "BNA", "BOS", "BQN", "BUF", "BUR", "BWI", "CLE",
        "CLT", "CMH", "CVG", "CUN", "DAL", "DCA", "DEN", "DFW", "DTW", "ELP", "EWR", "FLL",
        "GDL", "GUA", "HNL", "HOU", "IAD", "IAH", "IND", "JAX", "JFK", "LAS", "LAX", "LGB",
        "LIH", "LIR", "LGA", "MCI", "MCO", "MEX", "MIA", "MKE", "MSP", "MSY", "MTY", "OAK",
        "OGG", "OKC", "ORD", "PAP", "PDX", "PHL", "PHX", "PIT", "PTY", "PVR", "RDU", "RIC",
        "SAN", "SAT", "SAV", "SDQ", "SEA", "SFO", "SJC", "SJD", "SJU", "SLC", "SNA", "STI",
        "STL", "TPA", "YEG", "YOW", "YUL", "YVR", "YYC", "YYZ",
    )},
    **{code: "SAM" for code in (
        "ASU", "BOG", "CCS", "CLO", "COR", "EZE", "FOR", "GIG", "GRU", "LIM", "MVD", "REC",
        "ROS", "SCL", "SSA", "UIO",
    )},
    **{code: "EUR" for code in (
        "AMS", "ARN", "ATH", "BCN", "BEG", "BER", "BOD", "BRS", "BRU", "BUD", "CDG", "CPH",
        "DUB", "DUS", "EMA", "EDI", "FAO", "FCO", "FLR", "FRA", "GLA", "GVA", "HAM", "HEL",
        "IBZ", "IST", "KEF", "KRK", "LGW", "LHR", "LIS", "LUX", "MAD", "MAN", "MLA", "MRS",
        "MUC", "MXP", "NCE", "NAP", "OPO", "ORY", "OSL", "OTP", "PMI", "PRG", "RIX", "SKG",
        "SOF", "STR", "SVQ", "TFS", "TLL", "VCE", "VIE", "VNO", "WAW", "ZRH",
    )},
    **{code: "MEA" for code in (
        "ACC", "ADD", "AMM", "AUH", "CAI", "CMN", "CPT", "DAR", "DOH", "DXB", "JED", "JNB",
        "KRT", "LOS", "NBO", "RUH", "TLV",
    )},
    **{code: "APAC" for code in (
        "ADL", "AKL", "BKK", "BLR", "BOM", "BNE", "CAN", "CCU", "CGK", "CHC", "CNS", "CTU",
        "CTS", "DEL", "DMK", "DPS", "FUK", "GMP", "HAN", "HGH", "HKG", "HKT", "HND", "HYD",
        "ICN", "ITM", "KHH", "KIX", "KMG", "KUL", "MEL", "MNL", "NGO", "NKG", "NRT", "OKA",
        "PEK", "PER", "PKX", "PVG", "SGN", "SHA", "SIN", "SYD", "SZX", "TAO", "TPE", "XIY",
    )},
}

_NAME_SUFFIXES = (" AIRLINES", " AIRWAYS", " AIR LINES", " AIRLINE")


def normalize_airline_name(name: str) -> str:
    """Upper-case, drop punctuation that pages sprinkle around names, collapse spaces."""
    name = re.sub(r"[.,'’]", "", name or "").upper()
    return re.sub(r"\s+", " ", name).strip()


def _build_name_index(codes: Mapping[str, str], aliases: Mapping[str, str]) -> Dict[str, str]:
    index = {normalize_airline_name(name): code for code, name in codes.items()}
    index.update({normalize_airline_name(name): code for name, code in aliases.items()})
    return index


@dataclass(frozen=True)
class ReferenceData:
    """Read-only lookup tables the parser depends on."""

    airline_codes: Mapping[str, str] = field(default_factory=lambda: AIRLINE_CODES)
    airline_aliases: Mapping[str, str] = field(default_factory=lambda: AIRLINE_NAME_ALIASES)
    airport_tz: Mapping[str, str] = field(default_factory=lambda: AIRPORT_TZ_MAP)
    airport_regions: Mapping[str, str] = field(default_factory=lambda: AIRPORT_REGION_HINTS)
    name_index: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "name_index", _build_name_index(self.airline_codes, self.airline_aliases))

    def airline_code(self, name: str) -> Optional[str]:
        """Airline display name → carrier code, or None if unknown."""
        key = normalize_airline_name(name)
        if not key:
            return None
        if key in self.name_index:
            return self.name_index[key]
        for suffix in _NAME_SUFFIXES:
            if key.endswith(suffix) and key[: -len(suffix)] in self.name_index:
                return self.name_index[key[: -len(suffix)]]
        return None

    def is_carrier_code(self, code: str) -> bool:
        return (code or "").upper() in self.airline_codes

    def timezone(self, airport: str) -> Optional[str]:
        return self.airport_tz.get((airport or "").upper())

    def region(self, airport: str) -> str:
        return self.airport_regions.get((airport or "").upper(), "")


DEFAULT_REFERENCE = ReferenceData()
