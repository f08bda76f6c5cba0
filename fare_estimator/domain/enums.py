"""Domain enumerations, tariff tables and the serviceable-country allow-list."""

import enum


class VehicleClass(str, enum.Enum):
    BERLINE = "Berline"
    HYBRIDE = "Hybride"
    VAN = "Van"


class AddOn(str, enum.Enum):
    NONE = "none"
    BABY_SEAT = "baby-seat"
    BOOSTER_SEAT = "booster-seat"


class ResolutionFailure(str, enum.Enum):
    DEPARTURE = "departure"
    ARRIVAL = "arrival"
    BOTH = "both"


# EUR per km, applied to the detour-adjusted distance
RATE_PER_KM: dict[VehicleClass, float] = {
    VehicleClass.BERLINE: 1.8,
    VehicleClass.HYBRIDE: 2.0,
    VehicleClass.VAN: 2.3,
}

# Add-ons that carry the flat surcharge
SURCHARGED_ADD_ONS: frozenset[AddOn] = frozenset(
    {AddOn.BABY_SEAT, AddOn.BOOSTER_SEAT}
)

# ISO 3166-1 alpha-2 -> display name for every serviceable country
COUNTRY_NAMES: dict[str, str] = {
    "AL": "Albania",
    "AD": "Andorra",
    "AT": "Austria",
    "BY": "Belarus",
    "BE": "Belgium",
    "BA": "Bosnia and Herzegovina",
    "BG": "Bulgaria",
    "HR": "Croatia",
    "CY": "Cyprus",
    "CZ": "Czech Republic",
    "DK": "Denmark",
    "EE": "Estonia",
    "FI": "Finland",
    "FR": "France",
    "DE": "Germany",
    "GR": "Greece",
    "HU": "Hungary",
    "IS": "Iceland",
    "IE": "Ireland",
    "IT": "Italy",
    "XK": "Kosovo",
    "LV": "Latvia",
    "LI": "Liechtenstein",
    "LT": "Lithuania",
    "LU": "Luxembourg",
    "MT": "Malta",
    "MD": "Moldova",
    "MC": "Monaco",
    "ME": "Montenegro",
    "NL": "Netherlands",
    "MK": "North Macedonia",
    "NO": "Norway",
    "PL": "Poland",
    "PT": "Portugal",
    "RO": "Romania",
    "RU": "Russia",
    "SM": "San Marino",
    "RS": "Serbia",
    "SK": "Slovakia",
    "SI": "Slovenia",
    "ES": "Spain",
    "SE": "Sweden",
    "CH": "Switzerland",
    "UA": "Ukraine",
    "GB": "United Kingdom",
    "VA": "Vatican City",
}

EUROPEAN_COUNTRIES: frozenset[str] = frozenset(COUNTRY_NAMES)


def country_name(iso2: str) -> str:
    """Display name for *iso2*, or the code itself when unknown."""
    return COUNTRY_NAMES.get(iso2, iso2)
