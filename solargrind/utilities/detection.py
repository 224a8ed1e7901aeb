"""Match a street address to its Texas electric utility.

Detection tries, in order of confidence:

1. the five-digit ZIP code against a ZIP -> utility table (``high``),
2. the city name against a city -> utility table (``medium``),
3. county and metro keywords, which only suggest candidates (``low``).

A detected utility is paired with its :class:`~.programs.SolarProgram`
when the programme table covers it.  Addresses in another state are not
matched at all.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .programs import SolarProgram, get_solar_program

# ======================================================================
# Lookup tables
# ======================================================================

# Utility -> space-separated ZIP codes; "a-b" is an inclusive run.  Where
# territories overlap, a ZIP is listed under the utility that bills most
# of it.
_ZIP_TABLE: dict[str, str] = {
    "Oncor Electric Delivery": (
        "75001 75002 75006 75007 75019 75023-75025 75030 75040 75042-75044"
        " 75050-75052 75060-75063 75080-75082 75201-75212 75214-75238 75240"
        " 75241 75243 75244 75246-75249 75251-75254 76101-76120 76123"
        " 76133-76135 76137 76140 76148 76155 76161 76162 76164 76179 76180"
        " 76182"
    ),
    "CenterPoint Energy": "77001-77096 77098 77099",
    "Grayson-Collin Electric Cooperative": (
        "75013 75032 75069-75071 75087 75126 75142 75160 75189 75407 75409"
        " 75454"
    ),
    "Denton County Electric Cooperative (CoServ)": (
        "75022 75028 75056 75065 75077 76092 76201 76205 76207-76210 76227"
        " 76262 76266"
    ),
    "Bluebonnet Electric Cooperative": (
        "78132 78133 78154 78610 78620 78640 78645 78666 78669 78676"
        " 78732-78734 78737 78738 78746"
    ),
    "Pedernales Electric Cooperative (PEC)": (
        "78602 78612 78621 78624 78634 78644 78652-78654 78657 78663 78681"
        " 78717 78719 78721-78731 78735 78736 78739 78741 78742 78744 78745"
        " 78747-78754 78756-78759"
    ),
    "HILCO Electric Cooperative": "75114 75119 75144 75165 75169 75601-75608",
    "Wood County Electric Cooperative": "75441 75442 75494 75497 75773 75778",
    "Cherokee County Electric Cooperative": "75701-75709 75750 75766 75785 75789",
    "Guadalupe Valley Electric Cooperative (GVEC)": (
        "78108 78109 78112 78114 78119 78124 78125 78130 78131 78152 78155"
        " 78156"
    ),
    "Bandera Electric Cooperative": "78003 78013 78025 78028 78029 78058 78070",
    "Medina Electric Cooperative": (
        "78002 78006 78015 78024 78055-78057 78063 78073 78833"
    ),
    "Big Country Electric Cooperative": (
        "79701-79703 79705-79708 79711 79712 79718 79720"
    ),
    "Concho Valley Electric Cooperative": (
        "76801 76802 76821 76823 76825 76827 76828 76834 76837 76841 76844"
        " 76845 76849 76856"
    ),
    "Lyntegar Electric Cooperative": (
        "79015 79316 79331 79336 79347 79356 79358 79360 79364 79373"
    ),
    "Xcel Energy": "79001-79014 79016-79019",
    "Victoria Electric Cooperative": "77901-77905",
    "Wharton County Electric Cooperative": "77404 77414 77435 77456 77465 77488",
    "Austin Energy": "78701-78705",
}


def _expand_zips(table: dict[str, str]) -> dict[str, str]:
    zips: dict[str, str] = {}
    for utility, spec in table.items():
        for token in spec.split():
            first, _, last = token.partition("-")
            for code in range(int(first), int(last or first) + 1):
                zips[f"{code:05d}"] = utility
    return zips


ZIP_TO_UTILITY: dict[str, str] = _expand_zips(_ZIP_TABLE)

CITY_TO_UTILITY: dict[str, str] = {
    # Dallas-Fort Worth
    "dallas": "Oncor Electric Delivery",
    "fort worth": "Oncor Electric Delivery",
    "arlington": "Oncor Electric Delivery",
    "plano": "Oncor Electric Delivery",
    "garland": "Oncor Electric Delivery",
    "irving": "Oncor Electric Delivery",
    "grand prairie": "Oncor Electric Delivery",
    "mesquite": "Oncor Electric Delivery",
    "carrollton": "Oncor Electric Delivery",
    "richardson": "Oncor Electric Delivery",
    "frisco": "Oncor Electric Delivery",
    "mckinney": "Grayson-Collin Electric Cooperative",
    "denton": "Denton County Electric Cooperative (CoServ)",
    "lewisville": "Denton County Electric Cooperative (CoServ)",
    "flower mound": "Denton County Electric Cooperative (CoServ)",
    # Houston
    "houston": "CenterPoint Energy",
    "sugar land": "CenterPoint Energy",
    "katy": "CenterPoint Energy",
    "spring": "CenterPoint Energy",
    "the woodlands": "CenterPoint Energy",
    "pasadena": "CenterPoint Energy",
    "pearland": "CenterPoint Energy",
    "league city": "CenterPoint Energy",
    "baytown": "CenterPoint Energy",
    "galveston": "CenterPoint Energy",
    # Central Texas
    "austin": "Austin Energy",
    "round rock": "Oncor Electric Delivery",
    "cedar park": "Oncor Electric Delivery",
    "pflugerville": "Oncor Electric Delivery",
    "kyle": "Bluebonnet Electric Cooperative",
    "buda": "Bluebonnet Electric Cooperative",
    "dripping springs": "Bluebonnet Electric Cooperative",
    "waco": "Oncor Electric Delivery",
    "killeen": "Oncor Electric Delivery",
    "temple": "Oncor Electric Delivery",
    "bryan": "Bryan Texas Utilities",
    "college station": "Bryan Texas Utilities",
    # San Antonio and Hill Country
    "san antonio": "CPS Energy",
    "new braunfels": "Guadalupe Valley Electric Cooperative (GVEC)",
    "seguin": "Guadalupe Valley Electric Cooperative (GVEC)",
    "schertz": "Guadalupe Valley Electric Cooperative (GVEC)",
    "cibolo": "Guadalupe Valley Electric Cooperative (GVEC)",
    # East Texas
    "tyler": "Cherokee County Electric Cooperative",
    "longview": "HILCO Electric Cooperative",
    "marshall": "East Texas Cable",
    "texarkana": "SWEPCO",
    "beaumont": "Texas-New Mexico Power (TNMP)",
    "port arthur": "Texas-New Mexico Power (TNMP)",
    # West Texas and the Panhandle
    "amarillo": "Xcel Energy",
    "lubbock": "LP&L",
    "abilene": "AEP Texas",
    "midland": "Big Country Electric Cooperative",
    "odessa": "AEP Texas",
    "el paso": "El Paso Electric",
    # South Texas and the coast
    "corpus christi": "AEP Texas",
    "brownsville": "AEP Texas",
    "laredo": "AEP Texas",
    "victoria": "Victoria Electric Cooperative",
}

# Metro/county keyword -> utilities that commonly serve it
_REGIONS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (
        ("dallas", "collin", "denton", "fort worth"),
        (
            "Oncor Electric Delivery",
            "Grayson-Collin Electric Cooperative",
            "Denton County Electric Cooperative (CoServ)",
            "Wise Electric Cooperative",
        ),
    ),
    (
        ("houston", "harris", "galveston", "montgomery"),
        ("CenterPoint Energy",),
    ),
    (
        ("austin", "travis", "williamson"),
        (
            "Austin Energy",
            "Oncor Electric Delivery",
            "Pedernales Electric Cooperative (PEC)",
            "Bluebonnet Electric Cooperative",
        ),
    ),
    (
        ("san antonio", "bexar", "comal", "guadalupe"),
        (
            "CPS Energy",
            "Guadalupe Valley Electric Cooperative (GVEC)",
            "Bandera Electric Cooperative",
        ),
    ),
    (
        ("corpus christi", "nueces", "coastal"),
        ("AEP Texas", "Nueces Electric Cooperative", "San Patricio Electric Cooperative"),
    ),
)

_US_STATES = frozenset(
    "AL AK AZ AR CA CO CT DE DC FL GA HI ID IL IN IA KS KY LA ME MD MA MI MN "
    "MS MO MT NE NV NH NJ NM NY NC ND OH OK OR PA RI SC SD TN TX UT VT VA WA "
    "WV WI WY".split()
)

_ZIP_RE = re.compile(r"\b(\d{5})(?:-\d{4})?\b")
_TEXAS_RE = re.compile(r"\b(TX|Texas)\b", re.IGNORECASE)
_STATE_ZIP_RE = re.compile(r"\b([A-Z]{2})\s+\d{5}(?:-\d{4})?\b")


# ======================================================================
# Address parsing
# ======================================================================

@dataclass(frozen=True)
class AddressComponents:
    full_address: str
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None


def parse_address(address: str) -> AddressComponents:
    """Split a one-line US address into street, city, state and ZIP.

    The ZIP is the last five-digit group, so a five-digit house number is
    not mistaken for it.  The city is the comma-separated segment just
    before the state.
    """
    cleaned = address.strip()

    zips = _ZIP_RE.findall(cleaned)
    zip_code = zips[-1] if zips else None

    state_match = _TEXAS_RE.search(cleaned)
    state = "TX" if state_match else None
    if state_match is None:
        for match in _STATE_ZIP_RE.finditer(cleaned):
            if match.group(1) in _US_STATES:
                state_match, state = match, match.group(1)

    city = None
    if state_match is not None:
        before = cleaned[: state_match.start()].rstrip(" ,")
        if "," in before:
            city = before.rsplit(",", 1)[1].strip() or None

    street = cleaned.split(",", 1)[0].strip() or None
    return AddressComponents(cleaned, street, city, state, zip_code)


# ======================================================================
# Detection
# ======================================================================

@dataclass(frozen=True)
class UtilityDetection:
    address: AddressComponents
    utility: str | None
    program: SolarProgram | None
    confidence: str                         # "high" | "medium" | "low"
    method: str                             # "zip" | "city" | "region" | "none"
    alternatives: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def utility_from_zip(zip_code: str) -> str | None:
    return ZIP_TO_UTILITY.get(zip_code)


def utility_from_city(city: str) -> str | None:
    return CITY_TO_UTILITY.get(city.strip().lower())


def suggest_utilities_for_region(address: str) -> list[str]:
    """Candidate utilities for the first metro or county named in *address*."""
    lowered = address.lower()
    for keywords, utilities in _REGIONS:
        if any(k in lowered for k in keywords):
            return list(utilities)
    return []


def _matched(
    parts: AddressComponents,
    utility: str,
    confidence: str,
    method: str,
    warnings: list[str],
) -> UtilityDetection:
    program = get_solar_program(utility)
    if program is None:
        warnings.append(f"No solar programme data for {utility}.")
    elif program.type == "deregulated_tdu":
        warnings.append(
            f"{utility} only delivers power in a deregulated area. Choose a "
            "retail electric provider (REP) with a solar buyback plan."
        )
    return UtilityDetection(parts, utility, program, confidence, method, (), tuple(warnings))


def detect_utility_from_address(address: str) -> UtilityDetection:
    """Best-effort utility detection for a Texas street address."""
    parts = parse_address(address)
    warnings: list[str] = []

    if parts.state is not None and parts.state != "TX":
        return UtilityDetection(
            parts, None, None, "low", "none",
            warnings=(f"Address appears to be outside Texas ({parts.state}).",),
        )

    if parts.zip_code:
        utility = utility_from_zip(parts.zip_code)
        if utility:
            return _matched(parts, utility, "high", "zip", warnings)
        warnings.append(f"ZIP code {parts.zip_code} is not in the utility table.")

    if parts.city:
        utility = utility_from_city(parts.city)
        if utility:
            return _matched(parts, utility, "medium", "city", warnings)
        warnings.append(f"City {parts.city!r} is not in the utility table.")

    alternatives = tuple(suggest_utilities_for_region(address))
    warnings.append("Could not detect the utility automatically; select one manually.")
    return UtilityDetection(
        parts, None, None, "low", "region" if alternatives else "none",
        alternatives=alternatives,
        warnings=tuple(warnings),
    )
