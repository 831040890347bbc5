"""Rule-based parser for free-text property searches.

Turns text like "3 bedroom house with pool in Los Angeles under 500k" into a
SearchCriteria record. Each rule group scans the query on its own and yields
detections (partial field dicts). Every detection that sets at least one
field is worth POINTS_PER_MATCH confidence points, capped at MAX_CONFIDENCE.

The parser is total: blank or unrecognised input gives a record with only
originalQuery set and a confidence of 0.
"""

import logging
import math
import re
from collections.abc import Callable, Iterator
from functools import partial
from typing import Any, NamedTuple

from app.schemas.search import SearchCriteria

logger = logging.getLogger(__name__)

Detection = dict[str, Any]

POINTS_PER_MATCH = 15
MAX_CONFIDENCE = 100

# Bare prices below this are shorthand for thousands ("500" -> 500k)
THOUSANDS_THRESHOLD = 10_000

# A "+" this close to a bare bed/bath count turns it into a minimum
PLUS_WINDOW_BEFORE = 10
PLUS_WINDOW_AFTER = 5


# =============================================================================
# Vocabularies
# =============================================================================

CITIES = (
    "Los Angeles", "San Francisco", "San Diego", "Sacramento", "San Jose",
    "Oakland", "Fresno", "Long Beach", "Santa Ana", "Anaheim", "Bakersfield",
    "Riverside", "Stockton", "Irvine", "Fremont", "San Bernardino", "Modesto",
    "Fontana", "Oxnard", "Moreno Valley", "Huntington Beach", "Glendale",
    "Santa Clarita", "Oceanside", "Garden Grove", "Elk Grove", "Corona",
    "Ontario", "Rancho Cucamonga", "Santa Rosa", "Pasadena", "Hayward",
    "Salinas", "Sunnyvale", "Roseville", "Escondido", "Pomona", "Torrance",
    "Fullerton", "Orange", "Visalia", "Thousand Oaks", "Simi Valley",
    "Concord", "Santa Clara", "Victorville", "Berkeley", "Vallejo",
    "Fairfield", "Murrieta", "Richmond", "Lancaster", "Palmdale", "Carlsbad",
    "Antioch", "Temecula", "Downey", "Inglewood", "Ventura", "West Covina",
    "Norwalk", "Burbank", "Daly City", "Rialto", "San Mateo", "Vista",
    "Vacaville", "Carson", "Hesperia", "Redding", "Santa Monica",
    "Westminster", "Santa Barbara", "Chico", "Newport Beach", "San Marcos",
    "Hawthorne", "Citrus Heights", "Alhambra", "Tracy", "Livermore",
    "Buena Park", "Menifee", "Hemet", "Lakewood", "Merced", "Chino",
    "Chino Hills", "Indio", "Redwood City", "Lake Forest", "Napa", "Tustin",
    "Bellflower", "Mountain View", "Redondo Beach", "Alameda", "Upland",
    "Folsom", "San Ramon", "Pleasanton", "Lynwood", "Union City",
    "Apple Valley", "Manteca", "Redlands", "Turlock", "Milpitas", "Whittier",
    "Davis", "Newport", "Palo Alto", "Malibu",
)

CITY_ABBREVIATIONS = {
    "la": "Los Angeles",
    "sf": "San Francisco",
}

_CANONICAL_CITIES = {city.lower(): city for city in CITIES} | CITY_ABBREVIATIONS

# Stored token -> accepted spellings (no capturing groups)
PROPERTY_TYPES = {
    "house": r"houses?",
    "condo": r"condos?",
    "townhouse": r"townhouses?",
    "apartment": r"apartments?",
    "single family": r"single[\s-]+family",
    "multi family": r"multi[\s-]*family",
    "land": r"land",
    "commercial": r"commercial",
}
_PROPERTY_TYPE_TOKENS = tuple(PROPERTY_TYPES)


# =============================================================================
# Patterns
# =============================================================================


def _phrase(name: str) -> str:
    return r"\s+".join(re.escape(word) for word in name.split())


# Longest names first so "Chino Hills" beats "Chino"
_CITY_NAMES = sorted(_CANONICAL_CITIES, key=len, reverse=True)
_CITY_RE = re.compile(
    r"\b(?:in|near|around|at)\s+(" + "|".join(_phrase(n) for n in _CITY_NAMES) + r")\b",
    re.IGNORECASE,
)

_RANGE_SEP = r"\s*(?:to|-|and)\s*"
_NUM = r"[0-9][0-9,]*"
_PRICE = r"\$?([0-9][0-9,]*(?:\.[0-9]+)?[kKmM]?)\b"

_PRICE_RANGE_RE = re.compile(rf"(?:\bbetween\s+)?{_PRICE}{_RANGE_SEP}{_PRICE}", re.IGNORECASE)
_MAX_PRICE_RE = re.compile(
    rf"\b(?:under|below|less\s+than|max|maximum|up\s+to)\s+{_PRICE}", re.IGNORECASE
)
_MIN_PRICE_RE = re.compile(
    rf"\b(?:over|above|more\s+than|min|minimum|starting\s+at|at\s+least)\s+{_PRICE}",
    re.IGNORECASE,
)

_BED_UNIT = r"(?:bed(?:room)?s?|br|bd)\b"
_BEDROOM_RE = re.compile(rf"\b([0-9]+)\s*\+?[\s-]*{_BED_UNIT}", re.IGNORECASE)
_MIN_BEDROOM_RE = re.compile(
    rf"(?:\bat\s+least|\bminimum|\bmin|\+)\s*([0-9]+)[\s-]*{_BED_UNIT}", re.IGNORECASE
)

_BATH_UNIT = r"(?:bath(?:room)?s?|ba)\b"
_BATHROOM_RE = re.compile(rf"\b([0-9]+(?:\.[0-9]+)?)\s*\+?[\s-]*{_BATH_UNIT}", re.IGNORECASE)
_MIN_BATHROOM_RE = re.compile(
    rf"(?:\bat\s+least|\bminimum|\bmin|\+)\s*([0-9]+(?:\.[0-9]+)?)[\s-]*{_BATH_UNIT}",
    re.IGNORECASE,
)

_SQFT_UNIT = r"(?:sq\.?\s*ft|square\s*f(?:ee|oo)t)\b"
_SQFT_RANGE_RE = re.compile(
    rf"(?:\bbetween\s+)?\b({_NUM}){_RANGE_SEP}({_NUM})\s*{_SQFT_UNIT}", re.IGNORECASE
)
_MIN_SQFT_RE = re.compile(
    rf"\b(?:over|above|more\s+than|at\s+least)\s+({_NUM})\s*{_SQFT_UNIT}", re.IGNORECASE
)
_MAX_SQFT_RE = re.compile(
    rf"\b(?:under|below|less\s+than|max|maximum|up\s+to)\s+({_NUM})\s*{_SQFT_UNIT}",
    re.IGNORECASE,
)
_SQFT_VALUE_RE = re.compile(rf"\b{_NUM}\s*{_SQFT_UNIT}", re.IGNORECASE)

_FEATURE_PREFIX = r"\b(?:with|has|having|includes?)\s+(?:an?\s+)?"
_POOL_RE = re.compile(rf"{_FEATURE_PREFIX}pool\b", re.IGNORECASE)
_FIREPLACE_RE = re.compile(rf"{_FEATURE_PREFIX}fireplace\b", re.IGNORECASE)
_VIEW_RE = re.compile(rf"{_FEATURE_PREFIX}(?:(?:ocean|mountain|city)\s+)?view\b", re.IGNORECASE)
_GARAGE_RE = re.compile(rf"{_FEATURE_PREFIX}garage\b", re.IGNORECASE)

_PROPERTY_TYPE_RE = re.compile(
    r"\b(?:" + "|".join(f"({p})" for p in PROPERTY_TYPES.values()) + r")\b",
    re.IGNORECASE,
)

_YEAR_RANGE_RE = re.compile(
    rf"\bbuilt\s+(?:between\s+)?([0-9]{{4}}){_RANGE_SEP}([0-9]{{4}})\b", re.IGNORECASE
)
_MIN_YEAR_RE = re.compile(r"\bbuilt\s+(?:after|since|from)\s+([0-9]{4})\b", re.IGNORECASE)
_MAX_YEAR_RE = re.compile(
    r"\bbuilt\s+(?:before|prior\s+to|until)\s+([0-9]{4})\b", re.IGNORECASE
)

# Phrases whose numbers must never be read as prices
_NON_PRICE_PATTERNS = (
    _BEDROOM_RE,
    _BATHROOM_RE,
    _SQFT_VALUE_RE,
    _YEAR_RANGE_RE,
    _MIN_YEAR_RE,
    _MAX_YEAR_RE,
)


# =============================================================================
# Value conversion
# =============================================================================


def parse_price(token: str) -> float | None:
    """Normalize a price token to absolute currency units.

    "500k" and "500" both mean 500,000; "$250,000" stays 250,000.
    Returns None for tokens that do not parse or overflow a float.
    """
    cleaned = token.replace(",", "").replace("$", "").strip().lower()
    multiplier = 1
    if cleaned.endswith("k"):
        cleaned, multiplier = cleaned[:-1], 1_000
    elif cleaned.endswith("m"):
        cleaned, multiplier = cleaned[:-1], 1_000_000

    try:
        value = float(cleaned)
    except ValueError:
        return None
    if multiplier == 1 and value < THOUSANDS_THRESHOLD:
        multiplier = 1_000

    value *= multiplier
    return value if math.isfinite(value) else None


def _to_int(token: str) -> int | None:
    try:
        return int(token.replace(",", ""))
    except ValueError:
        return None


def _to_whole_rooms(token: str) -> int | None:
    try:
        return math.ceil(float(token))
    except (ValueError, OverflowError):
        return None


def confidence_score(matched: int) -> int:
    return min(MAX_CONFIDENCE, matched * POINTS_PER_MATCH)


# =============================================================================
# Rule groups
# =============================================================================


def _blank(text: str, patterns: tuple[re.Pattern, ...]) -> str:
    """Replace every match of patterns with spaces, keeping offsets intact."""
    chars = list(text)
    for pattern in patterns:
        for match in pattern.finditer(text):
            chars[match.start():match.end()] = " " * (match.end() - match.start())
    return "".join(chars)


def _location(text: str) -> Iterator[Detection]:
    if match := _CITY_RE.search(text):
        key = " ".join(match.group(1).lower().split())
        yield {"city": _CANONICAL_CITIES[key]}


def _bounds(
    text: str,
    *,
    range_pattern: re.Pattern,
    min_pattern: re.Pattern,
    max_pattern: re.Pattern,
    convert: Callable[[str], Any],
    min_field: str,
    max_field: str,
) -> Iterator[Detection]:
    # A range short-circuits the independent bounds
    if match := range_pattern.search(text):
        yield {min_field: convert(match.group(1)), max_field: convert(match.group(2))}
        return

    if match := max_pattern.search(text):
        yield {max_field: convert(match.group(1))}
    if match := min_pattern.search(text):
        yield {min_field: convert(match.group(1))}


def _price(text: str) -> Iterator[Detection]:
    yield from _bounds(
        _blank(text, _NON_PRICE_PATTERNS),
        range_pattern=_PRICE_RANGE_RE,
        min_pattern=_MIN_PRICE_RE,
        max_pattern=_MAX_PRICE_RE,
        convert=parse_price,
        min_field="minPrice",
        max_field="maxPrice",
    )


def _room_count(
    text: str,
    *,
    min_pattern: re.Pattern,
    bare_pattern: re.Pattern,
    convert: Callable[[str], int | None],
    exact_field: str,
    min_field: str,
) -> Iterator[Detection]:
    if match := min_pattern.search(text):
        yield {min_field: convert(match.group(1))}
        return

    if match := bare_pattern.search(text):
        window = text[max(0, match.start() - PLUS_WINDOW_BEFORE):match.end() + PLUS_WINDOW_AFTER]
        field = min_field if "+" in window else exact_field
        yield {field: convert(match.group(1))}


def _flag(text: str, *, pattern: re.Pattern, field: str) -> Iterator[Detection]:
    if pattern.search(text):
        yield {field: True}


def _property_type(text: str) -> Iterator[Detection]:
    if match := _PROPERTY_TYPE_RE.search(text):
        yield {"propertyType": _PROPERTY_TYPE_TOKENS[match.lastindex - 1]}


class RuleGroup(NamedTuple):
    name: str
    extract: Callable[[str], Iterator[Detection]]


RULE_GROUPS: tuple[RuleGroup, ...] = (
    RuleGroup("location", _location),
    RuleGroup("price", _price),
    RuleGroup(
        "bedrooms",
        partial(
            _room_count,
            min_pattern=_MIN_BEDROOM_RE,
            bare_pattern=_BEDROOM_RE,
            convert=_to_int,
            exact_field="beds",
            min_field="minBeds",
        ),
    ),
    RuleGroup(
        "bathrooms",
        partial(
            _room_count,
            min_pattern=_MIN_BATHROOM_RE,
            bare_pattern=_BATHROOM_RE,
            convert=_to_whole_rooms,
            exact_field="baths",
            min_field="minBaths",
        ),
    ),
    RuleGroup(
        "square_feet",
        partial(
            _bounds,
            range_pattern=_SQFT_RANGE_RE,
            min_pattern=_MIN_SQFT_RE,
            max_pattern=_MAX_SQFT_RE,
            convert=_to_int,
            min_field="minSquareFeet",
            max_field="maxSquareFeet",
        ),
    ),
    RuleGroup("pool", partial(_flag, pattern=_POOL_RE, field="poolPrivate")),
    RuleGroup("fireplace", partial(_flag, pattern=_FIREPLACE_RE, field="fireplace")),
    RuleGroup("view", partial(_flag, pattern=_VIEW_RE, field="view")),
    RuleGroup("garage", partial(_flag, pattern=_GARAGE_RE, field="garage")),
    RuleGroup("property_type", _property_type),
    RuleGroup(
        "year_built",
        partial(
            _bounds,
            range_pattern=_YEAR_RANGE_RE,
            min_pattern=_MIN_YEAR_RE,
            max_pattern=_MAX_YEAR_RE,
            convert=_to_int,
            min_field="minYearBuilt",
            max_field="maxYearBuilt",
        ),
    ),
)


# =============================================================================
# Entry point
# =============================================================================


def parse_query(text: str | None) -> SearchCriteria:
    if text is None or not text.strip():
        return SearchCriteria(originalQuery=text, confidenceScore=0)

    data: Detection = {}
    matched = 0

    for group in RULE_GROUPS:
        for detection in group.extract(text):
            fields = {k: v for k, v in detection.items() if v is not None}
            if not fields:
                continue
            data.update(fields)
            matched += 1
            logger.debug("Rule group %s matched %s", group.name, fields)

    criteria = SearchCriteria(
        **data,
        originalQuery=text,
        confidenceScore=confidence_score(matched),
    )
    logger.debug(
        "Parsed %r: %d detections, confidence %d",
        text,
        matched,
        criteria.confidenceScore,
    )
    return criteria
