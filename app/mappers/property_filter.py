from collections.abc import Callable

from app.schemas.property import Property
from app.schemas.search import SearchCriteria

Predicate = Callable[[Property], bool]


def _equals_ignore_case(attr: str, expected: str) -> Predicate:
    expected = expected.lower()

    def predicate(listing: Property) -> bool:
        value = getattr(listing, attr)
        return value is not None and value.lower() == expected

    return predicate


def _equals(attr: str, expected) -> Predicate:
    def predicate(listing: Property) -> bool:
        return getattr(listing, attr) == expected

    return predicate


def _at_least(attr: str, bound) -> Predicate:
    def predicate(listing: Property) -> bool:
        value = getattr(listing, attr)
        return value is not None and value >= bound

    return predicate


def _at_most(attr: str, bound) -> Predicate:
    def predicate(listing: Property) -> bool:
        value = getattr(listing, attr)
        return value is not None and value <= bound

    return predicate


def _has_feature(attr: str) -> Predicate:
    def predicate(listing: Property) -> bool:
        return getattr(listing, attr) is True

    return predicate


def _property_type(label: str) -> Predicate:
    """Case-insensitive substring match on household type or property class."""
    needle = label.lower()

    def predicate(listing: Property) -> bool:
        return any(
            value is not None and needle in value.lower()
            for value in (listing.householdType, listing.propertyClass)
        )

    return predicate


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def build_predicates(criteria: SearchCriteria) -> list[Predicate]:
    """Translate the present criteria fields into listing predicates.

    Absent fields add no predicate, so an empty criteria record matches
    every listing.
    """
    predicates: list[Predicate] = []

    if not _is_blank(criteria.city):
        predicates.append(_equals_ignore_case("city", criteria.city))
    if not _is_blank(criteria.state):
        predicates.append(_equals_ignore_case("state", criteria.state))
    if not _is_blank(criteria.zip):
        predicates.append(_equals("zip", criteria.zip))

    if criteria.minPrice is not None:
        predicates.append(_at_least("price", criteria.minPrice))
    if criteria.maxPrice is not None:
        predicates.append(_at_most("price", criteria.maxPrice))

    # Exact counts take precedence over minimums
    if criteria.beds is not None:
        predicates.append(_equals("beds", criteria.beds))
    elif criteria.minBeds is not None:
        predicates.append(_at_least("beds", criteria.minBeds))

    if criteria.baths is not None:
        predicates.append(_equals("baths", criteria.baths))
    elif criteria.minBaths is not None:
        predicates.append(_at_least("baths", criteria.minBaths))

    if criteria.minSquareFeet is not None:
        predicates.append(_at_least("squareFeet", criteria.minSquareFeet))
    if criteria.maxSquareFeet is not None:
        predicates.append(_at_most("squareFeet", criteria.maxSquareFeet))

    for feature in ("poolPrivate", "fireplace", "view", "garage"):
        if getattr(criteria, feature) is True:
            predicates.append(_has_feature(feature))

    if criteria.minYearBuilt is not None:
        predicates.append(_at_least("yearBuilt", criteria.minYearBuilt))
    if criteria.maxYearBuilt is not None:
        predicates.append(_at_most("yearBuilt", criteria.maxYearBuilt))

    if not _is_blank(criteria.propertyType):
        predicates.append(_property_type(criteria.propertyType))

    return predicates


def matches_all(listing: Property, predicates: list[Predicate]) -> bool:
    return all(predicate(listing) for predicate in predicates)
