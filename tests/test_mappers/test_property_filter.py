from app.mappers.property_filter import build_predicates, matches_all
from app.schemas.property import Property
from app.schemas.search import SearchCriteria


def _listing(**overrides) -> Property:
    data = {
        "id": 1,
        "city": "Los Angeles",
        "state": "CA",
        "zip": "90001",
        "householdType": "Single Family Residence",
        "propertyClass": "Residential",
        "beds": 3,
        "baths": 2,
        "price": 450000.0,
        "squareFeet": 1800,
        "yearBuilt": 1995,
        "poolPrivate": True,
        "fireplace": False,
        "view": None,
        "garage": True,
    }
    data.update(overrides)
    return Property(**data)


def _matches(listing: Property, **criteria) -> bool:
    return matches_all(listing, build_predicates(SearchCriteria(**criteria)))


def test_empty_criteria_matches_everything():
    assert build_predicates(SearchCriteria()) == []
    assert _matches(_listing())


def test_city_is_case_insensitive():
    assert _matches(_listing(), city="los angeles")
    assert not _matches(_listing(), city="San Diego")


def test_state_and_zip():
    assert _matches(_listing(), state="ca", zip="90001")
    assert not _matches(_listing(), zip="90002")


def test_blank_city_adds_no_predicate():
    assert build_predicates(SearchCriteria(city="  ")) == []


def test_price_range_is_inclusive():
    assert _matches(_listing(), minPrice=450000, maxPrice=450000)
    assert not _matches(_listing(), maxPrice=449999)
    assert not _matches(_listing(), minPrice=450001)


def test_missing_attribute_fails_range():
    assert not _matches(_listing(price=None), minPrice=1)


def test_exact_and_minimum_beds():
    assert _matches(_listing(), beds=3)
    assert not _matches(_listing(), beds=2)
    assert _matches(_listing(), minBeds=2)
    assert not _matches(_listing(), minBeds=4)


def test_exact_and_minimum_baths():
    assert _matches(_listing(), baths=2)
    assert _matches(_listing(), minBaths=2)
    assert not _matches(_listing(), minBaths=3)


def test_square_feet_and_year_built():
    assert _matches(_listing(), minSquareFeet=1500, maxSquareFeet=2000)
    assert not _matches(_listing(), maxSquareFeet=1700)
    assert _matches(_listing(), minYearBuilt=1990, maxYearBuilt=2000)
    assert not _matches(_listing(), minYearBuilt=2000)


def test_features_require_true():
    assert _matches(_listing(), poolPrivate=True, garage=True)
    assert not _matches(_listing(), fireplace=True)
    assert not _matches(_listing(), view=True)


def test_false_feature_adds_no_predicate():
    assert build_predicates(SearchCriteria(fireplace=False)) == []


def test_property_type_substring_on_either_field():
    assert _matches(_listing(), propertyType="single family")
    assert _matches(_listing(), propertyType="residential")
    assert not _matches(_listing(), propertyType="condo")
    assert not _matches(_listing(householdType=None, propertyClass=None), propertyType="house")
