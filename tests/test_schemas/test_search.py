import pytest
from pydantic import ValidationError

from app.schemas.search import SearchCriteria


def test_beds_and_min_beds_are_exclusive():
    with pytest.raises(ValidationError, match="beds and minBeds"):
        SearchCriteria(beds=3, minBeds=2)


def test_baths_and_min_baths_are_exclusive():
    with pytest.raises(ValidationError, match="baths and minBaths"):
        SearchCriteria(baths=2, minBaths=1)


def test_exact_and_minimum_of_different_dimensions_allowed():
    criteria = SearchCriteria(beds=3, minBaths=2)

    assert criteria.beds == 3
    assert criteria.minBaths == 2


def test_criteria_is_frozen():
    criteria = SearchCriteria(city="Irvine")

    with pytest.raises(ValidationError):
        criteria.city = "Davis"
    assert criteria.city == "Irvine"


@pytest.mark.parametrize("score", [-1, 101])
def test_confidence_out_of_range_rejected(score):
    with pytest.raises(ValidationError):
        SearchCriteria(confidenceScore=score)


@pytest.mark.parametrize("score", [0, 100])
def test_confidence_bounds_accepted(score):
    assert SearchCriteria(confidenceScore=score).confidenceScore == score


def test_defaults_are_absent():
    criteria = SearchCriteria()

    assert criteria.model_dump(exclude_none=True) == {"confidenceScore": 0}
