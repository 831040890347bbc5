from pydantic import BaseModel, Field, model_validator


class SearchCriteria(BaseModel):
    """Structured criteria parsed from a free-text property search."""

    model_config = {"frozen": True}

    # Location
    city: str | None = None
    state: str | None = None
    zip: str | None = None

    # Price, absolute currency units
    minPrice: float | None = None
    maxPrice: float | None = None

    # Bedrooms / bathrooms: exact and minimum are mutually exclusive
    beds: int | None = None
    minBeds: int | None = None
    baths: int | None = None
    minBaths: int | None = None

    minSquareFeet: int | None = None
    maxSquareFeet: int | None = None

    # Features: True when detected, absent otherwise
    poolPrivate: bool | None = None
    fireplace: bool | None = None
    view: bool | None = None
    garage: bool | None = None

    propertyType: str | None = None

    minYearBuilt: int | None = None
    maxYearBuilt: int | None = None

    originalQuery: str | None = None
    confidenceScore: int = Field(default=0, ge=0, le=100)

    @model_validator(mode="after")
    def _exact_or_minimum(self) -> "SearchCriteria":
        if self.beds is not None and self.minBeds is not None:
            raise ValueError("beds and minBeds are mutually exclusive")
        if self.baths is not None and self.minBaths is not None:
            raise ValueError("baths and minBaths are mutually exclusive")
        return self
