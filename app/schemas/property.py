from pydantic import BaseModel


class Property(BaseModel):
    id: int
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    propertyClass: str | None = None
    householdType: str | None = None
    beds: int | None = None
    baths: int | None = None
    price: float | None = None
    squareFeet: int | None = None
    yearBuilt: int | None = None
    poolPrivate: bool | None = None
    fireplace: bool | None = None
    view: bool | None = None
    garage: bool | None = None
    remarks: str | None = None
    mlsNumber: str | None = None
    status: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    photos: list[str] = []
