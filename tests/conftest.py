import json

import httpx
import pytest
from httpx import ASGITransport

SAMPLE_LISTINGS = [
    {
        "id": 1,
        "address": "100 Sunset Blvd",
        "city": "Los Angeles",
        "state": "CA",
        "zip": "90026",
        "householdType": "Single Family Residence",
        "propertyClass": "Residential",
        "beds": 3,
        "baths": 2,
        "price": 480000,
        "squareFeet": 1650,
        "yearBuilt": 1978,
        "poolPrivate": True,
        "garage": True,
    },
    {
        "id": 2,
        "address": "22 Bay St",
        "city": "San Francisco",
        "state": "CA",
        "zip": "94133",
        "householdType": "Condominium",
        "propertyClass": "Residential",
        "beds": 2,
        "baths": 2,
        "price": 950000,
        "squareFeet": 1100,
        "yearBuilt": 2005,
        "view": True,
    },
    {
        "id": 3,
        "address": "9 Harbor Dr",
        "city": "San Diego",
        "state": "CA",
        "zip": "92101",
        "household_type": "Single Family Residence",
        "property_class": "Residential",
        "beds": 4,
        "baths": 3,
        "price": 550000,
        "squareFeet": 2200,
        "year_built": 1999,
        "garage": True,
    },
    {
        "id": 4,
        "address": "5 Elm Ct",
        "city": "Los Angeles",
        "state": "CA",
        "zip": "90027",
        "householdType": "Condominium",
        "beds": 1,
        "baths": 1,
        "price": 390000,
        "squareFeet": 700,
        "yearBuilt": 2012,
    },
]


@pytest.fixture
def listings_file(tmp_path):
    path = tmp_path / "listings.json"
    path.write_text(json.dumps(SAMPLE_LISTINGS))
    return path


@pytest.fixture
def mock_env(monkeypatch, listings_file):
    monkeypatch.setenv("LISTINGS_FILE", str(listings_file))
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "2")
    monkeypatch.setenv("MAX_PAGE_SIZE", "3")
    monkeypatch.setenv("MAX_QUERY_LENGTH", "120")


@pytest.fixture
async def client(mock_env):
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
