from __future__ import annotations

from pydantic import BaseModel

from app.schemas.property import Property
from app.schemas.search import SearchCriteria


class PropertyPage(BaseModel):
    content: list[Property]
    totalElements: int
    totalPages: int
    size: int
    number: int  # 0-based page index
    first: bool
    last: bool


class NLPSearchResponse(BaseModel):
    criteria: SearchCriteria
    results: PropertyPage


class HealthResponse(BaseModel):
    status: str  # "UP"
    listings: int
