from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Request

from app.config import Settings
from app.dependencies import SearchServiceDep, SettingsDep
from app.exceptions.custom import QueryTooLongError
from app.schemas.property import Property
from app.schemas.responses import NLPSearchResponse, PropertyPage
from app.schemas.search import SearchCriteria

router = APIRouter(prefix="/properties")

PageParam = Annotated[int, Query(ge=0)]
SizeParam = Annotated[int | None, Query(ge=1)]


def _page_size(size: int | None, settings: Settings) -> int:
    return min(size or settings.default_page_size, settings.max_page_size)


async def _read_query(request: Request, settings: Settings) -> str:
    """Read the raw text/plain body sent by the search box."""
    text = (await request.body()).decode("utf-8", errors="replace")
    if len(text) > settings.max_query_length:
        raise QueryTooLongError(len(text), settings.max_query_length)
    return text


@router.get("", response_model=PropertyPage, response_model_exclude_none=True)
async def search_properties(
    service: SearchServiceDep,
    settings: SettingsDep,
    city: str | None = None,
    state: str | None = None,
    zip: str | None = None,
    min_price: Annotated[float | None, Query(alias="minPrice")] = None,
    max_price: Annotated[float | None, Query(alias="maxPrice")] = None,
    beds: int | None = None,
    min_beds: Annotated[int | None, Query(alias="minBeds")] = None,
    baths: int | None = None,
    min_baths: Annotated[int | None, Query(alias="minBaths")] = None,
    page: PageParam = 0,
    size: SizeParam = None,
) -> PropertyPage:
    return service.search(
        city=city,
        state=state,
        zip=zip,
        min_price=min_price,
        max_price=max_price,
        beds=beds,
        min_beds=min_beds,
        baths=baths,
        min_baths=min_baths,
        page=page,
        size=_page_size(size, settings),
    )


@router.get("/{listing_id}", response_model=Property, response_model_exclude_none=True)
async def get_property(listing_id: int, service: SearchServiceDep) -> Property:
    listing = service.get(listing_id)
    if listing is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return listing


@router.post("/nlp-search", response_model=NLPSearchResponse, response_model_exclude_none=True)
async def search_with_nlp(
    request: Request,
    service: SearchServiceDep,
    settings: SettingsDep,
    page: PageParam = 0,
    size: SizeParam = None,
) -> NLPSearchResponse:
    text = await _read_query(request, settings)
    return service.search_nlp(text, page=page, size=_page_size(size, settings))


@router.post("/nlp-parse", response_model=SearchCriteria, response_model_exclude_none=True)
async def parse_nlp_query(
    request: Request,
    service: SearchServiceDep,
    settings: SettingsDep,
) -> SearchCriteria:
    text = await _read_query(request, settings)
    return service.parse(text)
