import logging

from app.listings import ListingStore
from app.mappers.property_filter import build_predicates
from app.mappers.query_parser import parse_query
from app.schemas.property import Property
from app.schemas.responses import NLPSearchResponse, PropertyPage
from app.schemas.search import SearchCriteria

logger = logging.getLogger(__name__)


class PropertySearchService:
    def __init__(self, store: ListingStore):
        self._store = store

    def parse(self, text: str | None) -> SearchCriteria:
        criteria = parse_query(text)
        logger.info(
            "Parsed query %r (confidence=%d)", text, criteria.confidenceScore
        )
        return criteria

    def get(self, listing_id: int) -> Property | None:
        return self._store.get(listing_id)

    def search(
        self,
        *,
        city: str | None = None,
        state: str | None = None,
        zip: str | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        beds: int | None = None,
        min_beds: int | None = None,
        baths: int | None = None,
        min_baths: int | None = None,
        page: int = 0,
        size: int = 20,
    ) -> PropertyPage:
        # Exact counts win over minimums when both are supplied
        criteria = SearchCriteria(
            city=city,
            state=state,
            zip=zip,
            minPrice=min_price,
            maxPrice=max_price,
            beds=beds,
            minBeds=min_beds if beds is None else None,
            baths=baths,
            minBaths=min_baths if baths is None else None,
        )
        result = self._store.find(build_predicates(criteria), page=page, size=size)
        logger.info("Structured search matched %d listings", result.totalElements)
        return result

    def search_nlp(self, text: str | None, page: int = 0, size: int = 20) -> NLPSearchResponse:
        criteria = self.parse(text)
        result = self._store.find(build_predicates(criteria), page=page, size=size)
        logger.info(
            "NLP search matched %d listings (confidence=%d)",
            result.totalElements,
            criteria.confidenceScore,
        )
        return NLPSearchResponse(criteria=criteria, results=result)

    @property
    def listing_count(self) -> int:
        return len(self._store)
