import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings
from app.exceptions.custom import QueryTooLongError
from app.exceptions.handlers import query_too_long_error_handler
from app.listings import ListingStore
from app.routers.health import router as health_router
from app.routers.properties import router as properties_router
from app.services.property_search import PropertySearchService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )

    if settings.listings_file:
        store = ListingStore.from_file(settings.listings_file)
    else:
        logger.warning("LISTINGS_FILE not set, starting with no listings")
        store = ListingStore()

    app.state.settings = settings
    app.state.search_service = PropertySearchService(store)

    yield


app = FastAPI(title="Property Search", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings().cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(QueryTooLongError, query_too_long_error_handler)

app.include_router(properties_router)
app.include_router(health_router)
