from fastapi import APIRouter

from app.dependencies import SearchServiceDep
from app.schemas.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(service: SearchServiceDep) -> HealthResponse:
    return HealthResponse(status="UP", listings=service.listing_count)
