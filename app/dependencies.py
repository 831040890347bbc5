from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from app.services.property_search import PropertySearchService


def get_search_service(request: Request) -> PropertySearchService:
    return request.app.state.search_service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


SearchServiceDep = Annotated[PropertySearchService, Depends(get_search_service)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
