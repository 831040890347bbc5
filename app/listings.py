from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from app.exceptions.custom import ListingSourceError
from app.mappers.property_filter import Predicate, matches_all
from app.schemas.property import Property
from app.schemas.responses import PropertyPage

logger = logging.getLogger(__name__)


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class ListingStore:
    """Read-only in-memory listing collection, ordered by id."""

    def __init__(self, listings: Iterable[Property] = ()) -> None:
        self._listings: dict[int, Property] = {}
        for listing in sorted(listings, key=lambda p: p.id):
            if listing.id in self._listings:
                logger.warning("Duplicate listing id %d, keeping the last one", listing.id)
            self._listings[listing.id] = listing

    @classmethod
    def from_file(cls, path: str) -> ListingStore:
        """Load listings from a JSON array or a {"listings": [...]} object.

        Keys may be camelCase or legacy snake_case (year_built, household_type).
        """
        source = Path(path)
        try:
            raw = json.loads(source.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise ListingSourceError("Listings file not found", path=path)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ListingSourceError(f"Listings file is not valid JSON: {exc}", path=path)

        if isinstance(raw, dict):
            raw = raw.get("listings")
        if not isinstance(raw, list):
            raise ListingSourceError("Expected a list of listings", path=path)

        try:
            listings = [
                Property(**{_camel(k): v for k, v in item.items()}) for item in raw
            ]
        except (AttributeError, ValidationError) as exc:
            raise ListingSourceError(f"Invalid listing: {exc}", path=path)

        logger.info("Loaded %d listings from %s", len(listings), path)
        return cls(listings)

    def __len__(self) -> int:
        return len(self._listings)

    def get(self, listing_id: int) -> Property | None:
        return self._listings.get(listing_id)

    def find(self, predicates: list[Predicate], page: int = 0, size: int = 20) -> PropertyPage:
        matched = [p for p in self._listings.values() if matches_all(p, predicates)]
        total = len(matched)
        total_pages = math.ceil(total / size) if size else 0
        start = page * size

        return PropertyPage(
            content=matched[start:start + size],
            totalElements=total,
            totalPages=total_pages,
            size=size,
            number=page,
            first=page == 0,
            last=page >= total_pages - 1,
        )
