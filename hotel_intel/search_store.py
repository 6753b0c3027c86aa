from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel

from hotel_intel.schemas.report import GroundingSource, ReportStats, SortConfig
from hotel_intel.schemas.responses import HotelIntel


class SearchStatus(StrEnum):
    searching = "searching"
    completed = "completed"
    error = "error"


class Search(BaseModel):
    search_id: str
    status: SearchStatus
    hotel_name: str
    city: str
    created_at: datetime
    finished_at: datetime | None = None
    report: dict | None = None
    sources: list[GroundingSource] = []
    stats: ReportStats | None = None
    error: str | None = None
    sort: SortConfig | None = None


def _same_query(search: Search, hotel_name: str, city: str) -> bool:
    return (
        search.hotel_name.strip().lower() == hotel_name.strip().lower()
        and search.city.strip().lower() == city.strip().lower()
    )


class SearchStore:
    def __init__(self, max_searches: int = 100) -> None:
        self._searches: dict[str, Search] = {}
        self._max_searches = max_searches

    def _evict(self) -> None:
        if len(self._searches) <= self._max_searches:
            return
        # Remove oldest finished searches first
        candidates = sorted(
            (s for s in self._searches.values() if s.status != SearchStatus.searching),
            key=lambda s: s.created_at,
        )
        while len(self._searches) > self._max_searches and candidates:
            self._searches.pop(candidates.pop(0).search_id, None)

    def create_search(self, hotel_name: str, city: str) -> Search:
        search = Search(
            search_id=uuid.uuid4().hex[:12],
            status=SearchStatus.searching,
            hotel_name=hotel_name,
            city=city,
            created_at=datetime.now(timezone.utc),
        )
        self._searches[search.search_id] = search
        self._evict()
        return search

    def get_search(self, search_id: str) -> Search | None:
        return self._searches.get(search_id)

    def has_active_search(self, hotel_name: str, city: str) -> Search | None:
        """Return an in-flight search for the same hotel and city, if any."""
        for search in self._searches.values():
            if search.status == SearchStatus.searching and _same_query(search, hotel_name, city):
                return search
        return None

    def mark_completed(self, search_id: str, intel: HotelIntel) -> None:
        if search := self._searches.get(search_id):
            search.status = SearchStatus.completed
            search.report = intel.report
            search.sources = intel.sources
            search.stats = intel.stats
            search.error = None
            search.sort = None
            search.finished_at = datetime.now(timezone.utc)

    def mark_failed(self, search_id: str, error: str) -> None:
        if search := self._searches.get(search_id):
            search.status = SearchStatus.error
            search.report = None
            search.sources = []
            search.stats = None
            search.error = error
            search.sort = None
            search.finished_at = datetime.now(timezone.utc)

    def set_sort(self, search_id: str, sort: SortConfig) -> None:
        if search := self._searches.get(search_id):
            search.sort = sort
