from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from hotel_intel.schemas.report import (
    GroundingSource,
    PlatformLink,
    RatingCard,
    ReportStats,
    RevenueRow,
    RoomRow,
    SortConfig,
    SortKey,
)


class SearchRequest(BaseModel):
    hotel_name: str = Field(min_length=1)
    city: str = Field(min_length=1)


class SortRequest(BaseModel):
    key: SortKey


class HotelIntel(BaseModel):
    report: dict
    sources: list[GroundingSource] = []
    stats: ReportStats


class SearchSubmittedResponse(BaseModel):
    search_id: str
    status: str
    message: str


class SearchStatusResponse(BaseModel):
    search_id: str
    status: str
    hotel_name: str
    city: str
    created_at: datetime
    finished_at: datetime | None = None
    error: str | None = None
    report: dict | None = None
    sources: list[GroundingSource] = []
    stats: ReportStats | None = None
    revenue: list[RevenueRow] = []
    ratings: list[RatingCard] = []
    links: list[PlatformLink] = []
    rooms: list[RoomRow] = []
    sort: SortConfig | None = None


class SortResponse(BaseModel):
    search_id: str
    sort: SortConfig
    rooms: list[RoomRow]
