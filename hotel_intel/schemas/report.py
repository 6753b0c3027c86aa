from enum import StrEnum

from pydantic import BaseModel

# Cells of an exported sheet are text or numbers only.
Cell = str | int | float


class GroundingSource(BaseModel):
    title: str
    uri: str


class SortKey(StrEnum):
    name = "name"
    size = "size"


class SortDirection(StrEnum):
    asc = "asc"
    desc = "desc"


class SortConfig(BaseModel):
    key: SortKey
    direction: SortDirection = SortDirection.asc


class RoomSize(BaseModel):
    sqft: float | None = None
    sqm: float | None = None
    raw: str | None = None  # set when the size text has no usable number


class RoomRow(BaseModel):
    name: str
    size: str
    view: str
    flooring: str
    connected: str
    amenities: str
    cancellation_policy: str
    size_detail: RoomSize | None = None


class RevenueRow(BaseModel):
    month: str
    arr: float
    occupancy: float
    growth: float | None = None  # None for the baseline month


class RatingCard(BaseModel):
    platform: str
    label: str
    score: float | None = None
    count: int | None = None
    max_score: int
    percentage: float = 0.0
    band: str | None = None  # "excellent" | "good" | "poor"


class PlatformLink(BaseModel):
    label: str
    url: str


class ReportStats(BaseModel):
    average_arr: float | None = None
    average_occupancy: float | None = None
    peak_capacity: int | float | str = "N/A"
    meeting_venues: int = 0
    mom_growth: list[float | None] = []


class Sheet(BaseModel):
    name: str
    rows: list[list[Cell]]


class Workbook(BaseModel):
    filename: str
    sheets: list[Sheet]

    def sheet(self, name: str) -> Sheet:
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        raise KeyError(name)
