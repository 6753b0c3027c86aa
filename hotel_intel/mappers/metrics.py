import math
import re
from collections.abc import Mapping

from hotel_intel.mappers.report_defaults import NOT_AVAILABLE
from hotel_intel.schemas.report import ReportStats, RevenueRow, RoomSize

SQFT_TO_SQM = 0.092903
BASELINE_LABEL = "N/A (Baseline)"

_NON_NUMERIC_RE = re.compile(r"[^\d.]")
_LEADING_NUMBER_RE = re.compile(r"\d+\.?\d*|\.\d+")
_EMPTY_SIZES = {"", NOT_AVAILABLE, "—"}


def dig(data, *path, default=None):
    """Walk nested mappings, returning ``default`` at the first gap."""
    for key in path:
        if not isinstance(data, Mapping) or key not in data:
            return default
        data = data[key]
    return default if data is None else data


def as_list(value) -> list:
    return value if isinstance(value, list) else []


def as_number(value) -> float:
    """Coerce a report leaf to a float; anything unusable is 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _series(points, field: str) -> list[float]:
    return [
        as_number(point.get(field)) if isinstance(point, Mapping) else 0.0
        for point in as_list(points)
    ]


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def average_arr(points) -> float | None:
    return _mean(_series(points, "arr"))


def average_occupancy(points) -> float | None:
    return _mean(_series(points, "occupancy"))


def month_over_month_growth(points) -> list[float | None]:
    """Occupancy change vs. the previous month, in percent.

    The first month is the baseline (None), as is any month whose previous
    occupancy is 0.
    """
    occupancy = _series(points, "occupancy")
    growth: list[float | None] = []
    for i, current in enumerate(occupancy):
        previous = occupancy[i - 1] if i > 0 else 0.0
        if i == 0 or previous == 0:
            growth.append(None)
        else:
            growth.append((current - previous) / previous * 100)
    return growth


def format_growth(value: float | None) -> str:
    if value is None:
        return BASELINE_LABEL
    return f"{value:.2f}%"


def peak_capacity(banquet_halls, conference_halls) -> int | float | str:
    capacities = [
        as_number(hall.get("capacity")) if isinstance(hall, Mapping) else 0.0
        for hall in [*as_list(banquet_halls), *as_list(conference_halls)]
    ]
    peak = max(capacities, default=0.0)
    if peak <= 0:
        return NOT_AVAILABLE
    return int(peak) if peak.is_integer() else peak


def _parse_size(size) -> float | None:
    if size is None or isinstance(size, bool):
        return None
    digits = _NON_NUMERIC_RE.sub("", str(size))
    match = _LEADING_NUMBER_RE.match(digits)
    if not match:
        return None
    return float(match.group(0))


def extract_numeric_size(size) -> float:
    """Numeric part of a free-form size such as "450 sq. ft."; 0 if none."""
    value = _parse_size(size)
    return 0.0 if value is None else value


def sqft_to_sqm(sqft: float) -> float:
    return sqft * SQFT_TO_SQM


def room_size_display(size) -> RoomSize | None:
    if size is None or (isinstance(size, str) and size.strip() in _EMPTY_SIZES):
        return None
    sqft = _parse_size(size)
    if sqft is None:
        return RoomSize(raw=str(size))
    return RoomSize(sqft=sqft, sqm=round(sqft_to_sqm(sqft), 1))


def meeting_venue_count(report: Mapping) -> int:
    return len(as_list(dig(report, "banquet_and_conference", "conference_halls"))) + len(
        as_list(dig(report, "banquet_and_conference", "banquet_halls"))
    )


def build_revenue_rows(points, growth: list[float | None]) -> list[RevenueRow]:
    rows = []
    for point, change in zip(as_list(points), growth):
        point = point if isinstance(point, Mapping) else {}
        rows.append(RevenueRow(
            month=str(point.get("month") or NOT_AVAILABLE),
            arr=as_number(point.get("arr")),
            occupancy=as_number(point.get("occupancy")),
            growth=change,
        ))
    return rows


def compute_report_stats(report: Mapping) -> ReportStats:
    points = dig(report, "revenue_insights")
    return ReportStats(
        average_arr=average_arr(points),
        average_occupancy=average_occupancy(points),
        peak_capacity=peak_capacity(
            dig(report, "banquet_and_conference", "banquet_halls"),
            dig(report, "banquet_and_conference", "conference_halls"),
        ),
        meeting_venues=meeting_venue_count(report),
        mom_growth=month_over_month_growth(points),
    )
