import re
from collections.abc import Mapping

from hotel_intel.mappers.metrics import as_list, dig, format_growth, month_over_month_growth
from hotel_intel.mappers.report_defaults import NOT_AVAILABLE
from hotel_intel.mappers.room_sorter import room_row
from hotel_intel.schemas.report import Cell, Sheet, Workbook

SUMMARY_SHEET = "Summary & Ratings"
REVENUE_SHEET = "Revenue Intelligence"
INVENTORY_SHEET = "Inventory Matrix"
OPERATIONS_SHEET = "Operational Specs"

REVENUE_HEADER: list[Cell] = ["Month", "ARR (INR)", "Occupancy (%)", "MoM Occupancy Growth (%)"]
INVENTORY_HEADER: list[Cell] = [
    "OTA Room Type", "Size (Sqft)", "View", "Flooring",
    "Connected", "Amenities", "Cancellation Policy",
]

_WHITESPACE_RE = re.compile(r"\s+")


def _cell(value, fallback: Cell = NOT_AVAILABLE) -> Cell:
    if value is None or value == "":
        return fallback
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (int, float)):
        return value
    return str(value)


def _yes_no(value) -> str:
    return "Yes" if value else "No"


def export_filename(hotel_name) -> str:
    return f"{_WHITESPACE_RE.sub('_', str(hotel_name))}_Intel_Report"


def _summary_rows(report: Mapping) -> list[list[Cell]]:
    info = dig(report, "basic_info", default={})
    rows: list[list[Cell]] = [
        ["PROPERTY SUMMARY", ""],
        ["Field", "Value"],
        ["Hotel Name", _cell(dig(info, "hotel_name"))],
        ["City", _cell(dig(info, "city"))],
        ["Segment", _cell(dig(info, "segment"))],
        ["Micro Market", _cell(dig(info, "micro_market"))],
        ["Style", _cell(dig(info, "property_style"))],
        ["Year Built", _cell(dig(info, "year_built"))],
        ["Description", _cell(dig(info, "overview_description"))],
        ["", ""],
        ["OTA RATINGS", ""],
        ["Platform", "Score", "Review Count"],
    ]

    ratings = dig(report, "ota_ratings", default={})
    if isinstance(ratings, Mapping):
        for platform, rating in ratings.items():
            # falsy scores and counts render the same as missing ones
            score = dig(rating, "score")
            count = dig(rating, "count")
            rows.append([
                str(platform).upper(),
                _cell(score) if score else NOT_AVAILABLE,
                _cell(count) if count else 0,
            ])
    return rows


def _revenue_rows(report: Mapping, growth: list[float | None]) -> list[list[Cell]]:
    rows: list[list[Cell]] = [list(REVENUE_HEADER)]
    for point, change in zip(as_list(dig(report, "revenue_insights")), growth):
        point = point if isinstance(point, Mapping) else {}
        rows.append([
            _cell(point.get("month")),
            _cell(point.get("arr"), 0),
            _cell(point.get("occupancy"), 0),
            format_growth(change),
        ])
    return rows


def _inventory_rows(report: Mapping) -> list[list[Cell]]:
    rows: list[list[Cell]] = [list(INVENTORY_HEADER)]
    for category in as_list(dig(report, "room_details", "categories")):
        room = room_row(category)
        rows.append([
            room.name,
            room.size,
            room.view,
            room.flooring,
            room.connected,
            room.amenities,
            room.cancellation_policy,
        ])
    return rows


def _operations_rows(report: Mapping) -> list[list[Cell]]:
    negative_points = [str(point) for point in as_list(dig(report, "negative_points"))]
    return [
        ["CATEGORY", "PARAMETER", "STATUS / VALUE"],
        ["Amenities", "Infinity Pool", _yes_no(dig(report, "amenities", "infinity_pool"))],
        ["Amenities", "Gym Available", _yes_no(dig(report, "amenities", "gym", "available"))],
        ["Amenities", "EV Charging", _yes_no(dig(report, "amenities", "ev_charging", "available"))],
        ["Amenities", "Power Backup", _cell(dig(report, "amenities", "power_backup", "type"))],
        [
            "Safety", "24/7 Manned Security",
            _yes_no(dig(report, "safety_and_structure", "security", "manned_24x7")),
        ],
        ["Dining", "Pure Veg", _yes_no(dig(report, "dining", "pure_veg"))],
        ["Critique", "Negative Points Identified", " | ".join(negative_points)],
    ]


def build_workbook(report: Mapping, growth: list[float | None] | None = None) -> Workbook:
    """Flatten a normalized report into the four export sheets.

    ``growth`` is the month-over-month series already shown on screen; it is
    computed here only when the caller has none.
    """
    if growth is None:
        growth = month_over_month_growth(dig(report, "revenue_insights"))

    return Workbook(
        filename=export_filename(dig(report, "basic_info", "hotel_name", default=NOT_AVAILABLE)),
        sheets=[
            Sheet(name=SUMMARY_SHEET, rows=_summary_rows(report)),
            Sheet(name=REVENUE_SHEET, rows=_revenue_rows(report, growth)),
            Sheet(name=INVENTORY_SHEET, rows=_inventory_rows(report)),
            Sheet(name=OPERATIONS_SHEET, rows=_operations_rows(report)),
        ],
    )
