from collections.abc import Mapping, Sequence

from hotel_intel.mappers.metrics import as_list, extract_numeric_size, room_size_display
from hotel_intel.mappers.report_defaults import NOT_AVAILABLE
from hotel_intel.schemas.report import RoomRow, SortConfig, SortDirection, SortKey


def _field(item, name: str):
    return item.get(name) if isinstance(item, Mapping) else None


def _sort_value(item, key: SortKey):
    if key == SortKey.size:
        return extract_numeric_size(_field(item, "size_sqft"))
    return str(_field(item, "name") or "").lower()


def sort_rooms(
    items: Sequence,
    key: SortKey,
    direction: SortDirection = SortDirection.asc,
) -> list:
    """Return a new, stably sorted list of room categories.

    Rooms with an equal name or size keep their input order in both
    directions.
    """
    return sorted(
        items,
        key=lambda item: _sort_value(item, key),
        reverse=direction == SortDirection.desc,
    )


def toggle_sort(current: SortConfig | None, key: SortKey) -> SortConfig:
    """Next sort state after a click on the ``key`` column header."""
    if current is not None and current.key == key and current.direction == SortDirection.asc:
        return SortConfig(key=key, direction=SortDirection.desc)
    return SortConfig(key=key, direction=SortDirection.asc)


def _text(value, fallback: str) -> str:
    if value is None or value == "":
        return fallback
    return str(value)


def room_row(category) -> RoomRow:
    """Display values for one room category, shared by the table and the export."""
    amenities = as_list(_field(category, "amenities"))
    return RoomRow(
        name=_text(_field(category, "name"), NOT_AVAILABLE),
        size=_text(_field(category, "size_sqft"), NOT_AVAILABLE),
        view=_text(_field(category, "view_type"), "Standard"),
        flooring=_text(_field(category, "flooring_type"), NOT_AVAILABLE),
        connected="Yes" if _field(category, "connected_rooms") else "No",
        amenities=", ".join(str(a) for a in amenities),
        cancellation_policy=_text(_field(category, "cancellation_policy"), NOT_AVAILABLE),
        size_detail=room_size_display(_field(category, "size_sqft")),
    )


def project_rooms(categories, sort: SortConfig | None = None) -> list[RoomRow]:
    rooms = as_list(categories)
    if sort is not None:
        rooms = sort_rooms(rooms, sort.key, sort.direction)
    return [room_row(category) for category in rooms]
