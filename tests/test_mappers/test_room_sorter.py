from hotel_intel.mappers.room_sorter import project_rooms, room_row, sort_rooms, toggle_sort
from hotel_intel.schemas.report import SortConfig, SortDirection, SortKey

ROOMS = [
    {"name": "Maple", "size_sqft": "320 sq. ft."},
    {"name": "acacia", "size_sqft": "450 sqft"},
    {"name": "Oak", "size_sqft": "N/A"},
    {"name": "Mahogany", "size_sqft": "280"},
]


def _names(rooms):
    return [r["name"] for r in rooms]


def test_sort_by_name_is_case_insensitive():
    assert _names(sort_rooms(ROOMS, SortKey.name)) == ["acacia", "Mahogany", "Maple", "Oak"]


def test_sort_by_name_descending():
    assert _names(sort_rooms(ROOMS, SortKey.name, SortDirection.desc)) == [
        "Oak", "Maple", "Mahogany", "acacia",
    ]


def test_sort_by_size_unparseable_sorts_smallest():
    assert _names(sort_rooms(ROOMS, SortKey.size)) == ["Oak", "Mahogany", "Maple", "acacia"]


def test_sort_by_size_descending():
    assert _names(sort_rooms(ROOMS, SortKey.size, SortDirection.desc)) == [
        "acacia", "Maple", "Mahogany", "Oak",
    ]


def test_sort_is_stable_for_equal_sizes():
    rooms = [{"name": "B", "size_sqft": "10 sqft"}, {"name": "A", "size_sqft": "10 sqft"}]
    assert _names(sort_rooms(rooms, SortKey.size)) == ["B", "A"]
    assert _names(sort_rooms(rooms, SortKey.size, SortDirection.desc)) == ["B", "A"]


def test_sort_does_not_mutate_input():
    rooms = list(ROOMS)
    sort_rooms(rooms, SortKey.name)
    assert rooms == ROOMS


def test_sort_tolerates_missing_fields():
    rooms = [{"size_sqft": "100"}, {"name": "Zen"}, "junk"]
    assert len(sort_rooms(rooms, SortKey.name)) == 3
    assert len(sort_rooms(rooms, SortKey.size)) == 3


# --- toggle_sort ---


def test_toggle_from_nothing_is_ascending():
    assert toggle_sort(None, SortKey.name) == SortConfig(key=SortKey.name, direction=SortDirection.asc)


def test_toggle_same_key_twice_flips_direction():
    first = toggle_sort(None, SortKey.name)
    second = toggle_sort(first, SortKey.name)
    assert second.direction == SortDirection.desc
    assert _names(sort_rooms(ROOMS, first.key, first.direction)) == ["acacia", "Mahogany", "Maple", "Oak"]
    assert _names(sort_rooms(ROOMS, second.key, second.direction)) == ["Oak", "Maple", "Mahogany", "acacia"]


def test_toggle_descending_resets_to_ascending():
    current = SortConfig(key=SortKey.size, direction=SortDirection.desc)
    assert toggle_sort(current, SortKey.size).direction == SortDirection.asc


def test_toggle_other_key_resets_to_ascending():
    current = SortConfig(key=SortKey.name, direction=SortDirection.asc)
    assert toggle_sort(current, SortKey.size) == SortConfig(key=SortKey.size, direction=SortDirection.asc)


# --- room_row / project_rooms ---


def test_room_row_fallbacks():
    row = room_row({"name": "Oak"})
    assert row.size == "N/A"
    assert row.view == "Standard"
    assert row.flooring == "N/A"
    assert row.connected == "No"
    assert row.amenities == ""
    assert row.cancellation_policy == "N/A"
    assert row.size_detail is None


def test_room_row_full():
    row = room_row({
        "name": "Maple",
        "size_sqft": "320 sq. ft.",
        "view_type": "Garden",
        "flooring_type": "Wooden",
        "connected_rooms": True,
        "amenities": ["Mini Bar", "Smart TV"],
        "cancellation_policy": "Free till 24h",
    })
    assert row.size == "320 sq. ft."
    assert row.connected == "Yes"
    assert row.amenities == "Mini Bar, Smart TV"
    assert row.size_detail.sqft == 320.0


def test_project_rooms_without_sort_keeps_order():
    assert [r.name for r in project_rooms(ROOMS)] == ["Maple", "acacia", "Oak", "Mahogany"]


def test_project_rooms_with_sort():
    sort = SortConfig(key=SortKey.size, direction=SortDirection.desc)
    assert [r.name for r in project_rooms(ROOMS, sort)] == ["acacia", "Maple", "Mahogany", "Oak"]


def test_project_rooms_non_list():
    assert project_rooms("no rooms") == []
