import pytest

from hotel_intel.mappers.metrics import (
    average_arr,
    average_occupancy,
    build_revenue_rows,
    compute_report_stats,
    extract_numeric_size,
    format_growth,
    month_over_month_growth,
    peak_capacity,
    room_size_display,
    sqft_to_sqm,
)
from hotel_intel.mappers.report_defaults import default_report


def _points(*occupancies):
    return [{"month": f"M{i}", "arr": 1000 * (i + 1), "occupancy": occ} for i, occ in enumerate(occupancies)]


# --- averages ---


def test_average_arr():
    assert average_arr(_points(50, 60, 70)) == pytest.approx(2000.0)


def test_average_occupancy():
    assert average_occupancy(_points(50, 60, 70)) == pytest.approx(60.0)


def test_averages_of_empty_series_are_none():
    assert average_arr([]) is None
    assert average_occupancy([]) is None
    assert average_arr("not a list") is None


def test_averages_treat_bad_values_as_zero():
    points = [{"arr": "4000", "occupancy": "sixty"}, {"arr": None, "occupancy": 40}, "junk"]
    assert average_arr(points) == pytest.approx(4000 / 3)
    assert average_occupancy(points) == pytest.approx(40 / 3)


# --- month_over_month_growth ---


def test_growth_baseline_and_change():
    growth = month_over_month_growth([{"occupancy": 50}, {"occupancy": 60}])
    assert growth[0] is None
    assert growth[1] == pytest.approx(20.0)


def test_growth_guards_zero_previous():
    assert month_over_month_growth([{"occupancy": 0}, {"occupancy": 10}]) == [None, None]


def test_growth_negative_change():
    growth = month_over_month_growth(_points(80, 60, 0, 30))
    assert growth[1] == pytest.approx(-25.0)
    assert growth[2] == pytest.approx(-100.0)
    assert growth[3] is None


def test_growth_has_one_entry_per_point():
    assert len(month_over_month_growth(_points(10, 20, 30, 40, 50, 60))) == 6
    assert month_over_month_growth([]) == []


def test_format_growth():
    assert format_growth(None) == "N/A (Baseline)"
    assert format_growth(20.0) == "20.00%"
    assert format_growth(-12.3456) == "-12.35%"


# --- peak_capacity ---


def test_peak_capacity_empty_is_sentinel():
    assert peak_capacity([], []) == "N/A"


def test_peak_capacity_parses_strings():
    assert peak_capacity([{"capacity": "200"}], [{"capacity": 0}]) == 200


def test_peak_capacity_ignores_unparseable():
    halls = [{"capacity": "about 300 pax"}, {"name": "no capacity"}, None]
    assert peak_capacity(halls, [{"capacity": 120}]) == 120


def test_peak_capacity_all_zero_is_sentinel():
    assert peak_capacity([{"capacity": "n/a"}], [{"capacity": 0}]) == "N/A"


# --- sizes ---


@pytest.mark.parametrize(
    "size, expected",
    [
        ("450 sq. ft.", 450.0),
        ("N/A", 0.0),
        (None, 0.0),
        (320, 320.0),
        ("275.5 sqft", 275.5),
        ("approx 1,200 sqft", 1200.0),
        ("", 0.0),
    ],
)
def test_extract_numeric_size(size, expected):
    assert extract_numeric_size(size) == expected


def test_sqft_to_sqm():
    assert sqft_to_sqm(100) == pytest.approx(9.2903)


def test_room_size_display():
    size = room_size_display("450 sq. ft.")
    assert size.sqft == 450.0
    assert size.sqm == 41.8
    assert size.raw is None


def test_room_size_display_missing_values():
    for value in (None, "", "N/A", "—"):
        assert room_size_display(value) is None


def test_room_size_display_unparseable_keeps_text():
    size = room_size_display("Spacious")
    assert size.sqft is None
    assert size.raw == "Spacious"


# --- stats ---


def test_compute_report_stats():
    report = default_report()
    report["revenue_insights"] = _points(50, 60)
    report["banquet_and_conference"]["banquet_halls"] = [{"capacity": 150}]
    report["banquet_and_conference"]["conference_halls"] = [{"capacity": "80"}, {"capacity": 40}]

    stats = compute_report_stats(report)

    assert stats.average_arr == pytest.approx(1500.0)
    assert stats.average_occupancy == pytest.approx(55.0)
    assert stats.peak_capacity == 150
    assert stats.meeting_venues == 3
    assert stats.mom_growth[0] is None
    assert stats.mom_growth[1] == pytest.approx(20.0)


def test_compute_report_stats_on_default():
    stats = compute_report_stats(default_report())
    assert stats.average_arr is None
    assert stats.peak_capacity == "N/A"
    assert stats.meeting_venues == 0
    assert stats.mom_growth == []


def test_build_revenue_rows_uses_given_growth():
    points = _points(50, 60)
    rows = build_revenue_rows(points, [None, 20.0])
    assert [r.month for r in rows] == ["M0", "M1"]
    assert rows[0].growth is None
    assert rows[1].growth == 20.0
    assert rows[1].arr == 2000.0
