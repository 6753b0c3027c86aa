import copy

NOT_AVAILABLE = "N/A"

_DEFAULT_REPORT: dict = {
    "basic_info": {
        "hotel_name": NOT_AVAILABLE,
        "city": NOT_AVAILABLE,
        "segment": NOT_AVAILABLE,
        "property_style": NOT_AVAILABLE,
        "overview_description": NOT_AVAILABLE,
    },
    "ota_ratings": {},
    "revenue_insights": [],
    "amenities": {
        "infinity_pool": False,
        "gym": {"available": False},
        "ev_charging": {"available": False},
        "power_backup": {"available": False},
        "wifi_access": NOT_AVAILABLE,
        "recreational_center": NOT_AVAILABLE,
    },
    "banquet_and_conference": {
        "conference_halls": [],
        "banquet_halls": [],
        "events": {
            "dj_available": False,
            "live_music": False,
            "bonfire": {"available": False},
            "candle_light_dinner": {"available": False},
        },
    },
    "room_details": {
        "categories": [],
        "family_rooms": {"available": False},
        "room_lock_type": NOT_AVAILABLE,
        "extra_mattress_charges": NOT_AVAILABLE,
    },
    "dining": {
        "pure_veg": False,
        "homemade_food_request": False,
        "restaurant_location": NOT_AVAILABLE,
        "happy_hours": {"available": False},
        "liquor_allowed": False,
    },
    "safety_and_structure": {
        "elevator": {"available": False, "door_type": NOT_AVAILABLE, "access_type": NOT_AVAILABLE},
        "cctv": {"available": False, "backup_14_days": False, "entrance_cctv": False},
        "fire_safety": {
            "extinguishers": False,
            "sprinklers_in_rooms": False,
            "sprinklers_in_common_areas": False,
            "safety_measures_in_rooms": False,
            "fire_exit_plan": False,
        },
        "security": {"manned_24x7": False, "lady_staff": False},
        "doctor_on_call": False,
        "first_aid": False,
    },
    "location_intelligence": {
        "business_hubs": [],
        "airport_transfer": {"available": False},
        "approach_type": NOT_AVAILABLE,
        "parking_available": False,
    },
    "external_links": {},
    "negative_points": [],
}

# (report key, display label, rating scale)
OTA_PLATFORMS: list[tuple[str, str, int]] = [
    ("google", "Google Business", 5),
    ("makemytrip", "MakeMyTrip", 5),
    ("goibibo", "Goibibo", 5),
    ("booking_com", "Booking.com", 10),
    ("agoda", "Agoda", 10),
    ("easemytrip", "EaseMyTrip", 5),
    ("yatra", "Yatra", 5),
    ("treebo", "Internal Scan", 5),
]

# (display label, external_links key)
PLATFORM_LINKS: list[tuple[str, str]] = [
    ("MMT", "mmt_link"),
    ("Goibibo", "goibibo_link"),
    ("Booking", "booking_com_link"),
    ("Agoda", "agoda_link"),
    ("EMT", "easemytrip_link"),
    ("Yatra", "yatra_link"),
    ("Google", "google_listing"),
    ("Treebo", "treebo_link"),
]


def default_report() -> dict:
    """Return a fresh, fully-populated report to merge model output into."""
    return copy.deepcopy(_DEFAULT_REPORT)
