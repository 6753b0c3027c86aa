import logging

import httpx
from pydantic import BaseModel

from hotel_intel.exceptions.custom import GeminiError, RateLimitError
from hotel_intel.mappers.metrics import as_list, dig
from hotel_intel.mappers.rating_mapper import extract_grounding_sources
from hotel_intel.schemas.report import GroundingSource

logger = logging.getLogger(__name__)

API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_MODEL = "gemini-3-flash-preview"

_PROMPT_TEMPLATE = """
TASK: Generate an exhaustive property intelligence report for "{hotel_name}" in "{city}", India.

CRITICAL INSTRUCTION: You MUST fetch and synthesize data from ALL platforms where this hotel is listed.
This includes but is not limited to Google Search, MakeMyTrip, Goibibo, Booking.com, Agoda, and Treebo.com.

REVENUE INTELLIGENCE PROTOCOL:
1. HISTORICAL PERFORMANCE: Research or estimate (based on pricing trends, seasonal demand, and listed room inventory) the performance for the LAST 6 MONTHS.
2. KEY METRICS: For each of the last 6 months, in chronological order, provide:
   - ARR (Average Room Rate) in INR.
   - Occupancy Percentage (%).

SEARCH GROUNDING PROTOCOL:
1. SCRAPE RATINGS: Provide specific score and review count for Google and EVERY major OTA.
2. FIND LINKS: Extract direct URLs for MMT, Goibibo, Booking, Agoda, and Treebo.
3. CROSS-VERIFY AMENITIES: Confirm Power Backup type, 24/7 Security, Fire Safety measures, and Elevator type.
4. ROOM INVENTORY: Identify every room category with precise sizes and view types.
5. CRITIQUE: List the weak points of the OTA listings and guest complaints as "negative_points".

OUTPUT: Return ONLY a valid JSON object. No pre-amble.

REQUIRED JSON STRUCTURE:
{{
  "basic_info": {{ "hotel_name", "city", "segment", "micro_market", "property_style", "overview_description", "year_built" }},
  "ota_ratings": {{
    "google": {{ "score", "count" }},
    "makemytrip": {{ "score", "count" }},
    "goibibo": {{ "score", "count" }},
    "booking_com": {{ "score", "count" }},
    "agoda": {{ "score", "count" }},
    "treebo": {{ "score", "count" }},
    "easemytrip": {{ "score", "count" }},
    "yatra": {{ "score", "count" }}
  }},
  "revenue_insights": [
    {{ "month": string, "arr": number, "occupancy": number }}
  ],
  "amenities": {{ "infinity_pool": boolean, "gym": {{ "available": boolean, "open_time", "close_time", "equipment_quality" }}, "ev_charging": {{ "available": boolean, "four_wheeler_count", "two_wheeler_count" }}, "power_backup": {{ "available": boolean, "hours", "type" }}, "wifi_access", "recreational_center", "laundry_service": boolean, "room_service_24h": boolean }},
  "banquet_and_conference": {{ "conference_halls": [{{"name", "style", "capacity", "floor", "wifi": boolean, "washroom_available": boolean}}], "banquet_halls": [{{"name", "capacity", "floor", "washroom_gender_separated": boolean, "ac_available": boolean}}], "events": {{ "dj_available": boolean, "live_music": boolean, "bonfire": {{ "available": boolean, "charges" }}, "candle_light_dinner": {{ "available": boolean, "charges" }} }} }},
  "room_details": {{ "categories": [{{"name", "size_sqft", "view_type", "flooring_type", "connected_rooms": boolean, "amenities": string[], "cancellation_policy", "deposit_required": boolean}}], "family_rooms": {{ "available": boolean, "count", "max_occupancy" }}, "room_lock_type", "extra_mattress_charges", "total_inventory": number }},
  "dining": {{ "pure_veg": boolean, "homemade_food_request": boolean, "restaurant_location", "happy_hours": {{ "available": boolean, "timing", "discount" }}, "liquor_allowed": boolean, "breakfast_type" }},
  "safety_and_structure": {{ "elevator": {{ "available": boolean, "door_type", "access_type" }}, "cctv": {{ "available": boolean, "backup_14_days": boolean, "entrance_cctv": boolean }}, "fire_safety": {{ "extinguishers": boolean, "sprinklers_in_rooms": boolean, "sprinklers_in_common_areas": boolean, "safety_measures_in_rooms": boolean, "fire_exit_plan": boolean }}, "security": {{ "manned_24x7": boolean, "lady_staff": boolean }}, "doctor_on_call": boolean, "first_aid": boolean }},
  "location_intelligence": {{ "business_hubs": [{{"name", "distance"}}], "tourist_spots": [{{"name", "distance"}}], "airport_transfer": {{ "available": boolean, "charges" }}, "approach_type", "parking_available": boolean }},
  "external_links": {{ "treebo_link", "mmt_link", "goibibo_link", "booking_com_link", "agoda_link", "google_listing", "image_gallery", "easemytrip_link", "yatra_link" }},
  "negative_points": [string]
}}
"""


class GeminiResult(BaseModel):
    text: str
    sources: list[GroundingSource] = []


def build_prompt(hotel_name: str, city: str) -> str:
    return _PROMPT_TEMPLATE.format(hotel_name=hotel_name, city=city).strip()


class GeminiService:
    def __init__(self, client: httpx.AsyncClient, api_key: str, model: str = DEFAULT_MODEL):
        self._client = client
        self._api_key = api_key
        self._model = model

    @property
    def url(self) -> str:
        return API_URL.format(model=self._model)

    async def generate(self, hotel_name: str, city: str) -> GeminiResult:
        """Run one search-grounded generation for a hotel.

        Raises GeminiError on transport or service failure, RateLimitError
        on HTTP 429. Nothing is retried.
        """
        payload = {
            "contents": [{"role": "user", "parts": [{"text": build_prompt(hotel_name, city)}]}],
            "tools": [{"google_search": {}}],
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self._api_key,
        }

        try:
            resp = await self._client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise GeminiError(f"Transport error: {exc}") from exc

        if resp.status_code == 429:
            raise RateLimitError("Gemini")
        if resp.status_code >= 400:
            raise GeminiError(resp.text, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise GeminiError("Response body is not JSON", status_code=resp.status_code) from exc

        text = self._response_text(data)
        sources = extract_grounding_sources(data)
        logger.info(
            "Gemini returned %d chars and %d sources for %s (%s)",
            len(text), len(sources), hotel_name, city,
        )
        return GeminiResult(text=text, sources=sources)

    @staticmethod
    def _response_text(data: dict) -> str:
        """Concatenate the text parts of the first candidate."""
        candidates = as_list(dig(data, "candidates"))
        if not candidates:
            return ""
        parts = as_list(dig(candidates[0], "content", "parts"))
        return "".join(str(part["text"]) for part in parts if isinstance(part, dict) and "text" in part)
