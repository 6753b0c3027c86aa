import logging

from hotel_intel.exceptions.custom import (
    GeminiError,
    IntelligenceGatheringError,
    MalformedPayloadError,
    RateLimitError,
)
from hotel_intel.mappers.metrics import as_list, compute_report_stats, dig
from hotel_intel.mappers.report_merger import normalize_report, parse_report_payload
from hotel_intel.schemas.responses import HotelIntel
from hotel_intel.services.gemini import GeminiService

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, gemini: GeminiService):
        self._gemini = gemini

    async def build(self, hotel_name: str, city: str) -> HotelIntel:
        """Fetch, parse and normalize one hotel report.

        Transport, quota and payload failures all surface as a single
        IntelligenceGatheringError; no partial report is returned.
        """
        logger.info("Gathering intelligence for %s (%s)", hotel_name, city)
        try:
            result = await self._gemini.generate(hotel_name, city)
            payload = parse_report_payload(result.text)
        except RateLimitError as exc:
            logger.warning("Rate limited while fetching %s: %s", hotel_name, exc)
            raise IntelligenceGatheringError() from exc
        except GeminiError as exc:
            logger.error(
                "Gemini call failed for %s: %s (status=%s)",
                hotel_name, exc.message, exc.status_code,
            )
            raise IntelligenceGatheringError() from exc
        except MalformedPayloadError as exc:
            logger.error("Malformed report payload for %s: %s", hotel_name, exc.message)
            raise IntelligenceGatheringError() from exc

        report = normalize_report(payload, hotel_name, city)
        stats = compute_report_stats(report)
        logger.info(
            "Report ready for %s: %d revenue points, %d room categories, %d sources",
            hotel_name,
            len(stats.mom_growth),
            len(as_list(dig(report, "room_details", "categories"))),
            len(result.sources),
        )
        return HotelIntel(report=report, sources=result.sources, stats=stats)
