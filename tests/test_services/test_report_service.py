from unittest.mock import AsyncMock

import pytest

from hotel_intel.exceptions.custom import (
    GENERIC_FAILURE_MESSAGE,
    GeminiError,
    IntelligenceGatheringError,
    RateLimitError,
)
from hotel_intel.schemas.report import GroundingSource
from hotel_intel.services.gemini import GeminiResult
from hotel_intel.services.report import ReportService


def _service(result=None, side_effect=None):
    gemini = AsyncMock()
    gemini.generate = AsyncMock(return_value=result, side_effect=side_effect)
    return ReportService(gemini), gemini


async def test_build_normalizes_payload():
    text = """```json
    {
      "basic_info": {"segment": "Upscale"},
      "revenue_insights": [{"month": "Jan", "arr": 5000, "occupancy": 40}, {"month": "Feb", "arr": 5200, "occupancy": 50}],
      "banquet_and_conference": {"banquet_halls": [{"capacity": "250"}]}
    }
    ```"""
    sources = [GroundingSource(title="Goibibo", uri="https://goibibo.example")]
    service, gemini = _service(GeminiResult(text=text, sources=sources))

    intel = await service.build("Hotel Sea Breeze", "Puri")

    gemini.generate.assert_awaited_once_with("Hotel Sea Breeze", "Puri")
    assert intel.report["basic_info"]["hotel_name"] == "Hotel Sea Breeze"
    assert intel.report["basic_info"]["city"] == "Puri"
    assert intel.report["basic_info"]["segment"] == "Upscale"
    assert intel.report["dining"]["pure_veg"] is False
    assert intel.sources == sources
    assert intel.stats.peak_capacity == 250
    assert intel.stats.mom_growth[0] is None
    assert intel.stats.mom_growth[1] == pytest.approx(25.0)


async def test_build_malformed_payload_raises_generic_error():
    service, _ = _service(GeminiResult(text="Sorry, I could not find that hotel."))

    with pytest.raises(IntelligenceGatheringError) as exc_info:
        await service.build("Ghost Hotel", "Nowhere")
    assert exc_info.value.message == GENERIC_FAILURE_MESSAGE


@pytest.mark.parametrize(
    "error",
    [GeminiError("boom", status_code=503), RateLimitError("Gemini")],
)
async def test_build_service_failures_collapse_to_generic_error(error):
    service, _ = _service(side_effect=error)

    with pytest.raises(IntelligenceGatheringError) as exc_info:
        await service.build("Hotel", "City")
    assert exc_info.value.message == GENERIC_FAILURE_MESSAGE
    assert exc_info.value.__cause__ is error
