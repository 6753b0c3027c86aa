import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from hotel_intel.config import Settings
from hotel_intel.exceptions.custom import IntelligenceGatheringError
from hotel_intel.exceptions.handlers import intelligence_error_handler
from hotel_intel.routers.search import router as search_router
from hotel_intel.search_store import SearchStore
from hotel_intel.services.gemini import GeminiService
from hotel_intel.services.report import ReportService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    # No timeout: a grounded generation can take minutes and is never retried
    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        gemini = GeminiService(client, settings.gemini_api_key, settings.gemini_model)

        app.state.report_service = ReportService(gemini)
        app.state.search_store = SearchStore(max_searches=settings.max_searches)

        yield


app = FastAPI(title="Hotel Intel", lifespan=lifespan)

app.add_exception_handler(IntelligenceGatheringError, intelligence_error_handler)

app.include_router(search_router)
