import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import IntelligenceGatheringError

logger = logging.getLogger(__name__)


async def intelligence_error_handler(
    _request: Request, exc: IntelligenceGatheringError
) -> JSONResponse:
    logger.error("Report fetch failed: %s (cause=%r)", exc.message, exc.__cause__)
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message},
    )
