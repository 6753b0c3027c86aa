from typing import Annotated

from fastapi import Depends, Request

from hotel_intel.search_store import SearchStore
from hotel_intel.services.report import ReportService


def get_report_service(request: Request) -> ReportService:
    return request.app.state.report_service


def get_search_store(request: Request) -> SearchStore:
    return request.app.state.search_store


ReportDep = Annotated[ReportService, Depends(get_report_service)]
SearchStoreDep = Annotated[SearchStore, Depends(get_search_store)]
