import asyncio
import logging
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Response
from fastapi.responses import JSONResponse

from hotel_intel.dependencies import ReportDep, SearchStoreDep
from hotel_intel.exceptions.custom import IntelligenceGatheringError
from hotel_intel.mappers.metrics import build_revenue_rows, dig
from hotel_intel.mappers.rating_mapper import build_platform_links, build_rating_cards
from hotel_intel.mappers.room_sorter import project_rooms, toggle_sort
from hotel_intel.mappers.workbook_builder import build_workbook
from hotel_intel.schemas.report import Workbook
from hotel_intel.schemas.responses import (
    SearchRequest,
    SearchStatusResponse,
    SearchSubmittedResponse,
    SortRequest,
    SortResponse,
)
from hotel_intel.search_store import Search, SearchStore
from hotel_intel.services.report import ReportService
from hotel_intel.services.xlsx_writer import XLSX_MEDIA_TYPE, render_xlsx

logger = logging.getLogger(__name__)

router = APIRouter()


async def _run_search(
    search_id: str,
    service: ReportService,
    store: SearchStore,
    hotel_name: str,
    city: str,
) -> None:
    try:
        intel = await service.build(hotel_name, city)
        store.mark_completed(search_id, intel)
    except IntelligenceGatheringError as exc:
        store.mark_failed(search_id, exc.message)
    except Exception:
        logger.exception("Search %s failed", search_id)
        store.mark_failed(search_id, IntelligenceGatheringError().message)


def _status_response(search: Search) -> SearchStatusResponse:
    response = SearchStatusResponse(
        search_id=search.search_id,
        status=search.status,
        hotel_name=search.hotel_name,
        city=search.city,
        created_at=search.created_at,
        finished_at=search.finished_at,
        error=search.error,
        sort=search.sort,
    )
    if search.report is None or search.stats is None:
        return response

    report = search.report
    response.report = report
    response.sources = search.sources
    response.stats = search.stats
    response.revenue = build_revenue_rows(dig(report, "revenue_insights"), search.stats.mom_growth)
    response.ratings = build_rating_cards(report)
    response.links = build_platform_links(report)
    response.rooms = project_rooms(dig(report, "room_details", "categories"), search.sort)
    return response


def _get_search(store: SearchStore, search_id: str) -> Search:
    search = store.get_search(search_id)
    if search is None:
        raise HTTPException(status_code=404, detail="Search not found")
    return search


def _get_report_search(store: SearchStore, search_id: str) -> Search:
    search = _get_search(store, search_id)
    if search.report is None or search.stats is None:
        raise HTTPException(status_code=409, detail=f"Report not available (status={search.status})")
    return search


def _workbook(search: Search) -> Workbook:
    return build_workbook(search.report, growth=search.stats.mom_growth)


@router.post("/search", response_model=SearchSubmittedResponse, status_code=202)
async def submit_search(
    request: SearchRequest,
    service: ReportDep,
    store: SearchStoreDep,
) -> SearchSubmittedResponse:
    existing = store.has_active_search(request.hotel_name, request.city)
    if existing:
        return JSONResponse(content={
            "search_id": existing.search_id,
            "status": "already_running",
            "message": "A search for this hotel is already in progress",
        })

    search = store.create_search(request.hotel_name, request.city)
    asyncio.create_task(
        _run_search(search.search_id, service, store, request.hotel_name, request.city)
    )
    return SearchSubmittedResponse(
        search_id=search.search_id,
        status=search.status,
        message="Search submitted",
    )


@router.post("/search/sync", response_model=SearchStatusResponse)
async def search_sync(
    request: SearchRequest,
    service: ReportDep,
    store: SearchStoreDep,
) -> SearchStatusResponse:
    search = store.create_search(request.hotel_name, request.city)
    try:
        intel = await service.build(request.hotel_name, request.city)
    except IntelligenceGatheringError as exc:
        store.mark_failed(search.search_id, exc.message)
        raise
    store.mark_completed(search.search_id, intel)
    return _status_response(search)


@router.get("/searches/{search_id}", response_model=SearchStatusResponse)
async def get_search(search_id: str, store: SearchStoreDep) -> SearchStatusResponse:
    return _status_response(_get_search(store, search_id))


@router.post("/searches/{search_id}/sort", response_model=SortResponse)
async def sort_rooms(search_id: str, request: SortRequest, store: SearchStoreDep) -> SortResponse:
    search = _get_report_search(store, search_id)
    sort = toggle_sort(search.sort, request.key)
    store.set_sort(search_id, sort)
    return SortResponse(
        search_id=search_id,
        sort=sort,
        rooms=project_rooms(dig(search.report, "room_details", "categories"), sort),
    )


@router.get("/searches/{search_id}/workbook", response_model=Workbook)
async def get_workbook(search_id: str, store: SearchStoreDep) -> Workbook:
    return _workbook(_get_report_search(store, search_id))


@router.get("/searches/{search_id}/export")
async def export_report(search_id: str, store: SearchStoreDep) -> Response:
    workbook = _workbook(_get_report_search(store, search_id))
    filename = f"{workbook.filename}.xlsx"
    return Response(
        content=render_xlsx(workbook),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
