"""Report endpoints: list with vote tallies, status summary, and status updates."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..models import ReportCategory, ReportStatus, parse_status_filter
from ..services.aggregator import filter_by_status, summarize
from ..services.reports_service import ReportsService, ReportsServiceError
from .dependencies import get_reports_service, raise_upstream_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class ReportWithVotesResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    category: ReportCategory
    status: ReportStatus
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location_name: Optional[str] = None
    photo_urls: Optional[List[str]] = None
    eta_days: Optional[int] = None
    created_at: str
    updated_at: str
    is_anonymous: bool = False
    upvotes: int = 0
    downvotes: int = 0
    reporter_name: Optional[str] = None


class SummaryResponse(BaseModel):
    total: int
    by_status: Dict[str, int]
    upvotes: int
    downvotes: int


class StatusUpdateRequest(BaseModel):
    status: ReportStatus


class StatusUpdateResponse(BaseModel):
    id: str
    status: ReportStatus
    updated_at: str


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("", response_model=List[ReportWithVotesResponse])
def list_reports(
    status_filter: str = Query("all", alias="status"),
    include_profiles: bool = Query(True),
    service: ReportsService = Depends(get_reports_service),
):
    """Return every report joined with its vote counts, newest first.

    ``status`` narrows the list to one status; ``all`` keeps every row.
    """
    try:
        selected = parse_status_filter(status_filter)
    except ValueError as exc:
        raise HTTPException(
            status_code=422,
            detail={"code": "invalid_status", "message": str(exc)},
        ) from exc

    try:
        rows = service.load_dashboard(include_profiles=include_profiles)
    except ReportsServiceError as exc:
        logger.error("Error fetching reports: %s", exc)
        raise_upstream_error(str(exc))

    return [row.to_dict() for row in filter_by_status(rows, selected)]


@router.get("/summary", response_model=SummaryResponse)
def report_summary(service: ReportsService = Depends(get_reports_service)):
    try:
        rows = service.load_dashboard(include_profiles=False)
    except ReportsServiceError as exc:
        logger.error("Error fetching reports: %s", exc)
        raise_upstream_error(str(exc))
    return summarize(rows).to_dict()


@router.patch("/{report_id}/status", response_model=StatusUpdateResponse)
def update_report_status(
    report_id: str,
    body: StatusUpdateRequest,
    service: ReportsService = Depends(get_reports_service),
):
    """Move a report to any status. No transition rules are enforced."""
    try:
        updated_at = service.update_status(report_id, body.status)
    except ReportsServiceError as exc:
        logger.error("Error updating status: %s", exc)
        raise_upstream_error("Failed to update status")

    return StatusUpdateResponse(id=report_id, status=body.status, updated_at=updated_at)
