"""In-memory dashboard view over the aggregated reports."""
from __future__ import annotations

import itertools
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from ..models import (
    STATUS_FILTER_ALL,
    ReportStatus,
    ReportWithVotes,
    StatusFilter,
    parse_status_filter,
)
from .aggregator import DashboardSummary, filter_by_status, summarize
from .reports_service import ReportsService, ReportsServiceError

logger = logging.getLogger(__name__)


class DashboardController:
    """
    Holds the rows shown by the dashboard and applies fetches and status changes.

    Every fetch is tagged with a token from ``begin_fetch``. Only the result of
    the most recent fetch is applied, so a slow earlier refresh that finishes
    late cannot overwrite newer data. Status changes made while a fetch is in
    flight are kept as pending overrides and re-applied on top of its rows.
    """

    def __init__(self, service: ReportsService, *, include_profiles: bool = True) -> None:
        self.service = service
        self.include_profiles = include_profiles
        self.rows: List[ReportWithVotes] = []
        self.status_filter: StatusFilter = STATUS_FILTER_ALL
        self.loading = False
        self.error: Optional[str] = None
        self._tokens = itertools.count(1)
        self._latest_token = 0
        # report id -> (status, updated_at, latest token when the change landed)
        self._pending: Dict[str, Tuple[ReportStatus, str, int]] = {}

    @property
    def latest_token(self) -> int:
        return self._latest_token

    def begin_fetch(self) -> int:
        self._latest_token = next(self._tokens)
        self.loading = True
        self.error = None
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    def complete_fetch(self, token: int, rows: List[ReportWithVotes]) -> bool:
        if not self.is_current(token):
            logger.debug("Dropping stale fetch result (token %d, latest %d)", token, self._latest_token)
            return False
        self.rows = self._with_pending(token, rows)
        self._pending.clear()
        self.loading = False
        self.error = None
        return True

    def fail_fetch(self, token: int, message: str) -> bool:
        if not self.is_current(token):
            logger.debug("Dropping stale fetch error (token %d, latest %d)", token, self._latest_token)
            return False
        self._pending.clear()
        self.loading = False
        self.error = message or "An error occurred"
        return True

    def load(self) -> List[ReportWithVotes]:
        """Blocking fetch through the service. Raises ReportsServiceError."""
        return self.service.load_dashboard(include_profiles=self.include_profiles)

    def refresh(self) -> bool:
        """Fetch and apply in one step. Returns True when the result was applied."""
        token = self.begin_fetch()
        try:
            rows = self.load()
        except ReportsServiceError as exc:
            logger.error("Error fetching reports: %s", exc)
            self.fail_fetch(token, str(exc))
            return False
        return self.complete_fetch(token, rows)

    def set_filter(self, value: Optional[str]) -> StatusFilter:
        self.status_filter = parse_status_filter(value)
        return self.status_filter

    def visible_rows(self) -> List[ReportWithVotes]:
        return filter_by_status(self.rows, self.status_filter)

    def find(self, report_id: str) -> Optional[ReportWithVotes]:
        for row in self.rows:
            if row.id == report_id:
                return row
        return None

    def submit_status(self, report_id: str, status: ReportStatus) -> str:
        """Blocking remote update only. Returns the ``updated_at`` that was written."""
        try:
            return self.service.update_status(report_id, ReportStatus(status))
        except ReportsServiceError as exc:
            logger.error("Error updating status: %s", exc)
            raise

    def change_status(self, report_id: str, status: ReportStatus) -> str:
        """
        Update a report remotely, then mirror the change into ``rows``.

        Local rows are only touched after the remote update succeeds. Errors
        from the service propagate unchanged.
        """
        status = ReportStatus(status)
        updated_at = self.submit_status(report_id, status)
        self.apply_status(report_id, status, updated_at)
        return updated_at

    def apply_status(self, report_id: str, status: ReportStatus, updated_at: str) -> None:
        status = ReportStatus(status)
        if self.loading:
            # The in-flight fetch may have read the table before this update.
            self._pending[report_id] = (status, updated_at, self._latest_token)
        self.rows = [
            replace(row, status=status, updated_at=updated_at) if row.id == report_id else row
            for row in self.rows
        ]

    def _with_pending(self, token: int, rows: List[ReportWithVotes]) -> List[ReportWithVotes]:
        # Overrides recorded before this fetch began are already in its rows.
        overrides = {
            report_id: (status, updated_at)
            for report_id, (status, updated_at, seen_token) in self._pending.items()
            if seen_token >= token
        }
        if not overrides:
            return rows
        return [
            replace(row, status=overrides[row.id][0], updated_at=overrides[row.id][1])
            if row.id in overrides
            else row
            for row in rows
        ]

    @staticmethod
    def available_actions(row: ReportWithVotes) -> List[ReportStatus]:
        return [status for status in ReportStatus if status is not row.status]

    def summary(self) -> DashboardSummary:
        return summarize(self.rows)
