"""Service for reading civic reports from Supabase and updating their status."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from ..config import load_settings
from ..models import Profile, Report, ReportInteraction, ReportStatus, ReportWithVotes
from .aggregator import aggregate_reports

logger = logging.getLogger(__name__)

REPORTS_TABLE = "reports"
INTERACTIONS_TABLE = "report_interactions"
PROFILES_TABLE = "profiles"


class ReportsServiceError(Exception):
    """Base error for reports service."""


class ReportsService:
    """Read reports, votes and profiles from Supabase and change report status."""

    def __init__(self, supabase_url: Optional[str] = None, supabase_key: Optional[str] = None):
        settings = load_settings()
        self.supabase_url = supabase_url or settings.supabase_url
        self.supabase_key = supabase_key or settings.supabase_key

        if not self.supabase_url or not self.supabase_key:
            raise ReportsServiceError(
                "Supabase credentials not configured. Set SUPABASE_URL and SUPABASE_KEY."
            )

        try:
            self.client: Client = create_client(self.supabase_url, self.supabase_key)
        except Exception as exc:
            raise ReportsServiceError(f"Failed to initialize Supabase client: {exc}") from exc

    def fetch_reports(self) -> List[Report]:
        """All reports, newest first."""
        try:
            response = (
                self.client.table(REPORTS_TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            return [Report.from_row(row) for row in response.data or []]
        except Exception as exc:
            raise ReportsServiceError(f"Failed to fetch reports: {exc}") from exc

    def fetch_interactions(self) -> List[ReportInteraction]:
        try:
            response = self.client.table(INTERACTIONS_TABLE).select("*").execute()
            return [ReportInteraction.from_row(row) for row in response.data or []]
        except Exception as exc:
            raise ReportsServiceError(f"Failed to fetch interactions: {exc}") from exc

    def fetch_profiles(self) -> List[Profile]:
        try:
            response = self.client.table(PROFILES_TABLE).select("*").execute()
            return [Profile.from_row(row) for row in response.data or []]
        except Exception as exc:
            raise ReportsServiceError(f"Failed to fetch profiles: {exc}") from exc

    def load_dashboard(self, include_profiles: bool = True) -> List[ReportWithVotes]:
        """
        Fetch every table the dashboard needs and join them.

        Any failed read aborts the whole load; there is no partial result.

        Args:
            include_profiles: Resolve reporter display names from ``profiles``

        Returns:
            Aggregated rows in report order (newest first)
        """
        reports = self.fetch_reports()
        interactions = self.fetch_interactions()
        profiles = self.fetch_profiles() if include_profiles else None
        rows = aggregate_reports(reports, interactions, profiles)
        logger.info(
            "Loaded %d report(s) with %d interaction(s)", len(rows), len(interactions)
        )
        return rows

    def update_status(self, report_id: str, status: ReportStatus) -> str:
        """
        Set a report's status.

        Any status may move to any other; no transition rules are enforced.

        Returns:
            The ``updated_at`` timestamp that was written
        """
        status = ReportStatus(status)
        updated_at = datetime.now(timezone.utc).isoformat()
        payload: Dict[str, Any] = {"status": status.value, "updated_at": updated_at}
        try:
            (
                self.client.table(REPORTS_TABLE)
                .update(payload)
                .eq("id", report_id)
                .execute()
            )
        except Exception as exc:
            raise ReportsServiceError(f"Failed to update status: {exc}") from exc

        logger.info("Report %s set to %s", report_id, status.value)
        return updated_at
