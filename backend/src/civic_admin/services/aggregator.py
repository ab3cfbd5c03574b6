"""Join reports with their vote interactions and reporter profiles."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..models import (
    STATUS_FILTER_ALL,
    InteractionType,
    Profile,
    Report,
    ReportInteraction,
    ReportStatus,
    ReportWithVotes,
    StatusFilter,
)

ANONYMOUS_REPORTER = "Anonymous"
UNKNOWN_REPORTER = "Unknown"


@dataclass(slots=True)
class VoteTally:
    upvotes: int = 0
    downvotes: int = 0


@dataclass(slots=True)
class DashboardSummary:
    total: int = 0
    by_status: Dict[str, int] = field(
        default_factory=lambda: {status.value: 0 for status in ReportStatus}
    )
    upvotes: int = 0
    downvotes: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "total": self.total,
            "by_status": dict(self.by_status),
            "upvotes": self.upvotes,
            "downvotes": self.downvotes,
        }


def group_interactions(interactions: Iterable[ReportInteraction]) -> Dict[str, VoteTally]:
    """Tally votes per report id in a single pass."""
    tallies: Dict[str, VoteTally] = defaultdict(VoteTally)
    for interaction in interactions:
        tally = tallies[interaction.report_id]
        if interaction.interaction_type is InteractionType.UPVOTE:
            tally.upvotes += 1
        elif interaction.interaction_type is InteractionType.DOWNVOTE:
            tally.downvotes += 1
    return dict(tallies)


def resolve_reporter_name(report: Report, profiles_by_id: Mapping[str, Profile]) -> str:
    """Anonymous reports hide the reporter; otherwise full name, email, then Unknown."""
    if report.is_anonymous:
        return ANONYMOUS_REPORTER
    profile = profiles_by_id.get(report.user_id)
    if profile is None:
        return UNKNOWN_REPORTER
    return profile.full_name or profile.email or UNKNOWN_REPORTER


def aggregate_reports(
    reports: Sequence[Report],
    interactions: Iterable[ReportInteraction],
    profiles: Optional[Iterable[Profile]] = None,
) -> List[ReportWithVotes]:
    """
    Build one row per report, in the order given, with vote counts attached.

    ``reporter_name`` is only resolved when ``profiles`` is supplied.
    """
    tallies = group_interactions(interactions)
    profiles_by_id = {p.id: p for p in profiles} if profiles is not None else None

    rows: List[ReportWithVotes] = []
    for report in reports:
        tally = tallies.get(report.id) or VoteTally()
        reporter_name = (
            resolve_reporter_name(report, profiles_by_id) if profiles_by_id is not None else None
        )
        rows.append(
            ReportWithVotes.from_report(
                report,
                upvotes=tally.upvotes,
                downvotes=tally.downvotes,
                reporter_name=reporter_name,
            )
        )
    return rows


def filter_by_status(rows: List[ReportWithVotes], status_filter: StatusFilter) -> List[ReportWithVotes]:
    if status_filter == STATUS_FILTER_ALL:
        return rows
    status = ReportStatus(status_filter)
    return [row for row in rows if row.status is status]


def summarize(rows: Iterable[ReportWithVotes]) -> DashboardSummary:
    summary = DashboardSummary()
    for row in rows:
        summary.total += 1
        summary.by_status[row.status.value] += 1
        summary.upvotes += row.upvotes
        summary.downvotes += row.downvotes
    return summary
