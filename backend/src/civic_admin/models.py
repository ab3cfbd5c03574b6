from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union


class ReportStatus(str, Enum):
    REPORTED = "reported"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class ReportCategory(str, Enum):
    POTHOLE = "pothole"
    GARBAGE = "garbage"
    STREETLIGHT = "streetlight"
    DRAINAGE = "drainage"
    WATER = "water"
    NOISE = "noise"


class InteractionType(str, Enum):
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


STATUS_FILTER_ALL = "all"

StatusFilter = Union[ReportStatus, str]


def parse_status_filter(value: Optional[str]) -> StatusFilter:
    """Turn user input into a ReportStatus or the ``"all"`` sentinel."""
    if value is None:
        return STATUS_FILTER_ALL
    if isinstance(value, ReportStatus):
        return value
    normalized = str(value).strip().lower().replace(" ", "_").replace("-", "_")
    if normalized in ("", STATUS_FILTER_ALL):
        return STATUS_FILTER_ALL
    try:
        return ReportStatus(normalized)
    except ValueError:
        allowed = ", ".join([STATUS_FILTER_ALL, *(s.value for s in ReportStatus)])
        raise ValueError(f"Unknown status filter '{value}'. Expected one of: {allowed}") from None


@dataclass(slots=True)
class Report:
    id: str
    user_id: str
    title: str
    category: ReportCategory
    status: ReportStatus
    created_at: str
    updated_at: str
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location_name: Optional[str] = None
    photo_urls: Optional[List[str]] = None
    eta_days: Optional[int] = None
    is_anonymous: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Report":
        """Build a report from a ``reports`` table row, ignoring unknown columns."""
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            title=row.get("title") or "",
            category=ReportCategory(row["category"]),
            status=ReportStatus(row["status"]),
            created_at=row["created_at"],
            updated_at=row.get("updated_at") or row["created_at"],
            description=row.get("description"),
            latitude=row.get("latitude"),
            longitude=row.get("longitude"),
            location_name=row.get("location_name"),
            photo_urls=row.get("photo_urls"),
            eta_days=row.get("eta_days"),
            is_anonymous=bool(row.get("is_anonymous") or False),
        )


@dataclass(slots=True)
class ReportInteraction:
    id: str
    report_id: str
    user_id: str
    interaction_type: InteractionType
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ReportInteraction":
        return cls(
            id=str(row["id"]),
            report_id=str(row["report_id"]),
            user_id=str(row["user_id"]),
            interaction_type=InteractionType(row["interaction_type"]),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


@dataclass(slots=True)
class Profile:
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Profile":
        return cls(
            id=str(row["id"]),
            email=row.get("email"),
            full_name=row.get("full_name"),
        )


@dataclass(slots=True)
class ReportWithVotes(Report):
    """A report joined with its vote tallies. Held in memory only."""

    upvotes: int = 0
    downvotes: int = 0
    reporter_name: Optional[str] = None

    @classmethod
    def from_report(
        cls,
        report: Report,
        *,
        upvotes: int = 0,
        downvotes: int = 0,
        reporter_name: Optional[str] = None,
    ) -> "ReportWithVotes":
        values = {f.name: getattr(report, f.name) for f in fields(Report)}
        return cls(**values, upvotes=upvotes, downvotes=downvotes, reporter_name=reporter_name)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        data["status"] = self.status.value
        return data
