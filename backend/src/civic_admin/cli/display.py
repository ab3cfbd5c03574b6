from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from rich.table import Table
from rich.text import Text

from ..models import ReportStatus, ReportWithVotes
from ..services.aggregator import DashboardSummary

TABLE_COLUMNS = ("Title", "Reporter", "Category", "Location", "Status", "Votes", "Created")

_STATUS_TONES = {
    ReportStatus.REPORTED: "warning",
    ReportStatus.IN_PROGRESS: "info",
    ReportStatus.RESOLVED: "success",
}

# Rich styles for each tone.
TONE_STYLES = {
    "warning": "bold yellow",
    "info": "bold cyan",
    "success": "bold green",
    "error": "bold red",
}

_STATUS_ICONS = {
    ReportStatus.REPORTED: "!",
    ReportStatus.IN_PROGRESS: "…",
    ReportStatus.RESOLVED: "✓",
}


def format_date(value: Optional[str]) -> str:
    """Render an ISO timestamp as e.g. ``Jan 5, 2025, 02:30 PM``."""
    if not value:
        return ""
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


def status_label(status: ReportStatus | str) -> str:
    return ReportStatus(status).value.replace("_", " ").title()


def status_tone(status: ReportStatus | str) -> str:
    return _STATUS_TONES.get(ReportStatus(status), "info")


def status_icon(status: ReportStatus | str) -> str:
    return _STATUS_ICONS.get(ReportStatus(status), "")


def format_votes(row: ReportWithVotes) -> str:
    return f"▲ {row.upvotes}  ▼ {row.downvotes}"


def format_location(row: ReportWithVotes) -> str:
    return row.location_name or "N/A"


def truncate(text: Optional[str], width: int = 40) -> str:
    if not text:
        return ""
    if len(text) <= width:
        return text
    return text[: max(width - 1, 0)] + "…"


def report_table_rows(rows: Iterable[ReportWithVotes]) -> List[tuple[str, ...]]:
    """Plain-text cells for each report, in TABLE_COLUMNS order."""
    formatted = []
    for row in rows:
        formatted.append(
            (
                truncate(row.title),
                row.reporter_name or "",
                row.category.value.title(),
                format_location(row),
                status_label(row.status),
                format_votes(row),
                format_date(row.created_at),
            )
        )
    return formatted


def build_reports_table(rows: Iterable[ReportWithVotes], *, title: str = "Civic Reports Admin") -> Table:
    table = Table(title=title, show_lines=False, header_style="bold")
    table.add_column("ID", style="dim", no_wrap=True)
    for column in TABLE_COLUMNS:
        table.add_column(column)

    rows = list(rows)
    for row, cells in zip(rows, report_table_rows(rows)):
        title_cell = Text(cells[0], style="bold")
        if row.description:
            title_cell.append("\n" + truncate(row.description, 60), style="dim")
        status_cell = Text(
            f"{status_icon(row.status)} {cells[4]}", style=TONE_STYLES[status_tone(row.status)]
        )
        votes_cell = Text.assemble(
            (f"▲ {row.upvotes}", "green"), "  ", (f"▼ {row.downvotes}", "red")
        )
        table.add_row(
            Text(row.id),
            title_cell,
            Text(cells[1]),
            Text(cells[2]),
            Text(cells[3]),
            status_cell,
            votes_cell,
            Text(cells[6]),
        )
    return table


def render_summary(summary: DashboardSummary) -> str:
    """Render summary counts as aligned lines."""
    lines = [f"Total reports: {summary.total}"]
    for status in ReportStatus:
        lines.append(f"  {status_label(status):<12} {summary.by_status.get(status.value, 0)}")
    lines.append(f"Upvotes: {summary.upvotes}  Downvotes: {summary.downvotes}")
    return "\n".join(lines)
