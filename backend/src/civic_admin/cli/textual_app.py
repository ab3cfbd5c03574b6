from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from rich.text import Text
from textual.app import App, ComposeResult, Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import DataTable, Footer, Header, Select, Static

from ..models import STATUS_FILTER_ALL, ReportStatus, ReportWithVotes
from ..services.dashboard import DashboardController
from ..services.reports_service import ReportsService, ReportsServiceError
from .display import (
    TABLE_COLUMNS,
    TONE_STYLES,
    report_table_rows,
    status_icon,
    status_label,
    status_tone,
)
from .screens import FetchErrorScreen, NoticeScreen, RetryRequested
from .state import FetchState, TableState

logger = logging.getLogger(__name__)

FILTER_OPTIONS = [
    ("All Reports", STATUS_FILTER_ALL),
    ("Reported", ReportStatus.REPORTED.value),
    ("In Progress", ReportStatus.IN_PROGRESS.value),
    ("Resolved", ReportStatus.RESOLVED.value),
]

UPDATE_FAILED_MESSAGE = "Failed to update status"
EMPTY_MESSAGE = "No reports found"


class ReportsDashboardApp(App):
    """Terminal dashboard for reviewing civic reports and changing their status."""

    TITLE = "Civic Reports Admin"
    CSS = """
    #toolbar {
        height: auto;
        padding: 0 1;
    }

    #status-filter {
        width: 30;
    }

    #summary {
        padding: 1 2;
        color: $text-muted;
    }

    #reports {
        height: 1fr;
    }

    #empty {
        padding: 1 2;
        color: $text-muted;
    }

    #status {
        height: auto;
        padding: 0 1;
    }

    .status.info { color: $text; }
    .status.success { color: $success; }
    .status.warning { color: $warning; }
    .status.error { color: $error; }

    .dialog {
        width: 60;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    .dialog-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .dialog-buttons {
        height: auto;
        margin-top: 1;
    }

    NoticeScreen, FetchErrorScreen {
        align: center middle;
    }
    """
    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("r", "refresh", "Refresh"),
        Binding("1", "set_status('reported')", "Reported"),
        Binding("2", "set_status('in_progress')", "Progress"),
        Binding("3", "set_status('resolved')", "Resolved"),
    ]

    def __init__(
        self,
        service: Optional[ReportsService] = None,
        *,
        include_profiles: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._service = service
        self._include_profiles = include_profiles
        self._controller: Optional[DashboardController] = None
        self._fetch_state = FetchState()
        self._table_state = TableState()
        self._table: Optional[DataTable] = None
        self._status_panel: Optional[Static] = None
        self._summary_panel: Optional[Static] = None
        self._empty_panel: Optional[Static] = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Horizontal(
                Select(FILTER_OPTIONS, value=STATUS_FILTER_ALL, allow_blank=False, id="status-filter"),
                id="toolbar",
            ),
            Static("", id="summary"),
            DataTable(id="reports", cursor_type="row", zebra_stripes=True),
            Static(EMPTY_MESSAGE, id="empty"),
            id="main",
        )
        yield Static("", id="status", classes="status info")
        yield Footer()

    async def on_mount(self) -> None:
        # Held directly so updates still land while a modal screen is on top.
        self._table = self.query_one("#reports", DataTable)
        self._status_panel = self.query_one("#status", Static)
        self._summary_panel = self.query_one("#summary", Static)
        self._empty_panel = self.query_one("#empty", Static)
        self._table.add_columns(*TABLE_COLUMNS)
        self._empty_panel.display = False
        self.action_refresh()

    async def on_unmount(self) -> None:
        task = self._fetch_state.task
        if task and not task.done():
            task.cancel()

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _get_controller(self) -> DashboardController:
        if self._controller is None:
            service = self._service or ReportsService()
            self._service = service
            self._controller = DashboardController(service, include_profiles=self._include_profiles)
        return self._controller

    @property
    def fetch_task(self) -> Optional[asyncio.Task]:
        return self._fetch_state.task

    def action_refresh(self) -> None:
        try:
            controller = self._get_controller()
        except ReportsServiceError as exc:
            logger.error("Error fetching reports: %s", exc)
            self._show_status(str(exc), "error")
            self.push_screen(FetchErrorScreen(str(exc)))
            return

        previous = self._fetch_state.task
        if previous and not previous.done():
            previous.cancel()

        token = controller.begin_fetch()
        self._show_status("Loading reports…", "info")
        self._fetch_state.task = asyncio.create_task(self._load_reports(token))

    async def _load_reports(self, token: int) -> None:
        controller = self._get_controller()
        try:
            rows = await asyncio.to_thread(controller.load)
        except ReportsServiceError as exc:
            logger.error("Error fetching reports: %s", exc)
            if controller.fail_fetch(token, str(exc)):
                self._show_status(f"Failed to load reports: {exc}", "error")
                self.push_screen(FetchErrorScreen(controller.error or str(exc)))
            return

        if not controller.complete_fetch(token, rows):
            return
        self._render_reports()
        self._show_status(f"Loaded {len(rows)} report(s).", "success")

    def on_retry_requested(self, message: RetryRequested) -> None:
        message.stop()
        self.action_refresh()

    # ------------------------------------------------------------------
    # Filtering and rendering
    # ------------------------------------------------------------------

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "status-filter" or self._controller is None:
            return
        value = event.value if isinstance(event.value, str) else STATUS_FILTER_ALL
        self._controller.set_filter(value)
        self._render_reports()

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        if event.row_key is not None:
            self._table_state.selected_report_id = event.row_key.value

    def _render_reports(self) -> None:
        if self._controller is None or self._table is None:
            return
        rows = self._controller.visible_rows()
        table = self._table
        table.clear()
        for row, cells in zip(rows, report_table_rows(rows)):
            table.add_row(*self._styled_cells(row, cells), key=row.id)
        self._table_state.row_ids = [row.id for row in rows]
        selected = self._table_state.selected_report_id
        if selected in self._table_state.row_ids:
            table.move_cursor(row=self._table_state.row_ids.index(selected))
        else:
            self._table_state.selected_report_id = rows[0].id if rows else None

        self._empty_panel.display = not rows
        self._summary_panel.update(self._render_summary())

    @staticmethod
    def _styled_cells(row: ReportWithVotes, cells: tuple[str, ...]) -> List[object]:
        styled: List[object] = [Text(cell) for cell in cells]
        styled[0] = Text(cells[0], style="bold")
        styled[4] = Text(
            f"{status_icon(row.status)} {cells[4]}", style=TONE_STYLES[status_tone(row.status)]
        )
        styled[5] = Text.assemble(
            (f"▲ {row.upvotes}", "green"), "  ", (f"▼ {row.downvotes}", "red")
        )
        return styled

    def _render_summary(self) -> str:
        if self._controller is None:
            return ""
        summary = self._controller.summary()
        parts = [f"Total {summary.total}"]
        parts.extend(
            f"{status_label(status)} {summary.by_status[status.value]}" for status in ReportStatus
        )
        parts.append(f"▲ {summary.upvotes} ▼ {summary.downvotes}")
        return " • ".join(parts)

    # ------------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------------

    def action_set_status(self, status_value: str) -> None:
        if self._controller is None:
            return
        report_id = self._table_state.selected_report_id
        row = self._controller.find(report_id) if report_id else None
        if row is None:
            self._show_status("Select a report first.", "warning")
            return

        status = ReportStatus(status_value)
        if status not in self._controller.available_actions(row):
            self._show_status(f"Report is already {status_label(status)}.", "warning")
            return

        self._show_status(f"Setting '{row.title}' to {status_label(status)}…", "info")
        self._fetch_state.status_task = asyncio.create_task(self._change_status(row.id, status))

    async def _change_status(self, report_id: str, status: ReportStatus) -> None:
        controller = self._get_controller()
        try:
            updated_at = await asyncio.to_thread(controller.submit_status, report_id, status)
        except ReportsServiceError:
            self._show_status(UPDATE_FAILED_MESSAGE, "error")
            self.push_screen(NoticeScreen(UPDATE_FAILED_MESSAGE, title="Error"))
            return

        controller.apply_status(report_id, status, updated_at)
        self._render_reports()
        self._show_status(f"Report moved to {status_label(status)}.", "success")

    def _show_status(self, message: str, tone: str) -> None:
        status_panel = self._status_panel
        if status_panel is None:
            return
        status_panel.update(message)
        for tone_name in ("info", "success", "warning", "error"):
            status_panel.remove_class(tone_name)
        status_panel.add_class(tone)
