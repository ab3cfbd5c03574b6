from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional

from rich.console import Console

from ..config import configure_logging, load_settings
from ..models import ReportStatus, parse_status_filter
from ..services.dashboard import DashboardController
from ..services.reports_service import ReportsService, ReportsServiceError
from .display import build_reports_table, render_summary, status_label

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SERVICE_ERROR = 1

ServiceFactory = Callable[[], ReportsService]


def _status_filter_arg(value: str) -> str:
    try:
        parse_status_filter(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="civic-admin",
        description="Review civic issue reports and update their status.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from CIVIC_ADMIN_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("tui", help="Open the interactive dashboard (default)")

    list_parser = subparsers.add_parser("list", help="Print reports with vote counts")
    list_parser.add_argument(
        "--status",
        default="all",
        type=_status_filter_arg,
        help="all, reported, in_progress or resolved",
    )
    list_parser.add_argument(
        "--no-profiles",
        action="store_true",
        help="Skip loading reporter profiles",
    )

    status_parser = subparsers.add_parser("set-status", help="Change the status of one report")
    status_parser.add_argument("report_id")
    status_parser.add_argument("status", choices=[status.value for status in ReportStatus])

    subparsers.add_parser("summary", help="Print report counts per status and vote totals")
    return parser


def _run_list(controller: DashboardController, console: Console, status_filter: str) -> int:
    if not controller.refresh():
        console.print(f"[bold red]Error fetching reports:[/bold red] {controller.error}")
        return EXIT_SERVICE_ERROR
    controller.set_filter(status_filter)
    rows = controller.visible_rows()
    if not rows:
        console.print("No reports found")
        return EXIT_OK
    console.print(build_reports_table(rows))
    return EXIT_OK


def _run_summary(controller: DashboardController, console: Console) -> int:
    if not controller.refresh():
        console.print(f"[bold red]Error fetching reports:[/bold red] {controller.error}")
        return EXIT_SERVICE_ERROR
    console.print(render_summary(controller.summary()))
    return EXIT_OK


def _run_set_status(service: ReportsService, console: Console, report_id: str, status: str) -> int:
    try:
        updated_at = service.update_status(report_id, ReportStatus(status))
    except ReportsServiceError as exc:
        logger.error("Error updating status: %s", exc)
        console.print(f"[bold red]Failed to update status:[/bold red] {exc}")
        return EXIT_SERVICE_ERROR
    console.print(f"[green]Report {report_id} set to {status_label(status)} at {updated_at}[/green]")
    return EXIT_OK


def main(
    argv: Optional[List[str]] = None,
    *,
    service_factory: Optional[ServiceFactory] = None,
    console: Optional[Console] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    command = args.command or "tui"
    level = args.log_level or settings.log_level

    if command == "tui":
        configure_logging(level, settings.log_path)
    else:
        configure_logging(level)

    console = console or Console()
    factory = service_factory or ReportsService

    try:
        service = factory()
    except ReportsServiceError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        return EXIT_SERVICE_ERROR

    if command == "tui":
        from .textual_app import ReportsDashboardApp

        ReportsDashboardApp(service, include_profiles=settings.include_profiles).run()
        return EXIT_OK

    if command == "set-status":
        return _run_set_status(service, console, args.report_id, args.status)

    include_profiles = settings.include_profiles and not getattr(args, "no_profiles", False)
    controller = DashboardController(service, include_profiles=include_profiles)
    if command == "summary":
        return _run_summary(controller, console)
    return _run_list(controller, console, args.status)


if __name__ == "__main__":
    sys.exit(main())
