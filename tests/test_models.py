import pytest

from civic_admin.models import (
    ReportCategory,
    ReportStatus,
    Report,
    ReportWithVotes,
    parse_status_filter,
)
from conftest import make_report_row


def test_report_from_row_ignores_extra_columns():
    row = make_report_row("a", extra_column="ignored", photo_urls=["p1.jpg"], eta_days=3)

    report = Report.from_row(row)

    assert report.category is ReportCategory.POTHOLE
    assert report.status is ReportStatus.REPORTED
    assert report.photo_urls == ["p1.jpg"]
    assert report.eta_days == 3


def test_report_from_row_defaults_anonymity_when_column_missing():
    row = make_report_row("a")
    del row["is_anonymous"]

    assert Report.from_row(row).is_anonymous is False


def test_report_from_row_rejects_unknown_status():
    with pytest.raises(ValueError):
        Report.from_row(make_report_row("a", status="closed"))


def test_report_with_votes_to_dict_uses_plain_values():
    report = Report.from_row(make_report_row("a"))
    row = ReportWithVotes.from_report(report, upvotes=4, downvotes=1, reporter_name="Alice")

    data = row.to_dict()

    assert data["status"] == "reported"
    assert data["category"] == "pothole"
    assert data["upvotes"] == 4
    assert data["downvotes"] == 1
    assert data["reporter_name"] == "Alice"
    assert data["title"] == report.title


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "all"),
        ("all", "all"),
        ("ALL", "all"),
        ("reported", ReportStatus.REPORTED),
        ("in progress", ReportStatus.IN_PROGRESS),
        ("in-progress", ReportStatus.IN_PROGRESS),
        ("Resolved", ReportStatus.RESOLVED),
    ],
)
def test_parse_status_filter(value, expected):
    assert parse_status_filter(value) == expected


def test_parse_status_filter_rejects_unknown():
    with pytest.raises(ValueError, match="Unknown status filter"):
        parse_status_filter("archived")
