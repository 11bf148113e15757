"""Tests for JSON/CSV/text export."""

import csv
import io
import json
from datetime import datetime

from sessionscore.export import (
    app_usage_to_csv,
    format_summary_report,
    summaries_to_csv,
    summary_to_json,
)
from sessionscore.models import (
    AppUsageEntry,
    Insight,
    InsightLevel,
    KeyMetrics,
    SessionSummary,
)


def _make_summary(session_id: str = "sess1") -> SessionSummary:
    return SessionSummary(
        session_id=session_id,
        duration_minutes=45,
        productivity_score=85.0,
        focus_score=70.0,
        total_activities=900,
        app_usage=[
            AppUsageEntry(application_name="VSCode", total_activity=700, keystrokes=650, clicks=50),
            AppUsageEntry(application_name="Chrome", total_activity=200, keystrokes=20, clicks=180),
        ],
        insights=[
            Insight(
                type="productivity",
                level=InsightLevel.POSITIVE,
                message="Excellent productivity session with high activity levels",
                category="achievement",
            ),
        ],
        key_metrics=KeyMetrics(
            activity_rate=20.0,
            deep_work_period_count=2,
            longest_focus_period_minutes=25,
            context_switch_count=4,
        ),
        generated_at=datetime(2026, 3, 2, 10, 0),
    )


def test_summary_to_json():
    data = json.loads(summary_to_json(_make_summary()))
    assert data["session_id"] == "sess1"
    assert data["key_metrics"]["deep_work_period_count"] == 2
    assert data["insights"][0]["level"] == "positive"


def test_summaries_to_csv():
    result = summaries_to_csv([_make_summary("a"), _make_summary("b")])
    rows = list(csv.reader(io.StringIO(result)))
    assert rows[0][0] == "session_id"
    assert len(rows) == 3
    assert rows[1][0] == "a"
    assert rows[1][9] == "VSCode"  # top_app column
    assert rows[1][10] == "1"  # insight count


def test_summaries_to_csv_empty():
    rows = list(csv.reader(io.StringIO(summaries_to_csv([]))))
    assert len(rows) == 1


def test_app_usage_to_csv():
    rows = list(csv.reader(io.StringIO(app_usage_to_csv(_make_summary().app_usage))))
    assert rows[0] == ["rank", "application_name", "total_activity", "keystrokes", "clicks"]
    assert rows[1] == ["1", "VSCode", "700", "650", "50"]
    assert rows[2][1] == "Chrome"


def test_format_summary_report():
    text = format_summary_report(_make_summary())
    assert "SESSION SUMMARY" in text
    assert "Productivity: 85/100" in text
    assert "TOP APPS" in text
    assert "INSIGHTS" in text
    assert "+ Excellent productivity" in text


def test_format_summary_report_unavailable():
    assert "No summary available" in format_summary_report(None)
