"""Export module — JSON, CSV and plain-text renderings of session summaries.

Summaries are meant to leave this tool: into a notebook, a spreadsheet, an
email body. These functions return strings; writing them is the caller's job.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Sequence

from sessionscore.models import AppUsageEntry, InsightLevel, SessionSummary


def summary_to_json(summary: SessionSummary) -> str:
    return json.dumps(json.loads(summary.model_dump_json()), indent=2)


def summaries_to_csv(summaries: Sequence[SessionSummary]) -> str:
    """Flat structure: one row per summary. Top app only, insights counted."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([
        "session_id",
        "duration_minutes",
        "productivity_score",
        "focus_score",
        "total_activities",
        "activity_rate",
        "deep_work_periods",
        "longest_focus_minutes",
        "context_switches",
        "top_app",
        "insights",
        "algorithm_version",
        "generated_at",
    ])
    for s in summaries:
        writer.writerow([
            s.session_id,
            s.duration_minutes,
            s.productivity_score,
            s.focus_score,
            s.total_activities,
            s.key_metrics.activity_rate,
            s.key_metrics.deep_work_period_count,
            s.key_metrics.longest_focus_period_minutes,
            s.key_metrics.context_switch_count,
            s.app_usage[0].application_name if s.app_usage else "",
            len(s.insights),
            s.algorithm_version,
            s.generated_at.isoformat(),
        ])
    return output.getvalue()


def app_usage_to_csv(entries: Sequence[AppUsageEntry]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["rank", "application_name", "total_activity", "keystrokes", "clicks"])
    for i, a in enumerate(entries, 1):
        writer.writerow([i, a.application_name, a.total_activity, a.keystrokes, a.clicks])
    return output.getvalue()


def format_summary_report(summary: SessionSummary | None) -> str:
    """Format a summary as readable text."""
    if summary is None:
        return "No summary available for this session."

    m = summary.key_metrics
    lines = [
        f"{'='*60}",
        f"  SESSION SUMMARY — {summary.session_id or '(unnamed)'}",
        f"{'='*60}",
        "",
        f"  Duration: {summary.duration_minutes} min",
        f"  Productivity: {summary.productivity_score:.0f}/100",
        f"  Focus: {summary.focus_score:.0f}/100",
        f"  Activity: {summary.total_activities} actions ({m.activity_rate:.1f}/min)",
        f"  Deep work: {m.deep_work_period_count} periods, longest {m.longest_focus_period_minutes} min",
        f"  Context switches: {m.context_switch_count}",
        "",
    ]

    if summary.app_usage:
        lines.append("  TOP APPS")
        lines.append(f"  {'-'*54}")
        for i, a in enumerate(summary.app_usage, 1):
            lines.append(
                f"  {i:2d}. {a.application_name[:30]:30s} {a.total_activity:6d} "
                f"({a.keystrokes} keys, {a.clicks} clicks)"
            )
        lines.append("")

    if summary.insights:
        lines.append("  INSIGHTS")
        lines.append(f"  {'-'*54}")
        icons = {InsightLevel.POSITIVE: "+", InsightLevel.NEUTRAL: "~", InsightLevel.IMPROVEMENT: "!"}
        for insight in summary.insights:
            lines.append(f"  {icons[insight.level]} {insight.message}")
        lines.append("")

    return "\n".join(lines)
