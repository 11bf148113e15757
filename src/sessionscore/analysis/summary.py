"""Session summary assembler and insight generator.

This is the entry point report and dashboard code calls. It runs both
scorers, the usage ranking and the switching analysis, then turns the
numbers into a short list of plain-language insights.

A summary is best-effort: if anything unexpected breaks while building it,
the failure is logged and ``None`` comes back instead of an exception, so
one malformed session cannot take down a whole batch.
"""

from __future__ import annotations

from typing import Any, Sequence

import structlog

from sessionscore.analysis.activity import total_activity
from sessionscore.analysis.focus import compute_focus_score, count_context_switches
from sessionscore.analysis.productivity import compute_productivity_score, is_valid_duration
from sessionscore.analysis.usage import rank_app_usage
from sessionscore.models import (
    ALGORITHM_VERSION,
    ActivityEvent,
    FocusScoreResult,
    Insight,
    InsightLevel,
    KeyMetrics,
    ScoreResult,
    SessionAnalysis,
    SessionSummary,
    WorkSession,
)

logger = structlog.get_logger()

CAPABILITIES = [
    "productivity_scoring",
    "focus_scoring",
    "session_summaries",
    "app_usage_analysis",
    "activity_patterns",
    "insights_generation",
]


def generate_insights(
    productivity: ScoreResult,
    focus: ScoreResult,
    duration_minutes: float,
    activity_rate: float,
) -> list[Insight]:
    """Evaluate the insight rule table. Rules are independent; several may fire."""
    insights: list[Insight] = []

    if productivity.score >= 80:
        insights.append(Insight(
            type="productivity",
            level=InsightLevel.POSITIVE,
            message="Excellent productivity session with high activity levels",
            category="achievement",
        ))
    if productivity.score < 40:
        insights.append(Insight(
            type="productivity",
            level=InsightLevel.IMPROVEMENT,
            message="Consider taking a break or changing your approach to boost productivity",
            category="suggestion",
        ))

    if focus.score >= 80:
        insights.append(Insight(
            type="focus",
            level=InsightLevel.POSITIVE,
            message="Great focus maintained throughout the session",
            category="achievement",
        ))
    if "excessive_context_switching" in focus.factors:
        insights.append(Insight(
            type="focus",
            level=InsightLevel.IMPROVEMENT,
            message="Try to minimize application switching to improve focus",
            category="suggestion",
        ))

    if 25 <= duration_minutes <= 90:
        insights.append(Insight(
            type="timing",
            level=InsightLevel.POSITIVE,
            message="Optimal session duration for sustained productivity",
            category="timing",
        ))
    if duration_minutes < 15:
        insights.append(Insight(
            type="timing",
            level=InsightLevel.NEUTRAL,
            message="Consider longer sessions for deeper work",
            category="timing",
        ))

    if activity_rate < 5:
        insights.append(Insight(
            type="activity",
            level=InsightLevel.IMPROVEMENT,
            message="Low activity detected - ensure you're actively working",
            category="behavior",
        ))

    return insights


def _build_summary(
    session: WorkSession,
    events: Sequence[ActivityEvent],
    productivity: ScoreResult | None = None,
    focus: FocusScoreResult | None = None,
) -> SessionSummary:
    if productivity is None:
        productivity = compute_productivity_score(session, events)
    if focus is None:
        focus = compute_focus_score(session, events)

    if is_valid_duration(session.duration_seconds):
        exact_minutes = session.duration_seconds / 60.0
    else:
        exact_minutes = 0.0
    duration_minutes = round(exact_minutes)
    total = total_activity(events)
    # Reported rate uses whole minutes; the insight rule uses the exact length.
    activity_rate = total / max(duration_minutes, 1)
    insight_rate = total / (exact_minutes or 1)

    return SessionSummary(
        session_id=session.id,
        duration_minutes=duration_minutes,
        productivity_score=productivity.score,
        focus_score=focus.score,
        total_activities=total,
        app_usage=rank_app_usage(events),
        insights=generate_insights(productivity, focus, exact_minutes, insight_rate),
        key_metrics=KeyMetrics(
            activity_rate=round(activity_rate, 2),
            deep_work_period_count=len(focus.deep_work_periods),
            longest_focus_period_minutes=focus.longest_focus_period_minutes,
            context_switch_count=count_context_switches(events),
        ),
    )


def generate_session_summary(
    session: WorkSession,
    events: Sequence[ActivityEvent],
    *,
    productivity: ScoreResult | None = None,
    focus: FocusScoreResult | None = None,
) -> SessionSummary | None:
    """Build a SessionSummary, or return None if building it fails.

    Scores already computed for this session and event list can be passed in
    to skip scoring again.
    """
    try:
        summary = _build_summary(session, events, productivity, focus)
    except Exception:
        logger.exception("session_summary_failed", session_id=session.id, events=len(events))
        return None

    logger.info(
        "session_summarized",
        session_id=session.id,
        productivity=summary.productivity_score,
        focus=summary.focus_score,
        insights=len(summary.insights),
    )
    return summary


def analyze_session(
    session: WorkSession,
    events: Sequence[ActivityEvent],
) -> SessionAnalysis:
    """Run every scorer and package the results for report consumers."""
    productivity = compute_productivity_score(session, events)
    focus = compute_focus_score(session, events)
    return SessionAnalysis(
        productivity_score=productivity.score,
        productivity_factors=productivity.factors,
        focus_score=focus.score,
        focus_factors=focus.factors,
        summary=generate_session_summary(session, events, productivity=productivity, focus=focus),
    )


def health_check() -> dict[str, Any]:
    return {
        "algorithmic_analysis_available": True,
        "version": ALGORITHM_VERSION,
        "capabilities": list(CAPABILITIES),
    }
