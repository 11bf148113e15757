"""Productivity scorer — a rule ladder over activity density, duration,
app switching and idle time.

Every session starts from a neutral 50. Each rule adds or subtracts a fixed
amount and records a factor tag, so the caller can always see *why* a score
came out the way it did. Bad input never raises: a non-positive or non-finite
duration yields a zero score tagged ``invalid_duration``.
"""

from __future__ import annotations

import math
from typing import Sequence

import structlog

from sessionscore.analysis.activity import total_activity
from sessionscore.models import ActivityEvent, EventType, ScoreResult, WorkSession

logger = structlog.get_logger()

BASE_SCORE = 50.0


def is_valid_duration(seconds: float) -> bool:
    """Positive and finite. NaN and infinities are as unusable as zero."""
    return seconds > 0 and math.isfinite(seconds)


def invalid_duration_result() -> ScoreResult:
    return ScoreResult(score=0.0, factors=["invalid_duration"])


def clamp_score(score: float) -> float:
    return round(max(0.0, min(100.0, score)), 2)


def compute_productivity_score(
    session: WorkSession,
    events: Sequence[ActivityEvent],
) -> ScoreResult:
    """Score how productive a session was, 0-100.

    Rules, applied in order:
    1. Activity rate (keystrokes + clicks per minute); 10-50/min is optimal
    2. Session length; 25-90 minutes is the sweet spot
    3. App switches per minute; one or fewer is focused
    4. Share of the session spent idle; under 10% is ideal
    """
    if not is_valid_duration(session.duration_seconds):
        logger.warning("invalid_session_duration", session_id=session.id,
                       duration_seconds=session.duration_seconds)
        return invalid_duration_result()

    factors: list[str] = []
    score = BASE_SCORE
    duration_min = session.duration_seconds / 60.0

    # Activity density
    rate = total_activity(events) / duration_min
    if rate == 0:
        score -= 20
        factors.append("no_activity_detected")
    elif 10 <= rate <= 50:
        score += 20
        factors.append("optimal_activity_rate")
    elif rate > 50:
        score += 10  # Busy, but possibly frantic
        factors.append("high_activity_rate")
    elif rate >= 5:
        score += 10
        factors.append("moderate_activity_rate")
    else:
        score -= 10
        factors.append("low_activity_rate")

    # Duration band. Nothing between 10 and 15 minutes or above 90.
    if 25 <= duration_min <= 90:
        score += 15
        factors.append("optimal_duration")
    elif 15 <= duration_min < 25:
        score += 10
        factors.append("good_duration")
    elif duration_min < 10:
        score -= 10
        factors.append("short_session")

    # App switching
    switches = sum(1 for e in events if e.event_type == EventType.APP_SWITCH)
    switch_rate = switches / max(duration_min, 1.0)
    if switch_rate > 5:
        score -= 15
        factors.append("excessive_app_switching")
    elif switch_rate > 2:
        score -= 5
        factors.append("moderate_app_switching")
    elif switch_rate <= 1:
        score += 10
        factors.append("focused_app_usage")

    # Idle ratio
    idle_seconds = sum(
        e.idle_duration_seconds for e in events
        if e.event_type == EventType.IDLE_START
    )
    idle_pct = 100.0 * idle_seconds / session.duration_seconds
    if idle_pct < 10:
        score += 10
        factors.append("minimal_idle_time")
    elif idle_pct > 30:
        score -= 15
        factors.append("excessive_idle_time")
    elif idle_pct > 15:
        score -= 5
        factors.append("moderate_idle_time")

    result = ScoreResult(score=clamp_score(score), factors=factors)
    logger.debug(
        "productivity_scored",
        session_id=session.id,
        score=result.score,
        activity_rate=round(rate, 2),
        idle_pct=round(idle_pct, 1),
    )
    return result
