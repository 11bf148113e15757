"""Focus scorer and the temporal analyses behind it.

Focus is about *shape*, not volume: does activity spread evenly over the
session, does it come in long unbroken runs, and does the user stay in one
application? Four signals feed the score:

  consistency     — spread of activity over fixed 5-minute windows
  deep work       — runs of >= 5 consecutive minutes with >= 2 actions each
  context switches — app_switch events that change the active application
  multitasking    — more than 5 app switches less than 30 seconds apart

All thresholds are fixed. Changing any of them changes scores.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Sequence

import structlog

from sessionscore.analysis.activity import app_switch_sequence, epoch_seconds
from sessionscore.analysis.productivity import BASE_SCORE, clamp_score, is_valid_duration
from sessionscore.models import (
    ActivityConsistency,
    ActivityEvent,
    DeepWorkPeriod,
    FocusScoreResult,
    MultitaskingResult,
    WorkSession,
)

logger = structlog.get_logger()

CONSISTENCY_WINDOW_SECONDS = 300
DEEP_WORK_MIN_ACTIVITY = 2    # Actions per minute for a minute to count as active
DEEP_WORK_MIN_MINUTES = 5
RAPID_SWITCH_SECONDS = 30
MULTITASKING_RAPID_SWITCHES = 5


def analyze_activity_consistency(
    events: Sequence[ActivityEvent],
    duration_seconds: float,
    session_start: datetime | None = None,
) -> ActivityConsistency:
    """Bucket activity into 5-minute windows and measure how even it is.

    Window index is ``floor(offset / 300) mod num_windows``. The offset is
    taken from the session start when known, else from the Unix epoch; in the
    epoch case distant windows can alias onto the same bucket.
    """
    if not is_valid_duration(duration_seconds):
        return ActivityConsistency()

    num_windows = math.ceil(duration_seconds / CONSISTENCY_WINDOW_SECONDS)
    windows = [0] * num_windows
    origin = epoch_seconds(session_start) if session_start else 0.0

    for e in events:
        units = e.activity_units
        if not units:
            continue
        offset = epoch_seconds(e.timestamp) - origin
        idx = math.floor(offset / CONSISTENCY_WINDOW_SECONDS) % num_windows
        windows[idx] += units

    mean = sum(windows) / num_windows
    variance = sum((w - mean) ** 2 for w in windows) / num_windows
    std_dev = math.sqrt(variance)
    consistency = max(0.0, 1 - std_dev / mean) if mean > 0 else 0.0

    return ActivityConsistency(
        consistency=consistency,
        window_activities=windows,
        mean=mean,
        std_dev=std_dev,
    )


def find_deep_work_periods(
    events: Sequence[ActivityEvent],
    session_start: datetime | None = None,
) -> list[DeepWorkPeriod]:
    """Find runs of consecutive active minutes lasting at least 5 minutes.

    Minutes are keyed by absolute epoch minute. A minute with no events at
    all breaks a run exactly like a minute below the activity threshold.
    With ``session_start`` the reported start is relative to the session's
    first minute; without it the absolute minute index is reported.
    """
    minutes: dict[int, int] = {}
    for e in events:
        key = math.floor(epoch_seconds(e.timestamp) / 60)
        minutes[key] = minutes.get(key, 0) + e.activity_units

    origin = math.floor(epoch_seconds(session_start) / 60) if session_start else 0
    runs: list[tuple[int, int]] = []  # (first minute, length)
    current: tuple[int, int] | None = None

    for minute in sorted(minutes):
        if minutes[minute] < DEEP_WORK_MIN_ACTIVITY:
            if current:
                runs.append(current)
            current = None
        elif current and minute == current[0] + current[1]:
            current = (current[0], current[1] + 1)
        else:
            if current:
                runs.append(current)
            current = (minute, 1)

    if current:
        runs.append(current)

    return [
        DeepWorkPeriod(start_minute_offset=start - origin, duration_minutes=length)
        for start, length in runs
        if length >= DEEP_WORK_MIN_MINUTES
    ]


def count_context_switches(events: Sequence[ActivityEvent]) -> int:
    """Count app_switch events that move to a different application.

    The first app_switch has nothing to switch from and never counts.
    """
    switches = 0
    last_app: str | None = None
    for e in app_switch_sequence(events):
        if last_app is not None and e.application_name != last_app:
            switches += 1
        last_app = e.application_name
    return switches


def detect_multitasking(events: Sequence[ActivityEvent]) -> MultitaskingResult:
    """Flag sessions with more than 5 app switches under 30 seconds apart."""
    sequence = app_switch_sequence(events)
    rapid = sum(
        1 for prev, curr in zip(sequence, sequence[1:])
        if epoch_seconds(curr.timestamp) - epoch_seconds(prev.timestamp) < RAPID_SWITCH_SECONDS
    )
    return MultitaskingResult(
        is_multitasking=rapid > MULTITASKING_RAPID_SWITCHES,
        rapid_switches=rapid,
        apps=frozenset(e.application_name for e in sequence),
    )


def compute_focus_score(
    session: WorkSession,
    events: Sequence[ActivityEvent],
) -> FocusScoreResult:
    """Score how focused a session was, 0-100, with the supporting data."""
    if not is_valid_duration(session.duration_seconds):
        logger.warning("invalid_session_duration", session_id=session.id,
                       duration_seconds=session.duration_seconds)
        return FocusScoreResult(score=0.0, factors=["invalid_duration"])

    factors: list[str] = []
    score = BASE_SCORE
    duration_min = session.duration_seconds / 60.0

    # Consistency
    consistency = analyze_activity_consistency(
        events, session.duration_seconds, session.started_at
    ).consistency
    if consistency > 0.8:
        score += 20
        factors.append("highly_consistent_activity")
    elif consistency > 0.6:
        score += 15
        factors.append("consistent_activity")
    elif consistency > 0.4:
        score += 5
        factors.append("moderate_consistency")
    else:
        score -= 10
        factors.append("inconsistent_activity")

    # Deep work
    periods = find_deep_work_periods(events, session.started_at)
    longest = max((p.duration_minutes for p in periods), default=0)
    if longest > 20:
        score += 20
        factors.append("extended_deep_work")
    elif longest > 10:
        score += 15
        factors.append("sustained_focus")
    elif longest > 5:
        score += 10
        factors.append("moderate_focus")
    else:
        score -= 5
        factors.append("fragmented_focus")

    # Context switching. No adjustment between 3 and 5 per minute.
    switches = count_context_switches(events)
    switch_rate = switches / duration_min
    if switch_rate < 1:
        score += 15
        factors.append("minimal_context_switching")
    elif switch_rate < 3:
        score += 5
        factors.append("moderate_context_switching")
    elif switch_rate > 5:
        score -= 15
        factors.append("excessive_context_switching")

    # Multitasking
    multitasking = detect_multitasking(events)
    if multitasking.is_multitasking:
        score -= 10
        factors.append("multitasking_detected")
    else:
        score += 10
        factors.append("single_task_focus")

    result = FocusScoreResult(
        score=clamp_score(score),
        factors=factors,
        deep_work_periods=periods,
        longest_focus_period_minutes=longest,
        consistency=round(consistency, 4),
        context_switches=switches,
        multitasking=multitasking,
    )
    logger.debug(
        "focus_scored",
        session_id=session.id,
        score=result.score,
        deep_work_periods=len(periods),
        context_switches=switches,
    )
    return result
