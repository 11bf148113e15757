"""Tests for the productivity rule ladder."""

import json
import math
import random
from datetime import datetime, timedelta

from sessionscore.analysis.productivity import compute_productivity_score
from sessionscore.models import ActivityEvent, WorkSession

BASE = datetime(2026, 3, 2, 9, 0)


def _session(duration_seconds: float) -> WorkSession:
    return WorkSession(id="sess1", duration_seconds=duration_seconds, started_at=BASE)


def _keys(minute: int, count: int, app: str | None = None) -> ActivityEvent:
    return ActivityEvent(
        timestamp=BASE + timedelta(minutes=minute, seconds=30),
        event_type="keystroke",
        keystroke_count=count,
        application_name=app,
    )


def _switch(seconds: int, app: str = "VSCode") -> ActivityEvent:
    return ActivityEvent(
        timestamp=BASE + timedelta(seconds=seconds),
        event_type="app_switch",
        application_name=app,
    )


def _idle(seconds: float) -> ActivityEvent:
    return ActivityEvent(
        timestamp=BASE + timedelta(minutes=5),
        event_type="idle_start",
        idle_duration_seconds=seconds,
    )


def _even_activity(minutes: int, per_minute: int) -> list[ActivityEvent]:
    return [_keys(m, per_minute) for m in range(minutes)]


# ── Invalid input ────────────────────────────────────────────


def test_zero_duration_is_soft_failure():
    result = compute_productivity_score(_session(0), _even_activity(5, 20))
    assert result.score == 0
    assert result.factors == ["invalid_duration"]


def test_negative_duration_is_soft_failure():
    result = compute_productivity_score(_session(-60), [])
    assert result.score == 0
    assert result.factors == ["invalid_duration"]


# ── Scenarios ────────────────────────────────────────────────


def test_empty_ten_minute_session():
    """50 - 20 (no activity) + 10 (no switching) + 10 (no idle). 10 min has no duration band."""
    result = compute_productivity_score(_session(600), [])
    assert result.score == 50
    assert result.factors == [
        "no_activity_detected",
        "focused_app_usage",
        "minimal_idle_time",
    ]


def test_optimal_thirty_minute_session_clamps_to_100():
    events = _even_activity(30, 20) + [_switch(0)]
    result = compute_productivity_score(_session(1800), events)
    # 50 + 20 + 15 + 10 + 10 = 105, clamped
    assert result.score == 100
    assert result.factors == [
        "optimal_activity_rate",
        "optimal_duration",
        "focused_app_usage",
        "minimal_idle_time",
    ]
    assert result.algorithm_version == "1.0"


def test_activity_rate_bands():
    cases = [
        (2000, "high_activity_rate", 95),
        (200, "moderate_activity_rate", 95),
        (60, "low_activity_rate", 75),
    ]
    for units, factor, expected in cases:
        events = [_keys(0, units)]
        result = compute_productivity_score(_session(1800), events)
        assert result.factors[0] == factor
        assert result.score == expected


def test_clicks_count_as_activity():
    events = [ActivityEvent(timestamp=BASE, event_type="click", click_count=600)]
    result = compute_productivity_score(_session(1800), events)
    assert "optimal_activity_rate" in result.factors


def test_duration_bands():
    assert "good_duration" in compute_productivity_score(_session(1200), []).factors
    assert "short_session" in compute_productivity_score(_session(300), []).factors

    long_session = compute_productivity_score(_session(6000), []).factors
    assert not {"optimal_duration", "good_duration", "short_session"} & set(long_session)

    gap = compute_productivity_score(_session(12 * 60), []).factors
    assert not {"optimal_duration", "good_duration", "short_session"} & set(gap)


def test_app_switch_bands():
    ten_minutes = _session(600)
    excessive = [_switch(i) for i in range(60)]
    moderate = [_switch(i) for i in range(30)]
    in_between = [_switch(i) for i in range(15)]

    assert "excessive_app_switching" in compute_productivity_score(ten_minutes, excessive).factors
    assert "moderate_app_switching" in compute_productivity_score(ten_minutes, moderate).factors

    neither = compute_productivity_score(ten_minutes, in_between).factors
    assert not {"excessive_app_switching", "moderate_app_switching", "focused_app_usage"} & set(neither)


def test_idle_bands():
    activity = _even_activity(30, 20)
    assert compute_productivity_score(_session(1800), activity + [_idle(300)]).score == 90
    assert "moderate_idle_time" in compute_productivity_score(
        _session(1800), activity + [_idle(300)]
    ).factors
    assert compute_productivity_score(_session(1800), activity + [_idle(600)]).score == 80
    assert "excessive_idle_time" in compute_productivity_score(
        _session(1800), activity + [_idle(600)]
    ).factors
    # Exactly 10% idle: no adjustment
    assert compute_productivity_score(_session(1800), activity + [_idle(180)]).score == 95


def test_idle_only_counted_on_idle_start_events():
    event = ActivityEvent(timestamp=BASE, event_type="scroll", idle_duration_seconds=1800)
    result = compute_productivity_score(_session(1800), [event])
    assert "minimal_idle_time" in result.factors


def test_more_idle_never_raises_score():
    activity = _even_activity(30, 20)
    scores = [
        compute_productivity_score(_session(1800), activity + [_idle(s)]).score
        for s in range(0, 900, 30)
    ]
    assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_event_without_counts_contributes_nothing():
    event = ActivityEvent(timestamp=BASE, event_type="keystroke")
    result = compute_productivity_score(_session(600), [event])
    assert "no_activity_detected" in result.factors


def test_score_always_in_bounds():
    rng = random.Random(7)
    for _ in range(200):
        duration = rng.randint(1, 7200)
        events = []
        for _ in range(rng.randint(0, 40)):
            events.append(ActivityEvent(
                timestamp=BASE + timedelta(seconds=rng.randint(0, duration)),
                event_type=rng.choice(["keystroke", "click", "app_switch", "idle_start", "other"]),
                keystroke_count=rng.randint(0, 500),
                click_count=rng.randint(0, 100),
                application_name=rng.choice(["A", "B", None]),
                idle_duration_seconds=rng.randint(0, 600),
            ))
        result = compute_productivity_score(_session(duration), events)
        assert 0 <= result.score <= 100


def test_inputs_are_not_mutated():
    events = _even_activity(30, 20)
    snapshot = [e.model_copy() for e in events]
    compute_productivity_score(_session(1800), events)
    assert events == snapshot


def test_non_finite_duration_is_soft_failure():
    for duration in (math.nan, math.inf, -math.inf):
        result = compute_productivity_score(_session(duration), _even_activity(5, 20))
        assert result.score == 0
        assert result.factors == ["invalid_duration"]


def test_nan_duration_from_ingestion_payload():
    session = WorkSession.model_validate(json.loads('{"id": "s", "duration_seconds": NaN}'))
    assert compute_productivity_score(session, []).factors == ["invalid_duration"]
