"""Synthetic session generator for demos and smoke runs.

`sessionscore demo` should show the whole engine working without any real
capture data: generate a plausible session, score it, summarize it.

Two archetypes cover both ends of the scale: a long focused coding block
and a short, scattered admin session full of rapid app switching.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta

from sessionscore.models import ActivityEvent, EventType, WorkSession

ARCHETYPES = {
    "deep_coding": {
        "apps": ["VSCode", "Terminal", "Chrome"],
        "duration_minutes": 50,
        "actions_per_minute": (15, 35),
        "switch_every_seconds": 600,
        "idle_minutes": 2,
    },
    "scattered_admin": {
        "apps": ["Gmail", "Slack", "Calendar", "Notion", "Chrome"],
        "duration_minutes": 12,
        "actions_per_minute": (0, 6),
        "switch_every_seconds": 20,
        "idle_minutes": 3,
    },
}


def generate_synthetic_session(
    archetype: str = "deep_coding",
    start: datetime | None = None,
    seed: int = 42,
) -> tuple[WorkSession, list[ActivityEvent]]:
    """Generate one session and its events. Same seed, same output."""
    if archetype not in ARCHETYPES:
        raise ValueError(f"Unknown archetype: {archetype}")

    arch = ARCHETYPES[archetype]
    rng = random.Random(seed)
    start = start or datetime(2026, 3, 2, 9, 0)
    duration = arch["duration_minutes"] * 60

    events: list[ActivityEvent] = []
    apps = arch["apps"]
    current_app = apps[0]

    for sec in range(0, duration, arch["switch_every_seconds"]):
        next_app = rng.choice([a for a in apps if a != current_app])
        current_app = next_app if sec else current_app
        events.append(ActivityEvent(
            timestamp=start + timedelta(seconds=sec),
            event_type=EventType.APP_SWITCH.value,
            application_name=current_app,
        ))

    lo, hi = arch["actions_per_minute"]
    for minute in range(arch["duration_minutes"]):
        ts = start + timedelta(minutes=minute, seconds=rng.randint(0, 59))
        keys = rng.randint(lo, hi)
        events.append(ActivityEvent(
            timestamp=ts,
            event_type=EventType.KEYSTROKE.value,
            keystroke_count=keys,
            click_count=rng.randint(0, max(1, keys // 4)),
            application_name=_app_at(events, ts),
        ))

    idle_at = start + timedelta(minutes=rng.randint(1, arch["duration_minutes"] - 1))
    events.append(ActivityEvent(
        timestamp=idle_at,
        event_type=EventType.IDLE_START.value,
        idle_duration_seconds=arch["idle_minutes"] * 60,
    ))

    session = WorkSession(
        id=f"demo_{archetype}_{seed}",
        duration_seconds=duration,
        started_at=start,
    )
    return session, sorted(events, key=lambda e: e.timestamp)


def _app_at(events: list[ActivityEvent], ts: datetime) -> str | None:
    """The application made active by the latest app_switch at or before ts."""
    active = None
    for e in events:
        if e.event_type == EventType.APP_SWITCH and e.timestamp <= ts:
            if active is None or e.timestamp >= active.timestamp:
                active = e
    return active.application_name if active else None
