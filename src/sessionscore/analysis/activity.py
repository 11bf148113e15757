"""Shared helpers for reading activity out of raw events."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from sessionscore.models import ActivityEvent, EventType


def epoch_seconds(ts: datetime) -> float:
    """Seconds since the Unix epoch. Naive timestamps are read as UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.timestamp()


def total_activity(events: Sequence[ActivityEvent]) -> int:
    """Sum of keystroke and click counts across all events."""
    return sum(e.activity_units for e in events)


def app_switch_sequence(events: Sequence[ActivityEvent]) -> list[ActivityEvent]:
    """``app_switch`` events that name an application, oldest first."""
    switches = [
        e for e in events
        if e.event_type == EventType.APP_SWITCH and e.application_name
    ]
    return sorted(switches, key=lambda e: epoch_seconds(e.timestamp))
