"""Per-application usage ranking."""

from __future__ import annotations

from typing import Sequence

from sessionscore.analysis.activity import epoch_seconds
from sessionscore.models import ActivityEvent, AppUsageEntry

TOP_APPS = 10


def rank_app_usage(
    events: Sequence[ActivityEvent],
    limit: int = TOP_APPS,
) -> list[AppUsageEntry]:
    """Rank applications by keystrokes + clicks attributed to them.

    Any event naming an application contributes, not only app_switch.
    Ties keep the order in which each app first appeared chronologically.
    """
    stats: dict[str, dict[str, int]] = {}
    for e in sorted(events, key=lambda e: epoch_seconds(e.timestamp)):
        if not e.application_name:
            continue
        s = stats.setdefault(e.application_name, {"keystrokes": 0, "clicks": 0})
        s["keystrokes"] += e.keystroke_count
        s["clicks"] += e.click_count

    entries = [
        AppUsageEntry(
            application_name=name,
            total_activity=s["keystrokes"] + s["clicks"],
            keystrokes=s["keystrokes"],
            clicks=s["clicks"],
        )
        for name, s in stats.items()
    ]
    entries.sort(key=lambda a: a.total_activity, reverse=True)
    return entries[:limit]
