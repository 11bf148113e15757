"""Core domain models for SessionScore."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALGORITHM_VERSION = "1.0"


class EventType(str, Enum):
    """Kinds of activity event the scoring rules understand.

    Events carrying any other type are kept but ignored by the type-specific
    rules, so ``ActivityEvent.event_type`` stays a plain string.
    """

    KEYSTROKE = "keystroke"
    CLICK = "click"
    APP_SWITCH = "app_switch"
    IDLE_START = "idle_start"


class WorkSession(BaseModel):
    """A tracked unit of work, as handed over by the ingestion layer."""

    id: str = ""
    duration_seconds: float = 0.0
    started_at: datetime | None = None


class ActivityEvent(BaseModel):
    """A single observed input or state transition during a session."""

    timestamp: datetime
    event_type: str = ""
    keystroke_count: int = Field(default=0, ge=0)
    click_count: int = Field(default=0, ge=0)
    application_name: str | None = None
    idle_duration_seconds: float = Field(default=0.0, ge=0)

    @field_validator("keystroke_count", "click_count", "idle_duration_seconds", mode="before")
    @classmethod
    def _none_is_zero(cls, v):
        return 0 if v is None else v

    @property
    def activity_units(self) -> int:
        return self.keystroke_count + self.click_count


# ── Results ──────────────────────────────────────────────────


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)


class ScoreResult(_Result):
    """A 0-100 score plus the ordered list of rules that fired."""

    score: float
    factors: list[str] = Field(default_factory=list)
    algorithm_version: str = ALGORITHM_VERSION
    calculated_at: datetime = Field(default_factory=datetime.now)


class DeepWorkPeriod(_Result):
    """A run of at least five consecutive active minutes."""

    start_minute_offset: int
    duration_minutes: int


class ActivityConsistency(_Result):
    """How evenly activity spreads over the session's 5-minute windows."""

    consistency: float = 0.0
    window_activities: list[int] = Field(default_factory=list)
    mean: float = 0.0
    std_dev: float = 0.0


class MultitaskingResult(_Result):
    is_multitasking: bool = False
    rapid_switches: int = 0
    apps: frozenset[str] = Field(default_factory=frozenset)


class FocusScoreResult(ScoreResult):
    """Focus score with the period and switching data it was derived from."""

    deep_work_periods: list[DeepWorkPeriod] = Field(default_factory=list)
    longest_focus_period_minutes: int = 0
    consistency: float = 0.0
    context_switches: int = 0
    multitasking: MultitaskingResult | None = None


class AppUsageEntry(_Result):
    application_name: str
    total_activity: int = 0
    keystrokes: int = 0
    clicks: int = 0


class InsightLevel(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    IMPROVEMENT = "improvement"


class Insight(_Result):
    """A qualitative, human-readable observation about a session."""

    type: str
    level: InsightLevel
    message: str
    category: str


class KeyMetrics(_Result):
    activity_rate: float = 0.0
    deep_work_period_count: int = 0
    longest_focus_period_minutes: int = 0
    context_switch_count: int = 0


class SessionSummary(_Result):
    """Everything the scoring engine knows about one session, in one place."""

    session_id: str = ""
    duration_minutes: int = 0
    productivity_score: float = 0.0
    focus_score: float = 0.0
    total_activities: int = 0
    app_usage: list[AppUsageEntry] = Field(default_factory=list)
    insights: list[Insight] = Field(default_factory=list)
    key_metrics: KeyMetrics = Field(default_factory=KeyMetrics)
    algorithm_version: str = ALGORITHM_VERSION
    generated_at: datetime = Field(default_factory=datetime.now)


class SessionAnalysis(_Result):
    """Productivity, focus and summary bundled for report consumers."""

    productivity_score: float
    productivity_factors: list[str] = Field(default_factory=list)
    focus_score: float
    focus_factors: list[str] = Field(default_factory=list)
    summary: SessionSummary | None = None
    method: str = "algorithmic"
    version: str = ALGORITHM_VERSION
    generated_at: datetime = Field(default_factory=datetime.now)
