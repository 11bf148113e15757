"""Local JSON storage for SessionScore data.

Simple, file-based. A session bundle is the session descriptor plus its
events, one JSON file per session under ``<data_dir>/sessions/``. Computed
summaries live next to them under ``<data_dir>/summaries/``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

import structlog

from sessionscore.models import ActivityEvent, SessionSummary, WorkSession

logger = structlog.get_logger()


def load_bundle_file(path: str | Path) -> tuple[WorkSession, list[ActivityEvent]]:
    """Read a ``{"session": {...}, "events": [...]}`` file.

    Raises FileNotFoundError if the file is missing and pydantic's
    ValidationError if its contents don't describe a session.
    """
    raw = json.loads(Path(path).read_text())
    session = WorkSession.model_validate(raw.get("session", {}))
    events = [ActivityEvent.model_validate(e) for e in raw.get("events", [])]
    return session, events


def bundle_to_dict(session: WorkSession, events: Sequence[ActivityEvent]) -> dict[str, Any]:
    return {
        "session": json.loads(session.model_dump_json()),
        "events": [json.loads(e.model_dump_json()) for e in events],
    }


class SessionStore:
    """File-based storage for session bundles and summaries."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.sessions_dir = self.data_dir / "sessions"
        self.sessions_dir.mkdir(exist_ok=True)
        self.summaries_dir = self.data_dir / "summaries"
        self.summaries_dir.mkdir(exist_ok=True)

    def _path(self, base_dir: Path, session_id: str) -> Path:
        """File for a session id. Ids must be plain file names inside the store."""
        if not session_id:
            raise ValueError("session id is required for storage")
        if (
            session_id in (".", "..")
            or "/" in session_id
            or "\\" in session_id
            or Path(session_id).name != session_id
        ):
            raise ValueError(f"session id is not a valid file name: {session_id!r}")
        return base_dir / f"{session_id}.json"

    # ── Bundles ──────────────────────────────────────────────

    def save_bundle(self, session: WorkSession, events: Sequence[ActivityEvent]) -> Path:
        """Save a session with its events, replacing any earlier copy."""
        path = self._path(self.sessions_dir, session.id)
        self._save_json(path, bundle_to_dict(session, events))
        logger.info("bundle_saved", session_id=session.id, events=len(events), path=str(path))
        return path

    def load_bundle(self, session_id: str) -> tuple[WorkSession, list[ActivityEvent]]:
        return load_bundle_file(self._path(self.sessions_dir, session_id))

    def list_sessions(self) -> list[str]:
        """Ids of every stored session bundle, sorted."""
        return sorted(p.stem for p in self.sessions_dir.glob("*.json"))

    # ── Summaries ────────────────────────────────────────────

    def save_summary(self, summary: SessionSummary) -> Path:
        path = self._path(self.summaries_dir, summary.session_id)
        self._save_json(path, json.loads(summary.model_dump_json()))
        logger.info("summary_saved", session_id=summary.session_id, path=str(path))
        return path

    def load_summary(self, session_id: str) -> SessionSummary | None:
        path = self._path(self.summaries_dir, session_id)
        if not path.exists():
            return None
        return SessionSummary.model_validate(json.loads(path.read_text()))

    def load_summaries(self) -> list[SessionSummary]:
        """Every stored summary, ordered by session id."""
        return [
            SessionSummary.model_validate(json.loads(p.read_text()))
            for p in sorted(self.summaries_dir.glob("*.json"))
        ]

    # ── Helpers ──────────────────────────────────────────────

    def _save_json(self, path: Path, data: Any) -> None:
        path.write_text(json.dumps(data, indent=2, default=str))
