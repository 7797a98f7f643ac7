"""
Study progress and streaks, persisted as a small JSON file.

Progress and the current session live together in
one file: ``{"progress": {...}, "session": {...} | null}``.
"""
from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass
from datetime import date
from pathlib import Path

from .config import DEFAULT_PROGRESS_FILE


class ProgressError(ValueError):
    """The progress file exists but cannot be read."""


@dataclass
class StudyProgress:
    last_studied: str = ""  # ISO date of the last study day
    total_cards: int = 0
    mastered_cards: int = 0
    streak: int = 0


@dataclass
class StudySession:
    cards_studied: int = 0
    correct: int = 0
    incorrect: int = 0
    start_time: float = 0.0

    @property
    def accuracy(self) -> float:
        return self.correct / self.cards_studied if self.cards_studied else 0.0


def update_streak(progress: StudyProgress, today: date | None = None) -> StudyProgress:
    """Advance the day streak: same day unchanged, next day +1, any gap resets to 1."""
    today = today or date.today()
    if not progress.last_studied:
        progress.streak = 1
    else:
        diff = (today - date.fromisoformat(progress.last_studied)).days
        if diff == 0:
            return progress
        progress.streak = progress.streak + 1 if diff == 1 else 1
    progress.last_studied = today.isoformat()
    return progress


class ProgressStore:
    """JSON-file backed progress/session store."""

    def __init__(self, path: Path | None = None):
        self.path = Path(path or DEFAULT_PROGRESS_FILE)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ProgressError(f"Progress file is not valid JSON: {self.path} ({e})") from e
        if not isinstance(data, dict):
            raise ProgressError(f"Progress file must hold a JSON object: {self.path}")
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get_progress(self) -> StudyProgress:
        raw = self._read().get("progress") or {}
        try:
            return StudyProgress(**raw)
        except TypeError as e:
            raise ProgressError(f"Malformed progress record in {self.path}: {e}") from e

    def save_progress(self, progress: StudyProgress) -> None:
        data = self._read()
        data["progress"] = asdict(progress)
        self._write(data)

    def get_session(self) -> StudySession | None:
        raw = self._read().get("session")
        if not raw:
            return None
        try:
            return StudySession(**raw)
        except TypeError as e:
            raise ProgressError(f"Malformed session record in {self.path}: {e}") from e

    def save_session(self, session: StudySession) -> None:
        data = self._read()
        data["session"] = asdict(session)
        self._write(data)

    def clear_session(self) -> None:
        data = self._read()
        if data.pop("session", None) is not None:
            self._write(data)

    def record_answer(self, correct: bool, today: date | None = None) -> tuple[StudyProgress, StudySession]:
        """Count one flashcard answer; correct answers also advance the streak and card totals."""
        session = self.get_session() or StudySession(start_time=time.time())
        session.cards_studied += 1
        if correct:
            session.correct += 1
        else:
            session.incorrect += 1

        progress = self.get_progress()
        if correct:
            update_streak(progress, today)
            progress.total_cards += 1
            progress.mastered_cards += 1

        data = self._read()
        data["progress"] = asdict(progress)
        data["session"] = asdict(session)
        self._write(data)
        return progress, session
