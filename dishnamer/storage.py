"""Persistence of the preference record and the acceptance history.

Reads never fail the caller: a missing or unreadable record loads as empty.
Writes are best effort by default. A failed save is logged and the in-memory
update is lost on restart. Build the stores with fail_loud=True to get a
StorageError instead.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import NamedDish, Preference, utcnow
from .preferences import PreferenceRecord, top_keywords

logger = logging.getLogger(__name__)

DEFAULT_USER = "household"


class StorageError(Exception):
    """Raised when a persisted record cannot be written."""

    pass


@dataclass
class HistoryEntry:
    """One accepted name as shown in the history page."""

    name: str
    image: str | None = None
    date: datetime = field(default_factory=utcnow)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "image": self.image,
            "date": self._utc_date().isoformat(),
            "suggestions": list(self.suggestions),
        }

    def _utc_date(self) -> datetime:
        # Stored timestamps are naive UTC
        if self.date.tzinfo is None:
            return self.date.replace(tzinfo=timezone.utc)
        return self.date.astimezone(timezone.utc)


class PreferenceStore:
    """Loads and saves the preference record for one user key."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        user: str = DEFAULT_USER,
        fail_loud: bool = False,
    ):
        self.session_factory = session_factory
        self.user = user
        self.fail_loud = fail_loud

    def load(self) -> PreferenceRecord:
        """Return the stored record, or a fresh empty one. Never raises."""
        try:
            with self.session_factory() as session:
                row = session.query(Preference).filter(Preference.user == self.user).first()
                data = row.data if row else None
        except (SQLAlchemyError, ValueError) as e:
            logger.warning(f"Could not read preferences for {self.user}: {e}")
            return PreferenceRecord()

        if not data:
            return PreferenceRecord()

        try:
            return PreferenceRecord.from_dict(data)
        except ValueError as e:
            logger.warning(f"Ignoring corrupt preferences for {self.user}: {e}")
            return PreferenceRecord()

    def save(self, record: PreferenceRecord) -> None:
        """Persist the record.

        Raises:
            StorageError: Only when fail_loud is set and the write failed.
        """
        try:
            with self.session_factory() as session:
                row = session.query(Preference).filter(Preference.user == self.user).first()
                if not row:
                    row = Preference(user=self.user)
                    session.add(row)
                # Assign a new dict so the JSON column registers the change
                row.data = record.to_dict()
                row.updated_at = utcnow()
                session.commit()
        except SQLAlchemyError as e:
            logger.exception(f"Error saving preferences for {self.user}: {e}")
            if self.fail_loud:
                raise StorageError(f"Could not save preferences: {e}") from e

    @staticmethod
    def top_keywords(record: PreferenceRecord, k: int) -> list[str]:
        return top_keywords(record, k)


class HistoryStore:
    """Append-only list of accepted names."""

    def __init__(self, session_factory: Callable[[], Session], fail_loud: bool = False):
        self.session_factory = session_factory
        self.fail_loud = fail_loud

    def load(self) -> list[HistoryEntry]:
        """All entries in acceptance order. Returns [] when unreadable."""
        try:
            with self.session_factory() as session:
                rows = session.query(NamedDish).order_by(NamedDish.id.asc()).all()
                return [
                    HistoryEntry(
                        name=row.name,
                        image=row.image,
                        date=row.accepted_at,
                        suggestions=list(row.suggestions or []),
                    )
                    for row in rows
                ]
        except (SQLAlchemyError, ValueError) as e:
            logger.warning(f"Could not read history: {e}")
            return []

    def recent(self) -> list[HistoryEntry]:
        """All entries, most recent first."""
        return list(reversed(self.load()))

    def append(self, entry: HistoryEntry) -> None:
        """Add an entry at the end.

        Raises:
            StorageError: Only when fail_loud is set and the write failed.
        """
        try:
            with self.session_factory() as session:
                session.add(
                    NamedDish(
                        name=entry.name,
                        image=entry.image,
                        suggestions=list(entry.suggestions),
                        accepted_at=entry.date,
                    )
                )
                session.commit()
        except SQLAlchemyError as e:
            logger.exception(f"Error saving history entry '{entry.name}': {e}")
            if self.fail_loud:
                raise StorageError(f"Could not save history: {e}") from e
