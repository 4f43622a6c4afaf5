"""
Refresh run log — one row per (prospect, source) recording the latest attempt.

upsert() overwrites the row for its key, which keeps "when was this prospect
last refreshed" a single-row lookup per source instead of a history scan.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from prospect_intel.database import get_session
from prospect_intel.models.refresh_log import RefreshLogEntry, make_entry_id

logger = logging.getLogger('refresh.run_log')


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def latest_refresh_map(entries: Iterable) -> Dict[str, datetime]:
    """Most recent last_refresh_at per prospect, across every source."""
    latest: Dict[str, datetime] = {}
    for entry in entries:
        refreshed = as_utc(entry.last_refresh_at)
        if refreshed is None:
            continue
        current = latest.get(entry.prospect_id)
        if current is None or refreshed > current:
            latest[entry.prospect_id] = refreshed
    return latest


class RefreshLog:
    """Database-backed run log."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory

    def _session(self):
        return (self._session_factory or get_session)()

    def upsert(self, prospect_id: str, source: str, status: str, items_found: int = 0,
               error_message: Optional[str] = None, refreshed_at: Optional[datetime] = None) -> Dict:
        """
        INSERT or UPDATE the entry for (prospect_id, source).

        Raises on database errors after rolling back; callers decide whether
        a failed log write matters.
        """
        session = self._session()
        try:
            entry_id = make_entry_id(prospect_id, source)
            entry = session.get(RefreshLogEntry, entry_id)
            if entry is None:
                entry = RefreshLogEntry(id=entry_id, prospect_id=prospect_id, source=source)
                session.add(entry)
            entry.last_refresh_at = refreshed_at or utcnow()
            entry.status = status
            entry.items_found = items_found
            entry.error_message = error_message
            session.commit()
            return entry.to_dict()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def load_all(self) -> List[RefreshLogEntry]:
        session = self._session()
        try:
            return session.query(RefreshLogEntry).all()
        finally:
            session.close()


class InMemoryRefreshLog:
    """
    Same contract as RefreshLog, backed by a (prospect_id, source) → row map.

    Used with the mock fetcher for local runs and by tests.
    """

    def __init__(self):
        self._rows: Dict[Tuple[str, str], RefreshLogEntry] = {}

    def upsert(self, prospect_id: str, source: str, status: str, items_found: int = 0,
               error_message: Optional[str] = None, refreshed_at: Optional[datetime] = None) -> Dict:
        key = (prospect_id, source)
        entry = self._rows.get(key)
        if entry is None:
            entry = RefreshLogEntry(id=make_entry_id(prospect_id, source),
                                    prospect_id=prospect_id, source=source)
            self._rows[key] = entry
        entry.last_refresh_at = refreshed_at or utcnow()
        entry.status = status
        entry.items_found = items_found
        entry.error_message = error_message
        return entry.to_dict()

    def load_all(self) -> List[RefreshLogEntry]:
        return list(self._rows.values())

    def __len__(self):
        return len(self._rows)
