"""
Persistence helpers for the refresh pipeline — roster reads and item inserts.

Unlike best-effort bookkeeping writes, these raise on failure: the scheduler
turns a failed insert into an error log entry for that prospect.
"""
import logging
import uuid
from typing import Dict, List, Optional

from prospect_intel.database import get_session
from prospect_intel.models.prospect import Prospect
from prospect_intel.models.intelligence_item import IntelligenceItem
from prospect_intel.refresh.base import CandidateItem

logger = logging.getLogger('services.db')


def new_item_id() -> str:
    return f'intel-{uuid.uuid4().hex[:16]}'


def load_active_prospects() -> List[Prospect]:
    """All non-archived prospects, in roster order."""
    session = get_session()
    try:
        return (
            session.query(Prospect)
            .filter(Prospect.archived.is_(False))
            .order_by(Prospect.created_at, Prospect.id)
            .all()
        )
    finally:
        session.close()


def get_prospect(prospect_id: str) -> Optional[Prospect]:
    session = get_session()
    try:
        return session.get(Prospect, prospect_id)
    finally:
        session.close()


def load_existing_item_keys(prospect_id: str) -> List[Dict[str, Optional[str]]]:
    """url + title of every stored item for a prospect, dismissed ones included."""
    session = get_session()
    try:
        rows = (
            session.query(IntelligenceItem.url, IntelligenceItem.title)
            .filter(IntelligenceItem.prospect_id == prospect_id)
            .all()
        )
        return [{'url': url, 'title': title} for url, title in rows]
    finally:
        session.close()


def insert_intelligence_items(prospect_id: Optional[str], candidates: List[CandidateItem]) -> int:
    """
    Bulk-insert candidates as new IntelligenceItem rows in one transaction.

    Returns the number inserted. Rolls back and re-raises on any failure,
    so either all candidates are stored or none.
    """
    if not candidates:
        return 0

    session = get_session()
    try:
        for item in candidates:
            session.add(IntelligenceItem(
                id=new_item_id(),
                prospect_id=prospect_id,
                dismissed=False,
                **item.to_row(),
            ))
        session.commit()
        logger.debug("Inserted %d items for prospect %s", len(candidates), prospect_id)
        return len(candidates)
    except Exception:
        session.rollback()
        logger.error("Insert failed for prospect %s (%d items)", prospect_id, len(candidates))
        raise
    finally:
        session.close()
