"""
RefreshLogEntry model — outcome of the latest refresh per (prospect, source).

The primary key is derived from (prospect_id, source), so writing the same pair
again replaces the row instead of adding history.
"""
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, UniqueConstraint

from prospect_intel.database import Base


def make_entry_id(prospect_id: str, source: str) -> str:
    """Deterministic row id for a (prospect, source) pair."""
    return f'refresh-{prospect_id}-{source}'


class RefreshLogEntry(Base):
    __tablename__ = 'intelligence_refresh_log'

    id = Column(Text, primary_key=True)
    prospect_id = Column(Text, ForeignKey('prospects.id'), nullable=False)
    source = Column(Text, nullable=False)          # cron_daily / manual
    last_refresh_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(Text, nullable=False)          # success / error
    items_found = Column(Integer, default=0)
    error_message = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint('prospect_id', 'source', name='uq_refresh_log_prospect_source'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'prospect_id': self.prospect_id,
            'source': self.source,
            'last_refresh_at': self.last_refresh_at.isoformat() if self.last_refresh_at else None,
            'status': self.status,
            'items_found': self.items_found or 0,
            'error_message': self.error_message,
        }
