"""
Refresh pipeline contracts.

The scheduler only talks to a CandidateFetcher through fetch(); provider-specific
logic lives in concrete fetcher classes (see services.news). Everything a fetcher
returns is a CandidateItem — an IntelligenceItem minus the storage-assigned fields.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Dict, List, Any, Optional


@dataclass
class ProspectIdentity:
    """The prospect attributes a fetcher may use to find intelligence."""
    company: str
    website: Optional[str] = None
    prospect_type: Optional[str] = None
    country: Optional[str] = None
    linkedin_url: Optional[str] = None

    @classmethod
    def from_prospect(cls, prospect) -> 'ProspectIdentity':
        return cls(
            company=prospect.company,
            website=prospect.website or None,
            prospect_type=prospect.prospect_type or None,
            country=prospect.country or None,
            linkedin_url=prospect.linkedin_url or None,
        )


@dataclass
class CandidateItem:
    """A fetched intelligence item that has not been stored yet."""
    title: str
    description: Optional[str] = None
    source_type: str = 'news'
    intelligence_type: str = 'news'
    url: Optional[str] = None
    published_at: Optional[datetime] = None
    ai_tip: Optional[str] = None
    relevance_score: Optional[float] = None
    company_name: Optional[str] = None
    source_name: Optional[str] = None
    content_quote: Optional[str] = None
    match_home_team: Optional[str] = None
    match_away_team: Optional[str] = None
    match_home_score: Optional[int] = None
    match_away_score: Optional[int] = None
    match_league: Optional[str] = None
    person_name: Optional[str] = None
    person_position: Optional[str] = None
    person_linkedin_url: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        """Column values for an IntelligenceItem insert."""
        return asdict(self)


class CandidateFetcher(ABC):
    """
    Base class for intelligence providers.

    fetch() may be slow and may raise; the scheduler catches errors per prospect
    and owns rate limiting, so implementations should not sleep between calls.
    """
    name: str = ''

    @abstractmethod
    def fetch(self, identity: ProspectIdentity) -> List[CandidateItem]:
        ...


@dataclass
class ProspectOutcome:
    """Result of refreshing a single prospect."""
    prospect_id: str
    status: str
    items_found: int = 0
    new_items: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RefreshSummary:
    """Per-invocation batch report returned to the trigger. Not persisted."""
    total_prospects: int = 0
    stale_prospects: int = 0
    batch_size: int = 0
    processed: int = 0
    new_items: int = 0
    errors: int = 0
    timestamp: str = ''
    outcomes: List[ProspectOutcome] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Scanned {self.processed} prospects, found {self.new_items} new items"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'total_prospects': self.total_prospects,
            'stale_prospects': self.stale_prospects,
            'batch_size': self.batch_size,
            'processed': self.processed,
            'new_items': self.new_items,
            'errors': self.errors,
            'timestamp': self.timestamp,
            'outcomes': [o.to_dict() for o in self.outcomes],
        }
