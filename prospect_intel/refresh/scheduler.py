"""
Scheduled intelligence refresh — picks which prospects to scan and scans them.

One invocation:
  load roster + run log → drop recently refreshed → order by status priority,
  then oldest refresh → cap the batch → for each prospect:
  FETCH → SORT → DEDUP → INSERT → LOG → sleep(delay)

Prospects are processed strictly one at a time: the provider rate limit is per
caller, so the delay after every prospect (including failed ones) is the
throttle. A prospect that fails is logged and skipped; the batch carries on.
If the host kills the process mid-batch, unreached prospects stay stale and
are picked up first next time.
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from prospect_intel.config import (
    STATUS_PRIORITY, UNKNOWN_STATUS_PRIORITY,
    REFRESH_BATCH_SIZE, REFRESH_DELAY_SECONDS, REFRESH_STALENESS_HOURS,
    REFRESH_SOURCE_CRON, REFRESH_STATUS_SUCCESS, REFRESH_STATUS_ERROR,
)
from prospect_intel.refresh.base import (
    CandidateFetcher, CandidateItem, ProspectIdentity, ProspectOutcome, RefreshSummary,
)
from prospect_intel.refresh.dedup import dedup_candidates
from prospect_intel.refresh.run_log import RefreshLog, latest_refresh_map, utcnow
from prospect_intel.services.db import (
    load_active_prospects, load_existing_item_keys, insert_intelligence_items,
)

logger = logging.getLogger('refresh.scheduler')

# Never-refreshed prospects sort as if last refreshed at the epoch
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ── Planning (pure) ──────────────────────────────────────────────────────────

def status_priority(status: Optional[str]) -> int:
    return STATUS_PRIORITY.get(status, UNKNOWN_STATUS_PRIORITY)


def filter_stale(prospects: List, last_refresh: Dict[str, datetime], now: datetime,
                 staleness_hours: float = REFRESH_STALENESS_HOURS) -> List:
    """Keep prospects never refreshed, or last refreshed more than `staleness_hours` ago."""
    cutoff = now - timedelta(hours=staleness_hours)
    stale = []
    for prospect in prospects:
        refreshed = last_refresh.get(prospect.id)
        if refreshed is None or refreshed < cutoff:
            stale.append(prospect)
    return stale


def order_by_priority(prospects: List, last_refresh: Dict[str, datetime]) -> List:
    """
    Sort by status priority (Hot first), then by last refresh, oldest first.

    The second key is what keeps low-priority prospects from starving: each run
    they don't get picked, they become relatively staler. Ties keep roster order.
    """
    return sorted(
        prospects,
        key=lambda p: (status_priority(p.status), last_refresh.get(p.id, EPOCH)),
    )


@dataclass
class RefreshPlan:
    total: int
    stale: List = field(default_factory=list)
    batch: List = field(default_factory=list)
    last_refresh: Dict[str, datetime] = field(default_factory=dict)


def plan_batch(prospects: List, log_entries: List, now: datetime,
               batch_size: int = REFRESH_BATCH_SIZE,
               staleness_hours: float = REFRESH_STALENESS_HOURS) -> RefreshPlan:
    last_refresh = latest_refresh_map(log_entries)
    stale = order_by_priority(filter_stale(prospects, last_refresh, now, staleness_hours), last_refresh)
    return RefreshPlan(
        total=len(prospects),
        stale=stale,
        batch=stale[:batch_size],
        last_refresh=last_refresh,
    )


def sort_by_relevance(items: List[CandidateItem]) -> List[CandidateItem]:
    """Highest relevance first; unscored items count as 0. Stable for ties."""
    return sorted(items, key=lambda i: i.relevance_score or 0, reverse=True)


# ── Execution ────────────────────────────────────────────────────────────────

class RefreshScheduler:
    """
    Runs one scheduled refresh batch.

    Collaborators are passed in so the trigger route, local preview and tests
    can each wire their own fetcher, log store and clock.
    """

    def __init__(
        self,
        fetcher: CandidateFetcher,
        refresh_log=None,
        batch_size: int = REFRESH_BATCH_SIZE,
        delay_seconds: float = REFRESH_DELAY_SECONDS,
        staleness_hours: float = REFRESH_STALENESS_HOURS,
        time_budget: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Optional[Callable[[], datetime]] = None,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self.fetcher = fetcher
        self.refresh_log = refresh_log if refresh_log is not None else RefreshLog()
        self.batch_size = batch_size
        self.delay_seconds = delay_seconds
        self.staleness_hours = staleness_hours
        self.time_budget = time_budget
        self._sleep = sleep
        self._clock = clock or utcnow
        self._monotonic = monotonic

    def plan(self) -> RefreshPlan:
        """Load roster and run log and pick this run's batch. Load errors propagate."""
        prospects = load_active_prospects()
        entries = self.refresh_log.load_all()
        return plan_batch(prospects, entries, self._clock(),
                          batch_size=self.batch_size, staleness_hours=self.staleness_hours)

    def run(self) -> RefreshSummary:
        started = self._monotonic()
        plan = self.plan()

        summary = RefreshSummary(
            total_prospects=plan.total,
            stale_prospects=len(plan.stale),
            batch_size=len(plan.batch),
        )
        logger.info("Processing %d of %d stale prospects (%d total)",
                    summary.batch_size, summary.stale_prospects, summary.total_prospects)

        for prospect in plan.batch:
            if self._out_of_time(started):
                logger.warning("Time budget of %ss nearly spent — stopping after %d of %d prospects",
                               self.time_budget, summary.processed, summary.batch_size)
                break

            outcome = self.refresh_prospect(prospect, source=REFRESH_SOURCE_CRON)
            summary.outcomes.append(outcome)
            summary.processed += 1
            summary.new_items += outcome.new_items
            if outcome.status == REFRESH_STATUS_ERROR:
                summary.errors += 1

            # Provider rate limit — applies after failures too
            self._sleep(self.delay_seconds)

        summary.timestamp = self._clock().isoformat()
        logger.info("Cron refresh complete — processed=%d, new_items=%d, errors=%d",
                    summary.processed, summary.new_items, summary.errors)
        return summary

    def refresh_prospect(self, prospect, source: str = REFRESH_SOURCE_CRON) -> ProspectOutcome:
        """
        Fetch, dedup and store intelligence for one prospect, then log the outcome.

        Never raises: fetch and persistence errors become an error log entry.
        items_found is the fetch yield, not the number of new rows.
        """
        context = {'prospect_id': prospect.id, 'source': source}
        logger.info("Scanning: %s", prospect.company, extra=context)
        items: List[CandidateItem] = []
        inserted = 0
        try:
            items = sort_by_relevance(self.fetcher.fetch(ProspectIdentity.from_prospect(prospect)) or [])
            if items:
                existing = load_existing_item_keys(prospect.id)
                fresh = dedup_candidates(items, existing)
                inserted = insert_intelligence_items(prospect.id, fresh)
                logger.info("%s — %d fetched, %d new", prospect.company, len(items), inserted,
                            extra={**context, 'status': REFRESH_STATUS_SUCCESS})
            self.refresh_log.upsert(prospect.id, source, REFRESH_STATUS_SUCCESS,
                                    items_found=len(items), refreshed_at=self._clock())
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.error("Error scanning %s: %s", prospect.company, message, exc_info=True,
                         extra={**context, 'status': REFRESH_STATUS_ERROR})
            self._record_error(prospect.id, source, message)
            return ProspectOutcome(
                prospect_id=prospect.id,
                status=REFRESH_STATUS_ERROR,
                new_items=inserted,
                error=message,
            )

        return ProspectOutcome(
            prospect_id=prospect.id,
            status=REFRESH_STATUS_SUCCESS,
            items_found=len(items),
            new_items=inserted,
        )

    def _record_error(self, prospect_id: str, source: str, message: str):
        try:
            self.refresh_log.upsert(prospect_id, source, REFRESH_STATUS_ERROR,
                                    items_found=0, error_message=message,
                                    refreshed_at=self._clock())
        except Exception:
            logger.error("Failed to write error log entry for prospect %s", prospect_id, exc_info=True)

    def _out_of_time(self, started: float) -> bool:
        if not self.time_budget:
            return False
        elapsed = self._monotonic() - started
        return elapsed + self.delay_seconds >= self.time_budget
