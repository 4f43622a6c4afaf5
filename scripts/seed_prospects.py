#!/usr/bin/env python3
"""
Seed a demo prospect roster for exercising the scheduled refresh locally.

Covers the scheduling scenarios:
  1. Hot prospects never refreshed (scanned first)
  2. Prospects refreshed within the last 24h (skipped)
  3. Prospects refreshed days ago (eligible, older first within a status)
  4. Archived prospects (never scanned)
  5. Unknown status (sorted last)

Usage:
    python scripts/seed_prospects.py          # seed roster + refresh log
    python scripts/seed_prospects.py --clear  # wipe seeded data first

Requires: DATABASE_URL set (or defaults to sqlite:///local.db).
"""
import sys
import os
import argparse
from datetime import datetime, timezone, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from prospect_intel.config import REFRESH_SOURCE_CRON, REFRESH_STATUS_SUCCESS, REFRESH_STATUS_ERROR
from prospect_intel.database import get_session, init_db
from prospect_intel.models.prospect import Prospect
from prospect_intel.models.intelligence_item import IntelligenceItem
from prospect_intel.models.refresh_log import RefreshLogEntry, make_entry_id

SEED_PREFIX = 'seed-'

# (slug, company, status, type, country, website, archived, hours since last refresh or None, last status)
PROSPECTS = [
    ('mozzart',   'Mozzart Sport',        'Hot',               'Media',         'Serbia',   'https://www.mozzartsport.com', False, None, None),
    ('nova',      'Nova Media Group',     'Hot',               'Media',         'Croatia',  'https://nova.hr',              False, 72,   REFRESH_STATUS_SUCCESS),
    ('partizan',  'FK Partizan',          'Warm',              'Sports Club',   'Serbia',   'https://partizan.rs',          False, 30,   REFRESH_STATUS_ERROR),
    ('aba',       'ABA League',           'Warm',              'Sports League', 'Slovenia', 'https://www.aba-liga.com',     False, 6,    REFRESH_STATUS_SUCCESS),
    ('kurir',     'Kurir',                'Not contacted yet', 'Media',         'Serbia',   'https://www.kurir.rs',         False, None, None),
    ('ert',       'ERT',                  'Cold',              'Media',         'Greece',   'https://www.ert.gr',           False, 200,  REFRESH_STATUS_SUCCESS),
    ('dinamo',    'GNK Dinamo Zagreb',    'Lost',              'Sports Club',   'Croatia',  'https://gnkdinamo.hr',         False, 500,  REFRESH_STATUS_SUCCESS),
    ('rtl',       'RTL Hrvatska',         'Prospecting',       'Media',         'Croatia',  'https://www.rtl.hr',           False, None, None),
    ('oldco',     'Defunct Publishing',   'Cold',              'Media',         'Belgium',  None,                           True,  None, None),
]


def seed(session):
    now = datetime.now(timezone.utc)
    for slug, company, status, ptype, country, website, archived, hours_ago, last_status in PROSPECTS:
        prospect_id = f'{SEED_PREFIX}{slug}'
        session.merge(Prospect(
            id=prospect_id,
            company=company,
            status=status,
            prospect_type=ptype,
            country=country,
            website=website,
            archived=archived,
        ))
        if hours_ago is not None:
            session.merge(RefreshLogEntry(
                id=make_entry_id(prospect_id, REFRESH_SOURCE_CRON),
                prospect_id=prospect_id,
                source=REFRESH_SOURCE_CRON,
                last_refresh_at=now - timedelta(hours=hours_ago),
                status=last_status,
                items_found=0 if last_status == REFRESH_STATUS_ERROR else 3,
                error_message='Google News RSS returned 503' if last_status == REFRESH_STATUS_ERROR else None,
            ))
        print(f'  {status:<18} {company}')


def clear_seeded_data(session):
    """Remove seeded prospects and everything attached to them."""
    ids = [p.id for p in session.query(Prospect).filter(Prospect.id.like(f'{SEED_PREFIX}%')).all()]
    if not ids:
        print('No seeded data found.')
        return

    deleted_items = session.query(IntelligenceItem).filter(
        IntelligenceItem.prospect_id.in_(ids)).delete(synchronize_session=False)
    deleted_log = session.query(RefreshLogEntry).filter(
        RefreshLogEntry.prospect_id.in_(ids)).delete(synchronize_session=False)
    deleted = session.query(Prospect).filter(Prospect.id.in_(ids)).delete(synchronize_session=False)
    session.commit()
    print(f'Cleared {deleted} prospects, {deleted_items} items, {deleted_log} log entries.')


def main():
    parser = argparse.ArgumentParser(description='Seed a demo prospect roster')
    parser.add_argument('--clear', action='store_true', help='Clear seeded data before (or instead of) seeding')
    parser.add_argument('--clear-only', action='store_true', help='Only clear, do not re-seed')
    args = parser.parse_args()

    init_db()

    session = get_session()
    try:
        if args.clear or args.clear_only:
            clear_seeded_data(session)
            if args.clear_only:
                return

        print('Seeding prospects...')
        seed(session)
        session.commit()
        print('\nDone! Trigger a refresh with:')
        print('  curl -H "Authorization: Bearer $CRON_SECRET" http://localhost:8080/api/cron/refresh-intelligence')

    except Exception as e:
        session.rollback()
        print(f'Error: {e}')
        raise
    finally:
        session.close()


if __name__ == '__main__':
    main()
