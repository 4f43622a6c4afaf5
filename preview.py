"""
Local preview server — runs the refresh service without external providers.

Uses the mock fetcher, a zero inter-prospect delay and a dev cron secret,
and seeds the demo roster into SQLite.

Usage: python preview.py
Then:  curl -H "Authorization: Bearer dev" http://localhost:5001/api/cron/refresh-intelligence
"""
import os
import sys

os.environ.setdefault('CRON_SECRET', 'dev')
os.environ.setdefault('REFRESH_DELAY_SECONDS', '0')

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'scripts'))

from prospect_intel import create_app
from prospect_intel.services.mock_fetcher import MockFetcher
from seed_prospects import seed
from prospect_intel.database import get_session, init_db

flask_app = create_app(fetcher=MockFetcher())

init_db()
session = get_session()
try:
    seed(session)
    session.commit()
finally:
    session.close()

if __name__ == '__main__':
    print("\n  Preview server running at http://localhost:5001\n")
    flask_app.run(host='0.0.0.0', port=5001, debug=True, use_reloader=False)
