"""Shared test fixtures."""
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from prospect_intel.database import Base
from prospect_intel.refresh.base import CandidateFetcher, CandidateItem


NOW = datetime(2026, 3, 2, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine('sqlite:///:memory:')
    import prospect_intel.models.prospect
    import prospect_intel.models.intelligence_item
    import prospect_intel.models.refresh_log
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """SQLAlchemy session bound to in-memory SQLite. Rolls back after each test."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(autouse=True)
def patch_get_session(db_engine):
    """
    Route every get_session() call to the in-memory engine.

    Modules bind get_session at import time, so each importing module is
    patched as well as prospect_intel.database. Every call returns a fresh
    session so close() in production code doesn't affect the test session.
    Test setup data must be committed: production rollbacks share the
    single in-memory connection.
    """
    TestSession = sessionmaker(bind=db_engine)
    factory = lambda: TestSession()  # noqa: E731
    with patch('prospect_intel.database.get_session', side_effect=factory), \
            patch('prospect_intel.services.db.get_session', side_effect=factory), \
            patch('prospect_intel.refresh.run_log.get_session', side_effect=factory):
        yield TestSession


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_prospect(db_session):
    """Factory fixture — inserts and commits a Prospect row."""
    from prospect_intel.models.prospect import Prospect
    counter = {'n': 0}

    def _make(id, status='Hot', **overrides):
        counter['n'] += 1
        fields = dict(
            id=id,
            company=overrides.pop('company', f'Company {id}'),
            status=status,
            archived=False,
            website=None,
            prospect_type=None,
            country=None,
            linkedin_url=None,
            # Deterministic roster order
            created_at=NOW - timedelta(days=365) + timedelta(minutes=counter['n']),
        )
        fields.update(overrides)
        prospect = Prospect(**fields)
        db_session.add(prospect)
        db_session.commit()
        return prospect
    return _make


@pytest.fixture
def make_log_entry(db_session):
    """Factory fixture — inserts and commits a RefreshLogEntry row."""
    from prospect_intel.models.refresh_log import RefreshLogEntry, make_entry_id

    def _make(prospect_id, hours_ago, source='cron_daily', status='success', items_found=0):
        entry = RefreshLogEntry(
            id=make_entry_id(prospect_id, source),
            prospect_id=prospect_id,
            source=source,
            last_refresh_at=NOW - timedelta(hours=hours_ago),
            status=status,
            items_found=items_found,
        )
        db_session.add(entry)
        db_session.commit()
        return entry
    return _make


def candidate(title, url=None, score=None, **overrides):
    """Build a CandidateItem with sensible defaults."""
    return CandidateItem(title=title, url=url, relevance_score=score, **overrides)


@pytest.fixture
def make_candidate():
    return candidate


class FakeFetcher(CandidateFetcher):
    """
    Fetcher returning canned results per company name.

    A value that is an Exception instance is raised instead of returned.
    Calls are recorded in order on `.calls`.
    """
    name = 'fake'

    def __init__(self, results=None, default=None):
        self.results = results or {}
        self.default = default if default is not None else []
        self.calls = []

    def fetch(self, identity):
        self.calls.append(identity.company)
        result = self.results.get(identity.company, self.default)
        if isinstance(result, Exception):
            raise result
        return list(result)


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def app(fake_fetcher):
    """Flask test app wired with a fake fetcher and no inter-prospect delay."""
    from prospect_intel import create_app
    app = create_app(fetcher=fake_fetcher)
    app.config.update(
        TESTING=True,
        CRON_SECRET='test-secret',
        REFRESH_DELAY_SECONDS=0,
    )
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def auth_headers():
    return {'Authorization': 'Bearer test-secret'}
