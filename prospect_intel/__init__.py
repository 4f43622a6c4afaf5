"""
Flask application factory.

Creates and configures the app, wires the intelligence fetcher and registers
blueprints.
"""
import importlib
import logging

from flask import Flask

logger = logging.getLogger('prospect_intel')


def build_fetcher():
    """Production fetcher: company news + industry news, AI-scored when OpenAI is configured."""
    from prospect_intel.config import MOCK_FETCHER, OPENAI_API_KEY, OPENAI_MODEL

    if MOCK_FETCHER:
        from prospect_intel.services.mock_fetcher import MockFetcher
        logger.info("MOCK_FETCHER active — using canned intelligence")
        return MockFetcher()

    from prospect_intel.services.news import CompositeFetcher, GoogleNewsFetcher, IndustryNewsFetcher
    from prospect_intel.services.openai_client import RelevanceScorer, make_openai_client

    client = make_openai_client(OPENAI_API_KEY)
    scorer = RelevanceScorer(client, model=OPENAI_MODEL) if client is not None else None
    return CompositeFetcher(
        primary=GoogleNewsFetcher(scorer=scorer),
        secondary=[IndustryNewsFetcher(scorer=scorer)],
    )


def create_app(fetcher=None, refresh_log=None):
    """Create and configure the Flask application."""
    from prospect_intel import config
    from prospect_intel.logging_config import configure_logging

    app = Flask(__name__)

    configure_logging(app)

    app.config.update(
        CRON_SECRET=config.CRON_SECRET,
        REFRESH_BATCH_SIZE=config.REFRESH_BATCH_SIZE,
        REFRESH_DELAY_SECONDS=config.REFRESH_DELAY_SECONDS,
        REFRESH_STALENESS_HOURS=config.REFRESH_STALENESS_HOURS,
        REFRESH_MAX_DURATION_SECONDS=config.REFRESH_MAX_DURATION_SECONDS,
    )

    app.extensions['intel_fetcher'] = fetcher if fetcher is not None else build_fetcher()
    # None → database-backed RefreshLog, built per request
    app.extensions['intel_refresh_log'] = refresh_log

    from prospect_intel.routes.cron import bp as cron_bp
    app.register_blueprint(cron_bp)

    # Import models so Base.metadata knows about them.
    # Schema is managed by Alembic — no create_all() call.
    importlib.import_module('prospect_intel.models.prospect')
    importlib.import_module('prospect_intel.models.intelligence_item')
    importlib.import_module('prospect_intel.models.refresh_log')

    return app
