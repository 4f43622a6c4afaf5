"""
Refresh routes — the scheduled cron trigger and a single-prospect refresh.

Both are authenticated with "Authorization: Bearer <CRON_SECRET>".
"""
import hmac
import logging
from flask import Blueprint, current_app, jsonify, request

from prospect_intel.config import REFRESH_SOURCE_MANUAL
from prospect_intel.refresh.scheduler import RefreshScheduler
from prospect_intel.services.db import get_prospect
from prospect_intel.services.notifications import notify_refresh_complete

logger = logging.getLogger('routes.cron')

bp = Blueprint('cron', __name__)


def _authorized() -> bool:
    secret = current_app.config.get('CRON_SECRET')
    if not secret:
        return False
    header = request.headers.get('Authorization', '')
    return hmac.compare_digest(header.encode(), f'Bearer {secret}'.encode())


def _build_scheduler() -> RefreshScheduler:
    cfg = current_app.config
    return RefreshScheduler(
        fetcher=current_app.extensions['intel_fetcher'],
        refresh_log=current_app.extensions.get('intel_refresh_log'),
        batch_size=cfg['REFRESH_BATCH_SIZE'],
        delay_seconds=cfg['REFRESH_DELAY_SECONDS'],
        staleness_hours=cfg['REFRESH_STALENESS_HOURS'],
        time_budget=cfg['REFRESH_MAX_DURATION_SECONDS'],
    )


@bp.route('/api/cron/refresh-intelligence', methods=['GET', 'POST'])
def refresh_intelligence():
    """Run one scheduled refresh batch and return its summary."""
    if not _authorized():
        return jsonify({'error': 'Unauthorized'}), 401

    logger.info("Starting scheduled intelligence refresh")
    try:
        summary = _build_scheduler().run()
    except Exception:
        logger.error("Cron refresh failed", exc_info=True)
        return jsonify({'error': 'Cron refresh failed'}), 500

    notify_refresh_complete(summary)
    return jsonify(summary.to_dict()), 200


@bp.route('/api/prospects/<prospect_id>/refresh-intelligence', methods=['POST'])
def refresh_single_prospect(prospect_id):
    """Refresh one prospect now, ignoring staleness and the batch delay."""
    if not _authorized():
        return jsonify({'error': 'Unauthorized'}), 401

    try:
        prospect = get_prospect(prospect_id)
    except Exception:
        logger.error("Failed to load prospect %s", prospect_id, exc_info=True)
        return jsonify({'error': 'Failed to load prospect'}), 500

    if prospect is None:
        return jsonify({'error': 'Prospect not found'}), 404

    outcome = _build_scheduler().refresh_prospect(prospect, source=REFRESH_SOURCE_MANUAL)
    return jsonify(outcome.to_dict()), 200


@bp.route('/health')
def health_check():
    """Health check endpoint."""
    return jsonify({'status': 'healthy'}), 200
