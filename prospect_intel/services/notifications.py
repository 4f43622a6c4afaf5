"""
Notifications — Slack webhook integration for refresh runs.

Notification failure never fails the refresh.
"""
import logging
import requests

from prospect_intel.config import SLACK_WEBHOOK_URL

logger = logging.getLogger('services.notifications')


def notify_refresh_complete(summary, webhook_url=None):
    """Post a batch summary to Slack."""
    url = webhook_url or SLACK_WEBHOOK_URL
    if not url:
        return

    try:
        blocks = [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": "Intelligence Refresh Completed"},
            },
            {
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*Prospects:* {summary.total_prospects}"},
                    {"type": "mrkdwn", "text": f"*Stale:* {summary.stale_prospects}"},
                    {"type": "mrkdwn", "text": f"*Scanned:* {summary.processed}/{summary.batch_size}"},
                    {"type": "mrkdwn", "text": f"*New items:* {summary.new_items}"},
                    {"type": "mrkdwn", "text": f"*Errors:* {summary.errors}"},
                ],
            },
        ]

        failed = [o for o in summary.outcomes if o.error]
        if failed:
            lines = '\n'.join(f"• `{o.prospect_id}` — {o.error[:120]}" for o in failed[:5])
            blocks.append({"type": "section", "text": {"type": "mrkdwn", "text": lines}})

        requests.post(url, json={"blocks": blocks}, timeout=10)
        logger.info("Refresh summary notification sent")

    except Exception:
        logger.error("Failed to send refresh notification", exc_info=True)
