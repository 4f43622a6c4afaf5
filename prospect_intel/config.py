"""
Centralized configuration — env vars, scheduler constants, status priorities.
"""
import os


# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── PostgreSQL ────────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')

# ── Auth ─────────────────────────────────────────────────────────────────────
# Pre-shared secret sent by the cron trigger as "Authorization: Bearer <secret>"
CRON_SECRET = os.getenv('CRON_SECRET')

# ── OpenAI ────────────────────────────────────────────────────────────────────
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')

# ── Slack notifications ──────────────────────────────────────────────────────
SLACK_WEBHOOK_URL = os.getenv('SLACK_WEBHOOK_URL')

# ── Local dev ────────────────────────────────────────────────────────────────
MOCK_FETCHER = os.getenv('MOCK_FETCHER')

# ── Scheduled refresh ────────────────────────────────────────────────────────
REFRESH_BATCH_SIZE = int(os.getenv('REFRESH_BATCH_SIZE', '10'))
REFRESH_DELAY_SECONDS = float(os.getenv('REFRESH_DELAY_SECONDS', '3'))
REFRESH_STALENESS_HOURS = float(os.getenv('REFRESH_STALENESS_HOURS', '24'))
REFRESH_MAX_DURATION_SECONDS = float(os.getenv('REFRESH_MAX_DURATION_SECONDS', '60'))

# Refresh log source tags — one log row per (prospect, source)
REFRESH_SOURCE_CRON = 'cron_daily'
REFRESH_SOURCE_MANUAL = 'manual'

REFRESH_STATUS_SUCCESS = 'success'
REFRESH_STATUS_ERROR = 'error'

# ── Prospect status priority (lower is scanned first) ────────────────────────
STATUS_PRIORITY = {
    'Hot': 1,
    'Warm': 2,
    'Not contacted yet': 3,
    'Cold': 4,
    'Lost': 5,
}
UNKNOWN_STATUS_PRIORITY = 99
