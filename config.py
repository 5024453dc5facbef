"""Application configuration — environment variables and derived constants.

Loads ``BOT_TOKEN``, ``API_HOST``, ``REQUEST_TIMEOUT``, ``PROXY_URL`` and
``LOG_LEVEL`` from the environment via ``python-dotenv``.  All values are
resolved at import time so other modules can ``from config import …``
without repeated lookups.
"""

# ── stdlib ───────────────────────────────────────────────────────────────────
import logging
import os

# ── third-party ──────────────────────────────────────────────────────────────
from dotenv import load_dotenv

# ── core ─────────────────────────────────────────────────────────────────────
from core.logger import TelebindLogger

# ── Environment bootstrap ────────────────────────────────────────────────────
load_dotenv()


# ── Helper functions (private) ───────────────────────────────────────────────


def _parse_log_level(raw: str | None) -> int:
    """Map a level name such as ``"DEBUG"`` to its numeric value (INFO if unknown)."""
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _parse_timeout(raw: str | None, default: int = 10) -> int:
    """Parse a positive integer number of seconds, falling back to *default*."""
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


# ── Public constants ─────────────────────────────────────────────────────────

LOG_LEVEL: int = _parse_log_level(os.environ.get("LOG_LEVEL"))
BOT_TOKEN: str | None = os.environ.get("BOT_TOKEN")
API_HOST: str = (os.environ.get("API_HOST") or "https://api.telegram.org").rstrip("/")
REQUEST_TIMEOUT: int = _parse_timeout(os.environ.get("REQUEST_TIMEOUT"))
PROXY_URL: str | None = os.environ.get("PROXY_URL") or None


# ── Logger (used for startup diagnostics at the bottom of this module) ───────
logger = TelebindLogger.get_logger(LOG_LEVEL)


# ── Startup diagnostics ─────────────────────────────────────────────────────

if BOT_TOKEN:
    logger.info("Config loaded — BOT_TOKEN is set", extra={"api_host": API_HOST})
else:
    logger.warning("Config loaded — BOT_TOKEN is NOT set")

if os.environ.get("REQUEST_TIMEOUT") and str(REQUEST_TIMEOUT) != os.environ["REQUEST_TIMEOUT"].strip():
    logger.warning("Invalid REQUEST_TIMEOUT, using default", extra={"request_timeout": REQUEST_TIMEOUT})

if PROXY_URL:
    logger.info("Requests will be sent through a proxy")
