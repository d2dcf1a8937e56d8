import logging
import sys
from app.core.config import settings
import newrelic.agent

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def _build_formatter() -> logging.Formatter:
    # New Relic's formatter adds trace/entity metadata for Logs in Context
    if settings.new_relic_license_key:
        try:
            return newrelic.agent.NewRelicContextFormatter()
        except Exception:
            pass
    return logging.Formatter(LOG_FORMAT)

def setup_logging():
    """
    Configures the root logger for the booking backend.
    Safe to call more than once; previous handlers are replaced.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level.upper())

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter())
    root_logger.addHandler(handler)

    for noisy in ("uvicorn.access", "uvicorn.error", "httpx", "httpcore", "hpack"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
