# Pulse Helpers
# Utility functions used across the Pulse service

import logging
from datetime import datetime, timezone

from .config import LOG_FORMAT, LOG_LEVEL
from .exceptions import PulseError

logger = logging.getLogger(__name__)


def configure_logging(level=None):
    """Set up root logging once for the service"""
    logging.basicConfig(format=LOG_FORMAT, level=level or LOG_LEVEL)


def utc_now_iso():
    """Current UTC time as an ISO-8601 string"""
    return datetime.now(timezone.utc).isoformat()


def truncate(text, limit):
    """Cut text to at most `limit` characters"""
    if text is None:
        return None
    return text[:limit]


def strip_markdown_json(content):
    """Strip markdown code blocks from Claude's JSON response"""
    content = content.strip()
    if content.startswith('```'):
        # Remove first line (```json or ```)
        content = content.split('\n', 1)[1] if '\n' in content else content[3:]
    if content.endswith('```'):
        content = content.rsplit('```', 1)[0]
    return content.strip()


def error_response(error):
    """Translate an exception into a JSON body and HTTP status.

    Every handler goes through here so the status codes and body shape
    stay the same across routes. Server-side errors only ever expose
    their generic message; the detail goes to the log.

    Args:
        error: The exception raised while handling the request

    Returns:
        Tuple of ({'error': message}, status_code)
    """
    if isinstance(error, PulseError):
        if error.status_code >= 500:
            logger.error(f"{type(error).__name__}: {error}", exc_info=error)
        return {'error': error.public_message}, error.status_code

    logger.error(f"Unhandled error: {error!r}", exc_info=error)
    return {'error': 'Internal server error'}, 500
