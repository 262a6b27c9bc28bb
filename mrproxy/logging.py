"""Logging setup for the service.

Everything mrproxy logs lives under the ``mrproxy`` logger; HTTP access
lines go to ``mrproxy.access`` at DEBUG and are shown only at DEBUG level
or when ``logging.access_log`` is enabled. urllib3 connection chatter from
the GitLab client is held at WARNING unless DEBUG is requested.
"""

import logging

from mrproxy.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ACCESS_LOGGER = "mrproxy.access"


def _resolve_level(level: str) -> int:
    """Map level name to logging constant; unknown names mean INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


def setup_logging(config: LoggingConfig) -> None:
    """Install the root handler and set levels for mrproxy and its client."""
    level = _resolve_level(config.level)
    logging.basicConfig(level=level, format=config.format or DEFAULT_FORMAT, force=True)

    logging.getLogger("mrproxy").setLevel(level)
    logging.getLogger(ACCESS_LOGGER).setLevel(logging.DEBUG if config.access_log else logging.NOTSET)
    logging.getLogger("urllib3").setLevel(level if level == logging.DEBUG else logging.WARNING)
