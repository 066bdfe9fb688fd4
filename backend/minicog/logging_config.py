"""Logging setup for the console runner."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at process start.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ...)

    Raises:
        ValueError: If level is not a known level name
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: '{level}'")
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=True)

    # Keep HTTP client chatter out of the test transcript
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))
    logging.getLogger("httpcore").setLevel(max(numeric_level, logging.WARNING))
