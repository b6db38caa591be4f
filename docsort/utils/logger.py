"""Logging setup shared by the API, the CLI and the processing core."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PREVIEW_LENGTH = 200


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once with a stdout handler.

    Later calls are no-ops so the API and CLI can both call this safely.

    Args:
        level: Logging level name. Unknown names fall back to INFO.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    root.setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def preview(text: str, limit: int = PREVIEW_LENGTH) -> str:
    """Shorten OCR output to a single line for log messages.

    Args:
        text: Text to preview.
        limit: Maximum number of characters kept.

    Returns:
        The first ``limit`` characters with newlines replaced by spaces.
    """
    return text[:limit].replace("\r", " ").replace("\n", " ")
