"""Centralized logging configuration.

Applies the root level and per-category levels from Settings so that noisy
loggers (SQLAlchemy statement echo, pool chatter) can be tuned without
touching application loggers.

Usage:
    from board.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan or a script
"""
import logging
import sys

from board.config import settings

# Settings field -> logger names whose level it controls.
_CATEGORY_MAP: dict[str, list[str]] = {
    "LOG_LEVEL_SQL": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
}


def setup_logging() -> None:
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.LOG_LEVEL))

    # Uvicorn normally installs a handler; scripts and tests may not.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s - %(message)s")
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, sql=%s", settings.LOG_LEVEL, settings.LOG_LEVEL_SQL
    )


def _parse_level(raw: str) -> int:
    """Convert a level name to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
