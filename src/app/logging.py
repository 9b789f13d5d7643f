"""Console logging for the CLI and the signal engine, rendered with rich."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.logging import RichHandler

_LEVEL_ENV: Final[str] = "INDIC_LOG_LEVEL"
_DEFAULT_LEVEL: Final[str] = "INFO"
_FORMAT: Final[str] = "%(message)s"
_DATE_FORMAT: Final[str] = "[%X]"

_configured: bool = False


def _resolve_level(level: str | None) -> int:
    """Turn a level name into a logging constant.

    Precedence: explicit argument, ``INDIC_LOG_LEVEL``, the ``log_level``
    config key, then INFO.  Unknown names fall back to INFO.
    """
    if level is None:
        level = os.environ.get(_LEVEL_ENV)
    if level is None:
        # Deferred import: config must stay importable without logging set up.
        from app.config import load_config

        level = str(load_config().get("log_level", _DEFAULT_LEVEL))
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(level: str | None = None, *, force: bool = False) -> None:
    """Attach a Rich console handler to the root logger.

    Only the first call has an effect unless *force* is set, in which case
    previously installed Rich handlers are replaced.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        force: Reconfigure even if logging was already set up.
    """
    global _configured
    if _configured and not force:
        return

    resolved_level = _resolve_level(level)
    root = logging.getLogger()

    if force:
        for existing in [h for h in root.handlers if isinstance(h, RichHandler)]:
            root.removeHandler(existing)

    handler = RichHandler(
        level=resolved_level,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
    )
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))

    root.setLevel(resolved_level)
    root.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a named logger, configuring logging on first use."""
    setup_logging()
    return logging.getLogger(name)
