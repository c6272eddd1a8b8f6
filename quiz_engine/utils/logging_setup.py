from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Iterable, Optional

FILE_HANDLER_NAME = "quiz_engine_file_handler"
DEFAULT_FILE_LOGGERS = ("quiz_engine", "uvicorn.error")
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def resolve_log_path(log_file_path: str) -> Optional[Path]:
    """Relative paths are taken from the repo root, not the process cwd."""
    if not log_file_path:
        return None
    path = Path(log_file_path)
    if path.is_absolute():
        return path
    return Path(__file__).resolve().parents[2] / path


def _find_file_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    return next((h for h in logger.handlers if h.name == FILE_HANDLER_NAME), None)


def setup_file_logging(
    *,
    log_file_path: str,
    level: int,
    logger_names: Iterable[str] = DEFAULT_FILE_LOGGERS,
    backup_days: int = 14,
) -> Optional[logging.Handler]:
    """
    Route the given loggers into one daily-rotating file.

    All loggers share a single handler so only one object ever rotates the
    file. Loggers that already carry it are left alone, which makes repeated
    calls (app reloads, tests) harmless. Returns the handler, or None when no
    path is configured.
    """
    path = resolve_log_path(log_file_path)
    if path is None:
        return None
    path.parent.mkdir(parents=True, exist_ok=True)

    handler: Optional[logging.Handler] = None
    for name in logger_names:
        logger = logging.getLogger(name)
        existing = _find_file_handler(logger)
        if existing is not None:
            handler = handler or existing
            continue
        if handler is None:
            handler = TimedRotatingFileHandler(
                filename=str(path), when="midnight", backupCount=backup_days, encoding="utf-8"
            )
            handler.name = FILE_HANDLER_NAME
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        if logger.level == logging.NOTSET or logger.level > level:
            logger.setLevel(level)
        # Once the file handler is attached, skip root to avoid double lines.
        logger.propagate = False
    return handler


def silence_noisy_loggers(names: Iterable[str] = ("uvicorn.access",)) -> None:
    """Per-request access lines add nothing next to the request-id middleware."""
    for name in names:
        logging.getLogger(name).setLevel(logging.WARNING)
