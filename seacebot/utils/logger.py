from __future__ import annotations
# seacebot/utils/logger.py
#
# One "seacebot" logger for the process. Concurrent export runs share it, so
# every component logs through a RunLogger that stamps the run id onto each
# line; grep "[<run id>]" to follow one run.
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

LOGGER_NAME = "seacebot"

# third-party loggers held at WARNING unless <NAME>_LOG_LEVEL says otherwise
NOISY_LOGGERS = ("playwright", "werkzeug", "asyncio", "urllib3")


def _level(name: Optional[str], default: str = "INFO") -> int:
    return getattr(logging, (name or default).upper(), logging.INFO)


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt=os.getenv("LOG_FORMAT", "[%(asctime)s] %(levelname)s %(name)s %(message)s"),
        datefmt=os.getenv("LOG_DATEFMT", "%Y-%m-%d %H:%M:%S"),
    )


def _file_handler(path: str) -> RotatingFileHandler:
    log_dir = os.path.dirname(path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(os.getenv("LOG_FILE_MAX_BYTES", str(5 * 1024 * 1024))),
        backupCount=int(os.getenv("LOG_FILE_BACKUP_COUNT", "3")),
        encoding="utf-8",
    )


def _quiet(name: str, default: str = "WARNING") -> None:
    env = os.getenv(f"{name.upper().replace('.', '_')}_LOG_LEVEL", default)
    logging.getLogger(name).setLevel(_level(env, default))


def _build_logger() -> logging.Logger:
    level = _level(os.getenv("LOG_LEVEL"))

    log = logging.getLogger(LOGGER_NAME)
    if log.handlers:
        return log
    log.setLevel(level)

    handlers = [logging.StreamHandler(sys.stdout)]
    log_file = os.getenv("LOG_FILE", "").strip()
    if log_file:
        handlers.append(_file_handler(log_file))

    fmt = _formatter()
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
        log.addHandler(h)

    for noisy in NOISY_LOGGERS:
        _quiet(noisy)

    return log


class RunLogger(logging.LoggerAdapter):
    """Prefixes every message with ``[run_id]``."""

    def process(self, msg, kwargs):
        return f"[{self.extra['run_id']}] {msg}", kwargs


Log = Union[logging.Logger, logging.LoggerAdapter]


def get_run_logger(run_id: str) -> RunLogger:
    return RunLogger(logger, {"run_id": run_id})


logger = _build_logger()
