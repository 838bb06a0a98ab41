"""Logging setup shared by every Commit Digest module.

Logs always go to stderr: stdout is reserved for the commit message itself.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Final, TextIO


LOG_LEVEL_ENV_VAR: Final[str] = "COMMIT_DIGEST_LOG_LEVEL"

_REGISTERED_LOGGERS: set[logging.Logger] = set()

_DEFAULT_FORMAT: Final[str] = "%(message)s"
_RESET: Final[str] = "\033[0m"
_BOLD: Final[str] = "\033[1m"
_DIM: Final[str] = "\033[2m"


def _rgb_escape(red: int, green: int, blue: int) -> str:
    """Return the ANSI escape sequence for a 24-bit foreground color."""

    return f"\033[38;2;{red};{green};{blue}m"


@dataclass(frozen=True)
class _LevelStyle:
    """Styling information for a log level."""

    label: str
    color: str
    bold: bool = False
    dim: bool = False

    def render(self, message: str, logger_name: str, *, colored: bool) -> str:
        """Prefix *message* with level and module, adding ANSI styles when *colored*."""

        prefix = f"[{self.label}:{logger_name.rsplit('.', 1)[-1]}]"
        if not colored:
            return f"{prefix} {message}"

        modifiers = [_BOLD] if self.bold else []
        if self.dim:
            modifiers.append(_DIM)
        modifiers.append(self.color)

        return f"{''.join(modifiers)}{prefix} {message}{_RESET}"


_LEVEL_STYLES: Final[dict[int, _LevelStyle]] = {
    logging.DEBUG: _LevelStyle("DEBUG", _rgb_escape(150, 150, 150), dim=True),
    logging.INFO: _LevelStyle("INFO", _rgb_escape(95, 175, 255)),
    logging.WARNING: _LevelStyle("WARN", _rgb_escape(255, 200, 80), bold=True),
    logging.ERROR: _LevelStyle("ERROR", _rgb_escape(255, 95, 95), bold=True),
    logging.CRITICAL: _LevelStyle("FATAL", _rgb_escape(255, 60, 140), bold=True),
}


class _DigestFormatter(logging.Formatter):
    """Formatter adding a short level/module prefix to every record."""

    def __init__(self, stream: TextIO) -> None:
        super().__init__(_DEFAULT_FORMAT)
        self._stream = stream

    def _colored(self) -> bool:
        if os.getenv("NO_COLOR"):
            return False
        isatty = getattr(self._stream, "isatty", None)
        return bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        style = _LEVEL_STYLES.get(record.levelno)
        if not style:
            return message

        return style.render(message, record.name, colored=self._colored())


def _parse_level(level_name: str | None) -> int | None:
    """Translate a level name such as ``debug`` into a logging constant."""

    if not level_name:
        return None

    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else None


def commit_digest_logger(name: str) -> logging.Logger:
    """Return a logger writing prefixed records to stderr."""

    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_DigestFormatter(sys.stderr))
        logger.addHandler(handler)

    env_level = _parse_level(os.getenv(LOG_LEVEL_ENV_VAR))
    if env_level is not None:
        logger.setLevel(env_level)

    _REGISTERED_LOGGERS.add(logger)
    return logger


def set_commit_digest_log_level(level_name: str) -> None:
    """Set the log level for all Commit Digest loggers, current and future."""

    level = _parse_level(level_name)
    if level is None:
        raise ValueError(f"Unknown log level: {level_name}")

    os.environ[LOG_LEVEL_ENV_VAR] = level_name
    for logger in _REGISTERED_LOGGERS:
        logger.setLevel(level)
