from __future__ import annotations
import datetime as _dt
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from termcolor import colored as _colored

LOGGER_NAME = "stencilgen"
AST_LOGGER_NAME = f"{LOGGER_NAME}.ast"
BENCHMARK_LOGGER_NAME = f"{LOGGER_NAME}.benchmark"

_LEVEL_EMOJI = {
    "DEBUG": "🔍",
    "INFO": "✅",
    "WARNING": "⚠️",
    "ERROR": "💥",
    "CRITICAL": "🧨",
}
_LEVEL_COLOR = {
    "DEBUG": "blue",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red",
}
def c(text: str, color: Optional[str] = None, attrs: Optional[List[str]] = None) -> str:
    """Colorize text with termcolor (no-op without a color)."""
    if not color:
        return text
    try:
        return _colored(text, color=color, attrs=attrs or [])
    except Exception:
        return text
class EmojiFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = _dt.datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        emoji = _LEVEL_EMOJI.get(record.levelname, "•")
        lvl = c(record.levelname, _LEVEL_COLOR.get(record.levelname))
        msg = record.getMessage()
        if record.levelno >= logging.WARNING:
            msg = c(msg, _LEVEL_COLOR.get(record.levelname), attrs=["bold"])
        return f"{ts} {emoji} {lvl:<8} {msg}"
@dataclass(frozen=True)
class LogSettings:
    """Process-wide verbosity, decided once from the CLI flags."""
    level: int = logging.INFO
    log_ast: bool = False
    log_benchmarks: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_flags(
        cls,
        *,
        quiet: bool = False,
        verbose: bool = False,
        log_ast: bool = False,
        log_benchmarks: bool = False,
        log_file: Optional[str] = None,
    ) -> "LogSettings":
        # quiet beats verbose beats the informational default
        if quiet:
            level = logging.ERROR
        elif verbose:
            level = logging.DEBUG
        else:
            level = logging.INFO
        return cls(
            level=level,
            log_ast=(verbose or log_ast) and not quiet,
            log_benchmarks=(verbose or log_benchmarks) and not quiet,
            log_file=log_file,
        )

    @property
    def verbose(self) -> bool:
        return self.level <= logging.DEBUG
class Log:
    @staticmethod
    def setup(settings: LogSettings) -> logging.Logger:
        logger = logging.getLogger(LOGGER_NAME)
        logger.handlers.clear()
        logger.propagate = False
        logger.setLevel(settings.level)
        fmt = EmojiFormatter()
        sh = logging.StreamHandler()
        sh.setLevel(settings.level)
        sh.setFormatter(fmt)
        logger.addHandler(sh)
        if settings.log_file:
            fp = Path(settings.log_file).expanduser().resolve()
            fp.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(fp, encoding="utf-8")
            fh.setLevel(settings.level)
            fh.setFormatter(fmt)
            logger.addHandler(fh)
        # AST/benchmark channels log at INFO so they survive the default level
        for name, enabled in ((AST_LOGGER_NAME, settings.log_ast), (BENCHMARK_LOGGER_NAME, settings.log_benchmarks)):
            child = logging.getLogger(name)
            child.disabled = not enabled
            child.setLevel(logging.INFO if enabled else logging.CRITICAL + 1)
        logger.debug("Logger initialized")
        return logger
    @staticmethod
    def ast() -> logging.Logger:
        return logging.getLogger(AST_LOGGER_NAME)
    @staticmethod
    def benchmark() -> logging.Logger:
        return logging.getLogger(BENCHMARK_LOGGER_NAME)
