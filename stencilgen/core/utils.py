from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, NoReturn, Union

from .exceptions import ExitCode, Fatal

PathLike = Union[str, Path]

class U:
    @staticmethod
    def die(logger: logging.Logger, msg: str, code: int = ExitCode.OTHER) -> NoReturn:
        logger.error(msg)
        raise Fatal(code, msg)
    @staticmethod
    def json_dump(obj: Any) -> str:
        try:
            return json.dumps(obj, indent=2, sort_keys=True, default=str)
        except Exception:
            return repr(obj)
    @staticmethod
    def is_readable(p: PathLike) -> bool:
        p = Path(p)
        return p.exists() and os.access(p, os.R_OK)
    @staticmethod
    def is_writable(p: PathLike) -> bool:
        """A path that does not exist yet counts as writable; the engine may create it."""
        p = Path(p)
        return not p.exists() or os.access(p, os.W_OK)
    @staticmethod
    def is_file_or_directory(p: PathLike) -> bool:
        p = Path(p)
        return p.is_file() or p.is_dir()
    @staticmethod
    def require_readable(logger: logging.Logger, p: PathLike) -> Path:
        if not U.is_readable(p):
            U.die(logger, f"'{p}' does not exist or is not readable.", ExitCode.INVALID_PATH)
        return Path(p)
    @staticmethod
    def require_file_or_directory(logger: logging.Logger, p: PathLike) -> Path:
        U.require_readable(logger, p)
        if not U.is_file_or_directory(p):
            U.die(logger, f"'{p}' isn't a directory or proper file.", ExitCode.INVALID_PATH)
        return Path(p)
    @staticmethod
    def require_writable(logger: logging.Logger, p: PathLike) -> Path:
        if not U.is_writable(p):
            U.die(logger, f"'{p}' isn't writable.", ExitCode.INVALID_PATH)
        return Path(p)
