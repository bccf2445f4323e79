# stencilgen/core/exceptions.py
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_PATH = 1     # unreadable input / unwritable output
    INVALID_CONFIG = 2   # empty sources/templates, malformed descriptor
    OTHER = 3            # anything raised while generating


def _safe_int(x: Any, default: int = 1) -> int:
    try:
        return int(x)
    except Exception:
        return default


def _one_line(s: str, limit: int = 600) -> str:
    s = (s or "").strip().replace("\r", " ").replace("\n", " ")
    s = " ".join(s.split())
    return s if len(s) <= limit else (s[: limit - 3] + "...")


@dataclass(eq=False)
class StencilgenError(Exception):
    """
    Base project error with:
      - an exit code the top-level main() honours
      - readable __str__ (what users see)
      - optional cause/context for verbose output
    """
    code: int = ExitCode.OTHER
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _safe_int(self.code, default=int(ExitCode.OTHER))
        self.msg = _one_line(self.msg)
        super().__init__(self.msg)

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        base = self.msg or self.__class__.__name__

        parts = [base]

        if include_context and self.context:
            kv = ", ".join(f"{k}={self.context[k]!r}" for k in sorted(self.context.keys()))
            parts.append(f"[{kv}]")

        if include_cause and self.cause is not None:
            parts.append(f"(cause: {type(self.cause).__name__}: {_one_line(str(self.cause))})")

        return " ".join(parts)

    def __str__(self) -> str:
        return self.user_message(include_context=False, include_cause=False)

    def to_dict(self, *, include_cause: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "code": self.code,
            "message": self.msg,
            "context": self.context or {},
        }
        if include_cause and self.cause is not None:
            d["cause"] = {"type": type(self.cause).__name__, "message": _one_line(str(self.cause))}
        return d


class Fatal(StencilgenError):
    """
    User-facing fatal error (exit code should be honored by top-level main()).
    """
    pass


@dataclass(eq=False)
class DescriptorError(StencilgenError):
    """
    Descriptor file could not be turned into configurations.
    """
    code: int = ExitCode.INVALID_CONFIG


class EngineError(StencilgenError):
    """
    Generation engine failed while processing a configuration.
    Engines may raise this; any other exception is treated the same way.
    """
    pass


def format_exception_for_cli(e: BaseException, *, verbose: bool = False) -> str:
    """
    One-liner output for CLI.

    verbose=False: just message
    verbose=True: message + context + cause
    """
    if isinstance(e, StencilgenError):
        return e.user_message(include_context=verbose, include_cause=verbose)

    if verbose:
        return f"{type(e).__name__}: {_one_line(str(e))}"
    return _one_line(str(e)) or type(e).__name__
