from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..config.configuration import Configuration
from ..core.exceptions import ExitCode, Fatal, format_exception_for_cli
from ..core.logger import LogSettings
from ..core.validator import ConfigValidator
from ..engine.base import EngineFactory, EngineSettings, WatcherHandle
from ..engine.registry import load_engine_factory


def resolve_ejs_path(ejs_path: Optional[str], argv0: Optional[str] = None) -> Path:
    """Explicit --ejsPath wins; otherwise ejs.js next to the executable."""
    if ejs_path:
        return Path(ejs_path).expanduser()
    exe = argv0 if argv0 is not None else (sys.argv[0] if sys.argv else "")
    return Path(exe).parent / "ejs.js"


@dataclass
class RunContext:
    """
    Per-invocation state: when we started, the engine flags, and every
    watcher handle collected so far (in configuration order).
    """
    log: LogSettings
    verbose: bool = False
    watcher_enabled: bool = False
    cache_disabled: bool = False
    prune: bool = False
    ejs_path: Optional[Path] = None
    start: float = field(default_factory=time.monotonic)
    keep_alive: List[WatcherHandle] = field(default_factory=list)

    @classmethod
    def from_args(cls, args: argparse.Namespace, log: LogSettings) -> "RunContext":
        return cls(
            log=log,
            verbose=bool(getattr(args, "verbose", False)),
            watcher_enabled=bool(getattr(args, "watch", False)),
            cache_disabled=bool(getattr(args, "disable_cache", False)),
            prune=bool(getattr(args, "prune", False)),
            ejs_path=resolve_ejs_path(getattr(args, "ejs_path", "")),
        )

    def engine_settings(self, conf: Configuration) -> EngineSettings:
        return EngineSettings(
            verbose=self.verbose,
            watcher_enabled=self.watcher_enabled,
            cache_disabled=self.cache_disabled,
            cache_base_path=conf.cache_base_path,
            prune=self.prune,
            arguments=dict(conf.args),
            ejs_path=self.ejs_path,
        )


class Orchestrator:
    """
    Drives the generation engine once per configuration, strictly in order.

    Fail-fast: the first configuration that fails validation or blows up in
    the engine ends the whole batch. No rollback of earlier configurations.
    """

    def __init__(
        self,
        logger: logging.Logger,
        context: RunContext,
        engine_factory: Optional[EngineFactory] = None,
        validator: Optional[ConfigValidator] = None,
    ):
        self.logger = logger
        self.context = context
        self.engine_factory = engine_factory
        self.validator = validator or ConfigValidator(logger)

    def _factory(self) -> EngineFactory:
        if self.engine_factory is None:
            self.engine_factory = load_engine_factory(self.logger)
        return self.engine_factory

    def run_one(self, index: int, conf: Configuration) -> List[WatcherHandle]:
        self.validator.validate(conf)
        factory = self._factory()
        self.logger.debug(f"Processing configuration #{index + 1}: output={conf.output}")
        try:
            engine = factory(self.context.engine_settings(conf))
            handles = engine.process_files(conf.sources, conf.templates, conf.output, list(conf.force_parse))
        except Exception as e:
            msg = format_exception_for_cli(e, verbose=self.context.log.verbose)
            self.logger.error(msg)
            raise Fatal(code=ExitCode.OTHER, msg=msg, cause=e, context={"configuration": index})
        return list(handles or [])

    def run(self, configurations: Sequence[Configuration]) -> List[WatcherHandle]:
        for i, conf in enumerate(configurations):
            handles = self.run_one(i, conf)
            if handles:
                self.logger.debug(f"Configuration #{i + 1} is watching ({len(handles)} handle(s))")
            self.context.keep_alive.extend(handles)
        return self.context.keep_alive
