from __future__ import annotations

import os
from typing import Mapping, Optional, Sequence

from rich.console import Console

from .cli.argument_parser import parse_args
from .config.config_loader import ConfigLoader
from .core.exceptions import ExitCode, Fatal
from .core.logger import Log, LogSettings
from .core.utils import U
from .engine.base import EngineFactory
from .orchestrator.lifecycle import LifecycleManager
from .orchestrator.orchestrator import Orchestrator, RunContext


def run_cli(
    argv: Optional[Sequence[str]] = None,
    *,
    engine_factory: Optional[EngineFactory] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    args = parse_args(argv)
    log_settings = LogSettings.from_flags(
        quiet=args.quiet,
        verbose=args.verbose,
        log_ast=args.log_ast,
        log_benchmarks=args.log_benchmarks,
        log_file=args.log_file,
    )
    logger = Log.setup(log_settings)

    try:
        configurations = ConfigLoader(logger, args).resolve(args.config, os.environ if environ is None else environ)

        if args.dump_config:
            Console().print_json(U.json_dump([conf.to_dict() for conf in configurations]))
            return int(ExitCode.SUCCESS)

        context = RunContext.from_args(args, log_settings)
        handles = Orchestrator(logger, context, engine_factory).run(configurations)
        LifecycleManager(logger).finish(handles, context.start)
    except Fatal as e:
        # already logged where it was raised
        logger.debug(f"Exit details:\n{U.json_dump(e.to_dict(include_cause=True))}")
        return e.code
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C).")
        return 130
    return int(ExitCode.SUCCESS)


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
