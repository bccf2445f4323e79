from __future__ import annotations
import logging

from ..config.configuration import Configuration
from .exceptions import ExitCode
from .utils import U


class ConfigValidator:
    """
    Eager filesystem checks for one configuration.

    Check order is fixed; it decides which message the user sees first.
    Any violation logs and raises Fatal with the matching exit code.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def check_sources_present(self, conf: Configuration) -> None:
        if conf.sources.is_empty:
            U.die(self.logger, "No sources provided.", ExitCode.INVALID_CONFIG)

    def check_sources_readable(self, conf: Configuration) -> None:
        for p in conf.sources.all_paths:
            U.require_readable(self.logger, p)

    def check_templates_readable(self, conf: Configuration) -> None:
        for p in conf.templates.all_paths:
            U.require_readable(self.logger, p)

    def check_templates_present(self, conf: Configuration) -> None:
        if conf.templates.is_empty:
            U.die(self.logger, "No templates provided.", ExitCode.INVALID_CONFIG)

    def check_output_writable(self, conf: Configuration) -> None:
        if conf.output is not None and str(conf.output):
            U.require_writable(self.logger, conf.output)

    def validate(self, conf: Configuration) -> None:
        checks = [
            self.check_sources_present,
            self.check_sources_readable,
            self.check_templates_readable,
            self.check_templates_present,
            self.check_output_writable,
        ]
        for check in checks:
            check(conf)
        self.logger.debug("Configuration checks passed.")
