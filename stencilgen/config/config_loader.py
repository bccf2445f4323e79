from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import List, Mapping, Optional, Union

from ..core.exceptions import DescriptorError, ExitCode
from ..core.utils import U
from . import descriptor
from .configuration import DEFAULT_DESCRIPTOR_NAME, Configuration
from .parameter_source import ParameterSource

# flags a descriptor replaces wholesale
_DESCRIPTOR_OWNED_FLAGS = ("sources", "exclude_sources", "templates", "exclude_templates", "force_parse", "args")


class ConfigLoader:
    """
    Decide between a descriptor file and the CLI flags.

    A descriptor is used verbatim when it exists; flags are never merged into
    it. Without one, the flags describe exactly one configuration.
    """

    def __init__(self, logger: logging.Logger, args: argparse.Namespace):
        self.logger = logger
        self.args = args

    @staticmethod
    def descriptor_path(config_path: Union[str, Path]) -> Path:
        p = Path(config_path).expanduser()
        return p / DEFAULT_DESCRIPTOR_NAME if p.is_dir() else p

    def has_descriptor_owned_flags(self) -> bool:
        if any(getattr(self.args, name, None) for name in _DESCRIPTOR_OWNED_FLAGS):
            return True
        return bool(getattr(self.args, "output", "") or "")

    def from_flags(self) -> Configuration:
        a = self.args
        return ParameterSource.build_from_flags(
            source_include=getattr(a, "sources", None),
            source_exclude=getattr(a, "exclude_sources", None),
            template_include=getattr(a, "templates", None),
            template_exclude=getattr(a, "exclude_templates", None),
            output=getattr(a, "output", ""),
            force_parse=getattr(a, "force_parse", None),
            raw_args=getattr(a, "args", None),
        )

    def resolve(self, config_path: Union[str, Path], environment: Optional[Mapping[str, str]] = None) -> List[Configuration]:
        config_path = Path(config_path).expanduser()
        yaml_path = self.descriptor_path(config_path)

        if not yaml_path.exists():
            self.logger.info("No config file provided or it does not exist. Using command line arguments.")
            return [self.from_flags()]

        U.require_file_or_directory(self.logger, config_path)
        U.require_readable(self.logger, yaml_path)

        relative_base = (config_path if config_path.is_dir() else config_path.parent).resolve()
        try:
            configurations = descriptor.load(yaml_path, relative_base, environment)
        except DescriptorError as e:
            U.die(self.logger, f"while reading .yml '{yaml_path}'. '{e}'", ExitCode.INVALID_CONFIG)

        if self.has_descriptor_owned_flags():
            self.logger.warning(f"Using configuration file at '{yaml_path}'. WARNING: Ignoring the parameters passed in the command line.")
        else:
            self.logger.info(f"Using configuration file at '{yaml_path}'")
        self.logger.debug(f"Loaded {len(configurations)} configuration(s):\n{U.json_dump([c.to_dict() for c in configurations])}")
        return configurations
