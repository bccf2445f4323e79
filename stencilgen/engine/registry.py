from __future__ import annotations
import logging
from importlib.metadata import EntryPoint, entry_points
from typing import List

from ..core.exceptions import ExitCode
from ..core.utils import U
from .base import EngineFactory

ENTRY_POINT_GROUP = "stencilgen.engines"
DEFAULT_ENGINE_NAME = "default"


def installed_engines() -> List[EntryPoint]:
    return sorted(entry_points(group=ENTRY_POINT_GROUP), key=lambda ep: ep.name)


def load_engine_factory(logger: logging.Logger) -> EngineFactory:
    """
    Find the generation engine registered under the `stencilgen.engines`
    entry point group. An entry named "default" wins; otherwise the first by name.
    """
    found = installed_engines()
    if not found:
        U.die(logger, f"No generation engine installed (entry point group '{ENTRY_POINT_GROUP}').", ExitCode.OTHER)
    chosen = next((ep for ep in found if ep.name == DEFAULT_ENGINE_NAME), found[0])
    if len(found) > 1:
        logger.debug(f"Engines available: {', '.join(ep.name for ep in found)}; using '{chosen.name}'")
    try:
        factory = chosen.load()
    except Exception as e:
        U.die(logger, f"Failed to load generation engine '{chosen.name}': {e}", ExitCode.OTHER)
    logger.debug(f"Using generation engine '{chosen.name}' ({chosen.value})")
    return factory
