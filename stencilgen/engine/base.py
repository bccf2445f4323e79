from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from ..config.configuration import Paths

# Opaque to the orchestration layer: whatever the engine hands back to keep a
# change subscription alive. Only its existence matters here.
WatcherHandle = Any


@dataclass(frozen=True)
class EngineSettings:
    verbose: bool = False
    watcher_enabled: bool = False
    cache_disabled: bool = False
    cache_base_path: Optional[Path] = None
    prune: bool = False
    arguments: Dict[str, Any] = field(default_factory=dict)
    ejs_path: Optional[Path] = None


class GenerationEngine(Protocol):
    def process_files(
        self,
        sources: Paths,
        templates: Paths,
        output: Optional[Path],
        force_parse: Sequence[str],
    ) -> Optional[List[WatcherHandle]]:
        """
        Run generation once. Returns None when done, or the watcher handles
        keeping watch mode alive. May raise anything.
        """
        ...


EngineFactory = Callable[[EngineSettings], GenerationEngine]
