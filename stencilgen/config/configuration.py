from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

DEFAULT_DESCRIPTOR_NAME = ".stencilgen.yml"


def default_cache_base_path() -> Path:
    base = os.environ.get("XDG_CACHE_HOME")
    root = Path(base).expanduser() if base else Path.home() / ".cache"
    return root / "stencilgen"


@dataclass(frozen=True)
class Paths:
    """
    Include/exclude pair of locations (files or directories).

    Excludes narrow what the engine consumes, but still have to point at
    something readable, so validation walks `all_paths`.
    """
    include: List[Path] = field(default_factory=list)
    exclude: List[Path] = field(default_factory=list)

    @property
    def all_paths(self) -> List[Path]:
        return list(self.include) + list(self.exclude)

    @property
    def is_empty(self) -> bool:
        return not self.all_paths

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "include": [str(p) for p in self.include],
            "exclude": [str(p) for p in self.exclude],
        }


@dataclass(frozen=True)
class Configuration:
    """One generation job."""
    sources: Paths
    templates: Paths
    output: Optional[Path]
    cache_base_path: Path = field(default_factory=default_cache_base_path)
    force_parse: List[str] = field(default_factory=list)
    args: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sources": self.sources.to_dict(),
            "templates": self.templates.to_dict(),
            "output": str(self.output) if self.output is not None else None,
            "cache_base_path": str(self.cache_base_path),
            "force_parse": list(self.force_parse),
            "args": dict(self.args),
        }
