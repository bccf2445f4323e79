from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .annotations import parse_annotation_line
from .configuration import Configuration, Paths, default_cache_base_path

PathArg = Union[str, Path]


def _paths(items: Optional[Iterable[PathArg]]) -> list:
    return [Path(p).expanduser() for p in (items or [])]


class ParameterSource:
    """Transcribes CLI flags into exactly one Configuration. No filesystem access."""

    @staticmethod
    def build_from_flags(
        source_include: Optional[Sequence[PathArg]] = None,
        source_exclude: Optional[Sequence[PathArg]] = None,
        template_include: Optional[Sequence[PathArg]] = None,
        template_exclude: Optional[Sequence[PathArg]] = None,
        output: Optional[PathArg] = None,
        force_parse: Optional[Sequence[str]] = None,
        raw_args: Optional[Sequence[str]] = None,
    ) -> Configuration:
        arguments = parse_annotation_line(",".join(raw_args or []))
        out = str(output) if output is not None else ""
        return Configuration(
            sources=Paths(include=_paths(source_include), exclude=_paths(source_exclude)),
            templates=Paths(include=_paths(template_include), exclude=_paths(template_exclude)),
            output=Path(out).expanduser() if out else Path("."),
            cache_base_path=default_cache_base_path(),
            force_parse=list(force_parse or []),
            args=arguments,
        )
