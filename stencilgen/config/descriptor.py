from __future__ import annotations

import re
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

import yaml

from ..core.exceptions import DescriptorError
from .configuration import Configuration, Paths, default_cache_base_path

ENV_REF_RE = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)\}")

# accepted spellings for the same key
_CACHE_KEYS = ("cacheBasePath", "cache-base-path", "cache_base_path")
_FORCE_PARSE_KEYS = ("force-parse", "forceParse", "force_parse")


def substitute_env(text: str, env: Mapping[str, str]) -> str:
    """Replace ${NAME} with env[NAME]; unknown names become empty strings."""
    return ENV_REF_RE.sub(lambda m: env.get(m.group("name"), ""), text)


def _first(block: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for k in keys:
        if k in block:
            return block[k]
    return None


def _resolve(base: Path, raw: Any, where: str) -> Path:
    if not isinstance(raw, (str, int, float)) or isinstance(raw, bool):
        raise DescriptorError(msg=f"{where}: expected a path string, got {type(raw).__name__}")
    p = Path(str(raw)).expanduser()
    return p if p.is_absolute() else base / p


def _path_list(base: Path, raw: Any, where: str) -> List[Path]:
    if raw is None:
        return []
    if isinstance(raw, (str, Path)):
        raw = [raw]
    if not isinstance(raw, list):
        raise DescriptorError(msg=f"{where}: expected a list of paths")
    return [_resolve(base, item, where) for item in raw]


def _parse_paths(base: Path, raw: Any, key: str, where: str) -> Paths:
    if raw is None:
        raise DescriptorError(msg=f"{where}: no {key} provided")
    if isinstance(raw, dict):
        unknown = set(raw) - {"include", "exclude"}
        if unknown:
            raise DescriptorError(msg=f"{where}: unknown keys in {key}: {', '.join(sorted(map(str, unknown)))}")
        paths = Paths(
            include=_path_list(base, raw.get("include"), f"{where}.{key}.include"),
            exclude=_path_list(base, raw.get("exclude"), f"{where}.{key}.exclude"),
        )
    else:
        paths = Paths(include=_path_list(base, raw, f"{where}.{key}"))
    if paths.is_empty:
        raise DescriptorError(msg=f"{where}: no {key} provided")
    return paths


def _parse_output(base: Path, raw: Any, where: str) -> Path:
    if isinstance(raw, dict):
        raw = raw.get("path")
    if raw is None or raw == "":
        raise DescriptorError(msg=f"{where}: no output provided")
    return _resolve(base, raw, f"{where}.output")


def _parse_block(base: Path, block: Any, where: str) -> Configuration:
    if not isinstance(block, dict):
        raise DescriptorError(msg=f"{where}: configuration must be a mapping")

    cache_raw = _first(block, _CACHE_KEYS)
    cache_base = _resolve(base, cache_raw, f"{where}.cacheBasePath") if cache_raw else default_cache_base_path()

    force_parse = _first(block, _FORCE_PARSE_KEYS) or []
    if isinstance(force_parse, str):
        force_parse = [force_parse]
    if not isinstance(force_parse, list):
        raise DescriptorError(msg=f"{where}: force-parse must be a list of extensions")

    args = block.get("args") or {}
    if not isinstance(args, dict):
        raise DescriptorError(msg=f"{where}: args must be a mapping")

    return Configuration(
        sources=_parse_paths(base, block.get("sources"), "sources", where),
        templates=_parse_paths(base, block.get("templates"), "templates", where),
        output=_parse_output(base, block.get("output"), where),
        cache_base_path=cache_base,
        force_parse=[str(x) for x in force_parse],
        args={str(k): v for k, v in args.items()},
    )


def parse(text: str, relative_base: Union[str, Path], env: Optional[Mapping[str, str]] = None) -> List[Configuration]:
    """
    Turn descriptor text into configurations.

    Pure: the only inputs are the raw text, the directory relative paths are
    joined to, and the environment used for ${NAME} interpolation.
    Raises DescriptorError on anything that isn't a usable descriptor.
    """
    base = Path(relative_base)
    expanded = substitute_env(text, env or {})
    try:
        data = yaml.safe_load(expanded)
    except yaml.YAMLError as e:
        raise DescriptorError(msg=f"Invalid YAML: {e}", cause=e)
    if data is None:
        raise DescriptorError(msg="Descriptor is empty")
    if not isinstance(data, dict):
        raise DescriptorError(msg="Descriptor must be a mapping")

    if "configurations" not in data:
        return [_parse_block(base, data, "configuration")]

    blocks = data["configurations"]
    if not isinstance(blocks, list) or not blocks:
        raise DescriptorError(msg="'configurations' must be a non-empty list")
    return [_parse_block(base, b, f"configurations[{i}]") for i, b in enumerate(blocks)]


def load(path: Union[str, Path], relative_base: Union[str, Path], env: Optional[Mapping[str, str]] = None) -> List[Configuration]:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DescriptorError(msg=f"Failed to read {p}: {e}", cause=e)
    return parse(text, relative_base, env)
