from __future__ import annotations

from typing import Any, Dict


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_annotation_line(line: str) -> Dict[str, Any]:
    """
    Parse `key=value` fragments separated by commas into a mapping.

      "name = Foo, flag, tag=a, tag=b"  ->  {"name": "Foo", "flag": "true", "tag": ["a", "b"]}

    A bare key means "true". Repeated keys collect into a list, in order.
    Malformed fragments are skipped; this never raises.
    """
    out: Dict[str, Any] = {}
    for fragment in (line or "").split(","):
        fragment = fragment.strip()
        if not fragment:
            continue
        if "=" in fragment:
            key, value = fragment.split("=", 1)
            key, value = key.strip(), _unquote(value.strip())
        else:
            key, value = fragment, "true"
        if not key:
            continue
        if key not in out:
            out[key] = value
        elif isinstance(out[key], list):
            out[key].append(value)
        else:
            out[key] = [out[key], value]
    return out
