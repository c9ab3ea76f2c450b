"""Reading, merging and writing the extension manifest."""

import json
from pathlib import Path
from typing import Any

from .exceptions import TaskError

__all__ = [
    "apply_nightly",
    "deep_merge",
    "dumps_json",
    "fix_nightly_readme",
    "read_json",
    "write_json",
]


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise TaskError(f"Failed to read {path}: {e}") from e


def dumps_json(data: Any, indent: int | None = 2) -> str:
    if indent is None:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(data, ensure_ascii=False, indent=indent)


def write_json(path: Path, data: Any, indent: int | None = 2) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_json(data, indent), encoding="utf-8")


def _clone(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _clone(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_clone(v) for v in value]
    return value


def deep_merge(target: Any, source: Any) -> Any:
    """
    Merge ``source`` into a copy of ``target``.

    Objects are merged key by key, lists are concatenated and anything else
    in ``source`` replaces the value in ``target``. Neither input is mutated.
    """
    if isinstance(target, dict) and isinstance(source, dict):
        merged = {k: _clone(v) for k, v in target.items()}
        for key, value in source.items():
            if key in merged:
                merged[key] = deep_merge(merged[key], value)
            else:
                merged[key] = _clone(value)
        return merged

    if isinstance(target, list) and isinstance(source, list):
        return _clone(target) + _clone(source)

    return _clone(source)


def apply_nightly(manifest: dict[str, Any], version: str) -> dict[str, Any]:
    """Return a copy of ``manifest`` marked as a nightly preview build."""
    nightly = _clone(manifest)
    nightly["displayName"] = f"{nightly.get('displayName', '')} (Nightly)"
    nightly["version"] = version
    nightly["preview"] = True
    return nightly


def fix_nightly_readme(readme: Path, nightly_readme: Path) -> None:
    """Prefix the built README with the nightly notice."""
    try:
        text = readme.read_text(encoding="utf-8")
        notice = nightly_readme.read_text(encoding="utf-8")
        readme.write_text(notice + "\n" + text, encoding="utf-8")
    except OSError as e:
        raise TaskError(f"Failed to prepare nightly README: {e}") from e
