"""Glob based copy and delete helpers."""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

__all__ = ["copy_flat", "copy_tree_globs", "delete_globs", "expand"]

logger = logging.getLogger(__name__)


def _split_negations(patterns: Iterable[str]) -> tuple[list[str], list[str]]:
    include: list[str] = []
    exclude: list[str] = []
    for pattern in patterns:
        if pattern.startswith("!"):
            exclude.append(pattern[1:])
        else:
            include.append(pattern)
    return include, exclude


def expand(root: Path, patterns: Iterable[str]) -> list[Path]:
    """
    Expand glob patterns relative to ``root`` into a sorted list of files.

    Patterns prefixed with ``!`` remove matches of earlier patterns.
    """
    include, exclude = _split_negations(patterns)
    found: set[Path] = set()
    for pattern in include:
        found.update(p for p in root.glob(pattern) if p.is_file())
    for pattern in exclude:
        found.difference_update(root.glob(pattern))
    return sorted(found)


def copy_tree_globs(root: Path, patterns: Iterable[str], base: Path, dest: Path) -> list[Path]:
    """
    Copy files matching ``patterns`` into ``dest``, keeping their path below ``base``.

    Returns:
        The written destination paths.
    """
    written = []
    for src in expand(root, patterns):
        target = dest / src.relative_to(base)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, target)
        written.append(target)
    logger.debug("Copied %d files into %s", len(written), dest)
    return written


def copy_flat(root: Path, patterns: Iterable[str], dest: Path) -> list[Path]:
    """Copy files matching ``patterns`` directly into ``dest`` by basename."""
    dest.mkdir(parents=True, exist_ok=True)
    written = []
    for src in expand(root, patterns):
        target = dest / src.name
        shutil.copy2(src, target)
        written.append(target)
    logger.debug("Copied %d files into %s", len(written), dest)
    return written


def delete_globs(root: Path, patterns: Iterable[str]) -> list[Path]:
    """
    Delete everything matching ``patterns`` below ``root``.

    A pattern ending in ``/**`` removes the directory it names as well as its contents.
    """
    removed = []
    for pattern in patterns:
        if pattern.endswith("/**"):
            matches = list(root.glob(pattern[: -len("/**")]))
        else:
            matches = list(root.glob(pattern))

        for path in matches:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            elif path.exists() or path.is_symlink():
                path.unlink()
            else:
                continue
            logger.debug("Deleted %s", path)
            removed.append(path)
    return removed
