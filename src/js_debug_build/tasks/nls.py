"""Localization bundles: creating ours, downloading translations, exporting XLF."""

import json
import logging
import re
import tempfile
import zipfile
from pathlib import Path
from typing import IO, TYPE_CHECKING

import httpx

from ..constants import (
    LOC_ARCHIVE_URL,
    LOC_ENTRY_PATTERN,
    SOURCES,
    TRANSLATION_EXTENSION_NAME,
    TRANSLATION_PROJECT_NAME,
    TRANSLATIONS_EXPORT_DIR,
)
from ..exceptions import LocalizationError
from ..files import copy_flat
from ..manifest import write_json
from ..process import run_node

if TYPE_CHECKING:
    from ..context import BuildContext
    from ..graph import TaskRegistry

__all__ = [
    "bundle_create",
    "bundle_download",
    "download_archive",
    "export_xlf",
    "extract_locale_bundles",
    "register",
]

logger = logging.getLogger(__name__)

NLS_BUNDLE_SCRIPT = "nlsBundle"
NLS_EXPORT_SCRIPT = "nlsExportXlf"
NLS_FILES_GLOB = "nls.*.json"
DOWNLOAD_TIMEOUT = 60.0

_entry_re = re.compile(LOC_ENTRY_PATTERN)


def extract_locale_bundles(archive: IO[bytes], dest: Path) -> list[str]:
    """
    Write a ``nls.bundle.<locale>.json`` file for every js-debug translation in the archive.

    Args:
        archive: Seekable binary stream of the vscode-loc zip archive.
        dest: Directory receiving the bundles.

    Returns:
        The locales that were written, in archive order.

    Raises:
        LocalizationError: If a matching entry is not valid JSON.
    """
    dest.mkdir(parents=True, exist_ok=True)
    locales = []
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            match = _entry_re.search(info.filename)
            if not match or info.is_dir():
                continue

            locale = match.group(1)
            try:
                strings = json.loads(zf.read(info).decode("utf-8"))
                contents = strings["contents"]
            except (ValueError, KeyError, TypeError) as e:
                raise LocalizationError(f"Error parsing {info.filename}: {e}") from e

            write_json(dest / f"nls.bundle.{locale}.json", contents, indent=None)
            logger.info("Added strings for %s", locale)
            locales.append(locale)
    return locales


async def download_archive(
    url: str, sink: IO[bytes], client: httpx.AsyncClient | None = None
) -> None:
    """Stream ``url`` into ``sink``, following redirects."""
    own_client = client is None
    client = client or httpx.AsyncClient(follow_redirects=True, timeout=DOWNLOAD_TIMEOUT)
    try:
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            async for chunk in response.aiter_bytes():
                sink.write(chunk)
    except httpx.HTTPError as e:
        raise LocalizationError(f"Failed to download {url}: {e}") from e
    finally:
        if own_client:
            await client.aclose()


async def bundle_download(
    ctx: "BuildContext", client: httpx.AsyncClient | None = None
) -> list[str]:
    """Download published translations and write them as dist bundles."""
    with tempfile.TemporaryFile() as archive:
        await download_archive(LOC_ARCHIVE_URL, archive, client)
        archive.seek(0)
        return extract_locale_bundles(archive, ctx.dist_dir)


async def bundle_create(ctx: "BuildContext") -> None:
    """Extract localizable strings from the sources and bundle them into dist."""
    await run_node(
        ctx,
        ctx.build_src_dir / "build" / NLS_BUNDLE_SCRIPT,
        [
            "--id",
            f"ms-vscode.{ctx.extension_name}",
            "--out",
            str(ctx.build_dir),
            *SOURCES,
        ],
        name="nls bundle",
    )
    copied = copy_flat(ctx.build_dir, [NLS_FILES_GLOB], ctx.dist_dir)
    logger.info("Bundled %d localization files", len(copied))


async def export_xlf(ctx: "BuildContext") -> None:
    """Export XLF files for the translation team."""
    await run_node(
        ctx,
        ctx.build_src_dir / "build" / NLS_EXPORT_SCRIPT,
        [
            "--project",
            TRANSLATION_PROJECT_NAME,
            "--extension",
            TRANSLATION_EXTENSION_NAME,
            "--out",
            str((ctx.root / TRANSLATIONS_EXPORT_DIR).resolve()),
            str(ctx.build_dir / "package.json"),
            str(ctx.build_dir / "nls.metadata.header.json"),
            str(ctx.build_dir / "nls.metadata.json"),
        ],
        name="xlf export",
    )


async def _bundle_download_task(ctx: "BuildContext") -> None:
    """Download translated strings for every published locale."""
    await bundle_download(ctx)


def register(registry: "TaskRegistry") -> None:
    registry.add("nls:bundle-download", _bundle_download_task)
    registry.add("nls:bundle-create", bundle_create)
    registry.add(
        "translations-export",
        registry.series("clean", "compile", "nls:bundle-create", export_xlf),
        "Export XLF files for translation.",
    )
