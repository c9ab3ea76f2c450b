"""Bundling the extension and producing the VSIX."""

import logging
from typing import TYPE_CHECKING

from ..constants import BUILD_DIR, BUILD_SRC_DIR, VSCE_URLS
from ..exceptions import TaskError
from ..files import copy_flat, copy_tree_globs
from ..models.bundle import BundleEntry
from ..process import run_node
from .webpack import run_webpack

if TYPE_CHECKING:
    from ..context import BuildContext
    from ..graph import TaskRegistry

__all__ = [
    "BOOTLOADER_SOURCE_URL",
    "VSCE",
    "bootloader_as_cdp",
    "copy_extension_files",
    "create_vsix",
    "register",
]

logger = logging.getLogger(__name__)

VSCE = "node_modules/vsce/vsce"
BOOTLOADER_SOURCE_URL = "\n//# sourceURL=bootloader.bundle.cdp"

EXTENSION_FILE_GLOBS = (
    f"{BUILD_DIR}/LICENSE",
    f"{BUILD_DIR}/package.json",
    f"{BUILD_DIR}/package.*.json",
    f"{BUILD_DIR}/resources/**/*",
    f"{BUILD_DIR}/README.md",
)
WASM_GLOBS = (
    "node_modules/source-map/lib/*.wasm",
    "node_modules/@c4312/chromehash/pkg/*.wasm",
)
SCRIPT_GLOBS = (f"{BUILD_SRC_DIR}/**/*.sh",)


async def webpack_bundle(ctx: "BuildContext") -> None:
    """Run webpack to bundle the extension output files."""
    await run_webpack(
        ctx,
        [BundleEntry(entry=f"{BUILD_SRC_DIR}/extension.js", filename="extension.js", library=True)],
    )


async def flat_session_bundle(ctx: "BuildContext") -> None:
    """Bundle the flat session launcher (for VS or a standalone debug server)."""
    await run_webpack(
        ctx,
        [BundleEntry(entry=f"{BUILD_SRC_DIR}/flatSessionLauncher.js", library=True)],
        devtool="nosources-source-map",
    )


async def vs_debug_server_bundle(ctx: "BuildContext") -> None:
    """Bundle the VS debug server."""
    await run_webpack(
        ctx,
        [BundleEntry(entry=f"{BUILD_SRC_DIR}/vsDebugServer.js", library=True)],
        devtool="nosources-source-map",
    )


def bootloader_as_cdp(ctx: "BuildContext") -> None:
    """Give the bundled bootloader a stable sourceURL for CDP."""
    bootloader = ctx.dist_src_dir / "bootloader.bundle.js"
    if not bootloader.is_file():
        raise TaskError(f"Bundled bootloader not found at {bootloader}")
    with bootloader.open("a", encoding="utf-8") as f:
        f.write(BOOTLOADER_SOURCE_URL)


def copy_extension_files(ctx: "BuildContext") -> None:
    """Copy the extension static files into dist."""
    copy_tree_globs(ctx.root, EXTENSION_FILE_GLOBS, ctx.build_dir, ctx.dist_dir)
    copy_flat(ctx.root, WASM_GLOBS, ctx.dist_src_dir)
    copy_flat(ctx.root, SCRIPT_GLOBS, ctx.dist_src_dir)


async def create_vsix(ctx: "BuildContext") -> None:
    """Create a VSIX package using the vsce command line tool."""
    await run_node(
        ctx,
        ctx.root / VSCE,
        [
            "package",
            *VSCE_URLS.as_args(),
            "--yarn",
            "--out",
            str(ctx.vsix_path),
        ],
        name="vsce",
        cwd=ctx.dist_dir,
    )
    logger.info("Packaged %s", ctx.vsix_path)


def register(registry: "TaskRegistry") -> None:
    registry.add("package:webpack-bundle", webpack_bundle)
    registry.add("flatSessionBundle:webpack-bundle", flat_session_bundle)
    registry.add("vsDebugServerBundle:webpack-bundle", vs_debug_server_bundle)
    registry.add("package:bootloader-as-cdp", bootloader_as_cdp)
    registry.add("package:copy-extension-files", copy_extension_files)
    registry.add("package:createVSIX", create_vsix)

    registry.add(
        "package:prepare",
        registry.series(
            "clean",
            "compile:ts",
            "compile:static",
            "compile:dynamic",
            "package:webpack-bundle",
            "package:bootloader-as-cdp",
            "package:copy-extension-files",
            "nls:bundle-create",
        ),
        "Clean, compile and bundle the extension into dist.",
    )
    registry.add(
        "package",
        registry.series("package:prepare", "package:createVSIX"),
        "Clean, compile, bundle, and create a vsix for the extension.",
    )
    registry.add(
        "flatSessionBundle",
        registry.series(
            "clean",
            "compile",
            "flatSessionBundle:webpack-bundle",
            "package:bootloader-as-cdp",
            "package:copy-extension-files",
            registry.parallel("nls:bundle-download", "nls:bundle-create"),
        ),
        "Build the flat session launcher bundle with localization.",
    )
    # builds both flat session and debug server until flat session is retired
    registry.add(
        "vsDebugServerBundle",
        registry.series(
            "clean",
            "compile",
            "vsDebugServerBundle:webpack-bundle",
            "flatSessionBundle:webpack-bundle",
            "package:bootloader-as-cdp",
            "package:copy-extension-files",
            registry.parallel("nls:bundle-download", "nls:bundle-create"),
        ),
        "Build the VS debug server and flat session bundles with localization.",
    )
