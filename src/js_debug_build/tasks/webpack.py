"""Bundling compiled output with webpack."""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from ..constants import BUILD_SRC_DIR, NODE_TARGETS_DIR, BundlerMode
from ..models.bundle import BundleEntry, WebpackConfig, WebpackOutput
from ..process import run_node

if TYPE_CHECKING:
    from ..context import BuildContext

__all__ = ["COMMON_ENTRIES", "WEBPACK_BUILD_SCRIPT", "build_webpack_config", "run_webpack"]

logger = logging.getLogger(__name__)

WEBPACK_BUILD_SCRIPT = "src/build/webpackBuild"

# Entry points shared by every flavour of the extension
COMMON_ENTRIES: tuple[BundleEntry, ...] = (
    BundleEntry(entry=f"{BUILD_SRC_DIR}/common/hash/hash.js"),
    BundleEntry(entry=f"{BUILD_SRC_DIR}/{NODE_TARGETS_DIR}/bootloader.js"),
    BundleEntry(entry=f"{BUILD_SRC_DIR}/{NODE_TARGETS_DIR}/watchdog.js"),
    BundleEntry(entry=f"{BUILD_SRC_DIR}/diagnosticTool/diagnosticTool.js", target="web"),
)

Devtool = str | Literal[False]


def build_webpack_config(
    ctx: "BuildContext",
    package: BundleEntry,
    mode: BundlerMode,
    devtool: Devtool = False,
    compile_in_place: bool = False,
) -> WebpackConfig:
    """
    Build the webpack configuration for a single entry.

    Args:
        ctx: Build context.
        package: Entry to bundle.
        mode: Bundler mode.
        devtool: Source map style, or False for none.
        compile_in_place: Write the bundle beside its entry instead of into dist/src.

    Returns:
        The configuration handed to the webpack build script.
    """
    entry = (ctx.root / package.entry).resolve()
    node_modules = ctx.root / "node_modules"
    output_path = entry.parent if compile_in_place else ctx.dist_src_dir.resolve()

    return WebpackConfig(
        mode=mode,
        target=package.target or "async-node",
        entry=str(entry),
        output=WebpackOutput(
            path=str(output_path),
            filename=package.output_filename(),
            library_target="commonjs2" if package.library else None,
        ),
        devtool=devtool,
        resolve={
            "extensions": [".js", ".json"],
            "alias": {
                # their .mjs seems broken
                "acorn": str(node_modules / "acorn"),
                "acorn-loose": str(node_modules / "acorn-loose"),
            },
            "fallback": {"path": str(node_modules / "path-browserify")},
        },
        module={
            "rules": [
                {
                    "loader": "vscode-nls-dev/lib/webpack-loader",
                    "options": {"base": str(ctx.build_src_dir)},
                },
                {
                    # turned into a regex by the webpack build script
                    "test": "\\.css$",
                    "use": ["style-loader", "css-loader"],
                },
            ],
        },
    )


async def run_webpack(
    ctx: "BuildContext",
    packages: Sequence[BundleEntry] = (),
    devtool: Devtool = False,
    compile_in_place: bool = False,
    mode: BundlerMode | None = None,
    watch: bool = False,
) -> None:
    """
    Bundle ``packages`` plus the common entries, one webpack process per entry.

    All processes run concurrently; the first failure is raised once every
    process has exited.
    """
    mode = mode or ctx.mode
    entries = [*packages, *COMMON_ENTRIES]
    script = Path(WEBPACK_BUILD_SCRIPT)

    todo = []
    for package in entries:
        config = build_webpack_config(ctx, package, mode, devtool, compile_in_place)
        logger.debug("Bundling %s (%s)", package.entry, mode)
        todo.append(
            run_node(
                ctx,
                script,
                env={
                    "CONFIG": config.to_json(),
                    "ANALYZE_SIZE": str(ctx.analyze_size).lower(),
                    "WATCH": str(watch).lower(),
                },
                name=f"webpack ({Path(package.entry).name})",
            )
        )

    results = await asyncio.gather(*todo, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
