"""Compiling sources and generating the built manifest."""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from ..files import copy_flat, copy_tree_globs
from ..manifest import apply_nightly, deep_merge, fix_nightly_readme, read_json, write_json
from ..process import run_build_script, run_node
from ..versioning import get_version_number
from .webpack import run_webpack

if TYPE_CHECKING:
    from ..context import BuildContext
    from ..graph import TaskRegistry

__all__ = [
    "compile_dynamic",
    "compile_static",
    "compile_ts",
    "copy_hash_wasm",
    "register",
    "webpack_supporting",
]

logger = logging.getLogger(__name__)

TSC = "node_modules/typescript/bin/tsc"
STATIC_ROOT_FILES = ("LICENSE", "package.json")
STATIC_TREE_GLOBS = ("resources/**/*", "README.md", "src/**/*.sh")
HASH_WASM_GLOBS = ("node_modules/@c4312/chromehash/pkg/*.wasm",)


async def compile_ts(ctx: "BuildContext") -> None:
    """Compile TypeScript sources into out/src with source maps."""
    await run_node(
        ctx,
        TSC,
        [
            "-p",
            "tsconfig.json",
            "--outDir",
            str(ctx.build_src_dir),
            "--sourceMap",
            "--sourceRoot",
            "../../src",
        ],
        name="tsc",
    )


def compile_static(ctx: "BuildContext") -> None:
    """Copy license, manifest, resources, readme and shell scripts into out."""
    copy_flat(ctx.root, STATIC_ROOT_FILES, ctx.build_dir)
    copy_tree_globs(ctx.root, STATIC_TREE_GLOBS, ctx.root, ctx.build_dir)


async def compile_dynamic(ctx: "BuildContext") -> None:
    """Generate contributions and strings, then write the built manifest."""
    contributions, strings, _ = await asyncio.gather(
        run_build_script(ctx, "generate-contributions"),
        run_build_script(ctx, "generate-strings"),
        run_build_script(ctx, "documentReadme"),
    )

    manifest_path = ctx.build_dir / "package.json"
    manifest: dict[str, Any] = read_json(manifest_path)
    manifest["name"] = ctx.extension_name
    if ctx.nightly:
        version = get_version_number(ctx.settings.version)
        logger.info("Building nightly %s", version)
        manifest = apply_nightly(manifest, version)
        fix_nightly_readme(ctx.build_dir / "README.md", ctx.root / "README.nightly.md")

    manifest = deep_merge(manifest, contributions)

    await asyncio.gather(
        asyncio.to_thread(write_json, manifest_path, manifest),
        asyncio.to_thread(write_json, ctx.build_dir / "package.nls.json", strings),
    )


def copy_hash_wasm(ctx: "BuildContext") -> None:
    copy_flat(ctx.root, HASH_WASM_GLOBS, ctx.build_src_dir / "common" / "hash")


async def webpack_supporting(ctx: "BuildContext") -> None:
    await run_webpack(ctx, devtool="source-map", compile_in_place=True)


def register(registry: "TaskRegistry") -> None:
    registry.add("compile:ts", compile_ts)
    registry.add("compile:static", compile_static)
    registry.add("compile:dynamic", compile_dynamic)
    registry.add(
        "compile:webpack-supporting",
        registry.parallel(webpack_supporting, copy_hash_wasm),
        "Compile supporting libraries to single bundles in the output.",
    )
    registry.add(
        "compile",
        registry.series(
            "compile:ts", "compile:static", "compile:dynamic", "compile:webpack-supporting"
        ),
        "Compile sources, static files and generated manifest into out.",
    )
    registry.add("default", registry.series("compile"), "Alias for compile.")
