"""Incremental rebuilds while developing."""

import asyncio
import contextlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change, DefaultFilter, awatch

from ..exceptions import BuildError
from .webpack import run_webpack

if TYPE_CHECKING:
    from ..context import BuildContext
    from ..graph import Step, TaskRegistry

__all__ = ["SourceFilter", "register", "watch_and_rebuild"]

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".ts", ".tsx")


class SourceFilter(DefaultFilter):
    """Accept TypeScript sources under src/ and JSON files in the repository root."""

    def __init__(self, root: Path) -> None:
        super().__init__()
        self.root = root.resolve()

    def __call__(self, change: Change, path: str) -> bool:
        if not super().__call__(change, path):
            return False

        try:
            rel = Path(path).resolve().relative_to(self.root)
        except ValueError:
            return False

        if len(rel.parts) == 1:
            return rel.suffix == ".json"
        return rel.parts[0] == "src" and rel.suffix in SOURCE_SUFFIXES


def _report_bundler_exit(task: "asyncio.Task[None]") -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.error("Bundler watch stopped: %s", task.exception())


async def watch_and_rebuild(
    ctx: "BuildContext", rebuild: "Step", stop_event: asyncio.Event | None = None
) -> None:
    """
    Keep the bundler running in watch mode and rerun ``rebuild`` whenever sources change.

    A failed rebuild is logged and watching continues.

    Args:
        ctx: Build context.
        rebuild: Step run after every batch of changes.
        stop_event: Stops watching when set; runs until interrupted otherwise.
    """
    bundler = asyncio.create_task(
        run_webpack(ctx, devtool="source-map", compile_in_place=True, watch=True)
    )
    bundler.add_done_callback(_report_bundler_exit)

    logger.info("Watching %s for changes", ctx.root)
    try:
        async for changes in awatch(
            ctx.root, watch_filter=SourceFilter(ctx.root), stop_event=stop_event
        ):
            logger.info("%d file(s) changed, rebuilding", len(changes))
            try:
                await rebuild(ctx)
            except Exception as e:
                logger.error("Rebuild failed: %s", e)
                logger.debug("Rebuild traceback", exc_info=True)
    finally:
        bundler.cancel()
        # a bundler failure was already reported by _report_bundler_exit
        with contextlib.suppress(asyncio.CancelledError, BuildError):
            await bundler


def register(registry: "TaskRegistry") -> None:
    rebuild = registry.series("compile:ts", "compile:static", "compile:dynamic")

    async def start_watching(ctx: "BuildContext") -> None:
        await watch_and_rebuild(ctx, rebuild)

    registry.add(
        "watch",
        registry.series("clean", "compile", start_watching),
        "Compile, then rebuild on every source change.",
    )
