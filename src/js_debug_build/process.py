"""Helpers for running external tools."""

import asyncio
import contextlib
import json
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .exceptions import ProcessError, TaskError

if TYPE_CHECKING:
    from .context import BuildContext

__all__ = ["run_build_script", "run_node", "run_process"]

logger = logging.getLogger(__name__)


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            proc.terminate()
        await proc.wait()


async def run_process(
    args: Sequence[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
    name: str | None = None,
) -> None:
    """
    Run a process with inherited stdio and wait for it to exit.

    The process is terminated if the waiting task is cancelled.

    Args:
        args: Program and arguments.
        cwd: Working directory.
        env: Extra environment variables layered over the current environment.
        name: Label used in errors; defaults to the program name.

    Raises:
        TaskError: If the process cannot be started.
        ProcessError: If the process exits with a non-zero code.
    """
    label = name or Path(args[0]).name
    logger.debug("Executing: %s (cwd=%s)", " ".join(args), cwd)

    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            cwd=str(cwd),
            env={**os.environ, **env} if env else None,
        )
    except OSError as e:
        raise TaskError(f"Failed to start {label}: {e}") from e

    try:
        code = await proc.wait()
    except asyncio.CancelledError:
        await _terminate(proc)
        raise
    if code:
        raise ProcessError(label, code)


async def run_node(
    ctx: "BuildContext",
    script: str | Path,
    args: Sequence[str] = (),
    env: Mapping[str, str] | None = None,
    name: str | None = None,
    cwd: Path | None = None,
) -> None:
    """Run a Node script, from the repository root unless ``cwd`` is given."""
    await run_process(
        [ctx.settings.node, str(script), *args],
        cwd=cwd or ctx.root,
        env=env,
        name=name or Path(script).name,
    )


async def run_build_script(ctx: "BuildContext", name: str, args: Sequence[str] = ()) -> Any:
    """
    Run one of the compiled scripts in ``out/src/build`` and collect its output.

    The script's stderr is forwarded as is. Its stdout is parsed as JSON when
    possible and returned as text otherwise.

    Raises:
        TaskError: If the script cannot be started.
        ProcessError: If the script exits with a non-zero code.
    """
    script = ctx.build_src_dir / "build" / name
    logger.debug("Running build script %s", script)

    try:
        proc = await asyncio.create_subprocess_exec(
            ctx.settings.node,
            str(script),
            *args,
            cwd=str(ctx.root),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise TaskError(f"Failed to start {name}: {e}") from e

    try:
        stdout, stderr = await proc.communicate()
    except asyncio.CancelledError:
        await _terminate(proc)
        raise
    if stderr:
        sys.stderr.write(stderr.decode("utf-8", errors="replace"))
    if proc.returncode:
        raise ProcessError(name, proc.returncode)

    output = stdout.decode("utf-8")
    try:
        return json.loads(output)
    except json.JSONDecodeError:
        return output
