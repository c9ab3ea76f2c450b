"""Formatting and linting through prettier and eslint."""

from typing import TYPE_CHECKING

from ..exceptions import ProcessError, TaskError
from ..process import run_node

if TYPE_CHECKING:
    from ..context import BuildContext
    from ..graph import TaskRegistry

__all__ = ["eslint_args", "prettier_args", "register", "run_eslint", "run_prettier"]

PRETTIER = "./node_modules/@mixer/parallel-prettier/dist/index.js"
ESLINT = "./node_modules/eslint/bin/eslint.js"


def prettier_args(fix: bool) -> list[str]:
    return ["--write" if fix else "--list-different", "src/**/*.{ts,tsx}", "!src/**/*.d.ts", "*.md"]


def eslint_args(fix: bool) -> list[str]:
    return ["--color", "src/**/*.ts", "--fix" if fix else "--max-warnings=0"]


async def run_prettier(ctx: "BuildContext", fix: bool) -> None:
    try:
        await run_node(ctx, PRETTIER, prettier_args(fix), name="prettier")
    except ProcessError as e:
        raise TaskError(f"Prettier exited with code {e.exit_code}") from e


async def run_eslint(ctx: "BuildContext", fix: bool) -> None:
    try:
        await run_node(ctx, ESLINT, eslint_args(fix), name="eslint")
    except ProcessError as e:
        raise TaskError(f"Eslint exited with code {e.exit_code}") from e


async def format_prettier(ctx: "BuildContext") -> None:
    """Rewrite sources with prettier."""
    await run_prettier(ctx, fix=True)


async def format_eslint(ctx: "BuildContext") -> None:
    """Apply eslint autofixes."""
    await run_eslint(ctx, fix=True)


async def lint_prettier(ctx: "BuildContext") -> None:
    """List files prettier would change."""
    await run_prettier(ctx, fix=False)


async def lint_eslint(ctx: "BuildContext") -> None:
    """Lint sources, failing on any warning."""
    await run_eslint(ctx, fix=False)


def register(registry: "TaskRegistry") -> None:
    registry.add("format:prettier", format_prettier)
    registry.add("format:eslint", format_eslint)
    registry.add(
        "format", registry.series("format:prettier", "format:eslint"), "Format all sources."
    )

    registry.add("lint:prettier", lint_prettier)
    registry.add("lint:eslint", lint_eslint)
    registry.add("lint", registry.parallel("lint:prettier", "lint:eslint"), "Lint all sources.")
