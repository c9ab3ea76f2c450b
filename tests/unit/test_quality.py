import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from js_debug_build.exceptions import ProcessError, TaskError
from js_debug_build.tasks.quality import eslint_args, prettier_args, run_eslint, run_prettier


def test_prettier_args():
    assert prettier_args(fix=True)[0] == "--write"
    assert prettier_args(fix=False) == [
        "--list-different",
        "src/**/*.{ts,tsx}",
        "!src/**/*.d.ts",
        "*.md",
    ]


def test_eslint_args():
    assert eslint_args(fix=True) == ["--color", "src/**/*.ts", "--fix"]
    assert eslint_args(fix=False) == ["--color", "src/**/*.ts", "--max-warnings=0"]


def test_prettier_failure_message(ctx):
    with patch(
        "js_debug_build.tasks.quality.run_node",
        new_callable=AsyncMock,
        side_effect=ProcessError("prettier", 2),
    ):
        with pytest.raises(TaskError, match="^Prettier exited with code 2$"):
            asyncio.run(run_prettier(ctx, fix=False))


def test_eslint_failure_message(ctx):
    with patch(
        "js_debug_build.tasks.quality.run_node",
        new_callable=AsyncMock,
        side_effect=ProcessError("eslint", 1),
    ):
        with pytest.raises(TaskError, match="^Eslint exited with code 1$"):
            asyncio.run(run_eslint(ctx, fix=True))


def test_eslint_success_runs_local_binary(ctx):
    with patch("js_debug_build.tasks.quality.run_node", new_callable=AsyncMock) as run_node:
        asyncio.run(run_eslint(ctx, fix=False))

    assert run_node.await_args.args[1] == "./node_modules/eslint/bin/eslint.js"
