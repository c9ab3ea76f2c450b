import asyncio
import os
import sys

import pytest

from js_debug_build.exceptions import ProcessError, TaskError
from js_debug_build.process import run_build_script, run_node, run_process


def test_run_process_success(tmp_path):
    asyncio.run(run_process([sys.executable, "-c", "pass"], cwd=tmp_path))


def test_run_process_propagates_exit_code(tmp_path):
    with pytest.raises(ProcessError) as exc_info:
        asyncio.run(
            run_process([sys.executable, "-c", "raise SystemExit(3)"], cwd=tmp_path, name="tool")
        )

    assert exc_info.value.exit_code == 3
    assert exc_info.value.name == "tool"
    assert str(exc_info.value) == "tool exited with code 3"


def test_run_process_layers_environment(tmp_path):
    script = (
        "import os, sys\n"
        "sys.exit(0 if os.environ['WATCH'] == 'true' and os.environ.get('PATH') else 1)"
    )
    asyncio.run(run_process([sys.executable, "-c", script], cwd=tmp_path, env={"WATCH": "true"}))


def test_run_node_uses_configured_executable_and_cwd(ctx, tmp_path):
    script = tmp_path / "check_cwd.py"
    script.write_text(
        "import os, sys\n"
        f"sys.exit(0 if os.path.samefile(os.getcwd(), {str(tmp_path / 'dist')!r}) else 1)\n",
        encoding="utf-8",
    )
    (tmp_path / "dist").mkdir()

    asyncio.run(run_node(ctx, script, cwd=tmp_path / "dist"))


def test_run_build_script_parses_json(ctx, write_build_script):
    write_build_script("generate-strings", "print('{\"a\": 1}')")

    assert asyncio.run(run_build_script(ctx, "generate-strings")) == {"a": 1}


def test_run_build_script_returns_text_when_not_json(ctx, write_build_script):
    write_build_script("documentReadme", "print('updated readme')")

    assert asyncio.run(run_build_script(ctx, "documentReadme")) == "updated readme\n"


def test_run_build_script_forwards_stderr_and_fails(ctx, write_build_script, capsys):
    write_build_script(
        "generate-contributions",
        "import sys\nsys.stderr.write('bad things\\n')\nsys.exit(2)\n",
    )

    with pytest.raises(ProcessError, match="generate-contributions exited with code 2"):
        asyncio.run(run_build_script(ctx, "generate-contributions"))

    assert "bad things" in capsys.readouterr().err


def test_run_process_reports_missing_program(tmp_path):
    missing = str(tmp_path / "no-such-node")

    with pytest.raises(TaskError, match="^Failed to start eslint: "):
        asyncio.run(run_process([missing, "eslint.js"], cwd=tmp_path, name="eslint"))


def test_run_build_script_reports_missing_node(ctx, write_build_script):
    write_build_script("generate-strings", "print('{}')")
    ctx.settings.node = str(ctx.root / "no-such-node")

    with pytest.raises(TaskError, match="^Failed to start generate-strings: "):
        asyncio.run(run_build_script(ctx, "generate-strings"))


def test_cancelled_process_is_terminated(tmp_path):
    pid_file = tmp_path / "child.pid"
    script = (
        "import os, pathlib, time\n"
        f"pathlib.Path({str(pid_file)!r}).write_text(str(os.getpid()))\n"
        "time.sleep(30)\n"
    )

    async def main() -> int:
        task = asyncio.create_task(run_process([sys.executable, "-c", script], cwd=tmp_path))
        for _ in range(1000):
            if pid_file.exists() and pid_file.read_text():
                break
            await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return int(pid_file.read_text())

    pid = asyncio.run(main())

    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)
