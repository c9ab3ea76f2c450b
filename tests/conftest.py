import sys
from pathlib import Path

import pytest

from js_debug_build.context import BuildContext
from js_debug_build.models.config import BuildSettings


@pytest.fixture
def settings(tmp_path: Path) -> BuildSettings:
    # Python stands in for node so build scripts can be real subprocesses
    return BuildSettings(root=tmp_path, node=sys.executable, version=None, marketplace_token=None)


@pytest.fixture
def ctx(settings: BuildSettings) -> BuildContext:
    return BuildContext(settings=settings)


@pytest.fixture
def write_build_script(ctx: BuildContext):
    """Write a Python script where `run_build_script` expects a compiled build script."""

    def _write(name: str, source: str) -> Path:
        path = ctx.build_src_dir / "build" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write
