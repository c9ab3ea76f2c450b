import asyncio
import logging
from unittest.mock import AsyncMock, patch

import pytest
from pydantic import SecretStr

from js_debug_build.exceptions import ConfigError
from js_debug_build.tasks.publish import publish_vsce


def test_publish_requires_token(ctx):
    with patch("js_debug_build.tasks.publish.run_node", new_callable=AsyncMock) as run_node:
        with pytest.raises(ConfigError, match="MARKETPLACE_TOKEN"):
            asyncio.run(publish_vsce(ctx))

    run_node.assert_not_awaited()


def test_publish_rejects_empty_token(ctx):
    ctx.settings.marketplace_token = SecretStr("")

    with pytest.raises(ConfigError):
        asyncio.run(publish_vsce(ctx))


def test_publish_passes_token_to_vsce(ctx):
    ctx.settings.marketplace_token = SecretStr("pat-123")

    with patch("js_debug_build.tasks.publish.run_node", new_callable=AsyncMock) as run_node:
        asyncio.run(publish_vsce(ctx))

    call = run_node.await_args
    args = call.args[2]
    assert args[0] == "publish"
    assert "--pat" not in args
    assert "pat-123" not in " ".join(args)
    assert call.kwargs["env"] == {"VSCE_PAT": "pat-123"}
    assert "--noVerify" in args
    assert "--yarn" in args
    assert call.kwargs["cwd"] == ctx.dist_dir


def test_publish_keeps_token_out_of_logs(ctx, caplog):
    token = "pat-secret-456"  # noqa: S105
    ctx.settings.marketplace_token = SecretStr(token)
    ctx.dist_dir.mkdir()
    received = ctx.root / "received.txt"
    vsce = ctx.root / "node_modules" / "vsce" / "vsce"
    vsce.parent.mkdir(parents=True)
    vsce.write_text(
        "import os, pathlib, sys\n"
        f"pathlib.Path({str(received)!r}).write_text("
        "os.environ['VSCE_PAT'] + '\\n' + ' '.join(sys.argv[1:]))\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.DEBUG):
        asyncio.run(publish_vsce(ctx))

    env_token, argv = received.read_text(encoding="utf-8").split("\n")
    assert env_token == token
    assert argv.startswith("publish ")
    assert token not in argv
    assert caplog.records
    assert not any(token in r.getMessage() for r in caplog.records)
