from typing import TYPE_CHECKING

from ..constants import VSCE_URLS
from ..exceptions import ConfigError
from ..process import run_node
from .package import VSCE

if TYPE_CHECKING:
    from ..context import BuildContext
    from ..graph import TaskRegistry

__all__ = ["publish_vsce", "register"]


async def publish_vsce(ctx: "BuildContext") -> None:
    """Publish the built extension to the marketplace."""
    token = ctx.settings.marketplace_token
    if token is None or not token.get_secret_value():
        raise ConfigError("MARKETPLACE_TOKEN must be set to publish the extension.")

    await run_node(
        ctx,
        ctx.root / VSCE,
        [
            "publish",
            *VSCE_URLS.as_args(),
            # proposed API usage fails verification
            "--noVerify",
            "--yarn",
        ],
        env={"VSCE_PAT": token.get_secret_value()},
        name="vsce",
        cwd=ctx.dist_dir,
    )


def register(registry: "TaskRegistry") -> None:
    registry.add("publish:vsce", publish_vsce)
    registry.add(
        "publish",
        registry.series("package", "publish:vsce"),
        "Package the extension and publish it to the marketplace.",
    )
