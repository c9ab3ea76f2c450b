import logging
from typing import TYPE_CHECKING

from ..constants import CLEAN_ASSERTION_GLOBS, CLEAN_GLOBS
from ..files import delete_globs

if TYPE_CHECKING:
    from ..context import BuildContext
    from ..graph import TaskRegistry

__all__ = ["clean", "clean_assertions", "register"]

logger = logging.getLogger(__name__)


def clean_assertions(ctx: "BuildContext") -> None:
    """Delete `.txt.actual` files left behind by failed golden tests."""
    removed = delete_globs(ctx.root, CLEAN_ASSERTION_GLOBS)
    logger.info("Removed %d assertion outputs", len(removed))


def clean(ctx: "BuildContext") -> None:
    """Delete build output, packages and generated localization files."""
    delete_globs(ctx.root, CLEAN_GLOBS)


def register(registry: "TaskRegistry") -> None:
    registry.add("clean-assertions", clean_assertions)
    registry.add("clean", clean)
