"""js-debug-build - build and packaging pipeline for the js-debug extension."""

from .context import BuildContext, get_build_context
from .graph import TaskRegistry
from .tasks import create_registry

__all__ = [
    "BuildContext",
    "TaskRegistry",
    "__version__",
    "create_registry",
    "get_build_context",
]

__version__ = "0.1.0"
