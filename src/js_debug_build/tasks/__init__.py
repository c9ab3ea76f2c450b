from ..graph import TaskRegistry
from . import clean, compile, nls, package, publish, quality, watch

__all__ = ["create_registry"]

# Registration order matters: composites resolve the names they reference.
_MODULES = (clean, compile, nls, package, publish, quality, watch)


def create_registry() -> TaskRegistry:
    """Build a registry holding every pipeline task."""
    registry = TaskRegistry()
    for module in _MODULES:
        module.register(registry)
    return registry
