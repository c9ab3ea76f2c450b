from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from .constants import (
    BUILD_DIR,
    BUILD_SRC_DIR,
    DIST_DIR,
    DIST_SRC_DIR,
    EXTENSION_NAME,
    NIGHTLY_EXTENSION_NAME,
    BundlerMode,
)
from .exceptions import ConfigError
from .models.config import BuildSettings

__all__ = ["BuildContext", "get_build_context"]


@dataclass
class BuildContext:
    """State shared by every task of a single pipeline run."""

    settings: BuildSettings
    nightly: bool = False
    watch: bool = False
    analyze_size: bool = False

    @property
    def root(self) -> Path:
        return self.settings.root

    @property
    def extension_name(self) -> str:
        return NIGHTLY_EXTENSION_NAME if self.nightly else EXTENSION_NAME

    @property
    def mode(self) -> BundlerMode:
        return "development" if self.watch else "production"

    @property
    def build_dir(self) -> Path:
        return self.root / BUILD_DIR

    @property
    def build_src_dir(self) -> Path:
        return self.root / BUILD_SRC_DIR

    @property
    def dist_dir(self) -> Path:
        return self.root / DIST_DIR

    @property
    def dist_src_dir(self) -> Path:
        return self.root / DIST_SRC_DIR

    @property
    def vsix_path(self) -> Path:
        return self.dist_dir / f"{self.extension_name}.vsix"


def get_build_context(
    tasks: list[str] | None = None,
    *,
    nightly: bool = False,
    analyze_size: bool = False,
    root: Path | None = None,
    settings: BuildSettings | None = None,
) -> BuildContext:
    """
    Create the context for running ``tasks``.

    Requesting the ``watch`` task implies a nightly, development build.

    Args:
        tasks: Task names about to run.
        nightly: Force a nightly build.
        analyze_size: Ask the bundler for a size report.
        root: Override the repository root.
        settings: Pre-loaded settings; read from the environment when omitted.

    Returns:
        A BuildContext for the run.
    """
    if settings is None:
        try:
            settings = BuildSettings()
        except ValidationError as e:
            raise ConfigError(f"Invalid build settings: {e}") from e
    if root is not None:
        settings = settings.model_copy(update={"root": root.resolve()})

    watch = "watch" in (tasks or [])
    return BuildContext(
        settings=settings,
        nightly=nightly or settings.nightly or watch,
        watch=watch,
        analyze_size=analyze_size or settings.analyze_size,
    )
