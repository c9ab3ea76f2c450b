from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["BuildSettings"]


class BuildSettings(BaseSettings):
    """
    Configuration settings for the build pipeline.

    Loaded from environment variables with 'JS_DEBUG_' prefix or a .env file.
    The marketplace token keeps its historical unprefixed name.
    """

    root: Path = Field(default_factory=Path.cwd)
    """Root of the extension repository being built."""

    version: str | None = None
    """Explicit version for nightly builds (JS_DEBUG_VERSION)."""

    marketplace_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("MARKETPLACE_TOKEN", "JS_DEBUG_MARKETPLACE_TOKEN"),
    )
    """Personal access token used by `vsce publish`."""

    node: str = "node"
    """Node executable used to run build scripts and tools."""

    nightly: bool = False
    """Build the nightly flavour of the extension."""

    analyze_size: bool = False
    """Ask the bundler to report bundle sizes."""

    model_config = SettingsConfigDict(
        env_prefix="JS_DEBUG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
