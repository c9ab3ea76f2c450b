"""Pydantic models describing bundler entries and the config handed to webpack."""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["BundleEntry", "WebpackConfig", "WebpackOutput"]


class BundleEntry(BaseModel):
    """
    A single module graph to bundle.

    Paths are relative to the repository root.
    """

    model_config = ConfigDict(frozen=True)

    entry: str
    """Compiled JavaScript entry point."""

    library: bool = False
    """Export the bundle as a commonjs2 library."""

    target: str | None = None
    """Webpack target; defaults to async-node."""

    filename: str | None = None
    """Output filename; defaults to the entry name with a `.bundle.js` suffix."""

    def output_filename(self) -> str:
        if self.filename:
            return self.filename
        return Path(self.entry).name.replace(".js", ".bundle.js", 1)


class WebpackOutput(BaseModel):
    path: str
    filename: str
    devtool_module_filename_template: str = Field(
        default="../[resource-path]", serialization_alias="devtoolModuleFilenameTemplate"
    )
    library_target: Literal["commonjs2"] | None = Field(
        default=None, serialization_alias="libraryTarget"
    )


class WebpackConfig(BaseModel):
    """Config serialized into the ``CONFIG`` variable of the webpack build script."""

    mode: Literal["development", "production"]
    target: str
    entry: str
    output: WebpackOutput
    devtool: str | Literal[False] = False
    resolve: dict[str, Any]
    module: dict[str, Any]
    plugins: list[Any] = Field(default_factory=list)
    node: dict[str, bool] = Field(
        default_factory=lambda: {"__dirname": False, "__filename": False}
    )
    externals: dict[str, str] = Field(default_factory=lambda: {"vscode": "commonjs vscode"})

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)
