from dataclasses import dataclass
from typing import Literal

__all__ = [
    "BUILD_DIR",
    "BUILD_SRC_DIR",
    "BundlerMode",
    "CLEAN_ASSERTION_GLOBS",
    "CLEAN_GLOBS",
    "DIST_DIR",
    "DIST_SRC_DIR",
    "EXTENSION_NAME",
    "LOC_ARCHIVE_URL",
    "LOC_ENTRY_PATTERN",
    "NIGHTLY_EXTENSION_NAME",
    "NODE_TARGETS_DIR",
    "SOURCES",
    "TRANSLATIONS_EXPORT_DIR",
    "TRANSLATION_EXTENSION_NAME",
    "TRANSLATION_PROJECT_NAME",
    "VERSION_TIMEZONE",
    "VSCE_URLS",
    "VsceUrls",
]

# Layout
SOURCES: tuple[str, ...] = ("src/**/*.ts", "src/**/*.tsx")
BUILD_DIR = "out"
BUILD_SRC_DIR = f"{BUILD_DIR}/src"
DIST_DIR = "dist"
DIST_SRC_DIR = f"{DIST_DIR}/src"
NODE_TARGETS_DIR = "targets/node"
TRANSLATIONS_EXPORT_DIR = "../vscode-translations-export"

CLEAN_GLOBS: tuple[str, ...] = (
    "out/**",
    "dist/**",
    "src/*/package.nls.*.json",
    "packages/**",
    "*.vsix",
)
CLEAN_ASSERTION_GLOBS: tuple[str, ...] = ("src/test/**/*.txt.actual",)

# Extension identity
EXTENSION_NAME = "js-debug"
NIGHTLY_EXTENSION_NAME = "js-debug-nightly"
TRANSLATION_PROJECT_NAME = "vscode-extensions"
TRANSLATION_EXTENSION_NAME = "js-debug"

# Nightly versions are stamped in the team's local time
VERSION_TIMEZONE = "America/Los_Angeles"

BundlerMode = Literal["development", "production"]

# Localization
LOC_ARCHIVE_URL = "https://github.com/microsoft/vscode-loc/archive/main.zip"
LOC_ENTRY_PATTERN = r"vscode-language-pack-(.*?)/.+ms-vscode\.js-debug.*?\.i18n\.json$"


@dataclass(frozen=True)
class VsceUrls:
    """Base URLs vsce uses to rewrite relative links in the README."""

    base_content_url: str
    base_images_url: str

    def as_args(self) -> list[str]:
        return [
            "--baseContentUrl",
            self.base_content_url,
            "--baseImagesUrl",
            self.base_images_url,
        ]


VSCE_URLS = VsceUrls(
    base_content_url="https://github.com/microsoft/vscode-js-debug/blob/main",
    base_images_url="https://github.com/microsoft/vscode-js-debug/raw/main",
)
