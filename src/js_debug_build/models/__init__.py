from .bundle import BundleEntry, WebpackConfig
from .config import BuildSettings

__all__ = ["BuildSettings", "BundleEntry", "WebpackConfig"]
