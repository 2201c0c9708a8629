"""Configuration for webbundler runs."""

from .bundler_config import BundlerConfig
from .ini_parser import BundlerIniConfig

__all__ = [
    "BundlerConfig",
    "BundlerIniConfig",
]
