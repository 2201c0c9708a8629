"""
webbundler.ini configuration parser.

Projects that drive the bundler from a Makefile or CI script can keep their
settings in an INI file instead of passing every path on the command line.

Example webbundler.ini:
    [bundle]
    src_dir = frontend
    dist_dir = target/ui
    tmp_dir = target/ui-tmp
    wasm_version = 1.2.3
    release = true
    workspace_root = .
    base_url = /app/
    watch_dirs =
        shared
        assets/icons

Relative paths are resolved against the directory containing the INI file.
"""

import configparser
from pathlib import Path
from typing import Dict, List

from ..errors import ConfigError
from .bundler_config import BundlerConfig


class BundlerIniConfig:
    """
    Parser for webbundler.ini files.

    Usage:
        ini = BundlerIniConfig(Path("webbundler.ini"))
        config = ini.to_bundler_config()
    """

    SECTION = "bundle"
    REQUIRED_FIELDS = {"src_dir", "dist_dir", "tmp_dir", "wasm_version"}

    def __init__(self, ini_path: Path):
        """
        Initialize the parser with a webbundler.ini file.

        Args:
            ini_path: Path to the INI file

        Raises:
            ConfigError: If the file doesn't exist or cannot be parsed
        """
        self.ini_path = Path(ini_path)

        if not self.ini_path.exists():
            raise ConfigError(f"Configuration file not found: {self.ini_path}")

        self.config = configparser.ConfigParser(
            allow_no_value=True, interpolation=configparser.ExtendedInterpolation()
        )

        try:
            self.config.read(self.ini_path, encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to parse {self.ini_path}: {e}") from e

    @property
    def base_dir(self) -> Path:
        """Directory that relative paths in the file are resolved against."""
        return self.ini_path.resolve().parent

    def get_section(self) -> Dict[str, str]:
        """
        Get the [bundle] section as a dictionary.

        Raises:
            ConfigError: If the section or a required field is missing
        """
        if self.SECTION not in self.config:
            raise ConfigError(f"{self.ini_path} has no [{self.SECTION}] section")

        try:
            values = {key: (value or "").strip() for key, value in self.config[self.SECTION].items()}
        except configparser.Error as e:
            raise ConfigError(f"Invalid value in {self.ini_path}: {e}") from e

        missing_fields = {key for key in self.REQUIRED_FIELDS if not values.get(key)}
        if missing_fields:
            raise ConfigError(
                f"[{self.SECTION}] in {self.ini_path} is missing required fields: "
                + f"{', '.join(sorted(missing_fields))}"
            )

        return values

    def get_watch_dirs(self) -> List[Path]:
        """
        Parse the watch_dirs list.

        Example:
            For watch_dirs =
                shared
                assets, icons
            Returns: [<base>/shared, <base>/assets, <base>/icons]
        """
        raw = self.get_section().get("watch_dirs", "")
        dirs = []
        for line in raw.split("\n"):
            for entry in line.split(","):
                entry = entry.strip()
                if entry:
                    dirs.append(self._resolve(entry))
        return dirs

    def to_bundler_config(self) -> BundlerConfig:
        """Build a BundlerConfig from the [bundle] section."""
        values = self.get_section()

        try:
            release = self.config.getboolean(self.SECTION, "release", fallback=False)
        except ValueError as e:
            raise ConfigError(f"Invalid 'release' value in {self.ini_path}: {e}") from e

        return BundlerConfig(
            src_dir=self._resolve(values["src_dir"]),
            dist_dir=self._resolve(values["dist_dir"]),
            tmp_dir=self._resolve(values["tmp_dir"]),
            wasm_version=values["wasm_version"],
            release=release,
            workspace_root=self._resolve(values.get("workspace_root") or "."),
            base_url=values.get("base_url") or None,
            additional_watch_dirs=tuple(self.get_watch_dirs()),
        )

    def _resolve(self, value: str) -> Path:
        path = Path(value)
        if path.is_absolute():
            return path
        return self.base_dir / path
