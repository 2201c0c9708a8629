"""
Bundler run configuration.

A BundlerConfig describes one bundling pass: where the application sources
live, where output goes, the version baked into the wasm filename and
whether wasm-pack builds in release mode.

The dist and tmp directories are owned by the pipeline and are deleted and
recreated freely. The source directory and workspace root are only read.
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional, Tuple

from ..errors import ConfigError


@dataclass(frozen=True)
class BundlerConfig:
    """
    Immutable configuration for a single bundling run.

    Example index.html template consumed by the run:
        <!DOCTYPE html>
        <html lang="en">
            <head>
                <base href="{{ base_url }}">
                <meta charset="utf-8">
                {{ stylesheet | safe }}
                <title>My Amazing Website</title>
            </head>
            <body>
                <div id="app"></div>
                {{ javascript | safe }}
            </body>
        </html>

    Attributes:
        src_dir: Where to look for input files, usually the root of the SPA crate
        dist_dir: Where output is written; cleared at the start of every run
        tmp_dir: Scratch directory for wasm-pack output
        wasm_version: Version embedded in the wasm filename (app-<version>.wasm)
        release: Build in release mode instead of debug mode
        workspace_root: Root of the cargo workspace; 'web-target' is placed here
        base_url: Passed to the template as base_url (defaults to '/')
        additional_watch_dirs: Extra directories whose changes require a rebuild
    """

    src_dir: Path
    dist_dir: Path
    tmp_dir: Path
    wasm_version: str
    release: bool = False
    workspace_root: Path = Path(".")
    base_url: Optional[str] = None
    additional_watch_dirs: Tuple[Path, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Normalise str inputs so callers can pass plain strings
        object.__setattr__(self, "src_dir", Path(self.src_dir))
        object.__setattr__(self, "dist_dir", Path(self.dist_dir))
        object.__setattr__(self, "tmp_dir", Path(self.tmp_dir))
        object.__setattr__(self, "workspace_root", Path(self.workspace_root))
        object.__setattr__(
            self,
            "additional_watch_dirs",
            tuple(Path(d) for d in self.additional_watch_dirs),
        )

        if not self.wasm_version:
            raise ConfigError("wasm_version must not be empty")

    @property
    def target_dir(self) -> Path:
        """Cargo target directory used by wasm-pack, kept apart from the host build."""
        return self.workspace_root / "web-target"

    @property
    def watch_roots(self) -> Tuple[Path, ...]:
        """All roots whose contents should trigger a rebuild."""
        return (self.src_dir,) + self.additional_watch_dirs

    def with_overrides(self, **changes) -> "BundlerConfig":
        """Return a copy with the non-None values in changes applied."""
        changes = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **changes)

    @classmethod
    def from_env(
        cls,
        src_dir: Path,
        workspace_root: Path,
        environ: Optional[Mapping[str, str]] = None,
        base_url: Optional[str] = "/",
    ) -> "BundlerConfig":
        """
        Build a configuration from cargo build-script environment variables.

        Uses OUT_DIR (dist goes to OUT_DIR/ui, scratch to OUT_DIR/tmp),
        CARGO_PKG_VERSION for the wasm version and PROFILE for the build
        mode (anything but 'debug' is a release build).

        Args:
            src_dir: Frontend crate directory
            workspace_root: Workspace root directory
            environ: Environment mapping (defaults to os.environ)
            base_url: Base URL for the template

        Returns:
            BundlerConfig for this build-script invocation

        Raises:
            ConfigError: If a required variable is not set
        """
        if environ is None:
            environ = os.environ

        def require(name: str) -> str:
            value = environ.get(name)
            if not value:
                raise ConfigError(f"expected {name} to be set by Cargo")
            return value

        out_dir = Path(require("OUT_DIR"))
        return cls(
            src_dir=Path(src_dir),
            dist_dir=out_dir / "ui",
            tmp_dir=out_dir / "tmp",
            base_url=base_url,
            wasm_version=require("CARGO_PKG_VERSION"),
            release=require("PROFILE") != "debug",
            workspace_root=Path(workspace_root),
        )
