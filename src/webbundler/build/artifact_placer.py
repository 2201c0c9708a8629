"""Placement of the compiled wasm module under a versioned filename.

The version in the filename busts browser caches. The loader script in
index.html refers to the same name, so both sides use versioned_wasm_name().
"""

import logging
import shutil
from pathlib import Path

from ..errors import ArtifactError
from .toolchain_invoker import CompiledModuleArtifact


def versioned_wasm_name(wasm_version: str) -> str:
    """Filename of the published wasm module, e.g. 'app-1.2.3.wasm'."""
    return f"app-{wasm_version}.wasm"


class ArtifactPlacer:
    """Copies package_bg.wasm into dist as app-<version>.wasm."""

    def place(self, artifact: CompiledModuleArtifact, dist_dir: Path, wasm_version: str) -> Path:
        """
        Copy the compiled module into dist under its versioned name.

        Args:
            artifact: wasm-pack output description
            dist_dir: Destination directory
            wasm_version: Version string for the filename

        Returns:
            Path of the placed module

        Raises:
            ArtifactError: If the module is missing or cannot be copied
        """
        src = artifact.wasm_path
        dest = Path(dist_dir) / versioned_wasm_name(wasm_version)

        try:
            shutil.copyfile(src, dest)
        except OSError as e:
            raise ArtifactError(
                f"Failed to copy application wasm from {src} to {dest}: {e}"
            ) from e

        logging.info(f"Placed application wasm at {dest}")
        return dest
