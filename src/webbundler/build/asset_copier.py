"""
Copying of static files and wasm-pack JS snippets into dist.

Both inputs are optional. Many projects have no ./static directory, and
wasm-pack only writes snippets/ when the crate uses inline JS. Each source
directory is copied as a whole, so output lands in dist/static/ and
dist/snippets/, matching the './snippets/...' imports in package.js.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from ..errors import AssetCopyError


STATIC_DIR_NAME = "static"
SNIPPETS_DIR_NAME = "snippets"


class AssetCopier:
    """Copies optional asset directories into the dist directory."""

    def copy_static(self, src_dir: Path, dist_dir: Path) -> Optional[Path]:
        """Copy <src_dir>/static into dist. Returns the copy, or None if absent."""
        return self._copy_dir(Path(src_dir) / STATIC_DIR_NAME, Path(dist_dir), "static files")

    def copy_snippets(self, tmp_dir: Path, dist_dir: Path) -> Optional[Path]:
        """Copy <tmp_dir>/snippets into dist. Returns the copy, or None if absent."""
        return self._copy_dir(Path(tmp_dir) / SNIPPETS_DIR_NAME, Path(dist_dir), "js snippets")

    def _copy_dir(self, src: Path, dist_dir: Path, what: str) -> Optional[Path]:
        if not src.exists():
            logging.debug(f"No {what} at {src}, skipping")
            return None

        dest = dist_dir / src.name
        try:
            shutil.copytree(src, dest)
        except (OSError, shutil.Error) as e:
            raise AssetCopyError(
                f"Failed to copy {what} from {src} to {dist_dir}: {e}"
            ) from e

        logging.info(f"Copied {what} from {src} to {dest}")
        return dest
