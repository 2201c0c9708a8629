"""Clean staging of the dist directory.

The dist directory is deleted and recreated at the start of every run so no
file from a previous run survives. This is what makes repeated runs
produce identical output.
"""

import logging
import shutil
from pathlib import Path

from ..errors import StagingError


class OutputStager:
    """Clears and recreates the dist directory."""

    def prepare(self, dist_dir: Path) -> Path:
        """
        Remove dist_dir if it exists, then create it empty.

        Args:
            dist_dir: Destination directory owned by the pipeline

        Returns:
            The (now empty) dist directory

        Raises:
            StagingError: If the directory cannot be removed or created
        """
        dist_dir = Path(dist_dir)

        if dist_dir.is_dir():
            logging.info(f"Clearing old dist directory: {dist_dir}")
            try:
                shutil.rmtree(dist_dir)
            except OSError as e:
                raise StagingError(
                    f"Failed to clear old dist directory ({dist_dir}): {e}"
                ) from e

        try:
            dist_dir.mkdir(parents=True)
        except OSError as e:
            raise StagingError(
                f"Failed to create the dist directory ({dist_dir}): {e}"
            ) from e

        return dist_dir
