"""
Rebuild-trigger declaration for the host build system.

Before anything is built, every file under the source tree (and any extra
watch directories) is announced to the host as a dependency, one directive
per path. This runs first so that even a failed build still tells the host
which inputs to watch.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional


DEFAULT_DIRECTIVE = "cargo:rerun-if-changed={path}"


class ChangeTracker:
    """
    Enumerates watched paths and emits one rebuild directive per path.

    Unreadable entries are skipped rather than aborting the scan.

    Example usage:
        tracker = ChangeTracker()
        tracker.declare([Path("frontend"), Path("shared")])
    """

    def __init__(
        self,
        emit: Optional[Callable[[str], None]] = None,
        directive_template: str = DEFAULT_DIRECTIVE,
    ):
        """
        Initialize change tracker.

        Args:
            emit: Callable receiving each directive line (defaults to print)
            directive_template: Directive format with a {path} placeholder
        """
        self.emit = emit if emit is not None else print
        self.directive_template = directive_template

    def watched_paths(self, roots: Iterable[Path]) -> Iterator[Path]:
        """
        Yield every reachable entry under each root, the root included.

        Symlinked directories are not followed. A root that does not exist
        yields nothing.
        """
        for root in roots:
            root = Path(root)
            if not os.path.lexists(root):
                logging.debug(f"Skipping missing watch root: {root}")
                continue

            yield root

            for dirpath, dirnames, filenames in os.walk(root, onerror=self._skip_entry):
                base = Path(dirpath)
                dirnames.sort()
                for name in dirnames:
                    yield base / name
                for name in sorted(filenames):
                    yield base / name

    def declare(self, roots: Iterable[Path]) -> int:
        """
        Emit a rebuild directive for every watched path.

        Returns:
            Number of directives emitted
        """
        count = 0
        for path in self.watched_paths(roots):
            self.emit(self.directive_template.format(path=path))
            count += 1

        logging.debug(f"Declared {count} watched paths")
        return count

    @staticmethod
    def _skip_entry(error: OSError) -> None:
        logging.debug(f"Skipping unreadable entry {error.filename}: {error}")
