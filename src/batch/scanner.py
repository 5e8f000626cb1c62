# src/batch/scanner.py - v1
"""Document scanner: recursive discovery of document files under a root.

Traversal is depth first and each directory is listed in lexicographic
order, so the result order is stable for a given tree. Export output and
import summaries follow this order.
"""

from __future__ import annotations

import logging
from pathlib import Path

from annosync.core.errors import ScanError

logger = logging.getLogger(__name__)


class DocumentScanner:
    """Find files with one exact, case-sensitive extension.

    Workflow:
        1. Check that the root is a readable directory
        2. List each directory sorted by name
        3. Recurse into subdirectories in place (symlinked dirs are skipped)
        4. Keep regular files whose suffix equals the extension
    """

    def __init__(self, extension: str = ".pdf") -> None:
        self._extension = extension

    @property
    def extension(self) -> str:
        return self._extension

    def scan(self, scan_root: Path | str) -> list[Path]:
        """Discover all matching files under scan_root.

        Args:
            scan_root: Root directory to scan.

        Returns:
            Absolute paths in traversal order.

        Raises:
            ScanError: If the root is not a directory or a directory in the
                tree cannot be listed.
        """
        root = Path(scan_root).absolute()
        if not root.is_dir():
            raise ScanError(f"Scan root is not a directory: {root}")

        found: list[Path] = []
        self._walk(root, found)

        logger.info(
            "Scanned %s: found %d %s file(s)", root, len(found), self._extension,
        )
        return found

    def _walk(self, directory: Path, found: list[Path]) -> None:
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise ScanError(f"Cannot list directory {directory}: {exc}") from exc

        for child in children:
            if child.is_symlink() and child.is_dir():
                logger.debug("Not following directory symlink %s", child)
                continue
            if child.is_dir():
                self._walk(child, found)
            elif child.suffix == self._extension and child.is_file():
                found.append(child)
