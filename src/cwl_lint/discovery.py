"""CWL file discovery for batch linting."""

import fnmatch
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from cwl_lint.constants import CWL_EXTENSION

logger = logging.getLogger(__name__)


class CwlDiscovery:
    """Recursive discovery of .cwl files under a root directory."""

    def __init__(
        self,
        root: Path,
        exclude_patterns: list[str] | None = None,
        ignore_files: list[str] | None = None,
    ):
        """Initialize CWL discovery.

        Args:
            root: Directory to search
            exclude_patterns: Glob patterns (POSIX, relative to root) to skip
            ignore_files: Literal relative paths to skip
        """
        self.root = root.resolve()
        self.exclude_patterns = exclude_patterns or []
        self.ignore_files = set(ignore_files or [])

    def discover(self) -> list[Path]:
        """Return all non-excluded .cwl files, sorted by relative path."""
        found = []
        skipped = 0

        for cwl_file in self._find_cwl_files():
            if self._is_excluded(cwl_file):
                skipped += 1
                continue
            found.append(cwl_file)

        logger.info(f"Discovered {len(found)} CWL files under {self.root} ({skipped} excluded)")
        return sorted(found, key=self.relative_path)

    def relative_path(self, file_path: Path) -> str:
        """POSIX path of ``file_path`` relative to the discovery root."""
        return str(file_path.relative_to(self.root)).replace("\\", "/")

    def _find_cwl_files(self) -> Iterator[Path]:
        for root, dirs, files in os.walk(self.root):
            for file in files:
                if file.endswith(CWL_EXTENSION):
                    yield Path(root) / file

    def _is_excluded(self, file_path: Path) -> bool:
        relative_str = self.relative_path(file_path)

        if relative_str in self.ignore_files:
            return True
        for pattern in self.exclude_patterns:
            if fnmatch.fnmatch(relative_str, pattern):
                return True
        return False


def validate_single_file(file_path: Path) -> Path:
    """Check that a single file can be linted.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file lacks the .cwl extension
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File '{file_path}' does not exist.")
    if not str(file_path).endswith(CWL_EXTENSION):
        raise ValueError("File must have .cwl extension.")
    return file_path
