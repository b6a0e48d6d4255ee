"""
Filesystem walker for mdlib.

This module discovers the markdown files of a library: it traverses a root
directory recursively and keeps non-hidden, non-directory entries whose
extension is one of the recognized markdown extensions. Traversal errors on
individual entries are skipped so one unreadable subtree never aborts a scan.
"""

import os
import stat
from pathlib import Path
from typing import Dict, List, Optional, Iterator, Union, FrozenSet
import logging

from ..models.config import MARKDOWN_EXTENSIONS


logger = logging.getLogger(__name__)


class MarkdownWalker:
    """
    Filesystem walker that yields the markdown files under a root directory.

    Hidden directories are descended into; the hidden check only applies to
    file names. Directory entries are visited in sorted order so repeated
    scans of an unchanged tree produce the same sequence.
    """

    def __init__(self, extensions: Optional[FrozenSet[str]] = None):
        """
        Initialize the markdown walker.

        Args:
            extensions: Recognized extensions without leading dot (defaults to MARKDOWN_EXTENSIONS)
        """
        self.extensions = frozenset(extensions) if extensions is not None else MARKDOWN_EXTENSIONS
        self._stats = self._empty_stats()

    def iter_markdown_files(self, root: Union[str, Path]) -> Iterator[Path]:
        """
        Walk a root directory and yield every markdown file entry.

        Args:
            root: Root directory to scan

        Yields:
            Paths built by joining entry names onto root
        """
        root_path = Path(root)
        if not root_path.exists():
            logger.warning(f"Root directory does not exist: {root_path}")
            return

        if not root_path.is_dir():
            logger.warning(f"Root path is not a directory: {root_path}")
            return

        logger.info(f"Walking markdown library: {root_path}")
        for current_dir, subdirs, files in os.walk(root_path, onerror=self._on_walk_error):
            current_path = Path(current_dir)
            self._stats['directories_traversed'] += 1

            # Sort in place so os.walk descends in a stable order
            subdirs.sort()

            for filename in sorted(files):
                file_path = current_path / filename
                self._stats['files_scanned'] += 1

                if self.is_hidden(file_path):
                    self._stats['files_hidden'] += 1
                    continue

                if not self.is_markdown(file_path):
                    continue

                if not self._is_regular_entry(file_path):
                    continue

                self._stats['files_matched'] += 1
                yield file_path

    def discover(self, root: Union[str, Path]) -> List[Path]:
        """
        Collect every markdown file under root.

        Args:
            root: Root directory to scan

        Returns:
            Materialized list of markdown file paths in traversal order
        """
        return list(self.iter_markdown_files(root))

    @staticmethod
    def is_hidden(file_path: Path) -> bool:
        """Check if the base name starts with a dot."""
        return file_path.name.startswith('.')

    def is_markdown(self, file_path: Path) -> bool:
        """
        Check if a file has one of the recognized markdown extensions.

        The comparison is case-sensitive, so 'README.MD' is not a markdown file.
        """
        suffix = file_path.suffix
        if not suffix:
            return False
        return suffix[1:] in self.extensions

    def _is_regular_entry(self, file_path: Path) -> bool:
        """
        Check that an entry can be stat'ed and is not a directory.

        Broken symlinks and entries removed while walking fail the stat and
        are skipped like any other traversal error.
        """
        try:
            mode = file_path.stat().st_mode
        except OSError as e:
            logger.debug(f"Skipping unreachable entry {file_path}: {e}")
            self._stats['errors'] += 1
            return False
        return not stat.S_ISDIR(mode)

    def _on_walk_error(self, error: OSError) -> None:
        """Skip directories os.walk cannot list."""
        logger.debug(f"Skipping unreadable directory {error.filename}: {error.strerror}")
        self._stats['errors'] += 1

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'directories_traversed': 0,
            'files_scanned': 0,
            'files_matched': 0,
            'files_hidden': 0,
            'errors': 0
        }

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the walking operations since the last reset.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()


def discover_markdown_files(root: Union[str, Path], extensions: Optional[FrozenSet[str]] = None) -> List[Path]:
    """
    Recursively find the markdown files under a root directory.

    Args:
        root: Root directory to scan
        extensions: Recognized extensions (defaults to MARKDOWN_EXTENSIONS)

    Returns:
        List of markdown file paths, each rooted under root
    """
    return MarkdownWalker(extensions).discover(root)
