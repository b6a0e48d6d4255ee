"""
Tag queries over a markdown library.

This module combines file discovery and tag extraction into the two queries
mdlib supports: the sorted list of distinct tags under a root, and the files
carrying a given tag. Every query walks the filesystem again; nothing is
cached between calls.
"""

from pathlib import Path
from typing import Dict, List, Optional, Any, Iterator, Union, Tuple
import logging

from .models.config import MdlibConfig, DEFAULT_TAG_CHAR
from .models.tagged_file import TaggedFile
from .tools.fs_walker import MarkdownWalker
from .tools.tag_extractor import TagReadError, extract_tags


logger = logging.getLogger(__name__)


class MarkdownLibrary:
    """
    A directory tree of markdown files queried by tag.

    The open-error policy of the configuration decides what happens when a
    discovered file cannot be opened: with 'raise' the TagReadError aborts the
    query, with 'skip' the file is left out and the failure is recorded in
    `errors`.
    """

    def __init__(self, root: Union[str, Path], config: Optional[MdlibConfig] = None):
        """
        Initialize the library.

        Args:
            root: Root directory of the library
            config: Scan settings (defaults to MdlibConfig())
        """
        self.root = Path(root)
        self.config = config or MdlibConfig()
        self.walker = MarkdownWalker(self.config.extensions)
        self.errors: List[str] = []

    def _scan(self) -> Iterator[Tuple[Path, List[str]]]:
        """Yield (path, tags) for every discovered markdown file."""
        self.errors = []
        self.walker.reset_stats()

        for file_path in self.walker.discover(self.root):
            try:
                tags = extract_tags(self.config.tag_char, file_path)
            except TagReadError as e:
                if not self.config.skips_unreadable():
                    raise
                logger.warning(f"Skipping unreadable file: {e}")
                self.errors.append(str(e))
                continue
            yield file_path, tags

    def iter_tagged_files(self) -> Iterator[TaggedFile]:
        """Yield a record for every markdown file, whether or not it declares tags."""
        for file_path, tags in self._scan():
            yield TaggedFile.from_path(self.root, file_path, tags)

    def list_all_tags(self) -> List[str]:
        """
        Get every distinct tag in the library.

        Returns:
            Sorted list of tags without duplicates
        """
        tags = set()
        for _, file_tags in self._scan():
            tags.update(file_tags)
        return sorted(tags)

    def list_files_with_tag(self, tag: str) -> List[TaggedFile]:
        """
        Get the files whose tag line contains exactly `tag`.

        Args:
            tag: Tag to look for (without marker character)

        Returns:
            Records carrying each file's full tag sequence, in discovery order
        """
        files = []
        for record in self.iter_tagged_files():
            if record.has_tag(tag):
                files.append(record)
        logger.debug(f"Found {len(files)} files tagged '{tag}' under {self.root}")
        return files

    def has_errors(self) -> bool:
        """Check if the last query skipped any unreadable files."""
        return len(self.errors) > 0

    def get_stats(self) -> Dict[str, int]:
        """Get walker statistics for the last query."""
        return self.walker.get_stats()


def list_all_tags(root: Union[str, Path], tag_char: str = DEFAULT_TAG_CHAR) -> List[str]:
    """
    List the distinct tags declared under a root directory.

    Args:
        root: Root directory to scan
        tag_char: Marker character stripped from tags

    Returns:
        Sorted list of distinct tags

    Raises:
        TagReadError: If a discovered markdown file cannot be opened
        ValueError: If tag_char is empty
    """
    config = MdlibConfig(tag_char=tag_char)
    return MarkdownLibrary(root, config).list_all_tags()


def list_files_with_tag(root: Union[str, Path], tag: str, tag_char: str = DEFAULT_TAG_CHAR) -> List[TaggedFile]:
    """
    List the markdown files under a root directory that carry a tag.

    Args:
        root: Root directory to scan
        tag: Tag to look for
        tag_char: Marker character stripped from tags

    Returns:
        TaggedFile records in traversal order

    Raises:
        TagReadError: If a discovered markdown file cannot be opened
        ValueError: If tag_char is empty
    """
    config = MdlibConfig(tag_char=tag_char)
    return MarkdownLibrary(root, config).list_files_with_tag(tag)


def get_tags(root_dir: Union[str, Path], tag_char: str = DEFAULT_TAG_CHAR) -> List[str]:
    """Sorted, deduplicated tags under root_dir. Raises ValueError for an empty tag_char."""
    return list_all_tags(root_dir, tag_char)


def get_files_with_tag(root_dir: Union[str, Path], tag: str, tag_char: str = DEFAULT_TAG_CHAR) -> List[Dict[str, Any]]:
    """Files tagged `tag` under root_dir, as {name, local_path, tags} mappings."""
    return [record.to_dict() for record in list_files_with_tag(root_dir, tag, tag_char)]
