"""
Scanning tools for mdlib.

This module contains the filesystem walker that discovers markdown files and
the extractor that reads the tag line of each file.
"""

from .fs_walker import MarkdownWalker, discover_markdown_files
from .tag_extractor import TagReadError, TAG_LINE_PATTERN, extract_tags, extract_tags_from_line

__all__ = [
    'MarkdownWalker',
    'discover_markdown_files',
    'TagReadError',
    'TAG_LINE_PATTERN',
    'extract_tags',
    'extract_tags_from_line'
]
