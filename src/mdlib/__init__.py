"""
mdlib - Markdown Library Explorer

Read-only exploration of a directory of markdown notes by the tags declared
on the first line of each file.
"""

__version__ = "0.1.0"

from .library import (
    MarkdownLibrary,
    get_files_with_tag,
    get_tags,
    list_all_tags,
    list_files_with_tag
)

__all__ = [
    'MarkdownLibrary',
    'get_files_with_tag',
    'get_tags',
    'list_all_tags',
    'list_files_with_tag'
]
