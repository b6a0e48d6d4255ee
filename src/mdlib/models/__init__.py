"""
Data models for mdlib.

This module contains the configuration model and the tagged file record.
"""

from .config import MdlibConfig, OpenErrorPolicy, MARKDOWN_EXTENSIONS, DEFAULT_TAG_CHAR
from .tagged_file import TaggedFile, PathOutsideRootError, local_path_for

__all__ = [
    'MdlibConfig',
    'OpenErrorPolicy',
    'MARKDOWN_EXTENSIONS',
    'DEFAULT_TAG_CHAR',
    'TaggedFile',
    'PathOutsideRootError',
    'local_path_for'
]
