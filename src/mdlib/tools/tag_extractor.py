"""
Tag extraction for mdlib.

A markdown file declares its tags on its first line, written as a single
inline code span of space-separated tokens:

    `#python #notes draft`

Only the first line is read. The marker character is removed from every
token, so with marker '#' the line above yields ['python', 'notes', 'draft'].
"""

import re
from pathlib import Path
from typing import List, Union
import logging


logger = logging.getLogger(__name__)


# Anchored at the start of the line; anything after the closing backtick is ignored
TAG_LINE_PATTERN = re.compile(r'^`([A-Za-z0-9# _-]+)`')


class TagReadError(Exception):
    """Raised when a discovered markdown file cannot be opened."""

    def __init__(self, path: Union[str, Path], cause: OSError):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Unable to read tags from {self.path}: {cause}")


def extract_tags_from_line(tag_char: str, line: str) -> List[str]:
    """
    Parse a tag line into its tags.

    Args:
        tag_char: Marker character removed from every token
        line: First line of a markdown file

    Returns:
        Tags in order of appearance. Empty tokens (from doubled spaces or
        marker-only tokens) are kept as empty strings.
    """
    match = TAG_LINE_PATTERN.match(line)
    if not match:
        return []

    return [token.replace(tag_char, '') for token in match.group(1).split(' ')]


def extract_tags(tag_char: str, file_path: Union[str, Path]) -> List[str]:
    """
    Read the first line of a markdown file and extract its tags.

    Args:
        tag_char: Marker character removed from every token
        file_path: Markdown file to read

    Returns:
        Tags declared on the first line, or an empty list if the line is not a
        tag line or cannot be read

    Raises:
        TagReadError: If the file cannot be opened
    """
    try:
        f = open(file_path, 'rb')
    except OSError as e:
        raise TagReadError(file_path, e) from e

    # Only the first line is decoded; the body may be in any encoding
    with f:
        try:
            first_line = f.readline().decode('utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Could not read first line of {file_path}: {e}")
            return []

    return extract_tags_from_line(tag_char, first_line)
