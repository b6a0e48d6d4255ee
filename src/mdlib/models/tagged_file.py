"""
Tagged file data model for mdlib.

A TaggedFile is the record returned for every markdown file that carries a
requested tag: its base name, its path relative to the scanned root and the
full sequence of tags declared on its first line.
"""

from typing import Dict, List, Any, Union
from pathlib import Path
from pydantic import BaseModel, Field


class PathOutsideRootError(ValueError):
    """Raised when a discovered file does not live under the scanned root."""
    pass


def local_path_for(root: Union[str, Path], file_path: Union[str, Path]) -> str:
    """
    Compute the path of a file relative to the scanned root.

    Args:
        root: Root directory the scan started from
        file_path: Discovered file path (built by joining onto root)

    Returns:
        Root-relative path rendered with the host path separator

    Raises:
        PathOutsideRootError: If file_path does not start with root
    """
    try:
        return str(Path(file_path).relative_to(Path(root)))
    except ValueError as e:
        raise PathOutsideRootError(f"{file_path} is not under root {root}") from e


class TaggedFile(BaseModel):
    """
    A markdown file and the tags declared on its first line.

    Attributes:
        name: Base name of the file
        local_path: Path relative to the scanned root
        tags: Tags in order of appearance, duplicates preserved
    """

    name: str = Field(..., min_length=1, description="Base name of the file")
    local_path: str = Field(..., description="Path relative to the scanned root")
    tags: List[str] = Field(default_factory=list, description="Tags in order of appearance")

    @classmethod
    def from_path(cls, root: Union[str, Path], file_path: Union[str, Path], tags: List[str]) -> 'TaggedFile':
        """Build a record for a discovered file under root."""
        return cls(
            name=Path(file_path).name,
            local_path=local_path_for(root, file_path),
            tags=list(tags),
        )

    def has_tag(self, tag: str) -> bool:
        """Check for an exact tag match."""
        return tag in self.tags

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the serializable {name, local_path, tags} mapping."""
        return self.model_dump()

    def __str__(self) -> str:
        return f"{self.local_path} [{' '.join(self.tags)}]"
