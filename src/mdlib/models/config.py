"""
Configuration data models for mdlib.

This module defines the settings that drive a library scan: the tag marker
character, the recognized markdown extensions and the policy applied when a
discovered file cannot be opened.
"""

from typing import Dict, FrozenSet, Any
from enum import Enum
from pydantic import BaseModel, Field, field_validator


MARKDOWN_EXTENSIONS: FrozenSet[str] = frozenset({"md", "markdown", "mdown", "mkdn", "mkd"})

DEFAULT_TAG_CHAR = "#"


class OpenErrorPolicy(Enum):
    """What to do with a discovered markdown file that cannot be opened."""
    RAISE = "raise"
    SKIP = "skip"


class MdlibConfig(BaseModel):
    """
    Settings for scanning a markdown library.

    Attributes:
        tag_char: Marker character removed from every tag token
        extensions: Recognized markdown extensions (without leading dot, case-sensitive)
        on_open_error: Whether an unopenable file aborts the query or is skipped
    """

    model_config = {'frozen': True}

    tag_char: str = Field(DEFAULT_TAG_CHAR, min_length=1, description="Tag marker character")
    extensions: FrozenSet[str] = Field(MARKDOWN_EXTENSIONS, min_length=1, description="Recognized markdown extensions")
    on_open_error: OpenErrorPolicy = Field(OpenErrorPolicy.RAISE, description="Policy for files that cannot be opened")

    @field_validator('extensions', mode='before')
    @classmethod
    def validate_extensions(cls, v) -> FrozenSet[str]:
        """Strip leading dots and drop blank entries. Case is preserved."""
        if isinstance(v, str):
            v = [v]
        normalized = set()
        for ext in v:
            if not isinstance(ext, str):
                raise ValueError(f"Extension must be a string, got {type(ext).__name__}")
            ext = ext.strip().lstrip('.')
            if ext:
                normalized.add(ext)
        if not normalized:
            raise ValueError("At least one markdown extension must be specified")
        return frozenset(normalized)

    @field_validator('on_open_error', mode='before')
    @classmethod
    def validate_on_open_error(cls, v) -> OpenErrorPolicy:
        """Validate and convert the open-error policy to enum."""
        if isinstance(v, str):
            try:
                return OpenErrorPolicy(v.strip().lower())
            except ValueError:
                raise ValueError(f"Invalid open error policy: {v}")
        return v

    def skips_unreadable(self) -> bool:
        """Check if unopenable files are skipped instead of aborting the query."""
        return self.on_open_error == OpenErrorPolicy.SKIP

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'tag_char': self.tag_char,
            'extensions': sorted(self.extensions),
            'on_open_error': self.on_open_error.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MdlibConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Tag char: '{self.tag_char}'"]
        parts.append(f"Extensions: {', '.join(sorted(self.extensions))}")
        parts.append(f"On open error: {self.on_open_error.value}")
        return " | ".join(parts)
