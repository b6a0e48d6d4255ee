"""
YAML configuration parser for mdlib.

This module loads scan settings from a YAML file, either an explicit path or
the first default-named file found next to the library, in the current
directory or in the user's home. It validates the contents into an
MdlibConfig and reports helpful errors for configuration issues.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from ..models.config import MdlibConfig


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.

    Attributes:
        config: The parsed and validated configuration
        warnings: List of non-fatal warnings
        config_path: Path to the configuration file used
        is_default: Whether default configuration was used
    """
    config: MdlibConfig
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.

    Recognized keys are `tag_char`, `extensions` and `on_open_error`. Unknown
    keys produce a warning, or an error in strict mode.
    """

    DEFAULT_CONFIG_NAMES = [
        '.mdlib.yaml',
        '.mdlib.yml',
        'mdlib.yaml',
        'mdlib.yml'
    ]

    KNOWN_KEYS = {'tag_char', 'extensions', 'on_open_error'}

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the configuration parser.

        Args:
            strict_mode: If True, treat warnings as errors
        """
        self.strict_mode = strict_mode
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None,
                    root: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load and parse configuration from file or use defaults.

        Args:
            config_path: Path to configuration file. If None, searches for default files.
            root: Library root, searched first for a default-named file

        Returns:
            ConfigParseResult containing parsed configuration and metadata

        Raises:
            ConfigurationError: If configuration is invalid or file cannot be read
        """
        if config_path:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            config_data = self._load_yaml_file(config_path)
            is_default = False
        else:
            config_path, config_data = self._find_and_load_config(root)
            is_default = config_data is None
            if is_default:
                config_data = {}

        warnings = self._get_parser_warnings(config_data, is_default)
        known_data = {key: value for key, value in config_data.items() if key in self.KNOWN_KEYS}
        config = self._validate_config_data(known_data, config_path)

        if self.strict_mode and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        self.logger.info(f"Configuration loaded from {config_path or 'defaults'}")

        return ConfigParseResult(
            config=config,
            warnings=warnings,
            config_path=config_path,
            is_default=is_default
        )

    def _search_paths(self, root: Optional[Union[str, Path]]) -> List[Path]:
        search_paths = []
        if root is not None:
            search_paths.append(Path(root))
        search_paths.extend([
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'mdlib',
        ])
        return search_paths

    def _find_and_load_config(self, root: Optional[Union[str, Path]] = None) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load configuration file from default locations.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        for search_path in self._search_paths(root):
            for config_name in self.DEFAULT_CONFIG_NAMES:
                config_file = search_path / config_name
                if config_file.is_file():
                    self.logger.info(f"Found configuration file: {config_file}")
                    return config_file, self._load_yaml_file(config_file)

        self.logger.info("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)

            # Comment-only YAML
            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def _validate_config_data(self, config_data: Dict[str, Any], config_path: Optional[Path]) -> MdlibConfig:
        """
        Validate configuration values into an MdlibConfig.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            return MdlibConfig.from_dict(config_data)
        except ValidationError as e:
            source = config_path or 'defaults'
            raise ConfigurationError(f"Configuration validation failed for {source}: {e}") from e

    def _get_parser_warnings(self, config_data: Dict[str, Any], is_default: bool) -> List[str]:
        """
        Get parser-specific warnings.

        Args:
            config_data: Raw configuration data
            is_default: Whether default configuration was used

        Returns:
            List of warning messages
        """
        warnings = []

        for key in sorted(set(config_data) - self.KNOWN_KEYS):
            warnings.append(f"Unknown configuration key: {key}")

        tag_char = config_data.get('tag_char')
        if isinstance(tag_char, str) and len(tag_char) > 1:
            warnings.append(f"tag_char '{tag_char}' is longer than one character")

        return warnings

    def get_config_template(self) -> str:
        """
        Get a template configuration file with all options and comments.

        Returns:
            YAML template as string
        """
        lines = [
            "# mdlib configuration",
            "",
            "# Character marking tags on the first line of a markdown file",
            yaml.dump({'tag_char': MdlibConfig().tag_char}, default_flow_style=False).rstrip(),
            "",
            "# Recognized markdown extensions (case-sensitive)",
            yaml.dump({'extensions': sorted(MdlibConfig().extensions)}, default_flow_style=False).rstrip(),
            "",
            "# What to do with a markdown file that cannot be opened: raise or skip",
            yaml.dump({'on_open_error': MdlibConfig().on_open_error.value}, default_flow_style=False).rstrip(),
            "",
        ]
        return "\n".join(lines)


def load_config(config_path: Optional[Union[str, Path]] = None,
                root: Optional[Union[str, Path]] = None,
                strict_mode: bool = False) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file (optional)
        root: Library root searched first for a default-named file (optional)
        strict_mode: Whether to treat warnings as errors

    Returns:
        ConfigParseResult containing parsed configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser(strict_mode=strict_mode)
    return parser.load_config(config_path, root=root)
