"""
Unit tests for configuration parser.

Tests the YAML configuration parsing, validation, and error handling
functionality of the ConfigParser class.
"""

import pytest
import tempfile
import os
import shutil
import yaml
from pathlib import Path
from unittest.mock import patch

from mdlib.config.parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config
)
from mdlib.models.config import MdlibConfig, OpenErrorPolicy


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def test_init_default(self):
        """Test default initialization."""
        parser = ConfigParser()
        assert parser.strict_mode is False
        assert parser.DEFAULT_CONFIG_NAMES == [
            '.mdlib.yaml',
            '.mdlib.yml',
            'mdlib.yaml',
            'mdlib.yml'
        ]

    def test_init_strict_mode(self):
        """Test initialization with strict mode."""
        parser = ConfigParser(strict_mode=True)
        assert parser.strict_mode is True

    def test_load_config_with_valid_file(self):
        """Test loading configuration from valid YAML file."""
        config_data = {
            'tag_char': '$',
            'extensions': ['md', 'txt'],
            'on_open_error': 'skip'
        }

        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            yaml.dump(config_data, f)
            temp_path = f.name

        try:
            result = ConfigParser().load_config(temp_path)

            assert isinstance(result, ConfigParseResult)
            assert isinstance(result.config, MdlibConfig)
            assert result.config_path == Path(temp_path)
            assert result.is_default is False
            assert result.warnings == []
            assert result.config.tag_char == '$'
            assert result.config.extensions == frozenset({'md', 'txt'})
            assert result.config.on_open_error == OpenErrorPolicy.SKIP

        finally:
            os.unlink(temp_path)

    def test_load_config_file_not_found(self):
        """Test loading configuration from non-existent file."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            ConfigParser().load_config("/nonexistent/config.yaml")

    def test_load_config_invalid_yaml(self, tmp_path):
        """Test loading configuration with invalid YAML syntax."""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("tag_char: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML syntax"):
            ConfigParser().load_config(config_file)

    def test_load_config_not_a_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- md\n- txt\n")

        with pytest.raises(ConfigurationError, match="must contain a YAML object"):
            ConfigParser().load_config(config_file)

    def test_load_config_empty_file(self, tmp_path):
        """Test that an empty file falls back to default values."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        result = ConfigParser().load_config(config_file)

        assert result.config == MdlibConfig()
        assert result.is_default is False

    def test_load_config_comment_only(self, tmp_path):
        config_file = tmp_path / "comments.yaml"
        config_file.write_text("# nothing configured yet\n")

        assert ConfigParser().load_config(config_file).config == MdlibConfig()

    def test_load_config_validation_error(self, tmp_path):
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text("on_open_error: ignore\n")

        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            ConfigParser().load_config(config_file)

    def test_load_config_empty_tag_char(self, tmp_path):
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text("tag_char: ''\n")

        with pytest.raises(ConfigurationError):
            ConfigParser().load_config(config_file)

    def test_unknown_keys_warn(self, tmp_path):
        config_file = tmp_path / "extra.yaml"
        config_file.write_text("tag_char: '#'\ncache: true\n")

        result = ConfigParser().load_config(config_file)

        assert result.warnings == ["Unknown configuration key: cache"]
        assert result.config.tag_char == '#'

    def test_long_tag_char_warns(self, tmp_path):
        config_file = tmp_path / "long.yaml"
        config_file.write_text("tag_char: '##'\n")

        result = ConfigParser().load_config(config_file)

        assert any("longer than one character" in w for w in result.warnings)

    def test_strict_mode_rejects_warnings(self, tmp_path):
        config_file = tmp_path / "extra.yaml"
        config_file.write_text("cache: true\n")

        with pytest.raises(ConfigurationError, match="strict mode"):
            ConfigParser(strict_mode=True).load_config(config_file)

    def test_unreadable_file(self, tmp_path):
        config_file = tmp_path / "mdlib.yaml"
        config_file.write_text("tag_char: '#'\n")

        with patch('builtins.open', side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(ConfigurationError, match="Cannot read configuration file"):
                ConfigParser().load_config(config_file)


class TestConfigDiscovery:
    """Test cases for default configuration file discovery."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.library_root = Path(self.temp_dir) / "library"
        self.library_root.mkdir()
        self.home = Path(self.temp_dir) / "home"
        self.home.mkdir()
        self.cwd = Path(self.temp_dir) / "cwd"
        self.cwd.mkdir()

    def teardown_method(self):
        shutil.rmtree(self.temp_dir)

    def _load(self, root=None):
        with patch('mdlib.config.parser.Path.home', return_value=self.home), \
             patch('mdlib.config.parser.Path.cwd', return_value=self.cwd):
            return ConfigParser().load_config(root=root)

    def test_defaults_when_nothing_found(self):
        result = self._load(self.library_root)

        assert result.is_default is True
        assert result.config_path is None
        assert result.config == MdlibConfig()

    def test_root_config_found(self):
        (self.library_root / ".mdlib.yaml").write_text("tag_char: '$'\n")

        result = self._load(self.library_root)

        assert result.is_default is False
        assert result.config_path == self.library_root / ".mdlib.yaml"
        assert result.config.tag_char == '$'

    def test_root_takes_precedence_over_home(self):
        (self.library_root / "mdlib.yml").write_text("tag_char: '$'\n")
        (self.home / ".mdlib.yaml").write_text("tag_char: '%'\n")

        assert self._load(self.library_root).config.tag_char == '$'

    def test_cwd_before_home(self):
        (self.cwd / "mdlib.yaml").write_text("tag_char: '+'\n")
        (self.home / "mdlib.yaml").write_text("tag_char: '%'\n")

        assert self._load().config.tag_char == '+'

    def test_xdg_config_dir(self):
        xdg = self.home / ".config" / "mdlib"
        xdg.mkdir(parents=True)
        (xdg / "mdlib.yaml").write_text("on_open_error: skip\n")

        result = self._load()

        assert result.config_path == xdg / "mdlib.yaml"
        assert result.config.skips_unreadable()

    def test_broken_discovered_file_raises(self):
        (self.library_root / ".mdlib.yaml").write_text("tag_char: [\n")

        with pytest.raises(ConfigurationError):
            self._load(self.library_root)


class TestConfigTemplate:
    """Test cases for the configuration template."""

    def test_template_parses_to_defaults(self):
        template = ConfigParser().get_config_template()
        data = yaml.safe_load(template)

        assert MdlibConfig.from_dict(data) == MdlibConfig()
        assert template.startswith("# mdlib configuration")


def test_load_config_convenience(tmp_path):
    config_file = tmp_path / "mdlib.yaml"
    config_file.write_text("tag_char: '@'\n")

    result = load_config(config_file)

    assert result.config.tag_char == '@'
