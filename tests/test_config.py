"""Tests for ExportConfig."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from vaultpress.config import ExportConfig
from vaultpress.exceptions import ExportConfigurationError
from vaultpress.note_plugins.config import AttachmentsPluginConfig, PluginName


class TestExportConfig:
    """Test cases for ExportConfig."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = ExportConfig()

        assert config.vault_path == Path.cwd()
        assert config.export_path is None
        assert config.attachments_dir is None
        assert config.attachments_url_prefix == "/images"
        assert config.default_author == ""
        assert config.enable_cdn_transform is False
        assert config.cdn_enabled is False
        assert config.note_plugins == []
        assert config.config_file_path is None

    def test_is_frozen(self):
        config = ExportConfig()
        with pytest.raises(ValidationError):
            config.default_author = "Someone"

    def test_yaml_file_with_relative_paths(self, tmp_path):
        config_file = tmp_path / "vaultpress.yml"
        config_file.write_text(
            """
vault_path: vault
export_path: site/content/posts
attachments_dir: /srv/site/static/images
default_author: Ada
enable_cdn_transform: true
site_base_url: https://site.com/
note_plugins:
  - name: attachments
    max_concurrent: 2
"""
        )

        with patch.dict(os.environ, {}, clear=True):
            config = ExportConfig(config_file=config_file)

        assert config.vault_path == tmp_path / "vault"
        assert config.export_path == tmp_path / "site" / "content" / "posts"
        assert config.attachments_dir == Path("/srv/site/static/images")
        assert config.default_author == "Ada"
        assert config.cdn_enabled is True
        assert config.base_url == "https://site.com"
        assert config.note_plugins == [
            AttachmentsPluginConfig(name=PluginName.ATTACHMENTS, max_concurrent=2)
        ]
        assert config.config_file_path == config_file

    def test_precedence(self, tmp_path):
        """kwargs > environment > config file."""
        config_file = tmp_path / "vaultpress.yml"
        config_file.write_text("default_author: File\nsite_base_url: https://file.com\n")

        env = {"VAULTPRESS_DEFAULT_AUTHOR": "Env", "VAULTPRESS_SITE_BASE_URL": "https://env.com"}
        with patch.dict(os.environ, env, clear=True):
            config = ExportConfig(config_file=config_file, default_author="Kwarg")

        assert config.default_author == "Kwarg"
        assert config.site_base_url == "https://env.com"

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "vaultpress.yml"
        config_file.write_text("export_path: [unclosed\n")

        with pytest.raises(ExportConfigurationError):
            ExportConfig(config_file=config_file)

    def test_cdn_needs_base_url(self):
        config = ExportConfig(enable_cdn_transform=True, site_base_url="  ")
        assert config.cdn_enabled is False

    def test_require_paths(self):
        config = ExportConfig(export_path="")

        with pytest.raises(ExportConfigurationError, match="export path"):
            config.require_export_path()
        with pytest.raises(ExportConfigurationError, match="attachments directory"):
            config.require_attachments_dir()
