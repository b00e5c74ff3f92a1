"""Configuration management for vaultpress."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vaultpress.exceptions import ExportConfigurationError
from vaultpress.note_plugins.config import PluginConfig
from vaultpress.paths import resolve_config_paths

ENV_PREFIX = "VAULTPRESS_"
PATH_FIELDS = {"vault_path", "export_path", "attachments_dir"}


class ExportConfig(BaseSettings):
    """Settings for exporting vault notes as Hugo content.

    The value is frozen: every pipeline stage receives the same instance and
    none of them can change it.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        frozen=True,
    )

    vault_path: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the vault that notes and attachments live in",
    )
    export_path: Path | None = Field(
        default=None,
        description="Directory where exported markdown documents are written",
    )
    attachments_dir: Path | None = Field(
        default=None,
        description="Directory where referenced attachments are copied",
    )
    attachments_url_prefix: str = Field(
        default="/images",
        description="Public URL path that attachments_dir is served under",
    )
    default_author: str = Field(
        default="", description="Author used when a note doesn't declare one"
    )
    enable_cdn_transform: bool = Field(
        default=False,
        description="Rewrite image sources to Cloudflare /cdn-cgi/image/ URLs",
    )
    site_base_url: str = Field(
        default="",
        description="Base URL of the published site, required by the CDN transform",
    )

    note_plugins: list[PluginConfig] = Field(
        default_factory=list,
        description="Per-stage overrides for the export pipeline",
    )

    _config_file: Path | None = PrivateAttr(default=None)

    @field_validator("export_path", "attachments_dir", mode="before")
    @classmethod
    def empty_path_is_unset(cls, value: Any) -> Any:
        return None if value == "" else value

    def __init__(self, config_file: Path | None = None, **kwargs: Any) -> None:
        if config_file is not None and config_file.exists():
            with open(config_file, encoding="utf-8") as f:
                try:
                    config_data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ExportConfigurationError(
                        f"Invalid configuration file {config_file}: {e}"
                    ) from e

            if not isinstance(config_data, dict):
                raise ExportConfigurationError(
                    f"Configuration file {config_file} must contain a mapping"
                )

            config_data = resolve_config_paths(
                config_data, PATH_FIELDS, config_file.parent
            )

            # Environment variables take priority over the file, kwargs over both
            env_keys = {
                key[len(ENV_PREFIX) :].lower()
                for key in os.environ
                if key.upper().startswith(ENV_PREFIX)
            }
            config_data = {
                key: value for key, value in config_data.items() if key not in env_keys
            }
            kwargs = {**config_data, **kwargs}

        super().__init__(**kwargs)
        self._config_file = config_file

    @property
    def config_file_path(self) -> Path | None:
        """Return the configuration file this value was loaded from, if any."""
        return self._config_file

    @property
    def cdn_enabled(self) -> bool:
        """The CDN transform only applies once a site base URL is configured."""
        return self.enable_cdn_transform and bool(self.site_base_url.strip())

    @property
    def base_url(self) -> str:
        return self.site_base_url.strip().rstrip("/")

    def require_export_path(self) -> Path:
        if self.export_path is None:
            raise ExportConfigurationError(
                "Please set the export path (export_path) before exporting"
            )
        return self.export_path

    def require_attachments_dir(self) -> Path:
        if self.attachments_dir is None:
            raise ExportConfigurationError(
                "Please set the attachments directory (attachments_dir) before "
                "exporting notes with embedded attachments"
            )
        return self.attachments_dir
