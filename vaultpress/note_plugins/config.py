"""Plugin configuration models."""

from typing import Annotated, Literal

from pydantic import Field

from vaultpress.plugins import BasePluginConfig, PluginNameEnum


class PluginName(PluginNameEnum):
    """Enum for plugin names."""

    ATTACHMENTS = "attachments"
    INTERNAL_EMBEDS = "internal_embeds"
    EXTERNAL_IMAGES = "external_images"
    HTML_IMAGES = "html_images"
    FRONTMATTER = "frontmatter"
    TAGS = "tags"


class BaseNotePluginConfig(BasePluginConfig[PluginName]):
    """Base configuration for all note plugins."""

    name: PluginName


class AttachmentsPluginConfig(BaseNotePluginConfig):
    """Configuration for the attachments plugin.

    Example YAML configuration:
    ```yaml
    attachments:
      name: attachments
      enabled: true
      max_concurrent: 8
    ```
    """

    name: Literal[PluginName.ATTACHMENTS] = PluginName.ATTACHMENTS

    max_concurrent: int = Field(
        default=8, ge=1, description="Maximum attachment copies running at once"
    )


class InternalEmbedsPluginConfig(BaseNotePluginConfig):
    """Configuration for the internal embed rewriter.

    Example YAML configuration:
    ```yaml
    internal_embeds:
      name: internal_embeds
      enabled: true
    ```
    """

    name: Literal[PluginName.INTERNAL_EMBEDS] = PluginName.INTERNAL_EMBEDS
    after_dependencies: list[PluginName] = [PluginName.ATTACHMENTS]


class ExternalImagesPluginConfig(BaseNotePluginConfig):
    """Configuration for the markdown image rewriter."""

    name: Literal[PluginName.EXTERNAL_IMAGES] = PluginName.EXTERNAL_IMAGES
    after_dependencies: list[PluginName] = [PluginName.INTERNAL_EMBEDS]


class HtmlImagesPluginConfig(BaseNotePluginConfig):
    """Configuration for the raw `<img>` rewriter."""

    name: Literal[PluginName.HTML_IMAGES] = PluginName.HTML_IMAGES
    after_dependencies: list[PluginName] = [PluginName.EXTERNAL_IMAGES]


class FrontmatterPluginConfig(BaseNotePluginConfig):
    """Configuration for the frontmatter plugin.

    Example YAML configuration:
    ```yaml
    frontmatter:
      name: frontmatter
      enabled: true
    ```
    """

    name: Literal[PluginName.FRONTMATTER] = PluginName.FRONTMATTER
    after_dependencies: list[PluginName] = [PluginName.HTML_IMAGES]


class TagsPluginConfig(BaseNotePluginConfig):
    """Configuration for the tags plugin."""

    name: Literal[PluginName.TAGS] = PluginName.TAGS
    after_dependencies: list[PluginName] = [PluginName.FRONTMATTER]


PluginConfig = Annotated[
    AttachmentsPluginConfig
    | InternalEmbedsPluginConfig
    | ExternalImagesPluginConfig
    | HtmlImagesPluginConfig
    | FrontmatterPluginConfig
    | TagsPluginConfig,
    Field(discriminator="name"),
]


def default_plugin_configs() -> list[BaseNotePluginConfig]:
    """Every stage of the export pipeline, enabled with default settings."""
    return [
        AttachmentsPluginConfig(),
        InternalEmbedsPluginConfig(),
        ExternalImagesPluginConfig(),
        HtmlImagesPluginConfig(),
        FrontmatterPluginConfig(),
        TagsPluginConfig(),
    ]
