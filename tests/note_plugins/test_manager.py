"""Tests for the export plugin manager."""

import pytest
from conftest import FakeContentStore

from vaultpress.context import ExportContext
from vaultpress.exceptions import ExportConfigurationError
from vaultpress.io import FilesystemSink
from vaultpress.note_plugins import NotePlugin, PluginManager
from vaultpress.note_plugins.config import (
    FrontmatterPluginConfig,
    PluginName,
    TagsPluginConfig,
    default_plugin_configs,
)
from vaultpress.note_plugins.tags import TagsPlugin


@pytest.fixture
def manager(export_config):
    return PluginManager(export_config, FakeContentStore(), FilesystemSink())


class TestPluginManager:
    """Test cases for PluginManager."""

    def test_default_order(self, manager):
        manager.load_plugins_from_config(list(reversed(default_plugin_configs())))

        assert [plugin.name for plugin in manager.plugins] == [
            PluginName.ATTACHMENTS,
            PluginName.INTERNAL_EMBEDS,
            PluginName.EXTERNAL_IMAGES,
            PluginName.HTML_IMAGES,
            PluginName.FRONTMATTER,
            PluginName.TAGS,
        ]

    def test_services_are_injected(self, manager, export_config):
        manager.load_plugins_from_config(default_plugin_configs())

        attachments = manager.get_plugin_by_name(PluginName.ATTACHMENTS)
        assert attachments.global_config is export_config
        assert attachments.resolver.store is manager.store

    def test_disabled_trailing_stage(self, manager):
        configs = [
            c for c in default_plugin_configs() if c.name != PluginName.TAGS
        ] + [TagsPluginConfig(enabled=False)]

        manager.load_plugins_from_config(configs)

        assert manager.get_plugin_by_name(PluginName.TAGS) is None

    def test_missing_dependency(self, manager):
        with pytest.raises(ExportConfigurationError, match="html_images"):
            manager.load_plugins_from_config([FrontmatterPluginConfig()])

    def test_cycle(self, manager):
        configs = [
            FrontmatterPluginConfig(after_dependencies=[PluginName.TAGS]),
            TagsPluginConfig(),
        ]
        with pytest.raises(ExportConfigurationError, match="Circular"):
            manager.load_plugins_from_config(configs)

    def test_unknown_constructor_parameter(self, manager):
        class NeedsDatabase(NotePlugin):
            name = PluginName.TAGS

            def __init__(self, config, database):
                super().__init__(config)

            async def process(self, ctx):
                return ctx

        manager.register_plugin(PluginName.TAGS, NeedsDatabase)
        with pytest.raises(ValueError, match="database"):
            manager.load_plugin(PluginName.TAGS, TagsPluginConfig())

    async def test_process_note_runs_frontmatter_then_tags(self, manager):
        manager.load_plugins_from_config(
            [FrontmatterPluginConfig(after_dependencies=[]), TagsPluginConfig()]
        )
        raw = "---\ntags: [b]\n---\nBody #a"

        ctx = await manager.process_note(
            ExportContext(source_path="note.md", raw_content=raw, content=raw)
        )

        assert ctx.content == "Body #a"
        assert ctx.tags == ["a", "b"]
        assert isinstance(manager.plugins[-1], TagsPlugin)
