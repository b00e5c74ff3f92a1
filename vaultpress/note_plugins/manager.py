"""Plugin manager for loading and executing export stages."""

import inspect
import time
from typing import TYPE_CHECKING, Any

from vaultpress.context import ExportContext
from vaultpress.io import FilesystemSink
from vaultpress.logger import get_logger
from vaultpress.note_plugins.attachments import AttachmentsPlugin
from vaultpress.note_plugins.base import NotePlugin
from vaultpress.note_plugins.config import PluginConfig, PluginName
from vaultpress.note_plugins.frontmatter import FrontmatterPlugin
from vaultpress.note_plugins.images import (
    ExternalImagesPlugin,
    HtmlImagesPlugin,
    InternalEmbedsPlugin,
)
from vaultpress.note_plugins.tags import TagsPlugin
from vaultpress.plugins import BasePluginManager
from vaultpress.store import ContentStore

if TYPE_CHECKING:
    from vaultpress.config import ExportConfig

logger = get_logger(__name__)


class PluginManager(BasePluginManager[PluginConfig, NotePlugin]):
    """Manages loading and execution of plugins."""

    def __init__(
        self,
        global_config: "ExportConfig",
        store: ContentStore,
        sink: FilesystemSink,
    ) -> None:
        super().__init__()
        self.global_config = global_config
        self.store = store
        self.sink = sink
        self._plugin_registry: dict[PluginName, type[NotePlugin]] = {
            PluginName.ATTACHMENTS: AttachmentsPlugin,
            PluginName.INTERNAL_EMBEDS: InternalEmbedsPlugin,
            PluginName.EXTERNAL_IMAGES: ExternalImagesPlugin,
            PluginName.HTML_IMAGES: HtmlImagesPlugin,
            PluginName.FRONTMATTER: FrontmatterPlugin,
            PluginName.TAGS: TagsPlugin,
        }

    def load_plugin(self, name: str, config: PluginConfig) -> NotePlugin:
        """Load and configure a plugin."""
        if name not in self._plugin_registry:
            raise ValueError(f"Unknown plugin: {name}")

        plugin_class = self._plugin_registry[name]
        plugin = plugin_class(**self._get_constructor_params(plugin_class, config))
        plugin.setup()
        return plugin

    def _get_constructor_params(
        self, plugin_class: type[NotePlugin], config: PluginConfig
    ) -> dict[str, Any]:
        """Inspect the plugin constructor and determine what parameters to provide.

        Uses simple name-based conventions:
        - 'config': gets the plugin config
        - 'global_config': gets the global ExportConfig
        - 'store' / 'sink': get the content store and filesystem sink
        - other params with defaults: skipped
        - other required params: error

        """
        services = {
            "config": config,
            "global_config": self.global_config,
            "store": self.store,
            "sink": self.sink,
        }

        params = {}
        for param_name, param in inspect.signature(plugin_class.__init__).parameters.items():
            if param_name == "self":
                continue

            if param_name in services:
                params[param_name] = services[param_name]
            elif param.default is not inspect.Parameter.empty:
                continue
            else:
                raise ValueError(
                    f"Unknown required parameter '{param_name}' for plugin "
                    f"{plugin_class.__name__}"
                )

        return params

    async def process_note(self, ctx: ExportContext) -> ExportContext:
        """Run a note through every loaded plugin, in order."""
        for plugin in self.plugins:
            start_time = time.perf_counter()
            ctx = await plugin.process(ctx)
            duration = time.perf_counter() - start_time
            logger.info(f"Plugin {plugin.name.value} took {duration:.4f}s")
        return ctx

    def get_plugin_by_name(self, name: PluginName) -> NotePlugin | None:
        """Get a loaded plugin by its name."""
        for plugin in self.plugins:
            if plugin.name == name:
                return plugin
        return None
