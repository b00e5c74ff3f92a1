"""Tags plugin for merging frontmatter and inline tags."""

from vaultpress.context import ExportContext
from vaultpress.note_plugins.base import NotePlugin
from vaultpress.note_plugins.config import PluginName, TagsPluginConfig
from vaultpress.parsers import collect_tags


class TagsPlugin(NotePlugin[TagsPluginConfig]):
    name = PluginName.TAGS

    async def process(self, ctx: ExportContext) -> ExportContext:
        ctx.tags = collect_tags(ctx.frontmatter, ctx.content)
        return ctx
