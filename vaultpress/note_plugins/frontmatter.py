"""Frontmatter plugin for splitting an existing YAML header off a note."""

from vaultpress.context import ExportContext
from vaultpress.logger import get_logger
from vaultpress.note_plugins.base import NotePlugin
from vaultpress.note_plugins.config import FrontmatterPluginConfig, PluginName
from vaultpress.parsers import extract_frontmatter

logger = get_logger(__name__)


class FrontmatterPlugin(NotePlugin[FrontmatterPluginConfig]):
    """Plugin to extract frontmatter from the rewritten note text."""

    name = PluginName.FRONTMATTER

    async def process(self, ctx: ExportContext) -> ExportContext:
        ctx.frontmatter, ctx.content = extract_frontmatter(ctx.content)
        logger.debug(f"Frontmatter for {ctx.source_path}: {ctx.frontmatter}")
        return ctx
