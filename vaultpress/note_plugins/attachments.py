"""Attachments plugin for copying embedded vault files into the site."""

from typing import TYPE_CHECKING

from vaultpress.attachments import AttachmentCopier, AttachmentResolver, copy_attachments
from vaultpress.context import ExportContext
from vaultpress.io import FilesystemSink
from vaultpress.logger import get_logger
from vaultpress.note_plugins.base import NotePlugin
from vaultpress.note_plugins.config import AttachmentsPluginConfig, PluginName
from vaultpress.parsers import INTERNAL_EMBED_PATTERN
from vaultpress.store import ContentStore

if TYPE_CHECKING:
    from vaultpress.config import ExportConfig

logger = get_logger(__name__)


class AttachmentsPlugin(NotePlugin[AttachmentsPluginConfig]):
    """Resolves every `![[embed]]` in the note and copies what it finds.

    Runs before any rewriting so the attachment map is complete by the time the
    internal embed rewriter reads it.
    """

    name = PluginName.ATTACHMENTS

    def __init__(
        self,
        config: AttachmentsPluginConfig,
        global_config: "ExportConfig",
        store: ContentStore,
        sink: FilesystemSink,
    ) -> None:
        super().__init__(config)
        self.global_config = global_config
        self.resolver = AttachmentResolver(store)
        self.copier = AttachmentCopier(store, sink)

    async def process(self, ctx: ExportContext) -> ExportContext:
        names = [
            match.group(1) for match in INTERNAL_EMBED_PATTERN.finditer(ctx.raw_content)
        ]
        if not names:
            return ctx

        attachments, missing = await copy_attachments(
            names,
            ctx.source_path,
            self.global_config.require_attachments_dir(),
            self.resolver,
            self.copier,
            max_concurrent=self.config.max_concurrent,
        )
        ctx.attachments = attachments

        for name in missing:
            ctx.warn(f"Attachment not found: {name}")

        logger.info(f"Copied {len(attachments)} attachments for {ctx.source_path}")
        return ctx
