"""Core exporter that turns vault notes into Hugo content files."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from vaultpress.assembler import Clock, DocumentAssembler, output_filename
from vaultpress.context import ExportContext
from vaultpress.exceptions import ExportError, ExportIOError
from vaultpress.io import FilesystemSink
from vaultpress.logger import get_logger
from vaultpress.models import ExportResult
from vaultpress.note_plugins import PluginManager
from vaultpress.note_plugins.config import BaseNotePluginConfig, default_plugin_configs
from vaultpress.parsers import INTERNAL_EMBED_PATTERN
from vaultpress.store import ContentStore, VaultContentStore

if TYPE_CHECKING:
    from vaultpress.config import ExportConfig

logger = get_logger(__name__)


class ResultSink(ABC):
    """Receives the outcome of each export, for display only."""

    @abstractmethod
    def success(self, export_path: Path, attachments_copied: int) -> None:
        pass

    @abstractmethod
    def failure(self, message: str) -> None:
        pass


class NoteExporter:
    """Runs notes through the export pipeline and writes the results."""

    def __init__(
        self,
        config: "ExportConfig",
        store: ContentStore | None = None,
        sink: FilesystemSink | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config
        self.store = store or VaultContentStore(config.vault_path)
        self.sink = sink or FilesystemSink()
        self.assembler = DocumentAssembler(config, clock)
        self.plugin_manager = PluginManager(config, self.store, self.sink)

        self._setup_plugins()

    def _setup_plugins(self) -> None:
        """Load the default stages, replaced by any user-configured versions."""
        all_plugins: list[BaseNotePluginConfig] = default_plugin_configs()

        for plugin in self.config.note_plugins:
            all_plugins = [p for p in all_plugins if p.name != plugin.name]
            all_plugins.append(plugin)

        self.plugin_manager.load_plugins_from_config(all_plugins)

    async def export(self, source_path: str | Path) -> ExportResult:
        """
        Export a single note, given by its vault-relative path.

        Configuration problems are raised before anything is written. A failed
        write aborts the export; attachments copied up to that point stay in place.

        """
        source_path = Path(source_path)
        export_dir = self.config.require_export_path()

        try:
            raw_content = self.store.read_text(source_path)
        except (OSError, UnicodeDecodeError) as e:
            raise ExportIOError(f"Could not read note {source_path}: {e}") from e

        if INTERNAL_EMBED_PATTERN.search(raw_content):
            self.config.require_attachments_dir()

        logger.info(f"Exporting note: {source_path}")
        ctx = ExportContext(
            source_path=source_path,
            raw_content=raw_content,
            content=raw_content,
        )
        ctx = await self.plugin_manager.process_note(ctx)

        document = self.assembler.assemble(
            ctx.frontmatter, ctx.tags, ctx.content, ctx.basename
        )

        export_path = export_dir / output_filename(ctx.basename)
        self.sink.ensure_dir(export_dir)
        self.sink.write_text(export_path, document)

        return ExportResult(
            export_path=export_path,
            attachments_copied=len(
                {attachment.new_filename for attachment in ctx.attachments.values()}
            ),
            warnings=list(ctx.warnings),
        )

    async def export_many(
        self, source_paths: list[str | Path], result_sink: ResultSink
    ) -> list[ExportResult]:
        """Export notes one after another, reporting each outcome to `result_sink`."""
        results = []
        for source_path in source_paths:
            try:
                result = await self.export(source_path)
            except ExportError as e:
                logger.error(f"Export failed for {source_path}: {e}")
                result_sink.failure(f"Export failed for {source_path}: {e}")
                continue

            result_sink.success(result.export_path, result.attachments_copied)
            results.append(result)
        return results

    def cleanup(self) -> None:
        self.plugin_manager.teardown()
