"""Click CLI interface for vaultpress."""

import asyncio
import time
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from vaultpress.config import ExportConfig
from vaultpress.exceptions import ExportConfigurationError, HandledExportError
from vaultpress.exporter import NoteExporter, ResultSink

console = Console()


class ConsoleResultSink(ResultSink):
    """Prints export outcomes to the terminal."""

    def __init__(self) -> None:
        self.failures = 0

    def success(self, export_path: Path, attachments_copied: int) -> None:
        console.print(
            f"[green]✓ Exported to[/green] [cyan]{export_path}[/cyan] "
            f"[dim]({attachments_copied} attachments copied)[/dim]"
        )

    def failure(self, message: str) -> None:
        self.failures += 1
        console.print(f"[red]Error:[/red] {message}")


def _load_config(config: Path | None, vault: Path | None) -> ExportConfig:
    overrides = {"vault_path": vault} if vault is not None else {}
    try:
        return ExportConfig(config_file=config, **overrides)
    except ExportConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise HandledExportError(str(e)) from e


def _log_config(config: ExportConfig) -> None:
    """Log the current configuration."""
    console.print("\n[bold blue]Current Configuration:[/bold blue]")

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Setting", style="dim", width=25)
    table.add_column("Value", style="white")

    def optional(value: object) -> str:
        return str(value) if value else "[dim]Not set[/dim]"

    table.add_row("Config file:", optional(config.config_file_path))
    table.add_row("Vault:", str(config.vault_path))
    table.add_row("Export path:", optional(config.export_path))
    table.add_row("Attachments directory:", optional(config.attachments_dir))
    table.add_row("Attachments URL prefix:", config.attachments_url_prefix)
    table.add_row("Default author:", optional(config.default_author))
    table.add_row("CDN transform:", "✓" if config.enable_cdn_transform else "✗")
    table.add_row("Site base URL:", optional(config.site_base_url))

    console.print(table)

    if config.note_plugins:
        console.print("\n[bold]Pipeline overrides:[/bold]")
        for plugin in config.note_plugins:
            status = "[green]enabled[/green]" if plugin.enabled else "[red]disabled[/red]"
            console.print(f"  • [cyan]{plugin.name.value}[/cyan] ({status})")

    console.print()


def _vault_relative(note: Path, vault: Path) -> Path:
    if not note.is_absolute():
        return note
    try:
        return note.resolve().relative_to(vault.resolve())
    except ValueError:
        return note


@click.group()
@click.version_option(package_name="vaultpress")
def main() -> None:
    """vaultpress - Export vault notes as Hugo content."""
    pass


@main.command()
@click.argument("notes", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, file_okay=True, path_type=Path),
    help="Path to a YAML configuration file",
)
@click.option(
    "--vault",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Vault directory (overrides vault_path from the configuration)",
)
def export(notes: tuple[Path, ...], config: Path | None, vault: Path | None) -> None:
    """Export one or more notes, given relative to the vault."""
    try:
        export_config = _load_config(config, vault)
    except HandledExportError:
        raise SystemExit(1)

    result_sink = ConsoleResultSink()

    async def _export() -> None:
        exporter = NoteExporter(export_config)
        try:
            start_time = time.perf_counter()
            results = await exporter.export_many(
                [_vault_relative(note, export_config.vault_path) for note in notes],
                result_sink,
            )
            duration_ms = (time.perf_counter() - start_time) * 1000

            for result in results:
                for warning in result.warnings:
                    console.print(f"[yellow]Warning:[/yellow] {warning}")

            console.print(f"[dim]Finished in {duration_ms:.1f}ms[/dim]")
        finally:
            exporter.cleanup()

    try:
        asyncio.run(_export())
    except ExportConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if result_sink.failures:
        raise SystemExit(1)


@main.command(name="config")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, file_okay=True, path_type=Path),
    help="Path to a YAML configuration file",
)
def show_config(config: Path | None) -> None:
    """Show the effective configuration."""
    try:
        _log_config(_load_config(config, None))
    except HandledExportError:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
