"""Filesystem writes for exported documents and attachments."""

from pathlib import Path

from vaultpress.exceptions import ExportIOError


class FilesystemSink:
    """Writes export output, translating OS failures into ExportIOError."""

    def ensure_dir(self, path: Path) -> None:
        # Concurrent exports may create the same directory
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportIOError(f"Could not create directory {path}: {e}") from e

    def write_bytes(self, path: Path, data: bytes) -> None:
        try:
            path.write_bytes(data)
        except OSError as e:
            raise ExportIOError(f"Could not write {path}: {e}") from e

    def write_text(self, path: Path, text: str) -> None:
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ExportIOError(f"Could not write {path}: {e}") from e
