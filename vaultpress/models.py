"""Value types shared across the export pipeline."""

from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict


class Dimensions(BaseModel):
    """Pipe modifier of the form `500` or `500x300`."""

    width: int
    height: int | None = None

    model_config = ConfigDict(frozen=True)


class AltText(BaseModel):
    """Pipe modifier that isn't a size, kept verbatim."""

    text: str

    model_config = ConfigDict(frozen=True)


PipeModifier = Dimensions | AltText


class VaultFile(BaseModel):
    """Handle to a file inside the content store, addressed by its vault-relative path."""

    path: str

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def stem(self) -> str:
        return PurePosixPath(self.path).stem

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.path).suffix


class ResolvedAttachment(BaseModel):
    """An attachment that has been copied into the attachments directory."""

    source_name: str
    """Reference token exactly as written in the note, e.g. `photo.jpg`"""

    new_filename: str
    """Sanitized filename inside the attachments directory"""

    caption: str | None = None
    """Caption read from the image's IPTC/EXIF metadata"""

    model_config = ConfigDict(frozen=True)


class FigureSpec(BaseModel):
    """Attributes of a single `figure` shortcode."""

    src: str
    link: str | None = None
    alt: str | None = None
    caption: str | None = None
    width: int | None = None
    height: int | None = None

    model_config = ConfigDict(frozen=True)


class ExportResult(BaseModel):
    export_path: Path
    attachments_copied: int
    warnings: list[str] = []
