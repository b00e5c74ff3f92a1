"""Context model for passing export state through plugins."""

from datetime import date, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vaultpress.logger import get_logger
from vaultpress.models import ResolvedAttachment

logger = get_logger(__name__)


class FrontmatterData(BaseModel):
    """The frontmatter fields an export reads from an existing note header.

    Any other keys in the header are ignored and are not written back out.
    """

    title: str | None = None
    date: str | None = None
    author: str | None = None
    tags: list[str] = []

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", "author", mode="before")
    @classmethod
    def validate_text(cls, v: Any) -> str | None:
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v: Any) -> str | None:
        """YAML hands back dates as `date`/`datetime` objects; keep them as ISO text."""
        if v is None or v == "":
            return None
        if isinstance(v, datetime | date):
            return v.isoformat()
        return str(v)

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: Any) -> list[str]:
        """Accept a list of tags or a single tag string."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v else []
        if isinstance(v, list):
            return [str(tag) for tag in v if tag is not None and tag != ""]
        logger.warning(f"Ignoring tags of unsupported type: {type(v).__name__}")
        return []


class ExportContext(BaseModel):
    """Context object passed through plugins containing one note's export state."""

    # File information
    source_path: Path
    """Vault-relative path of the note being exported"""

    # Raw content from the store
    raw_content: str

    # Processed content, rewritten in place by each stage
    content: str = ""

    frontmatter: FrontmatterData = Field(default_factory=FrontmatterData)
    tags: list[str] = []

    # Keyed by the reference token as written in the note
    attachments: dict[str, ResolvedAttachment] = {}

    warnings: list[str] = []

    @property
    def basename(self) -> str:
        """Note filename without its extension."""
        return self.source_path.stem

    def warn(self, message: str) -> None:
        """Record a recoverable problem and log it."""
        logger.warning(message)
        self.warnings.append(message)
