"""Final document assembly: Hugo frontmatter header plus rewritten body."""

import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from vaultpress.context import FrontmatterData

if TYPE_CHECKING:
    from vaultpress.config import ExportConfig

FRONTMATTER_DELIMITER = "---"
DEFAULT_AUTHOR = "Unknown"


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. `2024-05-01T09:30:00.000Z`."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def sanitize_filename(basename: str) -> str:
    """
    Map a note name onto `[a-z0-9-]`, lowercased.

    Idempotent. Different notes can map to the same name, e.g. `My Note` and `my-note`.

    """
    return re.sub(r"[^a-z0-9-]", "-", basename, flags=re.IGNORECASE).lower()


def output_filename(basename: str) -> str:
    return f"{sanitize_filename(basename)}.md"


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class DocumentAssembler:
    """Builds the exported document from the pieces the pipeline produced."""

    def __init__(self, config: "ExportConfig", clock: Clock | None = None) -> None:
        self.config = config
        self.clock = clock or SystemClock()

    def assemble(
        self,
        frontmatter: FrontmatterData,
        tags: list[str],
        body: str,
        basename: str,
    ) -> str:
        title = frontmatter.title or basename
        date = frontmatter.date or format_timestamp(self.clock.now())
        author = frontmatter.author or self.config.default_author or DEFAULT_AUTHOR

        lines = [
            FRONTMATTER_DELIMITER,
            f"title: {_quote(title)}",
            f"date: {date}",
            f"author: {author}",
            "draft: false",
        ]
        if tags:
            lines.append("tags:")
            lines.extend(f"  - {tag}" for tag in tags)
        lines.append(FRONTMATTER_DELIMITER)

        return "\n".join(lines) + "\n\n" + body
