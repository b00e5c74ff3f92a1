"""Content store access for notes and attachments in a vault."""

from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

from rapidfuzz import fuzz, process

from vaultpress.logger import get_logger
from vaultpress.models import VaultFile

logger = get_logger(__name__)

# Minimum rapidfuzz ratio for a fuzzy filename match to count as a hit
FUZZY_MATCH_CUTOFF = 95


class ContentStore(ABC):
    """Read access to the notes and attachments an export draws from."""

    @abstractmethod
    def read_text(self, path: str | Path) -> str:
        pass

    @abstractmethod
    def read_binary(self, handle: VaultFile) -> bytes:
        pass

    @abstractmethod
    def get_by_exact_path(self, path: str) -> VaultFile | None:
        """Return the file stored at exactly `path`, if any."""
        pass

    @abstractmethod
    def resolve_link_path(self, name: str, source_path: str | Path) -> VaultFile | None:
        """Resolve a link the way the note's editor would, relative to `source_path`."""
        pass


class VaultContentStore(ContentStore):
    """Content store backed by a vault directory on disk.

    Hidden directories (`.obsidian`, `.trash`, ...) are never searched when
    resolving links.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def read_text(self, path: str | Path) -> str:
        return (self.root / path).read_text(encoding="utf-8")

    def read_binary(self, handle: VaultFile) -> bytes:
        return (self.root / handle.path).read_bytes()

    def get_by_exact_path(self, path: str) -> VaultFile | None:
        relative = PurePosixPath(path.lstrip("/"))
        if not relative.parts or ".." in relative.parts:
            return None

        full_path = self.root / relative
        if full_path.is_file():
            return VaultFile(path=relative.as_posix())
        return None

    def resolve_link_path(self, name: str, source_path: str | Path) -> VaultFile | None:
        # Headings and block references don't change which file is linked
        link_path = name.split("#", 1)[0].strip()
        if not link_path:
            return None

        target = PurePosixPath(link_path)
        source_dir = PurePosixPath(Path(source_path).as_posix()).parent

        # Relative to the linking note first
        if source_dir != PurePosixPath("."):
            relative_hit = self.get_by_exact_path((source_dir / target).as_posix())
            if relative_hit:
                return relative_hit

        vault_files = self._list_files()
        candidates = [
            path for path in vault_files if self._matches_link(path, target)
        ]
        if candidates:
            return VaultFile(path=self._closest(candidates, source_dir).as_posix())

        names = [path.name.lower() for path in vault_files]
        closest_match = process.extractOne(
            target.name.lower(),
            names,
            scorer=fuzz.ratio,
            score_cutoff=FUZZY_MATCH_CUTOFF,
        )
        if closest_match:
            _, score, index = closest_match
            logger.info(
                f"Fuzzy matched link {name} -> {vault_files[index]} (score {score:.1f})"
            )
            return VaultFile(path=vault_files[index].as_posix())

        return None

    def _list_files(self) -> list[PurePosixPath]:
        if not self.root.exists():
            return []

        files = []
        for path in self.root.rglob("*"):
            relative = path.relative_to(self.root)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if path.is_file():
                files.append(PurePosixPath(relative.as_posix()))
        return sorted(files)

    @staticmethod
    def _matches_link(path: PurePosixPath, target: PurePosixPath) -> bool:
        wanted = target.as_posix().lower()
        # Extensionless links match any file with that stem
        if target.suffix:
            candidate = path.as_posix().lower()
        else:
            candidate = path.with_suffix("").as_posix().lower()
        return candidate == wanted or candidate.endswith("/" + wanted)

    @staticmethod
    def _closest(candidates: list[PurePosixPath], source_dir: PurePosixPath) -> PurePosixPath:
        """Prefer a file next to the linking note, then the shortest path."""
        for candidate in candidates:
            if candidate.parent == source_dir:
                return candidate
        return min(candidates, key=lambda path: (len(path.parts), path.as_posix()))
