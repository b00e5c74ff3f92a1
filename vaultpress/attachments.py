"""Resolution and copying of attachments referenced by a note."""

import asyncio
import re
from collections import defaultdict
from pathlib import Path, PurePosixPath

from vaultpress.captions import extract_caption
from vaultpress.exceptions import ExportIOError
from vaultpress.io import FilesystemSink
from vaultpress.logger import get_logger
from vaultpress.models import ResolvedAttachment, VaultFile
from vaultpress.store import ContentStore

logger = get_logger(__name__)

# Tried in order when a reference has no extension
ATTACHMENT_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "webp", "svg", "pdf")


def sanitize_attachment_name(name: str) -> str:
    """
    Map a filename onto `[a-z0-9.-]`.

    Distinct names can sanitize to the same string, e.g. `A b.png` and `a-b.png`.

    """
    return re.sub(r"[^A-Za-z0-9.-]", "-", name).lower()


class AttachmentResolver:
    """Finds the store entry an embed refers to."""

    def __init__(self, store: ContentStore) -> None:
        self.store = store

    def resolve(self, name: str, source_path: str | Path) -> VaultFile | None:
        handle = self.store.get_by_exact_path(name)
        if handle:
            return handle

        if not PurePosixPath(name).suffix:
            for extension in ATTACHMENT_EXTENSIONS:
                handle = self.store.get_by_exact_path(f"{name}.{extension}")
                if handle:
                    return handle

        return self.store.resolve_link_path(name, source_path)


class AttachmentCopier:
    """Copies attachment bytes into the attachments directory."""

    def __init__(self, store: ContentStore, sink: FilesystemSink) -> None:
        self.store = store
        self.sink = sink

    def copy(self, handle: VaultFile, dest_dir: Path, source_name: str) -> ResolvedAttachment:
        try:
            data = self.store.read_binary(handle)
        except OSError as e:
            raise ExportIOError(f"Could not read attachment {handle.path}: {e}") from e
        caption = extract_caption(data)

        new_filename = sanitize_attachment_name(handle.name)
        self.sink.ensure_dir(dest_dir)
        self.sink.write_bytes(dest_dir / new_filename, data)

        logger.debug(f"Copied attachment {handle.path} -> {dest_dir / new_filename}")
        return ResolvedAttachment(
            source_name=source_name, new_filename=new_filename, caption=caption
        )


async def copy_attachments(
    names: list[str],
    source_path: str | Path,
    dest_dir: Path,
    resolver: AttachmentResolver,
    copier: AttachmentCopier,
    max_concurrent: int = 8,
) -> tuple[dict[str, ResolvedAttachment], list[str]]:
    """
    Resolve and copy every distinct reference in `names`.

    Every reference is resolved before the first copy starts. Copies that land on
    the same destination file run one after another, in reference order; all other
    copies run concurrently. Returns the attachment map and the references that
    could not be resolved.

    """
    distinct_names = list(dict.fromkeys(names))

    resolved: dict[str, VaultFile] = {}
    missing: list[str] = []
    for name in distinct_names:
        handle = resolver.resolve(name, source_path)
        if handle is None:
            missing.append(name)
        else:
            resolved[name] = handle

    # Group by destination so writes to one path never race
    groups: dict[str, list[str]] = defaultdict(list)
    for name, handle in resolved.items():
        groups[sanitize_attachment_name(handle.name)].append(name)

    semaphore = asyncio.Semaphore(max_concurrent)
    attachments: dict[str, ResolvedAttachment] = {}

    async def copy_group(group: list[str]) -> None:
        for name in group:
            async with semaphore:
                attachments[name] = await asyncio.to_thread(
                    copier.copy, resolved[name], dest_dir, name
                )

    await asyncio.gather(*(copy_group(group) for group in groups.values()))

    # Preserve reference order regardless of completion order
    return {name: attachments[name] for name in resolved}, missing
