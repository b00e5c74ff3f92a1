"""Shared fixtures and fakes for vaultpress tests."""

import logging
from datetime import datetime, timezone
from io import BytesIO
from pathlib import Path, PurePosixPath

import pytest
from PIL import Image

from vaultpress.assembler import Clock
from vaultpress.config import ExportConfig
from vaultpress.models import VaultFile
from vaultpress.store import ContentStore


class FakeContentStore(ContentStore):
    """In-memory content store keyed by vault-relative path."""

    def __init__(self, files: dict[str, bytes | str] | None = None) -> None:
        self.files: dict[str, bytes] = {
            path: data.encode("utf-8") if isinstance(data, str) else data
            for path, data in (files or {}).items()
        }
        self.link_lookups: list[str] = []

    def read_text(self, path: str | Path) -> str:
        key = Path(path).as_posix()
        if key not in self.files:
            raise FileNotFoundError(key)
        return self.files[key].decode("utf-8")

    def read_binary(self, handle: VaultFile) -> bytes:
        return self.files[handle.path]

    def get_by_exact_path(self, path: str) -> VaultFile | None:
        return VaultFile(path=path) if path in self.files else None

    def resolve_link_path(self, name: str, source_path: str | Path) -> VaultFile | None:
        self.link_lookups.append(name)
        for path in self.files:
            if PurePosixPath(path).name == name:
                return VaultFile(path=path)
        return None


class FixedClock(Clock):
    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


def make_image(
    description: str | None = None, image_format: str = "JPEG"
) -> bytes:
    """Create a tiny image, optionally with an EXIF ImageDescription."""
    image = Image.new("RGB", (8, 8), color=(200, 30, 30))
    buffer = BytesIO()
    exif = Image.Exif()
    if description is not None:
        exif[0x010E] = description
    image.save(buffer, image_format, exif=exif)
    return buffer.getvalue()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def export_config(tmp_path: Path) -> ExportConfig:
    return ExportConfig(
        vault_path=tmp_path / "vault",
        export_path=tmp_path / "site" / "content" / "posts",
        attachments_dir=tmp_path / "site" / "static" / "images",
        attachments_url_prefix="/images",
    )


@pytest.fixture
def cdn_config(export_config: ExportConfig) -> ExportConfig:
    return export_config.model_copy(
        update={"enable_cdn_transform": True, "site_base_url": "https://site.com"}
    )


@pytest.fixture
def caplog(caplog: pytest.LogCaptureFixture):
    """Attach pytest's capture handler to vaultpress loggers, which don't propagate."""
    loggers = [
        logger
        for name, logger in logging.root.manager.loggerDict.items()
        if name.startswith("vaultpress") and isinstance(logger, logging.Logger)
    ]
    for logger in loggers:
        logger.addHandler(caplog.handler)
    yield caplog
    for logger in loggers:
        logger.removeHandler(caplog.handler)
