"""Tests for attachment resolution and copying."""

import pytest
from conftest import FakeContentStore, make_image

from vaultpress.attachments import (
    AttachmentCopier,
    AttachmentResolver,
    copy_attachments,
    sanitize_attachment_name,
)
from vaultpress.exceptions import ExportIOError
from vaultpress.io import FilesystemSink
from vaultpress.models import ResolvedAttachment, VaultFile


class TestSanitizeAttachmentName:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("photo.jpg", "photo.jpg"),
            ("My Photo (1).JPG", "my-photo--1-.jpg"),
            ("résumé.png", "r-sum-.png"),
            ("under_score.png", "under-score.png"),
        ],
    )
    def test_sanitize(self, name, expected):
        assert sanitize_attachment_name(name) == expected


class TestAttachmentResolver:
    """Test cases for the three lookup strategies."""

    def test_exact_path(self):
        store = FakeContentStore({"assets/photo.jpg": b"x"})
        resolver = AttachmentResolver(store)

        assert resolver.resolve("assets/photo.jpg", "note.md") == VaultFile(
            path="assets/photo.jpg"
        )
        assert store.link_lookups == []

    def test_extension_order(self):
        store = FakeContentStore({"diagram.svg": b"x", "diagram.jpg": b"x"})

        handle = AttachmentResolver(store).resolve("diagram", "note.md")

        assert handle == VaultFile(path="diagram.jpg")

    def test_extensions_only_tried_for_bare_names(self):
        store = FakeContentStore({"photo.jpg.png": b"x"})

        assert AttachmentResolver(store).resolve("photo.jpg", "note.md") is None
        assert store.link_lookups == ["photo.jpg"]

    def test_falls_back_to_link_resolution(self):
        store = FakeContentStore({"attachments/photo.jpg": b"x"})

        handle = AttachmentResolver(store).resolve("photo.jpg", "note.md")

        assert handle == VaultFile(path="attachments/photo.jpg")
        assert store.link_lookups == ["photo.jpg"]

    def test_not_found(self):
        assert AttachmentResolver(FakeContentStore()).resolve("missing.png", "n.md") is None


class TestAttachmentCopier:
    """Test cases for AttachmentCopier."""

    def test_copy_writes_sanitized_file_with_caption(self, tmp_path):
        data = make_image("Harbour at dawn")
        store = FakeContentStore({"img/Harbour View.jpg": data})
        dest_dir = tmp_path / "static" / "images"

        attachment = AttachmentCopier(store, FilesystemSink()).copy(
            VaultFile(path="img/Harbour View.jpg"), dest_dir, "Harbour View.jpg"
        )

        assert attachment == ResolvedAttachment(
            source_name="Harbour View.jpg",
            new_filename="harbour-view.jpg",
            caption="Harbour at dawn",
        )
        assert (dest_dir / "harbour-view.jpg").read_bytes() == data

    def test_copy_overwrites_existing_file(self, tmp_path):
        (tmp_path / "a.pdf").write_bytes(b"old")
        store = FakeContentStore({"a.pdf": b"new"})

        attachment = AttachmentCopier(store, FilesystemSink()).copy(
            VaultFile(path="a.pdf"), tmp_path, "a.pdf"
        )

        assert attachment.caption is None
        assert (tmp_path / "a.pdf").read_bytes() == b"new"

    def test_write_failure_raises_export_io_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = FakeContentStore({"a.pdf": b"data"})

        with pytest.raises(ExportIOError):
            AttachmentCopier(store, FilesystemSink()).copy(
                VaultFile(path="a.pdf"), blocker / "images", "a.pdf"
            )


class TestCopyAttachments:
    """Test cases for copying every reference of a note."""

    async def test_copies_each_distinct_reference_once(self, tmp_path):
        store = FakeContentStore({"a.png": make_image(), "b.pdf": b"%PDF"})
        copied = []

        class RecordingCopier(AttachmentCopier):
            def copy(self, handle, dest_dir, source_name):
                copied.append(source_name)
                return super().copy(handle, dest_dir, source_name)

        attachments, missing = await copy_attachments(
            ["a.png", "b", "a.png", "gone.png"],
            "note.md",
            tmp_path,
            AttachmentResolver(store),
            RecordingCopier(store, FilesystemSink()),
        )

        assert list(attachments) == ["a.png", "b"]
        assert attachments["b"].new_filename == "b.pdf"
        assert missing == ["gone.png"]
        assert sorted(copied) == ["a.png", "b"]

    async def test_colliding_names_last_write_wins(self, tmp_path):
        store = FakeContentStore({"A B.pdf": b"first", "a-b.pdf": b"second"})

        attachments, _ = await copy_attachments(
            ["A B.pdf", "a-b.pdf"],
            "note.md",
            tmp_path,
            AttachmentResolver(store),
            AttachmentCopier(store, FilesystemSink()),
        )

        assert attachments["A B.pdf"].new_filename == "a-b.pdf"
        assert attachments["a-b.pdf"].new_filename == "a-b.pdf"
        assert (tmp_path / "a-b.pdf").read_bytes() == b"second"
