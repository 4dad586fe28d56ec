"""Tests for content-type detection."""

from __future__ import annotations

from s3deployer.core.mime import detect_mime_type, mime_from_extension
from s3deployer.models.asset import FileAsset

# Minimal PNG signature followed by an IHDR chunk header
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR" + b"\x00" * 32


class TestMimeFromExtension:
    def test_known_extensions(self):
        assert mime_from_extension("png") == "image/png"
        assert mime_from_extension("css") == "text/css"

    def test_empty_extension(self):
        assert mime_from_extension("") is None

    def test_unknown_extension(self):
        assert mime_from_extension("definitely-not-a-type") is None


class TestDetectMimeType:
    def test_extension_wins(self, tmp_path):
        path = tmp_path / "styles.css"
        path.write_bytes(PNG_BYTES)
        assert detect_mime_type(FileAsset(path)) == "text/css"

    def test_falls_back_to_content(self, tmp_path):
        path = tmp_path / "image"
        path.write_bytes(PNG_BYTES)
        assert detect_mime_type(FileAsset(path)) == "image/png"

    def test_unresolvable_returns_none(self, tmp_path):
        path = tmp_path / "notes"
        path.write_bytes(b"just some text")
        assert detect_mime_type(FileAsset(path)) is None

    def test_missing_file_returns_none(self, tmp_path):
        assert detect_mime_type(FileAsset(tmp_path / "gone")) is None
