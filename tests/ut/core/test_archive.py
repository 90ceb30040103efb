"""归档类型识别测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from srcfetch.core.archive import classify, download_extension, sniff
from srcfetch.core.models import ArchiveKind


class TestClassify:
    @pytest.mark.parametrize(("magic", "kind"), [
        (b"PK\x03\x04", ArchiveKind.ZIP),
        (b"\x1f\x8b\x08\x00", ArchiveKind.TAR),
        (b"BZh9", ArchiveKind.TAR),
        (b"\x1f\x9d\x90", ArchiveKind.TAR),
        (b"#!/b", ArchiveKind.OPAQUE),
        (b"PK\x05\x06", ArchiveKind.OPAQUE),
        (b"", ArchiveKind.OPAQUE),
    ])
    def test_magic(self, magic: bytes, kind: ArchiveKind) -> None:
        assert classify(magic) is kind


class TestSniff:
    def test_reads_leading_bytes(self, tmp_path: Path) -> None:
        f = tmp_path / "download.bin"
        f.write_bytes(b"BZh91AY&SY" + b"\x00" * 32)
        assert sniff(f) is ArchiveKind.TAR

    def test_jar_not_read(self, tmp_path: Path) -> None:
        """jar 虽是 zip 格式，但不做解压识别"""
        f = tmp_path / "tool-1.0.jar"
        f.write_bytes(b"PK\x03\x04rest")
        assert sniff(f) is ArchiveKind.JAR

    def test_short_file(self, tmp_path: Path) -> None:
        f = tmp_path / "x"
        f.write_bytes(b"P")
        assert sniff(f) is ArchiveKind.OPAQUE


class TestDownloadExtension:
    @pytest.mark.parametrize(("url", "ext"), [
        ("http://github.com/mxcl/homebrew/zipball/0.4", ".zip"),
        ("https://www.github.com/foo/bar/tarball/v1.0", ".tgz"),
        ("https://example.com/dl/wget-1.12.tar.gz", ".gz"),
        ("https://example.com/dl/wget-1.12.tar.bz2?mirror=1", ".bz2"),
        ("ftp://ftp.gnu.org/gnu/hello/hello-2.4.zip", ".zip"),
        ("https://example.com/install", ""),
    ])
    def test_extension(self, url: str, ext: str) -> None:
        assert download_extension(url) == ext
