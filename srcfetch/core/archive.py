"""归档类型识别

下载产物往往没有可靠的元数据（content-type 等），因此按文件头魔数判断：

  PK\\x03\\x04         -> zip
  \\x1f\\x8b (gzip)    -> tar
  BZh (bzip2)        -> tar
  \\x1f\\x9d (compress) -> tar

.jar 与 zip 兼容但不应解压，不读文件头直接识别为 JAR。
"""

from __future__ import annotations

import re
from pathlib import Path

from srcfetch.core.models import ArchiveKind
from srcfetch.utils.net import url_path

MAGIC_TABLE: tuple[tuple[bytes, ArchiveKind], ...] = (
    (b"PK\x03\x04", ArchiveKind.ZIP),
    (b"\x1f\x8b", ArchiveKind.TAR),
    (b"BZh", ArchiveKind.TAR),
    (b"\x1f\x9d", ArchiveKind.TAR),
)

# GitHub 的 zipball / tarball 下载 URL 没有扩展名
_GITHUB_BALL_RE = re.compile(r"^https?://(www\.)?github\.com/.*/(zip|tar)ball/")


def classify(magic: bytes) -> ArchiveKind:
    """按文件头字节分类"""
    for prefix, kind in MAGIC_TABLE:
        if magic.startswith(prefix):
            return kind
    return ArchiveKind.OPAQUE


def sniff(path: Path) -> ArchiveKind:
    """读取前 4 个字节判断归档类型"""
    if path.suffix == ".jar":
        return ArchiveKind.JAR
    with open(path, "rb") as f:
        return classify(f.read(4))


def download_extension(url: str) -> str:
    """缓存文件扩展名：GitHub ball 链接强制 .zip/.tgz，否则取 URL 自身扩展名"""
    m = _GITHUB_BALL_RE.match(url)
    if m:
        return ".zip" if m.group(2) == "zip" else ".tgz"
    return url_path(url).suffix
