"""网络工具：URL 协议校验与文件名解析"""

from __future__ import annotations

from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

from srcfetch.core.exceptions import ValidationError

DOWNLOAD_SCHEMES = frozenset(("http", "https", "ftp"))


def validate_url_scheme(
    url: str, *, allowed: frozenset[str] = DOWNLOAD_SCHEMES, context: str = "",
) -> None:
    """校验 URL 协议在白名单内，防止 file:// 等非预期协议访问

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in allowed:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 {'/'.join(sorted(allowed))}: {url}"
        )


def url_path(url: str) -> PurePosixPath:
    """URL 的路径部分（去掉查询串和片段）"""
    return PurePosixPath(unquote(urlparse(url).path))


def url_basename(url: str) -> str:
    """URL 路径的最后一段，如 https://a.org/x/foo-1.0.tar.gz -> foo-1.0.tar.gz"""
    name = url_path(url.rstrip("/")).name
    if name:
        return name
    # 无路径的 URL（或 cvs 这类非标准 URL）退化为整串最后一段
    return url.rstrip("/").rsplit("/", 1)[-1]
