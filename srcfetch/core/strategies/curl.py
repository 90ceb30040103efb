"""归档下载策略（HTTP / FTP）"""

from __future__ import annotations

import logging
from pathlib import Path

from srcfetch.core import archive, extract
from srcfetch.core.cache import discard_on_failure
from srcfetch.core.exceptions import NetworkError
from srcfetch.core.models import ArchiveKind
from srcfetch.core.strategies.base import DownloadStrategy
from srcfetch.utils.net import validate_url_scheme

logger = logging.getLogger(__name__)


class CurlDownloadStrategy(DownloadStrategy):
    """用 curl 下载归档，暂存时按文件头自动解压"""

    name = "curl"

    def cache_file(self) -> Path:
        """缓存文件路径: <缓存键><扩展名> 或 URL 文件名"""
        return self.cache.entry(
            self.cache_key, self.url, archive.download_extension(self.url),
        )

    def fetch(self) -> Path:
        logger.info("下载 %s", self.url)
        validate_url_scheme(self.url, context=self.origin.name or "download")
        dl = self.cache_file()
        self._entry = dl

        if dl.exists():
            # 存在即视为完整，不做新鲜度校验
            logger.info("文件已下载并缓存于 %s", self.cache.root)
            return dl

        self.cache.ensure()
        with discard_on_failure(dl):
            self._run(
                [self.config.tool("curl"), self.url, "-o", dl],
                NetworkError,
            )
        # 校验和由调用方基于返回路径完成
        return dl

    def stage(self) -> Path:
        dl = self.entry
        cwd = Path.cwd()
        kind = archive.sniff(dl)
        if kind in (ArchiveKind.ZIP, ArchiveKind.TAR):
            extract.extract(kind, dl, cwd, self.runner, self.config)
            return extract.settle(cwd)

        # 非归档（单文件安装脚本等）与 jar 保持原文件名放置
        extract.place(dl, cwd, self.url)
        return cwd


class NoUnzipCurlDownloadStrategy(CurlDownloadStrategy):
    """只下载不解压，适用于 jar 等需保持原样的单文件产物"""

    name = "nounzip"

    def stage(self) -> Path:
        cwd = Path.cwd()
        extract.place(self.entry, cwd, self.url)
        return cwd
