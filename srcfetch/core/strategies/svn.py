"""Subversion 策略（checkout / update / export 模型）"""

from __future__ import annotations

import logging
from pathlib import Path

from srcfetch.core.cache import discard_on_failure
from srcfetch.core.exceptions import VcsFetchError, VcsStageError
from srcfetch.core.models import PinKind
from srcfetch.core.strategies.base import VcsDownloadStrategy

logger = logging.getLogger(__name__)


class SubversionDownloadStrategy(VcsDownloadStrategy):
    """svn checkout 到缓存，export 到工作目录

    只认修订号锁定；分支和标签在 svn 中就是路径，由 URL 本身表达。
    svn 可执行文件可通过 tools.svn 配置，用于需要特定版本 svn 的包。
    """

    name = "svn"
    metadata_dir = ".svn"

    def fetch(self) -> Path:
        logger.info("检出 %s", self.url)
        co = self.cache_dir
        self._entry = co
        svn = self._tool("svn")
        if not co.exists():
            self.cache.ensure()
            with discard_on_failure(co):
                self._run([svn, "checkout", self.url, co], VcsFetchError, quiet=True)
        else:
            logger.info("更新 %s", co)
            self._run([svn, "up", co], VcsFetchError, quiet=True)
        return co

    def stage(self) -> Path:
        cwd = Path.cwd()
        # 目标目录已存在，必须 --force
        args: list = [self._tool("svn"), "export", "--force", self.entry, cwd]
        pin = self.origin.pin
        if pin is not None and pin.kind == PinKind.REVISION:
            args += ["-r", pin.ref]
        self._run(args, VcsStageError, quiet=True)
        return cwd
