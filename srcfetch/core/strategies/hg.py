"""Mercurial 策略（clone / update / archive 模型）

hg 在默认系统安装中经常缺失，是唯一在 fetch 前做工具预检的策略。
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from srcfetch.core.cache import discard_on_failure
from srcfetch.core.exceptions import ToolMissingError, VcsFetchError, VcsStageError
from srcfetch.core.strategies.base import VcsDownloadStrategy
from srcfetch.utils.shell import which

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^hg://")

INSTALL_HINT = (
    "需要安装 Mercurial，可选方式:\n\n"
    "    pip install mercurial\n"
    "    或使用系统包管理器安装 mercurial\n"
)


def normalize_hg_url(url: str) -> str:
    """去掉 hg:// 前缀，如 hg://https://example.com/repo -> https://example.com/repo"""
    return _SCHEME_RE.sub("", url)


class MercurialDownloadStrategy(VcsDownloadStrategy):
    """hg clone 到缓存，hg archive 导出到工作目录"""

    name = "hg"
    metadata_dir = ".hg"

    #: fetch() 预检得到的 hg 绝对路径，stage() 沿用
    _hg: str = ""

    @property
    def clone_url(self) -> str:
        return normalize_hg_url(self.url)

    def check_tool(self) -> str:
        """预检 hg 是否可用，返回可执行文件路径"""
        hg = self._tool("hg")
        found = hg if os.path.isabs(hg) and os.access(hg, os.X_OK) else which(hg)
        if not found:
            raise ToolMissingError(f"找不到 {hg}。{INSTALL_HINT}")
        return os.path.abspath(found)

    def fetch(self) -> Path:
        hg = self._hg = self.check_tool()
        logger.info("克隆 %s", self.clone_url)
        clone = self.cache_dir
        self._entry = clone
        if not clone.exists():
            self.cache.ensure()
            with discard_on_failure(clone):
                self._run([hg, "clone", self.clone_url, clone], VcsFetchError)
        else:
            logger.info("更新 %s", clone)
            self._run([hg, "update"], VcsFetchError, cwd=clone)
        return clone

    def stage(self) -> Path:
        dst = Path.cwd()
        clone = self.entry
        args: list = [self._hg, "archive", "-y"]
        pin = self.origin.pin
        if pin is not None:
            logger.info("切换到 %s", pin)
            args += ["-r", pin.ref]
        args += ["-t", "files", dst]
        self._run(args, VcsStageError, cwd=clone)
        return dst
