"""Git 策略（clone / fetch / checkout-index 模型）"""

from __future__ import annotations

import logging
from pathlib import Path

from srcfetch.core.cache import discard_on_failure
from srcfetch.core.exceptions import VcsFetchError, VcsStageError
from srcfetch.core.models import Pin, PinKind
from srcfetch.core.strategies.base import VcsDownloadStrategy

logger = logging.getLogger(__name__)


def checkout_target(pin: Pin) -> str:
    """锁定对应的 checkout 目标：分支走远程跟踪分支，标签和修订号原样使用"""
    if pin.kind == PinKind.BRANCH:
        return f"origin/{pin.ref}"
    return pin.ref


class GitDownloadStrategy(VcsDownloadStrategy):
    """git clone 到缓存，checkout-index 导出到工作目录"""

    name = "git"
    metadata_dir = ".git"

    def fetch(self) -> Path:
        logger.info("克隆 %s", self.url)
        clone = self.cache_dir
        self._entry = clone
        git = self._tool("git")
        if not clone.exists():
            self.cache.ensure()
            # 首次 clone 始终显示进度
            with discard_on_failure(clone):
                self._run([git, "clone", self.url, clone], VcsFetchError)
        else:
            logger.info("更新 %s", clone)
            self._run([git, "fetch", self.url], VcsFetchError, cwd=clone, quiet=True)
        return clone

    def stage(self) -> Path:
        dst = Path.cwd()
        git = self._tool("git")
        clone = self.entry
        pin = self.origin.pin
        if pin is not None:
            logger.info("切换到 %s", pin)
            self._run(
                [git, "checkout", checkout_target(pin)], VcsStageError,
                cwd=clone, quiet=True, discard_stdout=True,
            )
        # 前缀末尾的 / 表示导出到该目录下，不复制 .git
        self._run(
            [git, "checkout-index", "-af", f"--prefix={dst}/"], VcsStageError,
            cwd=clone,
        )
        return dst
