"""CVS 策略（pserver 登录后 checkout）

URL 形如 cvs://:pserver:anoncvs@www.gccxml.org:/cvsroot/GCC_XML:gccxml
拆为仓库根 :pserver:anoncvs@www.gccxml.org:/cvsroot/GCC_XML 和模块 gccxml，即:

  cvs -d :pserver:anoncvs@www.gccxml.org:/cvsroot/GCC_XML login
  cvs -d :pserver:anoncvs@www.gccxml.org:/cvsroot/GCC_XML checkout -d <缓存键> gccxml

CVS 没有 export 到已存在目录的能力，暂存时复制后删除所有 CVS 元数据目录。
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from pathlib import Path

from srcfetch.core.cache import discard_on_failure
from srcfetch.core.exceptions import ValidationError, VcsFetchError, VcsStageError
from srcfetch.core.strategies.base import VcsDownloadStrategy

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^cvs://")


def split_cvs_url(url: str) -> tuple[str, str]:
    """拆分 CVS URL，返回 (模块名, 仓库根)"""
    parts = _SCHEME_RE.sub("", url).split(":")
    module = parts.pop()
    root = ":".join(parts)
    if not module or not root:
        raise ValidationError(f"CVS URL 缺少模块名或仓库根: {url}")
    return module, root


def prune_metadata(root: Path, metadata_dir: str) -> int:
    """删除 root 下所有名为 metadata_dir 的目录并停止向其内部递归，返回删除数"""
    removed = 0
    for dirpath, dirnames, _filenames in os.walk(root, topdown=True):
        for d in list(dirnames):
            if d == metadata_dir:
                shutil.rmtree(Path(dirpath) / d)
                dirnames.remove(d)
                removed += 1
    return removed


class CVSDownloadStrategy(VcsDownloadStrategy):
    """cvs login + checkout 到缓存，复制到工作目录"""

    name = "cvs"
    metadata_dir = "CVS"

    def fetch(self) -> Path:
        logger.info("检出 %s", self.url)
        module, root = split_cvs_url(self.url)
        co = self.cache_dir
        self._entry = co
        cvs = self._tool("cvs")
        if not co.exists():
            cache_root = self.cache.ensure()
            with discard_on_failure(co):
                self._run([cvs, "-d", root, "login"], VcsFetchError, cwd=cache_root)
                self._run(
                    [cvs, "-d", root, "checkout", "-d", co.name, module],
                    VcsFetchError, cwd=cache_root,
                )
        else:
            # 更新时不重新登录，沿用首次 login 保存的凭据
            logger.info("更新 %s", co)
            self._run([cvs, "up"], VcsFetchError, cwd=co)
        return co

    def stage(self) -> Path:
        cwd = Path.cwd()
        co = self.entry
        try:
            for item in co.iterdir():
                target = cwd / item.name
                if item.is_dir() and not item.is_symlink():
                    shutil.copytree(item, target, symlinks=True, dirs_exist_ok=True)
                else:
                    shutil.copy2(item, target, follow_symlinks=False)
        except OSError as e:
            raise VcsStageError(f"复制 CVS 检出失败: {co} -> {cwd}: {e}") from e
        removed = prune_metadata(cwd, self.metadata_dir)
        logger.debug("已删除 %d 个 %s 目录", removed, self.metadata_dir)
        return cwd
