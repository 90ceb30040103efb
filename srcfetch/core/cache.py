"""缓存路径解析与残留清理

缓存策略:
  - 所有条目直接位于缓存根目录下，以缓存键命名
  - 无缓存键时退化为来源 URL 的文件名（不同来源可能撞名，已知弱约束）
  - 条目只创建和原地更新，从不由本模块淘汰
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from srcfetch.utils.net import url_basename

logger = logging.getLogger(__name__)


class CacheLayout:
    """缓存目录布局"""

    def __init__(self, root: Path | str) -> None:
        # 绝对路径，不随 stage() 时的当前目录变化
        self.root = Path(root).expanduser().resolve()

    def ensure(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def entry(self, key: str | None, url: str, ext: str = "") -> Path:
        """计算缓存条目路径

        有缓存键: root/<key><ext>
        无缓存键: root/<URL 文件名>
        """
        if key:
            return self.root / f"{key}{ext}"
        return self.root / url_basename(url)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path, ignore_errors=True)
    elif path.exists() or path.is_symlink():
        path.unlink(missing_ok=True)


@contextmanager
def discard_on_failure(path: Path) -> Iterator[Path]:
    """逐步创建的缓存条目：异常退出（含 Ctrl-C）时删除残留后再抛出

    保证下次运行不会把半截下载或半截 clone 当作已完成的缓存。
    """
    try:
        yield path
    except BaseException:
        if path.exists() or path.is_symlink():
            logger.warning("清理未完成的缓存条目: %s", path)
            _remove(path)
        raise
