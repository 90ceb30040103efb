"""拉取策略基类

每种来源（归档下载 / svn / git / cvs / hg）实现同一组接口:

  fetch() -> Path   保证缓存条目存在且最新；已存在时执行更新而非重新拉取
  stage() -> Path   将缓存内容干净地（不含版本控制元数据）放到当前目录

调用顺序固定为 fetch() 后 stage()，且同一进程内每个包最多 fetch 一次。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from srcfetch.core.cache import CacheLayout
from srcfetch.core.config import Config
from srcfetch.core.exceptions import ExecutionError, SrcFetchError, StageError
from srcfetch.core.models import OriginDescriptor, cache_key
from srcfetch.utils.shell import Arg, CommandResult, CommandRunner

logger = logging.getLogger(__name__)


class DownloadStrategy(ABC):
    """拉取策略抽象基类"""

    #: 子类的注册名，供按名称选择策略
    name: str = ""

    def __init__(
        self,
        origin: OriginDescriptor,
        config: Config,
        runner: CommandRunner | None = None,
    ) -> None:
        self.origin = origin
        self.config = config
        self.runner = runner if runner is not None else CommandRunner(verbose=config.verbose)
        self.cache = CacheLayout(config.cache_root)
        self.cache_key = cache_key(origin.name, origin.version)
        # fetch() 时设置，stage() 时读取
        self._entry: Path | None = None

    @property
    def url(self) -> str:
        return self.origin.url

    @property
    def entry(self) -> Path:
        """fetch() 得到的缓存条目"""
        if self._entry is None:
            raise StageError(f"尚未拉取，请先调用 fetch(): {self.url}")
        return self._entry

    @abstractmethod
    def fetch(self) -> Path:
        """拉取或更新缓存条目，返回条目路径"""

    @abstractmethod
    def stage(self) -> Path:
        """暂存到当前目录，返回源码根目录"""

    # ------------------------------------------------------------------
    # 命令执行
    # ------------------------------------------------------------------

    def _run(
        self,
        args: Sequence[Arg],
        error: type[SrcFetchError],
        *,
        cwd: Path | None = None,
        quiet: bool = False,
        discard_stdout: bool = False,
    ) -> CommandResult:
        """执行外部命令，失败时转为 error 类型的异常"""
        run = self.runner.run_quiet if quiet else self.runner.run
        try:
            return run(args, cwd=cwd, discard_stdout=discard_stdout)
        except ExecutionError as e:
            raise error(str(e)) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.url!r}, key={self.cache_key!r})"


class VcsDownloadStrategy(DownloadStrategy):
    """版本控制类策略公共部分：缓存条目是一个目录"""

    #: 该后端的私有元数据目录名
    metadata_dir: str = ""

    @property
    def cache_dir(self) -> Path:
        return self.cache.entry(self.cache_key, self.url)

    def _tool(self, name: str) -> str:
        return self.config.tool(name)
