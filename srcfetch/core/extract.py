"""暂存解压

职责:
- 调用 unzip / tar 将归档解压到当前目录
- 解压后规整：只有一个顶层目录时进入该目录作为新的根
- 非归档文件原样移动到当前目录
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from srcfetch.core.config import Config
from srcfetch.core.exceptions import EmptyArchiveError, ExecutionError, ExtractionError
from srcfetch.core.models import ArchiveKind
from srcfetch.utils.net import url_basename
from srcfetch.utils.shell import CommandRunner, QuietFlag

logger = logging.getLogger(__name__)


def extract(
    kind: ArchiveKind,
    archive: Path,
    cwd: Path,
    runner: CommandRunner,
    config: Config,
) -> None:
    """解压到 cwd，解压与解包由外部工具一步完成"""
    if kind == ArchiveKind.ZIP:
        args = [config.tool("unzip"), QuietFlag("-qq"), archive]
        run = runner.run_quiet
    elif kind == ArchiveKind.TAR:
        args = [config.tool("tar"), "xf", archive]
        run = runner.run
    else:
        raise ExtractionError(f"不是可解压的归档: {archive} ({kind.value})")

    logger.debug("解压 %s -> %s", archive, cwd)
    try:
        run(args, cwd=cwd)
    except ExecutionError as e:
        raise ExtractionError(f"解压失败: {archive}: {e}") from e


def visible_entries(directory: Path) -> list[Path]:
    """列出目录下的非隐藏顶层条目"""
    return sorted(p for p in directory.iterdir() if not p.name.startswith("."))


def descend(entry: Path) -> bool:
    """进入 entry 作为新的当前目录；不是目录时留在原处并返回 False"""
    if not entry.is_dir():
        return False
    try:
        os.chdir(entry)
    except OSError:
        return False
    return True


def settle(cwd: Path) -> Path:
    """解压后规整，返回实际的源码根目录

    - 没有任何顶层条目: 视为损坏或误判的下载，抛 EmptyArchiveError
    - 恰好一个顶层条目: 进入该目录
    """
    entries = visible_entries(cwd)
    if not entries:
        raise EmptyArchiveError(f"归档为空: {cwd}")
    if len(entries) == 1 and descend(entries[0]):
        return entries[0]
    return cwd


def place(cached: Path, cwd: Path, url: str) -> Path:
    """将缓存文件按 URL 原文件名移动（非复制）到 cwd"""
    dest = cwd / url_basename(url)
    shutil.move(str(cached), str(dest))
    logger.debug("放置 %s -> %s", cached, dest)
    return dest
