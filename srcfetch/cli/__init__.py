"""srcfetch 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

import click

from srcfetch import __version__
from srcfetch.core.config import DEFAULT_CONFIG_FILE, Config, get_config, init_config
from srcfetch.core.exceptions import SrcFetchError
from srcfetch.utils.logger import setup_logging


def _cfg() -> Config:
    """获取 CLI 入口初始化的全局配置"""
    return get_config()


@contextmanager
def _guard() -> Iterator[None]:
    """将业务异常转换为 click 的友好错误输出"""
    try:
        yield
    except SrcFetchError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default=DEFAULT_CONFIG_FILE,
              help="配置文件路径")
@click.option("--cache-dir", default=None, help="缓存根目录（覆盖配置）")
@click.option("--verbose", "-v", is_flag=True, help="显示外部命令的完整输出")
def main(config_path: str, cache_dir: str | None, verbose: bool) -> None:
    """srcfetch - 源码包拉取与暂存"""
    setup_logging(
        level=os.getenv("SRCFETCH_LOG_LEVEL", "DEBUG" if verbose else "INFO"),
        json_output=os.getenv("SRCFETCH_LOG_JSON", "") == "1",
    )
    with _guard():
        cfg = init_config(config_path)
    if cache_dir:
        cfg.cache_dir = cache_dir
    if verbose:
        cfg.verbose = True


# 注册各领域子命令
from srcfetch.cli.cmd_fetch import register as _reg_fetch  # noqa: E402
from srcfetch.cli.cmd_cache import register as _reg_cache  # noqa: E402

_reg_fetch(main)
_reg_cache(main)
