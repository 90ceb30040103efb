"""CLI：缓存与清单查询命令"""

from __future__ import annotations

from pathlib import Path

import click

from srcfetch.cli import _cfg, _guard
from srcfetch.core.archive import sniff
from srcfetch.core.dispatch import detect_strategy
from srcfetch.core.manifest import PackageManifest
from srcfetch.core.models import cache_key


def register(group: click.Group) -> None:
    group.add_command(show_cache_key)
    group.add_command(detect)
    group.add_command(list_packages)


@click.command(name="cache-key")
@click.argument("name")
@click.argument("version")
def show_cache_key(name: str, version: str) -> None:
    """显示包的缓存键与缓存路径"""
    key = cache_key(name, version)
    if key is None:
        click.echo("无法计算缓存键，将使用来源 URL 的文件名")
        return
    click.echo(f"{key}  {_cfg().cache_root / key}")


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def detect(path: Path) -> None:
    """按文件头识别归档类型"""
    click.echo(sniff(path).value)


@click.command(name="packages")
def list_packages() -> None:
    """列出清单中的所有包"""
    with _guard():
        packages = PackageManifest(_cfg().manifest).load()
    if not packages:
        click.echo("清单中没有包。")
        return
    for name, src in sorted(packages.items()):
        using = src.using or detect_strategy(src.origin.url).name
        pin = f" ({src.origin.pin})" if src.origin.pin else ""
        click.echo(
            f"  {name:20s} {src.origin.version:12s} [{using:7s}] "
            f"{src.origin.url}{pin}"
        )
