"""CLI：拉取与暂存命令"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

import click

from srcfetch.cli import _cfg, _guard
from srcfetch.core.dispatch import create_strategy
from srcfetch.core.manifest import PackageManifest
from srcfetch.core.models import OriginDescriptor, Pin, PinKind
from srcfetch.core.strategies import DownloadStrategy


def register(group: click.Group) -> None:
    group.add_command(fetch)
    group.add_command(stage)


def _origin_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """fetch / stage 共用的来源参数"""
    options = [
        click.argument("url", required=False),
        click.option("--package", "-p", default=None, help="从清单中按包名读取来源"),
        click.option("--name", default="", help="包名（决定缓存键）"),
        click.option("--version", "pkg_version", default="", help="包版本（决定缓存键）"),
        click.option("--branch", default=None, help="检出指定分支"),
        click.option("--tag", default=None, help="检出指定标签"),
        click.option("--revision", default=None, help="检出指定修订号"),
        click.option("--using", default=None, help="显式指定策略: curl/nounzip/svn/git/cvs/hg"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_strategy(
    url: str | None, package: str | None, name: str, pkg_version: str,
    branch: str | None, tag: str | None, revision: str | None, using: str | None,
) -> DownloadStrategy:
    cfg = _cfg()
    if package:
        src = PackageManifest(cfg.manifest).get(package)
        return create_strategy(src.origin, cfg, using=using or src.using or None)

    if not url:
        raise click.UsageError("需要指定 URL 或 --package")
    pins = {
        kind.value: ref
        for kind, ref in (
            (PinKind.BRANCH, branch), (PinKind.TAG, tag), (PinKind.REVISION, revision),
        )
        if ref
    }
    if len(pins) > 1:
        raise click.UsageError("--branch / --tag / --revision 只能指定一个")
    origin = OriginDescriptor(
        url=url, name=name, version=pkg_version, pin=Pin.from_mapping(pins),
    )
    return create_strategy(origin, cfg, using=using)


@click.command()
@_origin_options
def fetch(**kwargs: Any) -> None:
    """拉取来源到缓存（已缓存时只做更新）"""
    with _guard():
        strategy = _build_strategy(**kwargs)
        entry = strategy.fetch()
    click.echo(str(entry))


@click.command()
@_origin_options
@click.option("--into", "into", default=".", type=click.Path(file_okay=False),
              help="暂存目标目录（须为空目录）")
def stage(into: str, **kwargs: Any) -> None:
    """拉取后暂存到目标目录，输出源码根目录"""
    dest = Path(into)
    dest.mkdir(parents=True, exist_ok=True)
    if any(dest.iterdir()):
        raise click.UsageError(f"目标目录非空: {dest}")

    prev = os.getcwd()
    with _guard():
        strategy = _build_strategy(**kwargs)
        strategy.fetch()
        os.chdir(dest)
        try:
            root = strategy.stage()
        finally:
            os.chdir(prev)
    click.echo(str(root))
