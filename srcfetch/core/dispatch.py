"""策略分派：按来源 URL 选择拉取策略

显式指定的策略名优先；否则按 URL 形态识别，无法识别时按普通归档下载处理。
"""

from __future__ import annotations

import logging
import re

from srcfetch.core.config import Config
from srcfetch.core.exceptions import ValidationError
from srcfetch.core.models import OriginDescriptor
from srcfetch.core.strategies import (
    CurlDownloadStrategy,
    CVSDownloadStrategy,
    DownloadStrategy,
    GitDownloadStrategy,
    MercurialDownloadStrategy,
    NoUnzipCurlDownloadStrategy,
    SubversionDownloadStrategy,
)
from srcfetch.utils.shell import CommandRunner

logger = logging.getLogger(__name__)

STRATEGIES: dict[str, type[DownloadStrategy]] = {
    cls.name: cls
    for cls in (
        CurlDownloadStrategy,
        NoUnzipCurlDownloadStrategy,
        SubversionDownloadStrategy,
        GitDownloadStrategy,
        CVSDownloadStrategy,
        MercurialDownloadStrategy,
    )
}

# 按顺序匹配，第一条命中即返回
_URL_RULES: tuple[tuple[re.Pattern[str], type[DownloadStrategy]], ...] = (
    (re.compile(r"^cvs://"), CVSDownloadStrategy),
    (re.compile(r"^hg://"), MercurialDownloadStrategy),
    (re.compile(r"^svn://"), SubversionDownloadStrategy),
    (re.compile(r"^svn\+https?://"), SubversionDownloadStrategy),
    (re.compile(r"^git://"), GitDownloadStrategy),
    (re.compile(r"^https?://(.+?\.)?googlecode\.com/hg"), MercurialDownloadStrategy),
    (re.compile(r"^https?://(.+?\.)?googlecode\.com/svn"), SubversionDownloadStrategy),
    (re.compile(r"^https?://(.+?\.)?sourceforge\.net/svnroot/"), SubversionDownloadStrategy),
    (re.compile(r"^https?://svn\.apache\.org/repos/"), SubversionDownloadStrategy),
    (re.compile(r"\.git/?$"), GitDownloadStrategy),
)


def detect_strategy(url: str) -> type[DownloadStrategy]:
    """按 URL 形态识别策略类"""
    for pattern, cls in _URL_RULES:
        if pattern.search(url):
            return cls
    return CurlDownloadStrategy


def strategy_class(using: str) -> type[DownloadStrategy]:
    """按注册名获取策略类"""
    cls = STRATEGIES.get(using)
    if cls is None:
        raise ValidationError(
            f"未知的拉取策略: {using}，可用: {', '.join(sorted(STRATEGIES))}"
        )
    return cls


def create_strategy(
    origin: OriginDescriptor,
    config: Config,
    *,
    using: str | None = None,
    runner: CommandRunner | None = None,
) -> DownloadStrategy:
    """实例化来源对应的拉取策略"""
    if not origin.url:
        raise ValidationError("来源 URL 为必填")
    cls = strategy_class(using) if using else detect_strategy(origin.url)
    logger.debug("策略 %s <- %s", cls.name, origin.url)
    return cls(origin, config, runner)
