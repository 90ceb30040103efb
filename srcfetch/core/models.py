"""核心数据模型

- Pin:              分支 / 标签 / 修订号锁定
- OriginDescriptor: 包来源描述（URL + 名称 + 版本 + 可选锁定）
- ArchiveKind:      下载产物的归档类型
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from srcfetch.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# 无法确定包名时的占位名
UNKNOWN_NAME = "__UNKNOWN__"


class PinKind(str, Enum):
    """锁定类型"""

    BRANCH = "branch"
    TAG = "tag"
    REVISION = "revision"


@dataclass(frozen=True)
class Pin:
    """指定检出的分支、标签或修订号"""

    kind: PinKind
    ref: str

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> Pin | None:
        """从 {kind: ref} 映射构造锁定

        同一时刻只有一个检出目标有意义：按声明顺序只取第一项，其余忽略。
        """
        if not mapping:
            return None
        items = list(mapping.items())
        kind, ref = items[0]
        if len(items) > 1:
            logger.warning(
                "声明了多个锁定，仅使用第一个 %s=%s，忽略: %s",
                kind, ref, ", ".join(str(k) for k, _ in items[1:]),
            )
        try:
            pin_kind = PinKind(str(kind))
        except ValueError as e:
            raise ValidationError(
                f"未知的锁定类型: {kind}，可用: "
                f"{', '.join(k.value for k in PinKind)}"
            ) from e
        if ref is None or str(ref) == "":
            raise ValidationError(f"锁定 {kind} 缺少 ref")
        return cls(kind=pin_kind, ref=str(ref))

    def __str__(self) -> str:
        return f"{self.kind.value} {self.ref}"


@dataclass(frozen=True)
class OriginDescriptor:
    """包来源描述"""

    url: str
    name: str = ""
    version: str = ""
    pin: Pin | None = None


def cache_key(name: str, version: str) -> str | None:
    """计算缓存键 "{name}-{version}"，与 URL 无关

    包名为空或为占位名时返回 None，由调用方退化为 URL 文件名。
    """
    if not name or name == UNKNOWN_NAME:
        return None
    return f"{name}-{version}"


class ArchiveKind(str, Enum):
    """下载产物类型"""

    ZIP = "zip"
    TAR = "tar"       # gzip / bzip2 / compress 压缩的 tar 包
    JAR = "jar"       # zip 兼容但不解压
    OPAQUE = "opaque"  # 非归档，原样放置
