"""包来源清单

从 YAML 清单加载包的来源声明，例如:

    packages:
      gccxml:
        url: cvs://:pserver:anoncvs@www.gccxml.org:/cvsroot/GCC_XML:gccxml
        version: "0.9"
      libfoo:
        url: https://github.com/foo/libfoo.git
        version: "1.2"
        tag: v1.2
      tool:
        url: https://example.com/tool.jar
        version: "3.0"
        using: nounzip

锁定键 (branch / tag / revision) 按声明顺序只取第一个。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from srcfetch.core.exceptions import ValidationError
from srcfetch.core.models import OriginDescriptor, Pin, PinKind
from srcfetch.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

_PIN_KEYS = frozenset(k.value for k in PinKind)


@dataclass
class PackageSource:
    """清单中的单个包"""

    origin: OriginDescriptor
    using: str = ""
    description: str = ""

    @property
    def name(self) -> str:
        return self.origin.name


class PackageManifest:
    """包来源清单 - 从 YAML 文件加载"""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, PackageSource]:
        if not self.path.exists():
            logger.warning("清单文件不存在: %s", self.path)
            return {}

        data = load_yaml(self.path)
        packages: dict[str, PackageSource] = {}
        for name, info in (data.get("packages") or {}).items():
            if info is None:
                continue
            if not isinstance(info, dict) or not info.get("url"):
                raise ValidationError(f"包 '{name}' 缺少 url: {self.path}")
            pins = {k: v for k, v in info.items() if k in _PIN_KEYS}
            packages[name] = PackageSource(
                origin=OriginDescriptor(
                    url=str(info["url"]),
                    name=str(name),
                    version=str(info.get("version", "")),
                    pin=Pin.from_mapping(pins),
                ),
                using=info.get("using", ""),
                description=info.get("description", ""),
            )

        logger.debug("已加载 %d 个包", len(packages))
        return packages

    def get(self, name: str) -> PackageSource:
        packages = self.load()
        if name not in packages:
            raise ValidationError(
                f"包 '{name}' 不在清单中。可用: {list(packages.keys())}"
            )
        return packages[name]
