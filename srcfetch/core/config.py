"""集中配置管理

提供缓存根目录、verbose 开关和外部工具路径的统一入口。
支持从 YAML 文件加载 + 环境变量覆盖 + 编程式覆盖。

各拉取策略在构造时显式接收 Config；全局单例只供 CLI 入口使用。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from srcfetch.core.exceptions import ConfigError
from srcfetch.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "~/.config/srcfetch/config.yml"

# 工具名 -> 默认可执行文件
DEFAULT_TOOLS: dict[str, str] = {
    "curl": "curl",
    "unzip": "unzip",
    "tar": "tar",
    "svn": "svn",
    "git": "git",
    "cvs": "cvs",
    "hg": "hg",
}


@dataclass
class Config:
    """全局配置"""

    cache_dir: str = "~/.cache/srcfetch"
    manifest: str = "srcfetch.yml"
    verbose: bool = False

    # 工具名 -> 可执行文件路径，未配置的工具使用 DEFAULT_TOOLS
    tools: dict[str, str] = field(default_factory=dict)

    # 放不到字段里的配置项
    extra: dict = field(default_factory=dict)

    @property
    def cache_root(self) -> Path:
        """缓存根目录的绝对路径，相对路径按当前目录解析"""
        return Path(self.cache_dir).expanduser().resolve()

    def tool(self, name: str) -> str:
        """解析外部工具的可执行文件"""
        if name in self.tools:
            return self.tools[name]
        if name in DEFAULT_TOOLS:
            return DEFAULT_TOOLS[name]
        raise ConfigError(f"未知工具: {name}")

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        try:
            data = load_yaml(Path(path).expanduser())
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"读取配置文件失败: {path}: {e}") from e
        if not data:
            return cls()
        known = {f for f in cls.__dataclass_fields__ if f != "extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        tools = matched.get("tools")
        if tools is not None and not isinstance(tools, dict):
            raise ConfigError(f"tools 必须是映射: {path}")
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def apply_env(self) -> Config:
        """应用 SRCFETCH_CACHE / SRCFETCH_VERBOSE 环境变量覆盖"""
        cache = os.getenv("SRCFETCH_CACHE")
        if cache:
            self.cache_dir = cache
        if os.getenv("SRCFETCH_VERBOSE", "") not in ("", "0"):
            self.verbose = True
        return self


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config().apply_env()
    return _current


def init_config(path: str = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path).apply_env()
    logger.debug("配置已加载: %s", path)
    return _current
