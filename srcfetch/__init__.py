"""srcfetch - 源码包拉取与暂存"""

__version__ = "0.1.0"
