"""拉取策略

- base.py: 策略接口 fetch() / stage()
- curl.py: 归档下载（自动解压 / 不解压）
- svn.py:  Subversion checkout / export
- git.py:  Git clone / checkout-index
- cvs.py:  CVS login / checkout / 复制后清理
- hg.py:   Mercurial clone / archive
"""

from srcfetch.core.strategies.base import DownloadStrategy, VcsDownloadStrategy
from srcfetch.core.strategies.curl import CurlDownloadStrategy, NoUnzipCurlDownloadStrategy
from srcfetch.core.strategies.cvs import CVSDownloadStrategy
from srcfetch.core.strategies.git import GitDownloadStrategy
from srcfetch.core.strategies.hg import MercurialDownloadStrategy
from srcfetch.core.strategies.svn import SubversionDownloadStrategy

__all__ = [
    "DownloadStrategy",
    "VcsDownloadStrategy",
    "CurlDownloadStrategy",
    "NoUnzipCurlDownloadStrategy",
    "SubversionDownloadStrategy",
    "GitDownloadStrategy",
    "CVSDownloadStrategy",
    "MercurialDownloadStrategy",
]
