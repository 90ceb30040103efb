"""URL scheme 校验与文件名解析测试"""

import pytest

from srcfetch.core.exceptions import ValidationError
from srcfetch.utils.net import url_basename, validate_url_scheme


class TestValidateUrlScheme:
    @pytest.mark.parametrize("url", [
        "http://example.com/a.tgz",
        "https://example.com/a.tgz",
        "ftp://ftp.gnu.org/gnu/hello/hello-2.4.tar.gz",
    ])
    def test_download_schemes_ok(self, url: str) -> None:
        validate_url_scheme(url)

    def test_file_rejected(self) -> None:
        with pytest.raises(ValidationError, match="不允许的 URL 协议"):
            validate_url_scheme("file:///etc/passwd")

    def test_empty_scheme_rejected(self) -> None:
        with pytest.raises(ValidationError, match="不允许的 URL 协议"):
            validate_url_scheme("/local/path")

    def test_context_in_error(self) -> None:
        with pytest.raises(ValidationError, match="wget"):
            validate_url_scheme("file:///x", context="wget")


class TestUrlBasename:
    @pytest.mark.parametrize(("url", "name"), [
        ("https://a.org/x/foo-1.0.tar.gz", "foo-1.0.tar.gz"),
        ("https://a.org/x/foo.tar.gz?mirror=us#frag", "foo.tar.gz"),
        ("https://a.org/x/my%20tool.jar", "my tool.jar"),
        ("svn://svn.a.org/trunk/", "trunk"),
        ("git://github.com/foo/bar.git", "bar.git"),
    ])
    def test_basename(self, url: str, name: str) -> None:
        assert url_basename(url) == name

    def test_cvs_url(self) -> None:
        assert url_basename("cvs://:pserver:anon@cvs.a.org:/cvsroot/X:mod") == "X:mod"
