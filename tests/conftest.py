"""测试共享 fixture：记录型命令执行器

FakeExecutor 实现 CommandExecutor 协议，记录每条命令，
并在磁盘上模拟 curl / unzip / tar / git / svn / cvs / hg 的效果，
测试无需网络和真实工具即可验证命令形态和暂存结果。
"""

from __future__ import annotations

import shutil
import tarfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import pytest

from srcfetch.core.config import Config
from srcfetch.utils.shell import CommandResult, CommandRunner

# 模拟仓库中的文件
REPO_FILES = {
    "README": "hello\n",
    "src/main.c": "int main(void) { return 0; }\n",
}


@dataclass
class Call:
    cmd: list[str]
    cwd: str
    capture: bool
    discard_stdout: bool

    @property
    def tool(self) -> str:
        return Path(self.cmd[0]).name


def _write_tree(root: Path, metadata_dir: str = "") -> None:
    for rel, content in REPO_FILES.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content)
    if metadata_dir:
        (root / metadata_dir).mkdir(exist_ok=True)
        (root / "src" / metadata_dir).mkdir(exist_ok=True)


def _copy_without(src: Path, dst: Path, metadata_dir: str) -> None:
    shutil.copytree(
        src, dst, dirs_exist_ok=True,
        ignore=shutil.ignore_patterns(metadata_dir),
    )


def _positional(cmd: list[str]) -> list[str]:
    return [a for a in cmd[1:] if not a.startswith("-")]


class FakeExecutor:
    """记录命令并模拟外部工具"""

    def __init__(self) -> None:
        self.calls: list[Call] = []
        self.payload: bytes = b""
        self._failures: list[tuple[Callable[[list[str]], bool], int, bool]] = []
        self._hooks: list[tuple[Callable[[list[str]], bool], Callable[[list[str], Path], None]]] = []

    # ---- 配置 ----

    def fail_if(
        self, predicate: Callable[[list[str]], bool], *,
        rc: int = 1, simulate_first: bool = False,
    ) -> None:
        """匹配的命令返回 rc；simulate_first=True 时先产生部分副作用"""
        self._failures.append((predicate, rc, simulate_first))

    def on(
        self, predicate: Callable[[list[str]], bool],
        hook: Callable[[list[str], Path], None],
    ) -> None:
        """匹配的命令改为执行 hook（可用于抛出 KeyboardInterrupt）"""
        self._hooks.append((predicate, hook))

    def commands(self, tool: str | None = None) -> list[list[str]]:
        return [c.cmd for c in self.calls if tool is None or c.tool == tool]

    # ---- CommandExecutor 协议 ----

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        capture: bool = True,
        discard_stdout: bool = False,
    ) -> CommandResult:
        self.calls.append(Call(list(cmd), cwd, capture, discard_stdout))
        work = Path(cwd)
        for predicate, hook in self._hooks:
            if predicate(cmd):
                hook(cmd, work)
                return CommandResult(returncode=0)
        for predicate, rc, simulate_first in self._failures:
            if predicate(cmd):
                if simulate_first:
                    self._simulate(cmd, work)
                return CommandResult(returncode=rc, stderr="simulated failure")
        self._simulate(cmd, work)
        return CommandResult(returncode=0)

    # ---- 工具模拟 ----

    def _simulate(self, cmd: list[str], cwd: Path) -> None:
        tool = Path(cmd[0]).name
        handler = getattr(self, f"_sim_{tool}", None)
        if handler is not None:
            handler(cmd, cwd)

    def _sim_curl(self, cmd: list[str], cwd: Path) -> None:
        dest = Path(cmd[cmd.index("-o") + 1])
        dest.write_bytes(self.payload)

    def _sim_unzip(self, cmd: list[str], cwd: Path) -> None:
        with zipfile.ZipFile(_positional(cmd)[-1]) as zf:
            zf.extractall(cwd)

    def _sim_tar(self, cmd: list[str], cwd: Path) -> None:
        with tarfile.open(cmd[-1], "r:*") as tf:
            tf.extractall(cwd, filter="data")

    def _sim_git(self, cmd: list[str], cwd: Path) -> None:
        sub = cmd[1]
        if sub == "clone":
            _write_tree(Path(cmd[-1]), ".git")
        elif sub == "checkout-index":
            prefix = next(a for a in cmd if a.startswith("--prefix="))
            _copy_without(cwd, Path(prefix.split("=", 1)[1]), ".git")

    def _sim_svn(self, cmd: list[str], cwd: Path) -> None:
        args = _positional(cmd)
        if args[0] == "checkout":
            _write_tree(Path(args[-1]), ".svn")
        elif args[0] == "export":
            _copy_without(Path(args[1]), Path(args[2]), ".svn")

    def _sim_cvs(self, cmd: list[str], cwd: Path) -> None:
        if "checkout" in cmd:
            name = cmd[cmd.index("checkout") + 2]
            _write_tree(cwd / name, "CVS")

    def _sim_hg(self, cmd: list[str], cwd: Path) -> None:
        if cmd[1] == "clone":
            _write_tree(Path(cmd[-1]), ".hg")
        elif cmd[1] == "archive":
            dst = Path(cmd[-1])
            _copy_without(cwd, dst, ".hg")
            (dst / ".hg_archival.txt").write_text("repo: fake\n")


# =========================================================================
# fixtures
# =========================================================================

@pytest.fixture()
def fake() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture()
def config(tmp_path: Path) -> Config:
    return Config(cache_dir=str(tmp_path / "cache"))


@pytest.fixture()
def runner(fake: FakeExecutor) -> CommandRunner:
    return CommandRunner(fake)


@pytest.fixture()
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """空的构建目录，并切换为当前目录"""
    build = tmp_path / "build"
    build.mkdir()
    monkeypatch.chdir(build)
    return build.resolve()
