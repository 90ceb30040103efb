"""Shell 命令执行工具：统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，方便测试替换。
CommandRunner 在其上实现 "非 verbose 时静默" 的约定：
  - run():       原样执行，输出直接透传到终端
  - run_quiet(): 非 verbose 时追加静默参数并捕获输出
两者在非零退出码时都抛出 ExecutionError。
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence, Union

from srcfetch.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 静默参数标记
# =========================================================================

@dataclass(frozen=True)
class QuietFlag:
    """参数列表中的静默参数占位符

    非 verbose 时替换为 flag，verbose 时从参数列表中删除。
    例: ["unzip", QuietFlag("-qq"), "foo.zip"]
    """

    flag: str


Arg = Union[str, Path, QuietFlag]


def expand_quiet_args(args: Sequence[Arg], verbose: bool) -> list[str]:
    """展开静默参数

    - 存在 QuietFlag 时只处理第一个，不再插入默认的 -q
    - 否则在第 2 个位置插入 -q（如 svn up、git fetch 这类 "工具 子命令" 形式）
    - verbose 时不加任何静默参数
    """
    expanded: list[Arg] = list(args)
    for i, arg in enumerate(expanded):
        if isinstance(arg, QuietFlag):
            if verbose:
                del expanded[i]
            else:
                expanded[i] = arg.flag
            return [str(a) for a in expanded]
    if not verbose:
        expanded.insert(2, "-q")
    return [str(a) for a in expanded]


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议：抽象子进程调用

    测试时可注入记录型实现，无需 patch subprocess。
    """

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        capture: bool = True,
        discard_stdout: bool = False,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


class LocalExecutor:
    """本地子进程执行器（默认实现）"""

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        capture: bool = True,
        discard_stdout: bool = False,
    ) -> CommandResult:
        if capture:
            r = subprocess.run(
                cmd, capture_output=True, text=True, cwd=cwd, check=False,
            )
            return CommandResult(
                returncode=r.returncode, stdout=r.stdout, stderr=r.stderr,
            )
        r = subprocess.run(
            cmd, cwd=cwd, check=False,
            stdout=subprocess.DEVNULL if discard_stdout else None,
        )
        return CommandResult(returncode=r.returncode)


_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认命令执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor


# =========================================================================
# 命令运行器
# =========================================================================

class CommandRunner:
    """带 verbose 开关的命令运行器，失败抛 ExecutionError"""

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        self.executor = executor if executor is not None else get_executor()
        self.verbose = verbose

    def run(
        self,
        args: Sequence[Arg],
        *,
        cwd: Path | str | None = None,
        discard_stdout: bool = False,
    ) -> CommandResult:
        """执行命令，输出透传"""
        return self._execute(
            [str(a) for a in args], cwd=cwd,
            capture=False, discard_stdout=discard_stdout,
        )

    def run_quiet(
        self,
        args: Sequence[Arg],
        *,
        cwd: Path | str | None = None,
        discard_stdout: bool = False,
    ) -> CommandResult:
        """执行命令，非 verbose 时追加静默参数并屏蔽输出"""
        return self._execute(
            expand_quiet_args(args, self.verbose), cwd=cwd,
            capture=not self.verbose, discard_stdout=discard_stdout,
        )

    def _execute(
        self,
        cmd: list[str],
        *,
        cwd: Path | str | None,
        capture: bool,
        discard_stdout: bool,
    ) -> CommandResult:
        work_dir = str(cwd) if cwd is not None else "."
        logger.debug("  执行: %s (cwd=%s)", format_command(cmd), work_dir)
        r = self.executor.execute(
            cmd, cwd=work_dir, capture=capture, discard_stdout=discard_stdout,
        )
        if r.returncode != 0:
            message = f"{cmd[0]} 失败 (rc={r.returncode}): {format_command(cmd)}"
            if r.stderr:
                message = f"{message}\n{r.stderr[:500]}"
            raise ExecutionError(message, result=r)
        return r


def format_command(cmd: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in cmd)


def which(tool: str) -> str | None:
    """在 PATH 中查找可执行文件"""
    return shutil.which(tool)
