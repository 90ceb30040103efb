"""统一异常体系

所有业务异常继承 SrcFetchError。fetch 阶段的失败归入 FetchError，
stage 阶段的失败归入 StageError，CLI 层据此输出带 code 的友好提示。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from srcfetch.utils.shell import CommandResult


class SrcFetchError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(SrcFetchError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(SrcFetchError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"


class ExecutionError(SrcFetchError):
    """外部命令返回非零退出码"""

    code = "EXECUTION_ERROR"

    def __init__(self, message: str, result: CommandResult | None = None) -> None:
        super().__init__(message)
        self.result = result


# =========================================================================
# fetch 阶段
# =========================================================================

class FetchError(SrcFetchError):
    """拉取到缓存失败"""

    code = "FETCH_ERROR"


class NetworkError(FetchError):
    """归档下载失败"""

    code = "NETWORK_FAILURE"


class ToolMissingError(FetchError):
    """所需的外部工具未安装"""

    code = "TOOL_MISSING"


class VcsFetchError(FetchError):
    """版本控制 clone/checkout/update 失败"""

    code = "VCS_COMMAND_FAILURE"


# =========================================================================
# stage 阶段
# =========================================================================

class StageError(SrcFetchError):
    """暂存到工作目录失败"""

    code = "STAGE_ERROR"


class EmptyArchiveError(StageError):
    """归档解压后没有任何顶层条目"""

    code = "EMPTY_ARCHIVE"


class ExtractionError(StageError):
    """解压命令失败"""

    code = "EXTRACTION_FAILURE"


class VcsStageError(StageError):
    """版本控制 export/checkout 失败"""

    code = "VCS_COMMAND_FAILURE"
