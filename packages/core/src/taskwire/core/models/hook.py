"""HookInvocation Domain Model -- hook 脚本收到的命令行参数

每个进程构造一次，之后只读。
"""

from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .enums import HookApiVersion, HookEvent


class HookInvocation(BaseModel):
    """hook 调用参数"""

    model_config = ConfigDict(frozen=True)

    rc_path: Path = Field(description="taskrc 文件路径")
    data_path: Path = Field(description="data.location 目录")
    hook_path: Path = Field(description="hook 脚本路径")
    api_version: HookApiVersion = Field(description="hook API 版本")
    command: HookEvent = Field(description="触发的 hook 事件")
    tool_command: str | None = Field(
        default=None,
        description="Taskwarrior 子命令（如 done）；仅 key:value 形式提供",
    )
    command_line: str = Field(description="原始命令行，不拆分")
    tool_version: str = Field(description="Taskwarrior 版本号")

    @classmethod
    def from_argv(cls, argv: Sequence[str]) -> "HookInvocation":
        """从完整 argv（含程序名）解析，自动识别 key:value 形式"""
        from ..hook_args import is_tagged_argv, parse_hook_args, parse_tagged_hook_args

        if is_tagged_argv(argv):
            return parse_tagged_hook_args(argv)
        return parse_hook_args(argv[1:])
