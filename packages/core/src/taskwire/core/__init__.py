"""taskwire Core -- Taskwarrior 记录格式的数据交换层

公开接口导出：时间戳 / 时长 codec、Task 模型与序列化、hook 参数解析。
"""

# 构造器
from .builder import TaskBuilder

# 配置
from .config import CodecConfig, default_codec_config, load_codec_config
from .duration import (
    Duration,
    format_duration,
    parse_any_duration,
    parse_duration,
    parse_named_duration,
)

# 异常
from .exceptions import (
    ArgError,
    DecodeError,
    InvalidField,
    InvalidJson,
    MalformedDuration,
    MalformedTimestamp,
    MissingField,
    TaskwireError,
    TooFewArguments,
    UnknownApiVersion,
    UnknownHookFilename,
)
from .hook_args import parse_hook_args, parse_hook_filename, parse_tagged_hook_args
from .logging_config import setup_logging

# 数据模型
from .models import (
    Annotation,
    HookApiVersion,
    HookEvent,
    HookInvocation,
    Task,
    TaskStatus,
)
from .serializer import (
    decode_task,
    decode_tasks,
    encode_task,
    encode_tasks,
    task_from_dict,
    task_to_dict,
)
from .stream import read_modify_pair, read_task, write_task
from .timestamp import format_timestamp, parse_timestamp

__all__ = [
    "parse_timestamp",
    "format_timestamp",
    "Duration",
    "parse_duration",
    "parse_named_duration",
    "parse_any_duration",
    "format_duration",
    "Task",
    "Annotation",
    "TaskStatus",
    "HookEvent",
    "HookApiVersion",
    "HookInvocation",
    "decode_task",
    "decode_tasks",
    "encode_task",
    "encode_tasks",
    "task_from_dict",
    "task_to_dict",
    "TaskBuilder",
    "parse_hook_args",
    "parse_hook_filename",
    "parse_tagged_hook_args",
    "read_task",
    "read_modify_pair",
    "write_task",
    "CodecConfig",
    "load_codec_config",
    "default_codec_config",
    "setup_logging",
    "TaskwireError",
    "MalformedTimestamp",
    "MalformedDuration",
    "DecodeError",
    "InvalidJson",
    "MissingField",
    "InvalidField",
    "ArgError",
    "TooFewArguments",
    "UnknownHookFilename",
    "UnknownApiVersion",
]
