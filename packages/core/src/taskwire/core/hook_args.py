"""Hook Argument Parser -- hook 脚本命令行参数解析

支持两种形式：
1. 五个位置参数：rc 路径、data 目录、hook 脚本路径、原始命令行、Taskwarrior 版本
2. Taskwarrior 实际传入的 key:value 形式：api:2 args:... command:add rc:... data:... version:...

hook 事件由脚本文件名 on-<event>[...] 决定；API 版本由文件名中的 v<N> 段
或所在目录 hooks.v<N> 决定，都没有时为当前版本 V2。
"""

import re
from collections.abc import Sequence
from pathlib import Path

import structlog

from .exceptions import TooFewArguments, UnknownApiVersion, UnknownHookFilename
from .models.enums import (
    API_VERSION_BY_TOKEN,
    CURRENT_HOOK_API,
    HOOK_EVENT_BY_TOKEN,
    HookApiVersion,
    HookEvent,
)
from .models.hook import HookInvocation

log = structlog.get_logger()

HOOK_ARG_COUNT = 5
TAGGED_KEYS: tuple[str, ...] = ("api", "args", "command", "rc", "data", "version")

_HOOK_PREFIX = "on-"
# 长的在前，避免短 token 抢先匹配
_EVENT_TOKENS: tuple[str, ...] = tuple(sorted(HOOK_EVENT_BY_TOKEN, key=len, reverse=True))
_SEGMENT_SPLIT = re.compile(r"[.\-_]")
_API_MARKER = re.compile(r"^v(?P<version>\d+)$")
_HOOK_DIR_MARKER = re.compile(r"^hooks\.v(?P<version>\d+)$")


def _api_version(token: str) -> HookApiVersion:
    try:
        return API_VERSION_BY_TOKEN[token]
    except KeyError:
        raise UnknownApiVersion(token) from None


def parse_hook_filename(hook_path: str | Path) -> tuple[HookEvent, HookApiVersion]:
    """从 hook 脚本路径解析 (事件, API 版本)

    例:
        /home/.task/hooks/on-add.tsk        -> (ADD, V2)
        /home/.task/hooks/on-modify.v1.py   -> (MODIFY, V1)
        /home/.task/hooks.v1/on-exit        -> (EXIT, V1)
        /home/.task/hooks/on-addtags.py     -> (ADD, V2)

    Raises:
        UnknownHookFilename: 文件名不以 on-<event> 开头
        UnknownApiVersion: 版本标记不是已知版本
    """
    path = Path(hook_path)
    if not path.name.startswith(_HOOK_PREFIX):
        raise UnknownHookFilename(path.name)
    rest = path.name[len(_HOOK_PREFIX) :]
    # 与 Taskwarrior 一致按前缀匹配：on-addtags.py 也是 on-add hook
    token = next((t for t in _EVENT_TOKENS if rest.startswith(t)), None)
    if token is None:
        raise UnknownHookFilename(path.name)
    event = HOOK_EVENT_BY_TOKEN[token]

    # 第一段紧跟事件名，不作为版本标记
    segments = _SEGMENT_SPLIT.split(rest[len(token) :])[1:]
    markers = [m["version"] for segment in segments if (m := _API_MARKER.match(segment))]
    if len(markers) > 1:
        raise UnknownApiVersion(",".join(f"v{marker}" for marker in markers))
    if markers:
        return event, _api_version(markers[0])

    dir_match = _HOOK_DIR_MARKER.match(path.parent.name)
    if dir_match:
        return event, _api_version(dir_match["version"])

    return event, CURRENT_HOOK_API


def parse_hook_args(args: Sequence[str]) -> HookInvocation:
    """解析五个位置参数（不含程序名）

    Args:
        args: [rc 路径, data 目录, hook 脚本路径, 原始命令行, Taskwarrior 版本]

    Raises:
        TooFewArguments: 参数少于 5 个
        UnknownHookFilename / UnknownApiVersion: 见 parse_hook_filename
    """
    if len(args) < HOOK_ARG_COUNT:
        raise TooFewArguments(HOOK_ARG_COUNT, len(args))
    if len(args) > HOOK_ARG_COUNT:
        log.warning(
            "extra_hook_arguments_ignored",
            expected=HOOK_ARG_COUNT,
            got=len(args),
        )

    rc_path, data_path, hook_path, command_line, tool_version = args[:HOOK_ARG_COUNT]
    event, api_version = parse_hook_filename(hook_path)

    return HookInvocation(
        rc_path=Path(rc_path),
        data_path=Path(data_path),
        hook_path=Path(hook_path),
        api_version=api_version,
        command=event,
        command_line=command_line,
        tool_version=tool_version,
    )


def parse_tagged_hook_args(argv: Sequence[str]) -> HookInvocation:
    """解析 Taskwarrior 实际传入的 key:value 参数（含程序名）

    hook 事件取自 argv[0] 的脚本文件名，API 版本取自 api:<N>。
    command:<name> 是 Taskwarrior 子命令（如 done），保存在 tool_command。

    Raises:
        TooFewArguments: 缺少程序名或任一必需 key
        UnknownApiVersion: api 值未知
        UnknownHookFilename: argv[0] 不是 on-<event>...
    """
    if not argv:
        raise TooFewArguments(len(TAGGED_KEYS) + 1, 0)

    values: dict[str, str] = {}
    for token in argv[1:]:
        key, separator, value = token.partition(":")
        if not separator or key not in TAGGED_KEYS:
            log.debug("unknown_hook_argument", token=token)
            continue
        values[key] = value

    if len(values) < len(TAGGED_KEYS):
        missing = [key for key in TAGGED_KEYS if key not in values]
        log.warning("missing_hook_arguments", missing=missing)
        raise TooFewArguments(len(TAGGED_KEYS), len(values))

    event, _ = parse_hook_filename(argv[0])

    return HookInvocation(
        rc_path=Path(values["rc"]),
        data_path=Path(values["data"]),
        hook_path=Path(argv[0]),
        api_version=_api_version(values["api"]),
        command=event,
        tool_command=values["command"],
        command_line=values["args"],
        tool_version=values["version"],
    )


def is_tagged_argv(argv: Sequence[str]) -> bool:
    """argv（含程序名）是否为 key:value 形式"""
    return len(argv) > 1 and argv[1].startswith("api:")
