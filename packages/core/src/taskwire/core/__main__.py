"""CLI 入口模块 -- python -m taskwire.core <command>

支持的命令：
  normalize   从 stdin 逐行读取 Task JSON，重新编码后写到 stdout
  hook-info   解析 hook 参数并以 JSON 输出
"""

import sys

import structlog

from .exceptions import TaskwireError
from .hook_args import parse_hook_args
from .logging_config import setup_logging
from .serializer import decode_task, encode_task

log = structlog.get_logger()

USAGE = """用法: python -m taskwire.core <command>
命令:
  normalize                                   逐行规范化 stdin 中的 Task JSON
  hook-info <rc> <data> <hook> <args> <ver>   解析 hook 参数"""


def main(argv: list[str] | None = None) -> None:
    """CLI 主入口"""
    argv = argv if argv is not None else sys.argv
    setup_logging()

    if len(argv) < 2:
        print(USAGE)
        sys.exit(1)

    command = argv[1]

    if command == "normalize":
        normalize()
    elif command == "hook-info":
        hook_info(argv[2:])
    else:
        print(f"未知命令: {command}")
        print("可用命令: normalize, hook-info")
        sys.exit(1)


def normalize() -> None:
    """逐行解码再编码，遇到错误立即以 1 退出"""
    for lineno, line in enumerate(sys.stdin, start=1):
        if not line.strip():
            continue
        try:
            task = decode_task(line)
        except TaskwireError as e:
            log.error("task_decode_failed", line=lineno, error=str(e))
            sys.exit(1)
        print(encode_task(task))


def hook_info(args: list[str]) -> None:
    """输出解析后的 HookInvocation"""
    try:
        invocation = parse_hook_args(args)
    except TaskwireError as e:
        log.error("hook_args_invalid", error=str(e))
        sys.exit(1)
    print(invocation.model_dump_json())


if __name__ == "__main__":
    main()
