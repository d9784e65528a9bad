"""hook 标准输入/输出辅助

Taskwarrior 通过 stdin 逐行传入 Task JSON：
- on-add: 一行（新 Task）
- on-modify: 两行（原 Task、修改后的 Task）
hook 需要在 stdout 输出一行 Task JSON 作为结果。
"""

import sys
from typing import TextIO

from .exceptions import InvalidJson
from .models.task import Task
from .serializer import decode_task, encode_task


def read_task(stream: TextIO | None = None) -> Task:
    """从流中读取一行并解码为 Task

    Raises:
        InvalidJson: 流已结束或该行不是合法 Task JSON
    """
    stream = stream if stream is not None else sys.stdin
    line = stream.readline()
    if not line.strip():
        raise InvalidJson("输入流中没有 Task")
    return decode_task(line)


def read_modify_pair(stream: TextIO | None = None) -> tuple[Task, Task]:
    """读取 on-modify hook 的两行输入 (原 Task, 修改后 Task)"""
    original = read_task(stream)
    modified = read_task(stream)
    return original, modified


def write_task(task: Task, stream: TextIO | None = None) -> None:
    """编码 Task 并写入一行"""
    stream = stream if stream is not None else sys.stdout
    stream.write(encode_task(task) + "\n")
    stream.flush()
