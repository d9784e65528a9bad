"""Record Serializer -- Task <-> 线上 JSON

解码：逐个已知字段走对应 codec，其余 key 原样放入 udas。
编码：必填字段总是输出，可选字段仅在非 None 时输出，udas 合并到顶层。
"""

import json
from collections.abc import Callable, Iterable
from typing import Any

import structlog
from pydantic import ValidationError

from .duration import parse_duration
from .exceptions import InvalidField, InvalidJson, MissingField, TaskwireError
from .models.enums import status_from_wire, status_to_wire
from .models.task import Annotation, Task
from .timestamp import format_timestamp, parse_timestamp

log = structlog.get_logger()

REQUIRED_FIELDS: tuple[str, ...] = (
    "id",
    "description",
    "entry",
    "modified",
    "status",
    "uuid",
    "urgency",
)


def _int(value: Any) -> int:
    # bool 是 int 的子类，需排除
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"应为整数，实际为 {type(value).__name__}")
    return value


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"应为数字，实际为 {type(value).__name__}")
    return float(value)


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"应为字符串，实际为 {type(value).__name__}")
    return value


def _tags(value: Any) -> frozenset[str]:
    if not isinstance(value, list):
        raise ValueError(f"应为数组，实际为 {type(value).__name__}")
    return frozenset(_string(tag) for tag in value)


def _annotation(value: Any) -> Annotation:
    if not isinstance(value, dict):
        raise ValueError(f"注释应为对象，实际为 {type(value).__name__}")
    unknown = set(value) - {"entry", "description"}
    if unknown:
        raise ValueError(f"注释包含未知 key: {sorted(unknown)}")
    for key in ("entry", "description"):
        if key not in value:
            raise ValueError(f"注释缺少 {key}")
    return Annotation(
        entry=parse_timestamp(value["entry"]),
        description=_string(value["description"]),
    )


def _annotations(value: Any) -> tuple[Annotation, ...]:
    if not isinstance(value, list):
        raise ValueError(f"应为数组，实际为 {type(value).__name__}")
    return tuple(_annotation(item) for item in value)


# 线上字段名 -> 解码函数
FIELD_DECODERS: dict[str, Callable[[Any], Any]] = {
    "id": _int,
    "uuid": _string,
    "description": _string,
    "entry": parse_timestamp,
    "modified": parse_timestamp,
    "status": status_from_wire,
    "urgency": _number,
    "project": _string,
    "start": parse_timestamp,
    "end": parse_timestamp,
    "elapsed": parse_duration,
    "tags": _tags,
    "annotations": _annotations,
    "parent": _string,
}


def build_task(fields: dict[str, Any], udas: dict[str, Any] | None = None) -> Task:
    """用已解码的字段构造 Task，模型校验错误转换为 InvalidField

    解码和 TaskBuilder 共用此入口，保证两条路径校验规则一致。
    """
    for name in REQUIRED_FIELDS:
        if fields.get(name) is None:
            raise MissingField(name)
    try:
        return Task(**fields, udas=udas or {})
    except ValidationError as e:
        error = e.errors()[0]
        name = str(error["loc"][0]) if error["loc"] else "<task>"
        raise InvalidField(name, error["msg"]) from e


def task_from_dict(obj: Any) -> Task:
    """从已解析的 JSON 对象构造 Task

    Raises:
        InvalidJson: 顶层不是对象
        MissingField: 缺少必填字段
        InvalidField: 字段无法解码
    """
    if not isinstance(obj, dict):
        raise InvalidJson(f"顶层应为对象，实际为 {type(obj).__name__}")

    for name in REQUIRED_FIELDS:
        if name not in obj:
            raise MissingField(name)

    fields: dict[str, Any] = {}
    udas: dict[str, Any] = {}
    for key, value in obj.items():
        decoder = FIELD_DECODERS.get(key)
        if decoder is None:
            udas[key] = value
            continue
        if value is None:
            if key in REQUIRED_FIELDS:
                raise InvalidField(key, "必填字段不能为 null")
            # 可选字段的 null 等同缺省
            continue
        try:
            fields[key] = decoder(value)
        except (TaskwireError, ValueError) as e:
            raise InvalidField(key, e) from e

    return build_task(fields, udas)


def decode_task(json_text: str | bytes) -> Task:
    """解码单个 Task JSON 对象"""
    try:
        obj = json.loads(json_text)
    except (ValueError, TypeError) as e:
        raise InvalidJson(str(e)) from e
    return task_from_dict(obj)


def decode_tasks(json_text: str | bytes) -> list[Task]:
    """解码 `task export` 输出的 JSON 数组"""
    try:
        items = json.loads(json_text)
    except (ValueError, TypeError) as e:
        raise InvalidJson(str(e)) from e
    if not isinstance(items, list):
        raise InvalidJson(f"顶层应为数组，实际为 {type(items).__name__}")

    tasks: list[Task] = []
    for index, item in enumerate(items):
        try:
            tasks.append(task_from_dict(item))
        except TaskwireError as e:
            log.warning("task_decode_failed", index=index, error=str(e))
            raise
    return tasks


def task_to_dict(task: Task) -> dict[str, Any]:
    """Task -> 线上 JSON 对象（dict）

    udas 中与已知字段同名的 key 被丢弃并记录 warning，以类型化字段为准。
    """
    data: dict[str, Any] = {
        "id": task.id,
        "description": task.description,
        "entry": format_timestamp(task.entry),
        "modified": format_timestamp(task.modified),
        "status": status_to_wire(task.status),
        "uuid": task.uuid,
        "urgency": task.urgency,
    }

    if task.project is not None:
        data["project"] = task.project
    if task.start is not None:
        data["start"] = format_timestamp(task.start)
    if task.end is not None:
        data["end"] = format_timestamp(task.end)
    if task.elapsed is not None:
        data["elapsed"] = str(task.elapsed)
    if task.tags is not None:
        # 集合无序，排序保证输出稳定
        data["tags"] = sorted(task.tags)
    if task.annotations is not None:
        data["annotations"] = [
            {
                "entry": format_timestamp(annotation.entry),
                "description": annotation.description,
            }
            for annotation in task.annotations
        ]
    if task.parent is not None:
        data["parent"] = task.parent

    known = Task.known_fields()
    for key, value in task.udas.items():
        if key in known:
            log.warning("extension_field_conflict", field=key, uuid=task.uuid)
            continue
        data[key] = value

    return data


def encode_task(task: Task) -> str:
    """编码单个 Task 为 JSON 字符串（单行）"""
    return json.dumps(task_to_dict(task), ensure_ascii=False)


def encode_tasks(tasks: Iterable[Task]) -> str:
    """编码为 JSON 数组，与 `task export` 格式一致"""
    return json.dumps([task_to_dict(task) for task in tasks], ensure_ascii=False)
