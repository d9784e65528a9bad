"""TaskBuilder -- 以代码方式构造 Task

必填字段在 build() 时才检查，校验规则与 JSON 解码一致。
"""

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any, Self
from uuid import uuid4

from pydantic import JsonValue

from .duration import Duration, parse_duration
from .exceptions import InvalidField, MissingField, TaskwireError
from .models.enums import TaskStatus, status_from_wire
from .models.task import Annotation, Task
from .serializer import REQUIRED_FIELDS, build_task

# 字段名 -> 允许的值类型，与解码得到的类型一致；bool 单独排除
_FIELD_TYPES: dict[str, type | tuple[type, ...]] = {
    "id": int,
    "uuid": str,
    "description": str,
    "entry": datetime,
    "modified": datetime,
    "status": TaskStatus,
    "urgency": (int, float),
    "project": str,
    "start": datetime,
    "end": datetime,
    "elapsed": Duration,
    "parent": str,
}


def _check_type(name: str, value: Any, expected: type | tuple[type, ...]) -> None:
    if isinstance(value, bool) or not isinstance(value, expected):
        raise InvalidField(name, f"类型不合法: {type(value).__name__}")


class TaskBuilder:
    """Task 构造器（链式调用）

    例:
        task = (
            TaskBuilder()
            .uuid()
            .description("Task to do")
            .entry(now)
            .modified(now)
            .status("pending")
            .urgency(0.0)
            .tag("WORK")
            .build()
        )
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}
        self._tags: set[str] | None = None
        self._annotations: list[Annotation] | None = None
        self._udas: dict[str, JsonValue] = {}

    @classmethod
    def from_task(cls, task: Task) -> Self:
        """以已有 Task 为起点（read-modify-write）"""
        builder = cls()
        for name in Task.known_fields() - {"tags", "annotations"}:
            value = getattr(task, name)
            if value is not None:
                builder._fields[name] = value
        if task.tags is not None:
            builder._tags = set(task.tags)
        if task.annotations is not None:
            builder._annotations = list(task.annotations)
        builder._udas = dict(task.udas)
        return builder

    # 必填字段

    def id(self, value: int) -> Self:
        self._fields["id"] = value
        return self

    def uuid(self, value: str | None = None) -> Self:
        """设置 uuid；不传时生成新的 uuid4"""
        self._fields["uuid"] = value if value is not None else str(uuid4())
        return self

    def description(self, value: str) -> Self:
        self._fields["description"] = value
        return self

    def entry(self, value: datetime) -> Self:
        self._fields["entry"] = value
        return self

    def modified(self, value: datetime) -> Self:
        self._fields["modified"] = value
        return self

    def status(self, value: TaskStatus | str) -> Self:
        if not isinstance(value, TaskStatus):
            try:
                value = status_from_wire(value)
            except ValueError as e:
                raise InvalidField("status", e) from e
        self._fields["status"] = value
        return self

    def urgency(self, value: float) -> Self:
        self._fields["urgency"] = value
        return self

    # 可选字段

    def project(self, value: str | None) -> Self:
        return self._set_optional("project", value)

    def start(self, value: datetime | None) -> Self:
        return self._set_optional("start", value)

    def end(self, value: datetime | None) -> Self:
        return self._set_optional("end", value)

    def elapsed(self, value: Duration | str | None) -> Self:
        if isinstance(value, str):
            try:
                value = parse_duration(value)
            except TaskwireError as e:
                raise InvalidField("elapsed", e) from e
        return self._set_optional("elapsed", value)

    def parent(self, value: str | None) -> Self:
        return self._set_optional("parent", value)

    def tag(self, name: str) -> Self:
        if self._tags is None:
            self._tags = set()
        self._tags.add(name)
        return self

    def tags(self, names: Iterable[str] | None) -> Self:
        self._tags = None if names is None else set(names)
        return self

    def annotate(self, description: str, entry: datetime | None = None) -> Self:
        """追加注释；entry 缺省为当前 UTC 时间"""
        if entry is None:
            entry = datetime.now(UTC)
        _check_type("annotations", entry, datetime)
        _check_type("annotations", description, str)
        if self._annotations is None:
            self._annotations = []
        self._annotations.append(Annotation(entry=entry, description=description))
        return self

    def uda(self, key: str, value: JsonValue) -> Self:
        """设置扩展字段（UDA）"""
        if key in Task.known_fields():
            raise InvalidField(key, "UDA 不能与已知字段同名")
        self._udas[key] = value
        return self

    def _set_optional(self, name: str, value: Any) -> Self:
        if value is None:
            self._fields.pop(name, None)
        else:
            self._fields[name] = value
        return self

    def build(self) -> Task:
        """构造 Task

        值类型按解码规则检查，不做隐式转换（如 "3" -> 3）。

        Raises:
            MissingField: 缺少必填字段
            InvalidField: 字段值不合法
        """
        fields = dict(self._fields)
        for name in REQUIRED_FIELDS:
            if fields.get(name) is None:
                raise MissingField(name)
        for name, value in fields.items():
            if value is not None:
                _check_type(name, value, _FIELD_TYPES[name])
        if self._tags is not None:
            for tag in self._tags:
                _check_type("tags", tag, str)
            fields["tags"] = frozenset(self._tags)
        if self._annotations is not None:
            fields["annotations"] = tuple(self._annotations)
        return build_task(fields, dict(self._udas))
