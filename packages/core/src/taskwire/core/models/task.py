"""Task Domain Model -- Taskwarrior 导出记录

字段名与线上 JSON key 完全一致。未识别的 key（用户自定义属性 UDA）
原样保存在 udas 中，保证 read-modify-write 往返无损。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator

from ..duration import Duration
from ..timestamp import normalize_timestamp
from .enums import TaskStatus

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"


class Annotation(BaseModel):
    """Task 注释：时间戳 + 文本"""

    model_config = ConfigDict(frozen=True)

    entry: datetime = Field(description="注释创建时间（UTC）")
    description: str = Field(description="注释内容")

    @field_validator("entry")
    @classmethod
    def _normalize_entry(cls, value: datetime) -> datetime:
        return normalize_timestamp(value)


class Task(BaseModel):
    """Task 数据模型

    必填：id / uuid / description / entry / modified / status / urgency
    可选字段为 None 表示缺省，序列化时整个 key 省略而不是输出 null。
    parent 只是对另一个 Task 的 uuid 引用，不校验其是否存在。
    """

    model_config = ConfigDict(frozen=True)

    # 必填
    id: int = Field(ge=0, description="工作集编号，未提交的记录为 0")
    uuid: str = Field(pattern=UUID_PATTERN, description="36 字符规范 uuid")
    description: str = Field(min_length=1, description="任务描述")
    entry: datetime = Field(description="创建时间（UTC）")
    modified: datetime = Field(description="最后修改时间（UTC）")
    status: TaskStatus = Field(description="生命周期状态")
    urgency: float = Field(allow_inf_nan=False, description="紧急度")

    # 可选
    project: str | None = Field(default=None, description="项目")
    start: datetime | None = Field(default=None, description="开始时间")
    end: datetime | None = Field(default=None, description="结束时间")
    elapsed: Duration | None = Field(default=None, description="已用时长")
    tags: frozenset[str] | None = Field(default=None, description="标签集合，无序")
    annotations: tuple[Annotation, ...] | None = Field(
        default=None,
        description="注释列表，保持创建顺序",
    )
    parent: str | None = Field(
        default=None,
        pattern=UUID_PATTERN,
        description="父任务 uuid（非拥有引用）",
    )

    # 扩展字段（UDA）
    udas: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="未识别的顶层 key -> 原始 JSON 值",
    )

    @field_validator("entry", "modified", "start", "end")
    @classmethod
    def _normalize_timestamps(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return normalize_timestamp(value)

    @classmethod
    def known_fields(cls) -> frozenset[str]:
        """有类型映射的线上字段名（不含 udas）"""
        return frozenset(name for name in cls.model_fields if name != "udas")

    @classmethod
    def required_fields(cls) -> tuple[str, ...]:
        """必填字段名，按声明顺序"""
        return tuple(
            name for name, info in cls.model_fields.items() if info.is_required()
        )
