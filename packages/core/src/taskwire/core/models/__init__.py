"""taskwire Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    API_VERSION_BY_TOKEN,
    CURRENT_HOOK_API,
    HOOK_EVENT_BY_TOKEN,
    STATUS_BY_TOKEN,
    HookApiVersion,
    HookEvent,
    TaskStatus,
    status_from_wire,
    status_to_wire,
)
from .hook import HookInvocation
from .task import UUID_PATTERN, Annotation, Task

__all__ = [
    # 枚举
    "TaskStatus",
    "HookEvent",
    "HookApiVersion",
    "CURRENT_HOOK_API",
    # 映射表
    "STATUS_BY_TOKEN",
    "HOOK_EVENT_BY_TOKEN",
    "API_VERSION_BY_TOKEN",
    "status_from_wire",
    "status_to_wire",
    # Task
    "Task",
    "Annotation",
    "UUID_PATTERN",
    # Hook
    "HookInvocation",
]
