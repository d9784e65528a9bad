"""枚举定义 -- Task 状态、hook 事件、hook API 版本

线上 token 与枚举成员之间使用显式映射表，保证双向映射完整且一一对应；
未知 token 一律拒绝，不做开放式字符串比较。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 生命周期状态 -- 与 Taskwarrior status 词表一致"""

    PENDING = "pending"
    COMPLETED = "completed"
    DELETED = "deleted"
    WAITING = "waiting"
    RECURRING = "recurring"


class HookEvent(StrEnum):
    """Taskwarrior hook 事件（hook 文件名 on-<event> 中的 event）"""

    LAUNCH = "launch"
    EXIT = "exit"
    ADD = "add"
    MODIFY = "modify"


class HookApiVersion(StrEnum):
    """Hook API 版本"""

    V1 = "1"
    V2 = "2"


# 当前 Taskwarrior 使用的 hook API
CURRENT_HOOK_API: HookApiVersion = HookApiVersion.V2

STATUS_BY_TOKEN: dict[str, TaskStatus] = {
    "pending": TaskStatus.PENDING,
    "completed": TaskStatus.COMPLETED,
    "deleted": TaskStatus.DELETED,
    "waiting": TaskStatus.WAITING,
    "recurring": TaskStatus.RECURRING,
}
TOKEN_BY_STATUS: dict[TaskStatus, str] = {
    status: token for token, status in STATUS_BY_TOKEN.items()
}

HOOK_EVENT_BY_TOKEN: dict[str, HookEvent] = {
    "launch": HookEvent.LAUNCH,
    "exit": HookEvent.EXIT,
    "add": HookEvent.ADD,
    "modify": HookEvent.MODIFY,
}

API_VERSION_BY_TOKEN: dict[str, HookApiVersion] = {
    "1": HookApiVersion.V1,
    "2": HookApiVersion.V2,
}


def status_from_wire(token: str) -> TaskStatus:
    """线上 token -> TaskStatus

    Raises:
        ValueError: 未知 token（大小写敏感）
    """
    try:
        return STATUS_BY_TOKEN[token]
    except (KeyError, TypeError):
        raise ValueError(f"未知的 status: {token!r}") from None


def status_to_wire(status: TaskStatus) -> str:
    """TaskStatus -> 线上 token"""
    return TOKEN_BY_STATUS[status]
