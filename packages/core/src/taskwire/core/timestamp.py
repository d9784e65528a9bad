"""Timestamp Codec -- Taskwarrior 紧凑 UTC 时间戳

线上格式固定 16 字符：YYYYMMDDTHHMMSSZ，仅 UTC，秒级精度。
"""

from datetime import UTC, datetime

from .exceptions import MalformedTimestamp

TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
TIMESTAMP_LENGTH = 16

# (名称, 起始, 结束, 最小值, 最大值)
_FIELDS: tuple[tuple[str, int, int, int, int], ...] = (
    ("year", 0, 4, 0, 9999),
    ("month", 4, 6, 1, 12),
    ("day", 6, 8, 1, 31),
    ("hour", 9, 11, 0, 23),
    ("minute", 11, 13, 0, 59),
    ("second", 13, 15, 0, 59),
)


def parse_timestamp(text: str) -> datetime:
    """解析 YYYYMMDDTHHMMSSZ 为 UTC datetime

    逐字段检查长度、字面量和数值范围；日历合法性（如 2 月 30 日）交给 datetime。

    Raises:
        MalformedTimestamp: 格式或取值不合法
    """
    if not isinstance(text, str):
        raise MalformedTimestamp(repr(text), "不是字符串")
    if len(text) != TIMESTAMP_LENGTH:
        raise MalformedTimestamp(text, f"长度应为 {TIMESTAMP_LENGTH}，实际 {len(text)}")
    if text[8] != "T":
        raise MalformedTimestamp(text, "第 9 个字符应为 'T'")
    if text[15] != "Z":
        raise MalformedTimestamp(text, "末尾应为 'Z'")

    values: dict[str, int] = {}
    for name, start, end, low, high in _FIELDS:
        chunk = text[start:end]
        # str.isdigit 会接受全角数字等，这里只接受 ASCII
        if not (chunk.isascii() and chunk.isdigit()):
            raise MalformedTimestamp(text, f"{name} 字段 {chunk!r} 不是数字")
        value = int(chunk)
        if not low <= value <= high:
            raise MalformedTimestamp(text, f"{name} 超出范围 {low}-{high}: {chunk}")
        values[name] = value

    try:
        return datetime(tzinfo=UTC, **values)
    except ValueError as e:
        raise MalformedTimestamp(text, str(e)) from e


def normalize_timestamp(dt: datetime) -> datetime:
    """转为 UTC 并截断到秒；naive datetime 视为 UTC"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    else:
        dt = dt.astimezone(UTC)
    return dt.replace(microsecond=0)


def format_timestamp(dt: datetime) -> str:
    """格式化为 YYYYMMDDTHHMMSSZ"""
    dt = normalize_timestamp(dt)
    # %Y 在部分平台不补零，年份单独处理
    return f"{dt.year:04d}" + dt.strftime(TIMESTAMP_FORMAT[2:])
