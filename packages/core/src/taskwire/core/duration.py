"""Duration Codec -- ISO-8601 子集时长

语法: P[nY][nM][nD][T[nH][nM][nS]]
M 在 T 之前表示月，在 T 之后表示分钟，因此按 T 拆成两段分别扫描，
不用单个正则。

分量不做归一化：PT90M 解析为 minutes=90，而不是 1 小时 30 分钟。

另支持 Taskwarrior 自己的时长词汇（"5 days"、"weekly"、"fortnight" 等），
见 parse_named_duration；recur 与 duration 类型的 UDA 使用这种写法。
"""

import re
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

from .config import default_codec_config
from .exceptions import MalformedDuration

# 与 Taskwarrior 一致的 32 位无符号宽度
U32_MAX = 2**32 - 1

# designator -> 字段名，按规范顺序排列
DATE_DESIGNATORS: dict[str, str] = {"Y": "years", "M": "months", "D": "days"}
TIME_DESIGNATORS: dict[str, str] = {"H": "hours", "M": "minutes", "S": "seconds"}

COMPONENTS = ("years", "months", "days", "hours", "minutes", "seconds")

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
# Taskwarrior 的日历近似
SECONDS_PER_MONTH = 30 * SECONDS_PER_DAY
SECONDS_PER_YEAR = 365 * SECONDS_PER_DAY


class Duration(BaseModel):
    """按分量拆分的时长，各分量非负

    相等性按分量比较；P1M 与 P30D 不相等。
    """

    model_config = ConfigDict(frozen=True)

    years: int = Field(default=0, ge=0, le=U32_MAX)
    months: int = Field(default=0, ge=0, le=U32_MAX)
    days: int = Field(default=0, ge=0, le=U32_MAX)
    hours: int = Field(default=0, ge=0, le=U32_MAX)
    minutes: int = Field(default=0, ge=0, le=U32_MAX)
    seconds: int = Field(default=0, ge=0, le=U32_MAX)

    @classmethod
    def of_seconds(cls, seconds: int) -> "Duration":
        return cls(seconds=seconds)

    @classmethod
    def of_minutes(cls, minutes: int) -> "Duration":
        return cls(minutes=minutes)

    @classmethod
    def of_hours(cls, hours: int) -> "Duration":
        return cls(hours=hours)

    @classmethod
    def of_days(cls, days: int) -> "Duration":
        return cls(days=days)

    @classmethod
    def of_weeks(cls, weeks: int) -> "Duration":
        """一周按 7 天存储，线上格式没有 W"""
        return cls(days=weeks * 7)

    @classmethod
    def of_months(cls, months: int) -> "Duration":
        return cls(months=months)

    @classmethod
    def of_years(cls, years: int) -> "Duration":
        return cls(years=years)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Duration":
        """由 timedelta 构造只含秒的 Duration，亚秒部分截断

        通常配合 smoothed() 使用，例如由 start/end 计算 elapsed。
        """
        if delta < timedelta(0):
            raise ValueError(f"Duration 不能为负: {delta}")
        return cls(seconds=delta.days * SECONDS_PER_DAY + delta.seconds)

    def __add__(self, other: object) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(**{name: getattr(self, name) + getattr(other, name) for name in COMPONENTS})

    def __str__(self) -> str:
        return format_duration(self)

    def is_zero(self) -> bool:
        return not any(getattr(self, name) for name in COMPONENTS)

    def total_seconds(self) -> int:
        """按 Taskwarrior 近似换算总秒数（月 = 30 天，年 = 365 天）"""
        return (
            self.seconds
            + self.minutes * SECONDS_PER_MINUTE
            + self.hours * SECONDS_PER_HOUR
            + self.days * SECONDS_PER_DAY
            + self.months * SECONDS_PER_MONTH
            + self.years * SECONDS_PER_YEAR
        )

    def smoothed(self) -> "Duration":
        """进位后的新 Duration，例如 PT7200S -> PT2H

        天数不会折算为月，月的天数不固定。
        """
        minutes, seconds = divmod(self.minutes * SECONDS_PER_MINUTE + self.seconds, 60)
        hours, minutes = divmod(self.hours * 60 + minutes, 60)
        days, hours = divmod(self.days * 24 + hours, 24)
        years, months = divmod(self.years * 12 + self.months, 12)
        return Duration(
            years=years,
            months=months,
            days=days,
            hours=hours,
            minutes=minutes,
            seconds=seconds,
        )


def _scan_half(
    text: str,
    half: str,
    designators: dict[str, str],
    other: dict[str, str],
    in_time: bool,
    lenient_order: bool,
) -> dict[str, int]:
    """扫描 T 之前或之后的一段，返回 字段名 -> 值"""
    order = list(designators)
    values: dict[str, int] = {}
    last_rank = -1
    pos = 0
    while pos < len(half):
        end = pos
        while end < len(half) and "0" <= half[end] <= "9":
            end += 1
        digits = half[pos:end]
        if end == len(half):
            raise MalformedDuration(text, f"数字 {digits!r} 后缺少 designator")

        designator = half[end]
        if designator not in designators:
            if designator == "T":
                raise MalformedDuration(text, "重复的 'T'")
            if designator in other:
                where = "之前" if in_time else "之后"
                raise MalformedDuration(text, f"designator {designator!r} 不能出现在 'T' {where}")
            raise MalformedDuration(text, f"未知 designator {designator!r}")
        if not digits:
            raise MalformedDuration(text, f"designator {designator!r} 前缺少数字")

        name = designators[designator]
        if name in values:
            raise MalformedDuration(text, f"重复的 designator {designator!r}")
        rank = order.index(designator)
        if rank < last_rank and not lenient_order:
            raise MalformedDuration(text, f"designator {designator!r} 顺序错误")

        value = int(digits)
        if value > U32_MAX:
            raise MalformedDuration(text, f"数值 {digits} 溢出")

        values[name] = value
        last_rank = max(last_rank, rank)
        pos = end + 1
    return values


def parse_duration(text: str, *, lenient_order: bool | None = None) -> Duration:
    """解析 ISO-8601 子集时长字符串

    Args:
        text: 如 "PT2H"、"P1Y2M3DT4H5M6S"
        lenient_order: 同一半段内是否允许乱序；None 时使用默认 CodecConfig（进程内加载一次）

    Raises:
        MalformedDuration: 语法不合法
    """
    if not isinstance(text, str):
        raise MalformedDuration(repr(text), "不是字符串")
    if not text.startswith("P"):
        raise MalformedDuration(text, "应以 'P' 开头")
    if lenient_order is None:
        lenient_order = default_codec_config().duration_lenient_order

    date_half, separator, time_half = text[1:].partition("T")
    if not date_half and not separator:
        raise MalformedDuration(text, "没有任何时长分量")
    if separator and not time_half:
        raise MalformedDuration(text, "'T' 之后没有时间分量")

    values = _scan_half(
        text, date_half, DATE_DESIGNATORS, TIME_DESIGNATORS, False, lenient_order
    )
    values.update(
        _scan_half(text, time_half, TIME_DESIGNATORS, DATE_DESIGNATORS, True, lenient_order)
    )
    return Duration(**values)


# Taskwarrior 时长词汇：单位 -> (单位时长, 可否省略数字)
# 月按 30 天、季度按 91 天、年按 365 天换算为天数，与 Taskwarrior 的 calc 一致
NAMED_UNITS: dict[str, tuple[Duration, bool]] = {
    **dict.fromkeys(("seconds", "secs", "s"), (Duration(seconds=1), False)),
    **dict.fromkeys(("second", "sec"), (Duration(seconds=1), True)),
    **dict.fromkeys(("minutes", "mins"), (Duration(minutes=1), False)),
    **dict.fromkeys(("minute", "min"), (Duration(minutes=1), True)),
    **dict.fromkeys(("hours", "hrs", "h"), (Duration(hours=1), False)),
    **dict.fromkeys(("hour", "hr"), (Duration(hours=1), True)),
    **dict.fromkeys(("days", "d"), (Duration(days=1), False)),
    **dict.fromkeys(("day", "daily", "weekdays"), (Duration(days=1), True)),
    **dict.fromkeys(("weeks", "wks", "w"), (Duration(days=7), False)),
    **dict.fromkeys(("week", "weekly", "wk", "sennight"), (Duration(days=7), True)),
    **dict.fromkeys(("fortnight", "fortnightly", "biweekly"), (Duration(days=14), True)),
    **dict.fromkeys(("months", "m"), (Duration(days=30), False)),
    **dict.fromkeys(("month", "monthly", "mth", "mo"), (Duration(days=30), True)),
    "bimonthly": (Duration(days=61), True),
    **dict.fromkeys(("quarters", "qrtrs", "q"), (Duration(days=91), False)),
    **dict.fromkeys(("quarter", "quarterly", "qrtr", "qtr"), (Duration(days=91), True)),
    "semiannual": (Duration(days=183), True),
    **dict.fromkeys(("years", "yrs", "y"), (Duration(days=365), False)),
    **dict.fromkeys(("year", "yearly", "yr", "annual"), (Duration(days=365), True)),
    **dict.fromkeys(("biannual", "biyearly"), (Duration(days=730), True)),
}

_NAMED_DURATION = re.compile(r"[ \t]*(?P<count>[0-9]+)?[ \t]*(?P<unit>[a-z]+)[ \t]*")


def parse_named_duration(text: str) -> Duration:
    """解析 Taskwarrior 时长词汇，如 "5 seconds"、"3days"、"weekly"、"2 fortnight"

    用于 recur 和 duration 类型的 UDA；elapsed 字段只接受 ISO-8601。
    weekdays 按 1 天处理，"仅工作日" 的含义不保留。

    Raises:
        MalformedDuration: 单位未知、缺少数字或数值溢出
    """
    if not isinstance(text, str):
        raise MalformedDuration(repr(text), "不是字符串")
    match = _NAMED_DURATION.fullmatch(text)
    if match is None:
        raise MalformedDuration(text, "不是 '<数字> <单位>' 形式")

    unit = NAMED_UNITS.get(match["unit"])
    if unit is None:
        raise MalformedDuration(text, f"未知单位 {match['unit']!r}")
    step, bare_allowed = unit
    if match["count"] is None:
        if not bare_allowed:
            raise MalformedDuration(text, f"单位 {match['unit']!r} 前缺少数字")
        return step

    count = int(match["count"])
    values = {name: getattr(step, name) * count for name in COMPONENTS}
    if any(value > U32_MAX for value in values.values()):
        raise MalformedDuration(text, f"数值 {match['count']} 溢出")
    return Duration(**values)


def parse_any_duration(text: str, *, lenient_order: bool | None = None) -> Duration:
    """解析 ISO-8601 或 Taskwarrior 时长词汇

    以 P 开头的按 ISO-8601 解析，其余按时长词汇解析；词汇全部为小写，两者不会冲突。

    Raises:
        MalformedDuration: 对应形式不合法
    """
    if isinstance(text, str) and text.strip().startswith("P"):
        return parse_duration(text.strip(), lenient_order=lenient_order)
    return parse_named_duration(text)


def format_duration(duration: Duration) -> str:
    """格式化为规范字符串，只输出非零分量；全零输出 PT0S"""
    if duration.is_zero():
        return "PT0S"

    buffer = ["P"]
    for designator, name in DATE_DESIGNATORS.items():
        value = getattr(duration, name)
        if value:
            buffer.append(f"{value}{designator}")

    time_parts = [
        f"{getattr(duration, name)}{designator}"
        for designator, name in TIME_DESIGNATORS.items()
        if getattr(duration, name)
    ]
    if time_parts:
        buffer.append("T")
        buffer.extend(time_parts)
    return "".join(buffer)
