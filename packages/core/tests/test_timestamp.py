"""Timestamp Codec 单元测试

测试内容：
1. 合法时间戳解析与格式化
2. 长度 / 字面量 / 数值范围错误
3. 日历合法性交给 datetime
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from taskwire.core.exceptions import MalformedTimestamp
from taskwire.core.timestamp import format_timestamp, normalize_timestamp, parse_timestamp


class TestParseTimestamp:
    """parse_timestamp 测试"""

    def test_parse_sample(self, sample_instant):
        """20220131T083000Z -> 2022-01-31 08:30:00 UTC"""
        assert parse_timestamp("20220131T083000Z") == sample_instant

    def test_parse_is_utc_aware(self):
        dt = parse_timestamp("20220131T083000Z")
        assert dt.tzinfo is not None
        assert dt.utcoffset() == timedelta(0)

    def test_parse_boundaries(self):
        """各字段边界值"""
        assert parse_timestamp("19991231T235959Z") == datetime(
            1999, 12, 31, 23, 59, 59, tzinfo=UTC
        )
        assert parse_timestamp("20000101T000000Z") == datetime(2000, 1, 1, tzinfo=UTC)

    def test_leap_day(self):
        assert parse_timestamp("20240229T120000Z").day == 29

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "20220131T083000",
            "20220131T083000ZZ",
            "2022-01-31T08:30:00Z",
        ],
    )
    def test_wrong_length(self, text):
        with pytest.raises(MalformedTimestamp):
            parse_timestamp(text)

    def test_missing_t_literal(self):
        with pytest.raises(MalformedTimestamp) as exc_info:
            parse_timestamp("20220131X083000Z")
        assert exc_info.value.text == "20220131X083000Z"

    def test_missing_z_literal(self):
        with pytest.raises(MalformedTimestamp):
            parse_timestamp("20220131T083000+")

    def test_non_digit_field(self):
        with pytest.raises(MalformedTimestamp):
            parse_timestamp("2022013aT083000Z")

    def test_signed_field_rejected(self):
        """int() 接受的 '+1' 之类不应通过"""
        with pytest.raises(MalformedTimestamp):
            parse_timestamp("2022+131T083000Z")

    @pytest.mark.parametrize(
        "text",
        [
            "20221331T083000Z",  # month 13
            "20220031T083000Z",  # month 0
            "20220132T083000Z",  # day 32
            "20220100T083000Z",  # day 0
            "20220131T243000Z",  # hour 24
            "20220131T086000Z",  # minute 60
            "20220131T083060Z",  # second 60
        ],
    )
    def test_field_out_of_range(self, text):
        with pytest.raises(MalformedTimestamp):
            parse_timestamp(text)

    def test_calendar_invalid_date(self):
        """2 月 30 日由 datetime 拒绝"""
        with pytest.raises(MalformedTimestamp):
            parse_timestamp("20220230T083000Z")

    def test_non_string_rejected(self):
        with pytest.raises(MalformedTimestamp):
            parse_timestamp(20220131)  # type: ignore[arg-type]


class TestFormatTimestamp:
    """format_timestamp 测试"""

    def test_format_sample(self, sample_instant):
        assert format_timestamp(sample_instant) == "20220131T083000Z"

    def test_format_converts_to_utc(self):
        """非 UTC 时区先换算为 UTC"""
        tz = timezone(timedelta(hours=8))
        dt = datetime(2022, 1, 31, 16, 30, 0, tzinfo=tz)
        assert format_timestamp(dt) == "20220131T083000Z"

    def test_format_naive_as_utc(self):
        assert format_timestamp(datetime(2022, 1, 31, 8, 30)) == "20220131T083000Z"

    def test_format_drops_microseconds(self):
        dt = datetime(2022, 1, 31, 8, 30, 0, 999999, tzinfo=UTC)
        assert format_timestamp(dt) == "20220131T083000Z"

    def test_format_pads_small_year(self):
        assert format_timestamp(datetime(999, 1, 2, 3, 4, 5, tzinfo=UTC)) == "09990102T030405Z"

    @pytest.mark.parametrize(
        "text",
        ["20220131T083000Z", "19700101T000000Z", "20991231T235959Z", "20240229T000001Z"],
    )
    def test_roundtrip(self, text):
        """format(parse(s)) == s"""
        assert format_timestamp(parse_timestamp(text)) == text


class TestNormalizeTimestamp:
    def test_normalize_truncates_and_converts(self):
        tz = timezone(timedelta(hours=-5))
        dt = datetime(2022, 1, 31, 3, 30, 0, 1234, tzinfo=tz)
        result = normalize_timestamp(dt)
        assert result == datetime(2022, 1, 31, 8, 30, tzinfo=UTC)
        assert result.microsecond == 0
