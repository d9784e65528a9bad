"""packages/core 测试配置 -- Task JSON 样例 fixture"""

import json
from datetime import UTC, datetime

import pytest
from taskwire.core.config import default_codec_config

SAMPLE_UUID = "d67fce70-c0b6-43c5-affc-a21e64567d40"


@pytest.fixture
def sample_uuid() -> str:
    return SAMPLE_UUID


@pytest.fixture
def sample_instant() -> datetime:
    """20220131T083000Z 对应的时刻"""
    return datetime(2022, 1, 31, 8, 30, 0, tzinfo=UTC)


@pytest.fixture
def minimal_task_dict() -> dict:
    """仅含必填字段的 Task"""
    return {
        "id": 0,
        "description": "Task to do",
        "entry": "20220131T083000Z",
        "modified": "20220131T083000Z",
        "status": "pending",
        "uuid": SAMPLE_UUID,
        "urgency": 9.91234,
    }


@pytest.fixture
def full_task_dict(minimal_task_dict: dict) -> dict:
    """含全部可选字段和 UDA 的 Task"""
    return {
        **minimal_task_dict,
        "project": "Daily",
        "start": "20220131T083000Z",
        "end": "20220131T093000Z",
        "elapsed": "PT2H",
        "tags": ["WORK", "home"],
        "annotations": [
            {"entry": "20220131T084500Z", "description": "first note"},
            {"entry": "20220131T090000Z", "description": "second note"},
        ],
        "parent": "0b1c6a2e-57f4-4b4c-9a0d-2f3d1c9e8b7a",
        "estimate": "PT3H",
        "priority": "H",
        "weight": 2.5,
        "meta": {"source": "import", "ids": [1, 2]},
    }


@pytest.fixture
def minimal_task_json(minimal_task_dict: dict) -> str:
    return json.dumps(minimal_task_dict)


@pytest.fixture
def full_task_json(full_task_dict: dict) -> str:
    return json.dumps(full_task_dict)


@pytest.fixture
def clean_env(monkeypatch):
    """清除 taskwire 相关环境变量，前后重置默认配置缓存"""
    for var in (
        "TASKWIRE_DURATION_LENIENT_ORDER",
        "TASKWIRE_LOG_FORMAT",
        "TASKWIRE_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    default_codec_config.cache_clear()
    yield monkeypatch
    default_codec_config.cache_clear()
