"""CodecConfig -- codec 行为与日志配置

从环境变量加载，默认值即严格模式。
"""

import os
from functools import lru_cache
from typing import Literal

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class CodecConfig(BaseModel):
    """taskwire 配置 -- 从环境变量加载

    环境变量:
        TASKWIRE_DURATION_LENIENT_ORDER: 是否容忍乱序的时长 designator（默认 false）
        TASKWIRE_LOG_FORMAT: 日志渲染模式（dev/json）
        TASKWIRE_LOG_LEVEL: 日志级别（默认 INFO）
    """

    duration_lenient_order: bool = Field(
        default=False,
        description="同一半段内 designator 允许乱序（如 P2D1Y）",
    )
    log_format: Literal["dev", "json"] = Field(
        default="dev",
        description="日志渲染模式：dev / json",
    )
    log_level: str = Field(default="INFO", description="日志级别")


def _parse_bool(env_var: str, val: str, fallback: bool) -> bool:
    lowered = val.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    log.warning(
        "invalid_bool_config",
        env_var=env_var,
        value=val,
        fallback=fallback,
    )
    return fallback


def load_codec_config() -> CodecConfig:
    """从环境变量加载 codec 配置

    环境变量映射:
        TASKWIRE_DURATION_LENIENT_ORDER -> duration_lenient_order (默认 False)
        TASKWIRE_LOG_FORMAT -> log_format (默认 "dev")
        TASKWIRE_LOG_LEVEL -> log_level (默认 "INFO")

    Returns:
        CodecConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKWIRE_DURATION_LENIENT_ORDER"):
        # 无法识别的值不阻塞，使用默认值
        kwargs["duration_lenient_order"] = _parse_bool(
            "TASKWIRE_DURATION_LENIENT_ORDER", val, fallback=False
        )

    if val := os.environ.get("TASKWIRE_LOG_FORMAT"):
        kwargs["log_format"] = val

    if val := os.environ.get("TASKWIRE_LOG_LEVEL"):
        kwargs["log_level"] = val.upper()

    return CodecConfig(**kwargs)


@lru_cache(maxsize=1)
def default_codec_config() -> CodecConfig:
    """进程内只加载一次的默认配置

    codec 在调用方未显式传参时读取它，解码结果不随调用之间的环境变量变化。
    修改环境变量后需调用 default_codec_config.cache_clear() 重新加载。
    """
    return load_codec_config()
