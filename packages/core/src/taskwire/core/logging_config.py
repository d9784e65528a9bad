"""structlog 配置 -- hook 脚本与 CLI 的日志输出

hook 的 stdout 只能写 Task JSON，日志一律走 stderr。
TASKWIRE_LOG_FORMAT=json 时每行一个 JSON 事件，便于 Taskwarrior 之外的工具收集；
默认 dev 为终端可读格式。
"""

import logging
import sys

import structlog

from .config import CodecConfig, load_codec_config


def _renderer(config: CodecConfig) -> structlog.types.Processor:
    if config.log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging(config: CodecConfig | None = None) -> None:
    """把 structlog 接到 root logger 的 stderr handler 上

    codec 模块本身不调用此函数，由 hook 脚本或 CLI 在启动时调用一次；
    重复调用会替换 root logger 上已有的 handler。
    """
    if config is None:
        config = load_codec_config()

    # structlog 与标准库 logging 共用的前置处理
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(config),
            foreign_pre_chain=pre_chain,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
