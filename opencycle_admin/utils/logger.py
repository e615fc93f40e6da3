import logging
import os
import sys
from types import FrameType
from loguru import logger
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource

# Standard-library loggers whose records are routed into loguru
ROUTED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "gunicorn.error",
    "gunicorn.access",
    "fastapi",
    "sqlalchemy.engine",
)

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level}</level>: "
    "<cyan>[{name}:{line}]</cyan> - <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Forward standard `logging` records to loguru, keeping the original call site."""

    def emit(self, record: logging.LogRecord) -> None:
        # The OTLP exporter logs through stdlib; forwarding it would loop back into the exporter
        if record.name.startswith("opentelemetry"):
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame: FrameType | None = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _add_otlp_sink(endpoint: str, level: str) -> None:
    resource = Resource.create(
        {
            "service.name": os.getenv("OTEL_SERVICE_NAME", "opencycle-admin"),
            "deployment.environment": os.getenv("ENVIRONMENT", "production"),
        }
    )
    provider = LoggerProvider(resource=resource)
    set_logger_provider(provider)

    insecure = os.getenv("OTEL_EXPORTER_OTLP_INSECURE", "false").lower() == "true"
    provider.add_log_record_processor(
        BatchLogRecordProcessor(OTLPLogExporter(endpoint=endpoint, insecure=insecure))
    )
    logger.add(
        LoggingHandler(level=logging.getLevelName(level), logger_provider=provider),
        level=level,
        serialize=True,
    )


def setup_logging(level: str | None = None):
    """
    Make loguru the only log sink of the process.

    Server, framework and SQLAlchemy loggers are routed through `InterceptHandler`, a
    colored console sink is installed on stderr and, when `OTEL_EXPORTER_OTLP_ENDPOINT`
    is set, records are also shipped over OTLP. A broken exporter never stops startup.

    Parameters:
        level (str | None): Minimum level; defaults to `LOG_LEVEL` or `INFO`.

    Returns:
        The configured loguru logger.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(level)
    for name in ROUTED_LOGGERS:
        routed = logging.getLogger(name)
        routed.handlers = [InterceptHandler()]
        routed.propagate = False

    logger.remove()
    logger.add(
        sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True, enqueue=True
    )

    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        try:
            _add_otlp_sink(endpoint, level)
            logger.info("OTLP log export enabled")
        except Exception as e:
            print(f"OTLP log export setup failed: {e}", file=sys.stderr)

    return logger
