import logging
import logging.handlers
import sys

import structlog

from infrastructure.config import Settings, settings


def setup_logging(app_settings: Settings = settings, *, log_to_file: bool = True) -> None:
    """Configure structlog on top of the standard library logging handlers.

    Development renders colored console lines, other environments emit JSON.
    Output goes to stdout and, unless disabled, to a daily rotated file.
    """
    common_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if app_settings.app_env == "development":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *common_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=common_processors,
        processor=renderer,
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [stream_handler]

    if log_to_file:
        app_settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            app_settings.log_dir / f"{app_settings.app_env}.log",
            when="midnight",
            interval=1,
            backupCount=7,
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(app_settings.log_level.upper())

    # fsspec logs through its own logger; route it through the same handlers
    fsspec_logger = logging.getLogger("fsspec")
    fsspec_logger.handlers = handlers
    fsspec_logger.propagate = False
