import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

import structlog

from natgateway.config.defaults import LogDestination
from natgateway.config.schemas import LoggingConfig

LOGGER_NAME = "natgateway"


class DetailedFormatter(logging.Formatter):
    """Formatter adding the caller's module, function and line to each record."""

    def format(self, record):
        record.caller_info = f"{record.module}.{record.funcName}:{record.lineno}"
        return super().format(record)


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s [%(caller_info)s] - %(message)s"


def setup_logging(logging_config: Optional[LoggingConfig] = None) -> structlog.stdlib.BoundLogger:
    """
    Set up structured logging for the application using structlog.

    Args:
        logging_config: Logging settings. Defaults are used if omitted.
    Returns:
        Configured structlog logger instance.
    """
    logging_config = logging_config or LoggingConfig()
    destination = LogDestination(logging_config.destination)
    log_path = os.path.expandvars(logging_config.file.path)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, logging_config.level.value))

    handlers = []

    if destination in (LogDestination.FILE, LogDestination.BOTH):
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=logging_config.file.max_size_mb * 1024 * 1024,
            backupCount=logging_config.file.backup_count
        )
        file_handler.setFormatter(DetailedFormatter(LOG_FORMAT))
        handlers.append(file_handler)

    if destination in (LogDestination.STDOUT, LogDestination.BOTH):
        # stderr keeps stdout free for command output
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(DetailedFormatter(LOG_FORMAT))
        handlers.append(console_handler)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    # Quiet the AWS SDK unless debugging
    if root_logger.level > logging.DEBUG:
        for noisy in ("botocore", "boto3", "urllib3"):
            logging.getLogger(noisy).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(LOGGER_NAME)

    logger.debug(
        "Logging configured",
        log_level=logging_config.level.value,
        log_destination=destination.value,
        log_path=log_path
    )

    return logger
