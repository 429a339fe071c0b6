"""Loguru setup for the relay. Stdlib records from uvicorn and the Cloudinary SDK are routed through it."""
import logging
import sys

from loguru import logger

from gallery_relay.config import Settings

LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | req={extra[request_id]} | "
    "folder={extra[folder]} | {name}:{function}:{line} | {message}"
)

# Reduce noisy lib logs; requests are logged by the relay middleware.
QUIET_LOGGERS = ("urllib3", "cloudinary", "uvicorn.access")


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(app_settings: Settings) -> None:
    folder = app_settings.folder_name

    def _defaults(record) -> None:
        record["extra"].setdefault("request_id", "-")
        record["extra"].setdefault("folder", folder)

    logger.configure(patcher=_defaults)
    logger.remove()
    logger.add(sys.stderr, level=app_settings.log_level.upper(), format=LOG_FORMAT)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
