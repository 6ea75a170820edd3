import sys
import logging
from typing import Any

from loguru import logger

from linescore_relay.config.settings import settings

SENSITIVE_KEYS = ["key", "token", "password", "secret", "cookie"]


def mask_value(value: Any) -> Any:
    """Masks a string, keeping a short prefix and suffix when it is long enough."""
    if isinstance(value, str):
        if len(value) > 8:
            return value[:4] + "****" + value[-4:]
        return "********"
    if isinstance(value, dict):
        return {k: mask_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [mask_value(item) for item in value]
    return "********"


def _mask_extra(extra: dict[str, Any]) -> dict[str, Any]:
    masked = {}
    for name, value in extra.items():
        if any(sk in name.lower() for sk in SENSITIVE_KEYS):
            masked[name] = mask_value(value)
        elif isinstance(value, dict):
            # Header mappings are logged as nested dicts
            masked[name] = _mask_extra(value)
        else:
            masked[name] = value
    return masked


def sensitive_data_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask sensitive data in log records."""
    if "extra" in record and isinstance(record["extra"], dict):
        record["extra"].update(_mask_extra(record["extra"]))
    return True  # Keep the record after masking


class InterceptHandler(logging.Handler):
    """Routes standard logging records (uvicorn, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging() -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,
        filter=sensitive_data_filter,
    )

    logger.info(f"Logging initialized with level: {settings.log_level}")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        # uvicorn installs its own handlers; hand everything to the root one
        std_logger = logging.getLogger(name)
        std_logger.handlers = []
        std_logger.propagate = True
    logger.info("Standard logging intercepted.")
