# FILE: ./common/logging_config.py
import logging
import sys
from pythonjsonlogger import jsonlogger

from common.config import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL):
    """
    لاگر اصلی را برای خروجی لاگ‌های JSON به stdout پیکربندی می‌کند.
    این تابع باید یک بار در هنگام شروع به کار سرویس فراخوانی شود.
    """
    logger = logging.getLogger()
    if logger.hasHandlers():
        logger.handlers.clear()

    log_handler = logging.StreamHandler(sys.stdout)

    formatter = jsonlogger.JsonFormatter(
        '%(asctime)s %(levelname)s %(name)s %(message)s'
    )

    log_handler.setFormatter(formatter)
    logger.addHandler(log_handler)
    logger.setLevel(logging.getLevelName(level.upper()))

    # لاگ‌های دسترسی uvicorn از همین handler عبور می‌کنند
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers.clear()
        logging.getLogger(name).propagate = True

    logging.info("JSON logging configured successfully.")
