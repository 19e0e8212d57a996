import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from ..config.config import settings


def setup_logging(log_dir: str = None, level: str = None):
    """
    Configures the root logger for the whole application.

    Logs go both to stdout (for development and container logs) and to a
    rotating file inside ``log_dir``. Once ``app.log`` grows past 5 MB it is
    rolled over to ``app.log.1``, ``app.log.2`` and so on, keeping five backups.
    """
    log_format = "%(asctime)s - [%(name)s] - %(levelname)s - %(message)s"

    log_path = Path(log_dir or settings.LOG_DIR)
    log_path.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    # Drop handlers installed by uvicorn & co. so every line shares one format.
    if logger.hasHandlers():
        logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(stdout_handler)

    file_handler = RotatingFileHandler(
        log_path / "app.log",
        maxBytes=5*1024*1024,  # 5 MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(file_handler)
