"""Setting up a file logger for recording submission and grading events.

Returns a lazily initialized module logger that writes to a file
`{logging_dir}/{filename}` with a timestamp and level prefix.
"""
import os
from logging import FileHandler, Formatter, getLogger, getLevelName
from formcraft.app.core.config import settings


def get_logs_writer_logger(logging_dir=settings.LOG_PATH, filename='logs.log'):
    os.makedirs(logging_dir, exist_ok=True)
    log_path = os.path.join(logging_dir, filename)

    logger = getLogger("formcraft")

    if logger.handlers:
        return logger

    logger.setLevel(getLevelName(settings.LOG_LEVEL.upper()))

    handler = FileHandler(log_path, mode="a", encoding="utf-8", delay=True)
    handler.setFormatter(Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)

    return logger
