import logging
import logging.handlers
import os
from datetime import datetime
from pathlib import Path

from eventhub.constants import DEFAULT_LOG_LEVEL


def clean_old_logs(log_dir: Path, max_files: int = 5):
    """Remove old log files, keeping only the most recent `max_files` logs

    Log files in `log_dir` are sorted by modification time and the oldest are removed
    until only `max_files` remain.

    Args:
        log_dir (Path): The directory where the log files are stored.
        max_files (int, optional): The maximum number of log files to keep. Defaults to 5.

    Raises:
        PermissionError: If there is no permission to delete log files.
    """
    log_files = sorted(log_dir.glob("*.log"), key=os.path.getmtime)
    while len(log_files) > max_files:
        old_log = log_files.pop(0)
        old_log.unlink()


class CustomFormatter(logging.Formatter):
    def format(self, record):
        record.levelname = record.levelname.ljust(8)
        return super().format(record)


def configure_logger(
    log_level: int | str = DEFAULT_LOG_LEVEL, log_dir: Path | None = None, max_log_files: int = 5
) -> list[logging.Handler]:
    """Configures the root logger, which the hub logs to, with format and level

    The console gets a short format without date and time. When `log_dir` is given, a
    rotating log file named after the current date and time is written there too, with
    the detailed format, and only the previous `max_log_files` files are kept.

    Args:
        log_level (int | str): logging.[DEBUG | INFO | WARNING | ERROR] or its name, e.g.
            HubSettings.log_level. Defaults to WARNING.
        log_dir (Path | None): Where to store the logs. Defaults to console only.
        max_log_files (int): Keeps only the previous (n) number of log files. Defaults to 5.

    Returns:
        list[logging.Handler]: The handlers added to the root logger.
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    handlers: list[logging.Handler] = [stream_handler]

    if log_dir is not None:
        log_dir.mkdir(exist_ok=True, parents=True)
        clean_old_logs(log_dir=log_dir, max_files=max_log_files)

        log_filename = log_dir / datetime.now().strftime("%Y-%m-%d_%H-%M-%S.log")
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename, maxBytes=10 * 1024**2, backupCount=5
        )
        file_handler.setFormatter(
            CustomFormatter("[%(asctime)s] %(levelname)s %(message)s", datefmt="%d.%m.%Y %H:%M:%S")
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in handlers:
        root.addHandler(handler)

    return handlers
