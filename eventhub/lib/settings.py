"""Hub settings read from an INI file."""

from __future__ import annotations

import configparser
import logging
from pathlib import Path

from eventhub.constants import DEFAULT_ALLOW_MULTIPLE, DEFAULT_LOG_LEVEL
from eventhub.lib.logger import configure_logger

SECTION = "EVENTHUB"


class HubSettings:
    """Settings for building an EventHub, read from the [EVENTHUB] section of an INI file.

    Example config file:

        [EVENTHUB]
        allow_multiple = no
        log_level = DEBUG

    A missing file, section or option gives the default. The file is read once.
    """

    def __init__(self, config_file_path: str) -> None:
        self.config_file_path = config_file_path
        self._config_obj = configparser.ConfigParser()
        # Silently ignores missing files
        self._config_obj.read(config_file_path, encoding="utf-8")
        logging.debug(f"Using config file: {self.config_file_path}")

    @property
    def allow_multiple(self) -> bool:
        """Accepts 1/0, yes/no, true/false and on/off. Anything else falls back to the default."""
        try:
            return self._config_obj.getboolean(
                SECTION, "allow_multiple", fallback=DEFAULT_ALLOW_MULTIPLE
            )
        except ValueError:
            logging.warning(
                f"Invalid allow_multiple in {self.config_file_path}, using {DEFAULT_ALLOW_MULTIPLE}"
            )
            return DEFAULT_ALLOW_MULTIPLE

    @property
    def log_level(self) -> str:
        """Name of a logging level, e.g. DEBUG. Unknown names fall back to the default."""
        level = self._config_obj.get(SECTION, "log_level", fallback=DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(level), int):
            logging.warning(
                f"Invalid log_level {level} in {self.config_file_path}, using {DEFAULT_LOG_LEVEL}"
            )
            return DEFAULT_LOG_LEVEL
        return level

    def configure_logger(
        self, log_dir: Path | None = None, max_log_files: int = 5
    ) -> list[logging.Handler]:
        """Configure logging at the configured log_level. See logger.configure_logger."""
        return configure_logger(self.log_level, log_dir=log_dir, max_log_files=max_log_files)
