from typing import Any
from devents.config.logging import class_color_map, register_logger, LoggerAdapter
from colorlog import ColoredFormatter, StreamHandler
import logging


class Logger:
    def __init__(self, name: str, type: str, level: str = "warning"):
        self.name = name
        self.type = type

        def get_color(type, level):
            return class_color_map.get(type, {}).get(level, "white")

        colors = {
            level_name: get_color(self.type, level_name)
            for level_name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        }
        self.formatter = ColoredFormatter(
            "%(asctime)s %(log_color)s%(class_name)s:%(levelname)s%(reset)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors=colors,
            reset=True,
        )

        self._logger = logging.getLogger(f"devents.{self.name}")
        register_logger(self._logger.name)
        self.set_level(level)

        # Ensure no duplicate handlers are added
        if not self._logger.handlers:
            handler = StreamHandler()
            handler.setFormatter(self.formatter)
            self._logger.addHandler(handler)
        self._logger.propagate = False

        self.logger = LoggerAdapter(self._logger, {"class_name": self.name})

    def get_logger(self):
        return self._logger

    def set_level(self, level: str) -> None:
        self._logger.setLevel(getattr(logging, level.upper()))

    def is_enabled_for(self, level: str) -> bool:
        return self._logger.isEnabledFor(getattr(logging, level.upper()))

    def log(self, message: str, level: str = "info", exc_info=None):
        self.logger.log(
            getattr(logging, level.upper()),
            message,
            extra={"formatter": self.formatter},
            exc_info=exc_info,
        )

    def info(self, message: Any):
        self.logger.info(msg=message, extra={"formatter": self.formatter})

    def debug(self, message: str):
        self.logger.debug(msg=message, extra={"formatter": self.formatter})

    def error(self, message: str, exc_info=True):
        self.logger.error(
            msg=message, extra={"formatter": self.formatter}, exc_info=exc_info
        )

    def warning(self, message: str, exc_info=None):
        self.logger.warning(
            msg=message, extra={"formatter": self.formatter}, exc_info=exc_info
        )

    def critical(self, message: str, exc_info=True):
        self.logger.critical(
            msg=message, extra={"formatter": self.formatter}, exc_info=exc_info
        )
