import logging
import sys
import traceback


class LoggerAdapter(logging.LoggerAdapter):
    def __init__(self, logger, extra):
        super().__init__(logger, extra)
        self.logger = logger
        self.extra = extra

    def log(self, level, msg, *args, **kwargs):
        exc_info = kwargs.pop("exc_info", None)
        if exc_info:
            # Format exception with full traceback
            if isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            elif not isinstance(exc_info, tuple):
                exc_info = sys.exc_info()
            if exc_info[0] is not None:
                msg = f"{msg}\n" + "".join(traceback.format_exception(*exc_info))

        formatter = kwargs.get("extra", {}).get("formatter")
        if formatter and self.logger.handlers:
            self.logger.handlers[0].setFormatter(formatter)

        extra = {**self.extra, **kwargs.pop("extra", {})}
        self.logger.log(level, msg, *args, extra=extra, **kwargs)


class_color_map = {
    "events": {
        "INFO": "light_blue",
        "DEBUG": "cyan",
        "ERROR": "red",
        "WARNING": "yellow",
        "CRITICAL": "red,bg_white",
    },
    "listening": {
        "INFO": "green",
        "DEBUG": "purple",
        "ERROR": "red",
        "WARNING": "yellow",
        "CRITICAL": "red,bg_white",
    },
}

# Names of every logger created through utils.logging.Logger
library_loggers = set()


def register_logger(name: str) -> None:
    library_loggers.add(name)


def set_library_level(level: str) -> None:
    """Apply `level` to every logger the library has created."""
    for name in library_loggers:
        logging.getLogger(name).setLevel(level.upper())
