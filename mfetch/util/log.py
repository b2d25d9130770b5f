import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(padded)s %(name)s.%(funcName)s - %(message)s"


class LevelPadFormatter(logging.Formatter):
    LEVEL_WIDTH = len("WARNING")

    def format(self, record):
        level = record.levelname
        pad = " " * (self.LEVEL_WIDTH - len(level))
        record.padded = f"[{level}]{pad}"
        return super().format(record)


def configure(debug: bool, logfile: Path, name: str = "mfetch") -> logging.Logger:
    """
    Send the records of the mfetch loggers (and of every mfetch.* module
    logger below it) to a single log file. Calling it again only updates
    the level.
    """
    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # The report owns the terminal
    logger.propagate = False

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.setLevel(level)
            return logger

    handler = logging.FileHandler(logfile, mode="a", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(LevelPadFormatter(LOG_FORMAT))
    logger.addHandler(handler)

    return logger
