import datetime
import logging
import os
import sys
from pathlib import Path

import termcolor

__appname__ = "pagewise"


# ~/pagewise_logs/pagewise_<date>.log
logs_dir_path = Path.home() / f"{__appname__}_logs"
logs_dir_path.mkdir(parents=True, exist_ok=True)

current_date = datetime.datetime.now().strftime("%Y-%m-%d")
log_file_path = logs_dir_path / f"{__appname__}_{current_date}.log"

if os.name == "nt":  # Windows
    import colorama
    colorama.init()


COLORS = {
    "WARNING": "yellow",
    "INFO": "white",
    "DEBUG": "blue",
    "CRITICAL": "red",
    "ERROR": "red",
}


class ColoredFormatter(logging.Formatter):
    def __init__(self, fmt, use_color=True):
        logging.Formatter.__init__(self, fmt)
        self.use_color = use_color

    def format(self, record):
        color = COLORS.get(record.levelname) if self.use_color else None
        level = "{:<7}".format(record.levelname)
        message = record.getMessage()
        location = f"{record.module}:{record.lineno}"
        if color:
            level = termcolor.colored(level, color=color, attrs=["bold"])
            message = termcolor.colored(message, color=color)
            location = termcolor.colored(location, color="cyan")
        record.levelname2 = level
        record.message2 = message
        record.location2 = location
        return logging.Formatter.format(self, record)


logger = logging.getLogger(__appname__)
logger.setLevel(logging.INFO)

stream_handler = logging.StreamHandler(sys.stderr)
handler_format = ColoredFormatter(
    "%(asctime)s [%(levelname2)s] %(location2)s - %(message2)s"
)
stream_handler.setFormatter(handler_format)
logger.addHandler(stream_handler)

file_handler = logging.FileHandler(log_file_path)
file_format = logging.Formatter(
    "%(asctime)s [%(levelname)s] %(module)s:%(lineno)d - %(message)s"
)
file_handler.setFormatter(file_format)
logger.addHandler(file_handler)
