import datetime
import logging
import os
import sys
from pathlib import Path

import termcolor

__appname__ = "docsync"


def resolve_path(path: Path | str) -> Path:
    return Path(path).expanduser().resolve()


def resolve_logs_dir() -> Path:
    env_dir = os.environ.get("DOCSYNC_LOG_DIR", "").strip()
    if env_dir:
        return resolve_path(env_dir)
    return resolve_path(Path.home() / f"{__appname__}_logs")


resolved_logs_dir_path = resolve_logs_dir()

if not resolved_logs_dir_path.exists():
    resolved_logs_dir_path.mkdir(parents=True)

current_date = datetime.datetime.now().strftime("%Y-%m-%d")

resolved_log_file_path = resolve_path(
    resolved_logs_dir_path / f"{__appname__}_{current_date}.log"
)

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
        levelname = record.levelname
        if self.use_color and levelname in COLORS:

            def colored(text):
                return termcolor.colored(
                    text,
                    color=COLORS[levelname],
                    attrs=["bold"],
                )

            record.levelname2 = colored("{:<7}".format(record.levelname))
            record.message2 = colored(record.getMessage())

            asctime2 = datetime.datetime.fromtimestamp(record.created)
            record.asctime2 = termcolor.colored(str(asctime2), color="green")

            record.module2 = termcolor.colored(record.module, color="cyan")
            record.funcName2 = termcolor.colored(record.funcName, color="cyan")
            record.lineno2 = termcolor.colored(str(record.lineno), color="cyan")
        else:
            record.levelname2 = record.levelname
            record.message2 = record.getMessage()
            record.module2 = record.module
            record.funcName2 = record.funcName
            record.lineno2 = record.lineno
        return logging.Formatter.format(self, record)


def parse_log_level(level: str | int) -> int:
    """Turn a level name (``"DEBUG"``) or number into a logging level."""
    value = level
    if isinstance(value, str):
        value = logging.getLevelName(value.strip().upper())
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def set_log_level(level: str | int) -> None:
    logger.setLevel(parse_log_level(level))


logger = logging.getLogger(__appname__)
logger.setLevel(logging.INFO)

stream_handler = logging.StreamHandler(sys.stderr)
handler_format = ColoredFormatter(
    "%(asctime)s [%(levelname2)s] %(module2)s:%(funcName2)s:%(lineno2)s"
    "- %(message2)s"
)
stream_handler.setFormatter(handler_format)
logger.addHandler(stream_handler)

file_handler = logging.FileHandler(resolved_log_file_path)
file_format = logging.Formatter(
    "%(asctime)s [%(levelname)s] %(module)s:%(funcName)s:%(lineno)d - %(message)s"
)
file_handler.setFormatter(file_format)
logger.addHandler(file_handler)
