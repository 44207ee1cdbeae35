# tlkit/tl_logging.py
from loguru import logger
import sys
import os
from pathlib import Path
from typing import Literal

DEBUG_FORMAT = (
    "<green>{elapsed}</green>  <level>{level:<7}</level> {name}:{line}: "
    "<level>{message}</level>"
)
INFO_FORMAT = (
    "<green>{elapsed}</green>  <level>{level:<7}</level>: "
    "<level>{message}</level>"
)
FORMAT_DICT = {
    'TRACE': DEBUG_FORMAT,
    'DEBUG': DEBUG_FORMAT,
    'INFO': INFO_FORMAT,
    'WARNING': INFO_FORMAT,
    'ERROR': INFO_FORMAT,
}

LLTYPE = Literal['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR']


class LogController:

    def __init__(self):
        logger.remove()
        self.std_handler: int | None = None
        self.file_handlers: list[int] = []
        self.level: str = 'INFO'

    def set_default(self):
        value = os.getenv("TLKIT_LOGLEVEL", default="INFO")
        self.set_std_loglevel(value)

    def set_std_loglevel(self, loglevel: LLTYPE):
        # file sinks stay attached, only the console sink is replaced
        if self.std_handler is not None:
            logger.remove(self.std_handler)
        self.std_handler = logger.add(sys.stdout, level=loglevel,
                                      format=FORMAT_DICT.get(loglevel, INFO_FORMAT))
        self.level = loglevel
        os.environ["TLKIT_LOGLEVEL"] = loglevel

    def set_write_file(self, path: Path, loglevel: LLTYPE = 'DEBUG') -> Path:
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)
        logfile = path / 'tlkit.log'
        handler_id = logger.add(str(logfile), mode='w', level=loglevel,
                                format=FORMAT_DICT.get(loglevel, INFO_FORMAT), colorize=False)
        self.file_handlers.append(handler_id)
        return logfile

    def close_files(self):
        for handler_id in self.file_handlers:
            logger.remove(handler_id)
        self.file_handlers.clear()


LOG_CONTROLLER = LogController()
LOG_CONTROLLER.set_default()
