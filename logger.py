import os
import logging
from colorama import Fore, Style, init

from config import LOG_LEVEL, LOG_DIR, LOG_FILE_NAME

init(autoreset=True)


class Logger:
    _loggers = {}
    _colors = [
        Fore.BLUE,
        Fore.GREEN,
        Fore.CYAN,
        Fore.MAGENTA,
        Fore.YELLOW,
        Fore.WHITE,
    ]

    @staticmethod
    def _color_for_name(name: str) -> str:
        # stable across runs, unlike hash()
        idx = sum(name.encode()) % len(Logger._colors)
        return Logger._colors[idx]

    @staticmethod
    def get_logger(log_name: str, level: str = LOG_LEVEL, log_dir=LOG_DIR):

        if log_name in Logger._loggers:
            return Logger._loggers[log_name]

        logger = logging.getLogger(log_name)
        logger.setLevel(level)
        logger.propagate = False

        fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(os.path.join(log_dir, LOG_FILE_NAME))
            file_handler.setFormatter(logging.Formatter(fmt))
            logger.addHandler(file_handler)

        color = Logger._color_for_name(log_name)
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(f"{color}{fmt}{Style.RESET_ALL}"))
        logger.addHandler(console_handler)

        Logger._loggers[log_name] = logger
        return logger

    @staticmethod
    def set_level(level: str):
        """Change the level of every logger handed out so far."""
        for logger in Logger._loggers.values():
            logger.setLevel(level)
