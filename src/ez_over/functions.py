import logging
from functools import partial
from typing import Any, Callable
from .pipeline import Tap



def _default_logging_function(input: Any, logger: logging.Logger, logging_level: str = "info", stdout: bool = False, name = "LogStage"):
    logging_map = {
        "info": logger.info,
        "debug": logger.debug,
        "warn": logger.warning,
        "warning": logger.warning,
    }

    logging_func = logging_map.get(logging_level, logger.info)

    logging_string = f"{name} for input {input!r}"

    if stdout:
        print(logging_string)
    logging_func(logging_string)


class OverUtils:

    @staticmethod
    def Logger(name: str, logger: logging.Logger = None, logging_level: str = "info", logging_function: Callable = None, **kwargs):
        """Stage that logs the value passing through it and hands it on unchanged."""
        if not logging_function:
            if not logger:
                logger = logging.getLogger(__name__)
            logging_function = partial(_default_logging_function, logger=logger, logging_level=logging_level, name=name, **kwargs)

        return Tap(logging_function, name=name)
