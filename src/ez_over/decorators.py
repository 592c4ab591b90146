import functools
import logging

from typing import Any, Callable

logger = logging.getLogger(__name__)


class Err:

    def __init__(self, input_dict: dict):
        self.input_dict = input_dict

    def get(self, key: str) -> Any:
        if self.input_dict is None:
            return None
        return self.input_dict.get(key)

    @property
    def exception(self) -> BaseException | None:
        return self.get("exception")

    def __bool__(self):
        return self.input_dict not in [{}, None]

    def __repr__(self):
        return f"Err({self.input_dict!r})"


def catch_failed_input(func: Callable):
    """Wrap `func` so that it returns ``(output, Err)`` instead of raising."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        output = None
        err = None
        try:
            output = func(*args, **kwargs)
        except Exception as e:
            logger.exception(f"Error processing input: {e}")
            err = {"args": [a for a in args], "kwargs": kwargs, "exception": e}
        return output, Err(err)
    return wrapper
