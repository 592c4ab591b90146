from abc import ABC, abstractmethod
from typing import Any


class OverError(Exception):
    pass


class UnsupportedOperation(OverError, TypeError):
    """Raised when a receiver lacks the capability an operation needs."""


class BorrowError(OverError, RuntimeError):
    """Raised when a borrow conflicts with one already active on the same object."""


class BorrowExpired(BorrowError):
    """Raised when a view is used after the call it was lent to has returned."""


class OverCallable(ABC):

    @abstractmethod
    def _exec(self, input: Any):
        raise NotImplementedError

    def __call__(self, input):
        return self._exec(input)
