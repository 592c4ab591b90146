"""
Fluent stages.

A stage wraps a function together with one of the transform operations.
``value | stage`` applies it, ``stage | stage`` builds a `Chain`:

    >>> 5 | Over(lambda n: n * 2)
    10
    >>> [3, 1, 2] | (OverRef(sorted) | Over(lambda xs: xs[0]))
    1
"""
import logging

from typing import Any, Callable

from .common import OverCallable
from .decorators import Err, catch_failed_input
from .ops import over, over_deref, over_deref_mut, over_mut, over_ref

logger = logging.getLogger(__name__)


class OverFunction(OverCallable):
    """Stage passing the receiver's value to `f` (see `over`)."""

    _apply = staticmethod(over)

    def __init__(self, f: Callable, name: str = None) -> None:
        if not callable(f):
            raise TypeError(f"{type(self).__name__} expects a callable, got {type(f).__name__}")
        self._func = f
        self._name = name

    @property
    def name(self):
        if not self._name:
            return getattr(self._func, "__name__", None) or repr(self._func)
        return self._name

    def _exec(self, input: Any):
        logger.debug(f"{self.name} applying {type(self).__name__} to {type(input).__name__}")
        return self._apply(input, self._func)

    def __or__(self, f: Any):
        if isinstance(f, Chain):
            return Chain(self, *flatten(f), catch_errors=f.catch_errors)
        return Chain(self, *pipeify(f))

    def __ror__(self, value: Any):
        return self._exec(value)

    def __repr__(self):
        return f"{type(self).__name__}({self.name})"


class Over(OverFunction):
    pass


class OverRef(OverFunction):
    _apply = staticmethod(over_ref)


class OverMut(OverFunction):
    _apply = staticmethod(over_mut)


class OverDeref(OverFunction):
    _apply = staticmethod(over_deref)


class OverDerefMut(OverFunction):
    _apply = staticmethod(over_deref_mut)


class Tap(OverFunction):
    """Stage that lets `f` read the receiver and passes the receiver on unchanged."""

    _apply = staticmethod(over_ref)

    def _exec(self, input: Any):
        super()._exec(input)
        return input


class Chain(OverCallable):

    def __init__(self, *args, catch_errors: bool = True):
        self._functions: list[OverFunction] = [g for f in args for g in pipeify(f)]
        self.catch_errors = catch_errors

    def get_functions(self):
        return list(self._functions)

    def _exec(self, input: Any):
        for f in self._functions:
            input = f._exec(input)

        return input

    def run(self, input: Any) -> tuple[Any, Err]:
        """
        Apply every stage in order and return ``(output, err)``.

        With `catch_errors` the first failing stage stops the chain, its
        exception is logged and returned inside `err` (tagged with the stage
        name) and the output is None. Otherwise exceptions propagate and `err`
        is always empty.
        """
        if not self.catch_errors:
            return self._exec(input), Err(None)

        for f in self._functions:
            output, err = catch_failed_input(f)(input)
            if err:
                logger.debug(f"Chain stopped at stage {f.name}")
                err.input_dict["stage"] = f.name
                return None, err
            input = output
        return input, Err(None)

    def __len__(self):
        return len(self._functions)

    def __or__(self, f: Any):
        return Chain(*flatten(self), *pipeify(f), catch_errors=self.catch_errors)

    def __ror__(self, value: Any):
        return self._exec(value)

    def __repr__(self):
        return " | ".join(repr(f) for f in self._functions) or "Chain()"


def pipeify(f: Any) -> list[OverFunction]:
    if isinstance(f, OverFunction):
        return [f]
    elif isinstance(f, Chain):
        return flatten(f)
    elif callable(f):
        return [Over(f)]
    else:
        raise ValueError(f"Type {type(f)} not supported for conversion to OverFunction")


def flatten(chain: Chain):
    return chain.get_functions()
