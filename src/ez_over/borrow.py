"""
Borrowing primitives.

Python hands every callee a reference to the same object, so the read-only and
exclusive views are modelled explicitly here:

 - `Cell` is a mutable binding. It stands in for a caller's variable so that an
   exclusive borrow can replace an immutable value (``Cell(5)`` becoming ``16``).
 - `SharedView` is a read-only proxy over a mutable object. Reads are forwarded,
   writes raise `BorrowError`, and once the call it was lent to returns the view
   is revoked and every use raises `BorrowExpired`.
 - `UniqueRef` is an exclusive handle on the slot of a `Cell` (or `Box`), also
   revoked at the end of the call.
 - `BorrowTracker` records which objects are currently borrowed so that
   conflicting borrows are rejected.
"""
import logging
import threading

from collections import deque
from contextlib import contextmanager
from typing import Any

from .common import BorrowError, BorrowExpired

logger = logging.getLogger(__name__)

IMMUTABLE_TYPES = (int, float, complex, str, bytes, tuple, frozenset, range, type(None))

_MUTATORS = {
    list: frozenset({"append", "extend", "insert", "remove", "pop", "clear", "sort", "reverse"}),
    dict: frozenset({"update", "setdefault", "pop", "popitem", "clear"}),
    set: frozenset({
        "add", "discard", "remove", "pop", "clear", "update",
        "difference_update", "intersection_update", "symmetric_difference_update",
    }),
    bytearray: frozenset({"append", "extend", "insert", "remove", "pop", "clear", "reverse"}),
    deque: frozenset({
        "append", "appendleft", "extend", "extendleft", "insert",
        "pop", "popleft", "remove", "clear", "rotate", "reverse",
    }),
}


def is_immutable(value: Any) -> bool:
    return isinstance(value, IMMUTABLE_TYPES)


_SHARED_BLOCKED = frozenset({"deref_mut"})


def _mutators_for(target: Any) -> frozenset:
    for t, names in _MUTATORS.items():
        if isinstance(target, t):
            return names
    return frozenset()


class Cell:
    """A mutable binding holding a single value."""

    __slots__ = ("_value",)

    def __init__(self, value: Any = None) -> None:
        self._value = value

    def get(self) -> Any:
        return self._value

    def set(self, value: Any) -> None:
        self._value = value

    def replace(self, value: Any) -> Any:
        old, self._value = self._value, value
        return old

    def __eq__(self, other):
        if isinstance(other, Cell):
            return self._value == other._value
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"Cell({self._value!r})"


class UniqueRef:
    """Exclusive handle on the ``_value`` slot of its owner."""

    __slots__ = ("_owner", "_live")

    def __init__(self, owner: Any) -> None:
        self._owner = owner
        self._live = True

    def _check(self):
        if not self._live:
            raise BorrowExpired("unique reference used after its borrow ended")

    def get(self) -> Any:
        self._check()
        return self._owner._value

    def set(self, value: Any) -> None:
        self._check()
        self._owner._value = value

    def replace(self, value: Any) -> Any:
        self._check()
        old, self._owner._value = self._owner._value, value
        return old

    @property
    def value(self) -> Any:
        return self.get()

    @value.setter
    def value(self, value: Any) -> None:
        self.set(value)

    def release(self) -> None:
        self._live = False

    def __repr__(self):
        if not self._live:
            return "<expired UniqueRef>"
        return f"UniqueRef({self._owner._value!r})"


def is_view(value: Any) -> bool:
    return type(value) is SharedView


def unwrap(value: Any) -> Any:
    if type(value) is SharedView:
        return value._SharedView__get()
    return value


def revoke(view: "SharedView") -> None:
    """End the borrow behind `view`; any later use raises `BorrowExpired`."""
    object.__setattr__(view, "_SharedView__live", False)


class SharedView:
    """Read-only, revocable proxy over a target object."""

    __slots__ = ("__target", "__live")

    def __init__(self, target: Any) -> None:
        object.__setattr__(self, "_SharedView__target", target)
        object.__setattr__(self, "_SharedView__live", True)

    def __get(self):
        if not self.__live:
            raise BorrowExpired("shared view used after its borrow ended")
        return self.__target

    @property
    def __class__(self):
        return type(self.__get())

    def __getattr__(self, name):
        target = self.__get()
        if name in _SHARED_BLOCKED or name in _mutators_for(target):
            raise BorrowError(f"cannot call {name}() through a shared view")
        return getattr(target, name)

    def __setattr__(self, name, value):
        raise BorrowError(f"cannot set attribute {name!r} through a shared view")

    def __delattr__(self, name):
        raise BorrowError(f"cannot delete attribute {name!r} through a shared view")

    def __setitem__(self, key, value):
        raise BorrowError("cannot assign items through a shared view")

    def __delitem__(self, key):
        raise BorrowError("cannot delete items through a shared view")

    def __dir__(self):
        return dir(self.__get())

    def __repr__(self):
        if not self.__live:
            return "<expired SharedView>"
        return repr(self.__target)

    def __str__(self):
        return str(self.__get())

    def __format__(self, spec):
        return format(self.__get(), spec)

    def __bool__(self):
        return bool(self.__get())

    def __len__(self):
        return len(self.__get())

    def __iter__(self):
        return iter(self.__get())

    def __reversed__(self):
        return reversed(self.__get())

    def __contains__(self, item):
        return unwrap(item) in self.__get()

    def __getitem__(self, key):
        return self.__get()[unwrap(key)]

    def __hash__(self):
        return hash(self.__get())

    def __call__(self, *args, **kwargs):
        return self.__get()(*args, **kwargs)


def _forward_binary(name):
    def method(self, other):
        target = self._SharedView__get()
        impl = getattr(type(target), name, None)
        if impl is None:
            return NotImplemented
        return impl(target, unwrap(other))
    method.__name__ = name
    return method


def _forward_unary(name):
    def method(self):
        target = self._SharedView__get()
        impl = getattr(type(target), name, None)
        if impl is None:
            raise TypeError(f"{type(target).__name__!r} object does not support {name}")
        return impl(target)
    method.__name__ = name
    return method


def _reject_inplace(name):
    def method(self, other):
        raise BorrowError(f"cannot apply {name} through a shared view")
    method.__name__ = name
    return method


_BINARY = (
    "eq", "ne", "lt", "le", "gt", "ge",
    "add", "sub", "mul", "matmul", "truediv", "floordiv", "mod", "divmod", "pow",
    "lshift", "rshift", "and", "xor", "or",
    "radd", "rsub", "rmul", "rmatmul", "rtruediv", "rfloordiv", "rmod", "rdivmod", "rpow",
    "rlshift", "rrshift", "rand", "rxor", "ror",
)
_UNARY = ("neg", "pos", "abs", "invert", "index", "int", "float", "complex")
_INPLACE = (
    "iadd", "isub", "imul", "imatmul", "itruediv", "ifloordiv", "imod", "ipow",
    "ilshift", "irshift", "iand", "ixor", "ior",
)

for _name in _BINARY:
    setattr(SharedView, f"__{_name}__", _forward_binary(f"__{_name}__"))
for _name in _UNARY:
    setattr(SharedView, f"__{_name}__", _forward_unary(f"__{_name}__"))
for _name in _INPLACE:
    setattr(SharedView, f"__{_name}__", _reject_inplace(f"__{_name}__"))


class _BorrowState:
    __slots__ = ("shared", "unique")

    def __init__(self):
        self.shared = 0
        self.unique = False

    def is_free(self):
        return self.shared == 0 and not self.unique


class BorrowTracker:
    """
    Keeps the borrow state of every object currently lent out.

    Shared borrows may nest freely. A unique borrow excludes every other
    borrow of the same object, from any thread, until it ends. Immutable
    values are never tracked.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._states: dict[int, _BorrowState] = {}

    def _state(self, obj):
        return self._states.setdefault(id(obj), _BorrowState())

    def _release_if_free(self, obj):
        state = self._states.get(id(obj))
        if state is not None and state.is_free():
            del self._states[id(obj)]

    def is_borrowed(self, obj: Any) -> bool:
        with self._lock:
            return id(obj) in self._states

    def acquire_shared(self, obj: Any) -> None:
        if is_immutable(obj):
            return
        with self._lock:
            state = self._state(obj)
            if state.unique:
                logger.debug(f"Shared borrow of {type(obj).__name__} rejected, already uniquely borrowed")
                raise BorrowError(f"{type(obj).__name__} object is already uniquely borrowed")
            state.shared += 1

    def release_shared(self, obj: Any) -> None:
        if is_immutable(obj):
            return
        with self._lock:
            self._states[id(obj)].shared -= 1
            self._release_if_free(obj)

    def acquire_unique(self, obj: Any) -> None:
        if is_immutable(obj):
            return
        with self._lock:
            state = self._state(obj)
            if state.shared:
                logger.debug(f"Unique borrow of {type(obj).__name__} rejected, {state.shared} shared borrow(s) active")
                raise BorrowError(f"{type(obj).__name__} object is already borrowed as shared")
            if state.unique:
                logger.debug(f"Unique borrow of {type(obj).__name__} rejected, already uniquely borrowed")
                raise BorrowError(f"{type(obj).__name__} object is already uniquely borrowed")
            state.unique = True

    def release_unique(self, obj: Any) -> None:
        if is_immutable(obj):
            return
        with self._lock:
            self._states[id(obj)].unique = False
            self._release_if_free(obj)

    @contextmanager
    def shared(self, obj: Any):
        self.acquire_shared(obj)
        try:
            yield obj
        finally:
            self.release_shared(obj)

    @contextmanager
    def unique(self, obj: Any):
        self.acquire_unique(obj)
        try:
            yield obj
        finally:
            self.release_unique(obj)


borrows = BorrowTracker()


@contextmanager
def lend_shared(value: Any):
    """Yield a read-only view of `value` that is revoked on exit. Immutable values are lent as-is."""
    if is_immutable(value):
        yield value
        return
    view = SharedView(value)
    try:
        yield view
    finally:
        revoke(view)


@contextmanager
def lend_unique(owner: Any):
    """Yield a `UniqueRef` to the slot of `owner` that is revoked on exit."""
    ref = UniqueRef(owner)
    try:
        yield ref
    finally:
        ref.release()
