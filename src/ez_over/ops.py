"""
The five transform operations.

Each one hands a view of `receiver` to `f`, calls it exactly once and returns
whatever it returns. Exceptions raised by `f` propagate unchanged. A `Cell`
receiver is a binding: the operations act on the value it holds, and
`over_mut` lets `f` rebind it through a `UniqueRef`.

    >>> over(5, lambda n: n * 2)
    10
    >>> n = Cell(5)
    >>> over_mut(n, lambda r: r.set(r.get() * 3 + 1))
    >>> n
    Cell(16)
"""
from typing import Any, Callable, TypeVar

from .borrow import Cell, UniqueRef, borrows, is_immutable, is_view, lend_shared, lend_unique, unwrap
from .common import BorrowError, UnsupportedOperation
from .deref import require_deref

R = TypeVar("R")


def _binding(receiver: Any):
    if is_view(receiver):
        receiver = unwrap(receiver)
    if isinstance(receiver, Cell):
        return receiver, receiver.get()
    return receiver, receiver


def _reject_view(receiver: Any, operation: str) -> None:
    if is_view(receiver):
        raise BorrowError(f"cannot borrow a shared view as unique with {operation}()")


def over(receiver: Any, f: Callable[[Any], R]) -> R:
    """Pass the receiver's value to `f`. A shared view is passed on as it is."""
    if is_view(receiver):
        return f(receiver)
    _, value = _binding(receiver)
    return f(value)


def over_ref(receiver: Any, f: Callable[[Any], R]) -> R:
    """Pass a read-only view of the receiver's value to `f`. The view is revoked once `f` returns."""
    owner, value = _binding(receiver)
    with borrows.shared(owner), lend_shared(value) as view:
        return f(view)


def over_mut(receiver: Any, f: Callable[[Any], R]) -> R:
    """
    Pass an exclusive view of the receiver to `f`, which may mutate it.

    A `Cell` is lent as a `UniqueRef` so that `f` can rebind it; any other
    mutable object is lent as itself. Immutable values cannot be mutated in
    place and raise `UnsupportedOperation`.
    """
    _reject_view(receiver, "over_mut")
    if isinstance(receiver, Cell):
        with borrows.unique(receiver), lend_unique(receiver) as ref:
            return f(ref)
    if is_immutable(receiver):
        raise UnsupportedOperation(
            f"{type(receiver).__name__!r} object is immutable; wrap it in a Cell to mutate it with over_mut()"
        )
    with borrows.unique(receiver):
        return f(receiver)


def over_deref(receiver: Any, f: Callable[[Any], R]) -> R:
    """Pass a read-only view of the receiver's `deref()` target to `f`."""
    owner, value = _binding(receiver)
    require_deref(value)
    with borrows.shared(owner), lend_shared(value.deref()) as view:
        return f(view)


def over_deref_mut(receiver: Any, f: Callable[[Any], R]) -> R:
    """Pass the receiver's `deref_mut()` view to `f`, which may mutate the inner target."""
    _reject_view(receiver, "over_deref_mut")
    owner, value = _binding(receiver)
    require_deref(value, mutable=True)
    with borrows.unique(owner):
        target = value.deref_mut()
        try:
            return f(target)
        finally:
            if isinstance(target, UniqueRef):
                target.release()
