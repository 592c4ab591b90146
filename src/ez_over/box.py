from typing import Any

from .borrow import UniqueRef
from .mixins import OverMixin


class Box(OverMixin):
    """
    Owning wrapper around a single value.

    `deref()` returns the wrapped value and `deref_mut()` returns a `UniqueRef`
    to it, so `over_deref` and `over_deref_mut` reach the inner value rather
    than the box.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        self._value = value

    def deref(self) -> Any:
        return self._value

    def deref_mut(self) -> UniqueRef:
        return UniqueRef(self)

    def into_inner(self) -> Any:
        return self._value

    def __eq__(self, other):
        if isinstance(other, Box):
            return self._value == other._value
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"Box({self._value!r})"
