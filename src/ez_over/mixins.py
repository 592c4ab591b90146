from typing import Callable

from . import ops


class OverMixin:
    """Method-style access to the transform operations for any class that inherits it."""

    __slots__ = ()

    def over(self, f: Callable):
        return ops.over(self, f)

    def over_ref(self, f: Callable):
        return ops.over_ref(self, f)

    def over_mut(self, f: Callable):
        return ops.over_mut(self, f)

    def over_deref(self, f: Callable):
        return ops.over_deref(self, f)

    def over_deref_mut(self, f: Callable):
        return ops.over_deref_mut(self, f)
