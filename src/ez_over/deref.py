from typing import Any, Protocol, runtime_checkable

from .common import UnsupportedOperation


@runtime_checkable
class Deref(Protocol):
    """Wrapper exposing an inner target through `deref()`."""

    def deref(self) -> Any:
        ...


@runtime_checkable
class DerefMut(Deref, Protocol):
    """Wrapper that also exposes a mutable view of its target through `deref_mut()`."""

    def deref_mut(self) -> Any:
        ...


def require_deref(receiver: Any, mutable: bool = False) -> None:
    capability, method = (DerefMut, "deref_mut") if mutable else (Deref, "deref")
    if not isinstance(receiver, capability):
        raise UnsupportedOperation(f"{type(receiver).__name__!r} object does not support {method}()")


def deref(receiver: Any) -> Any:
    require_deref(receiver)
    return receiver.deref()


def deref_mut(receiver: Any) -> Any:
    require_deref(receiver, mutable=True)
    return receiver.deref_mut()
