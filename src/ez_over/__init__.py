from .borrow import Cell, SharedView, UniqueRef
from .box import Box
from .common import BorrowError, BorrowExpired, OverCallable, OverError, UnsupportedOperation
from .decorators import Err, catch_failed_input
from .deref import Deref, DerefMut, deref, deref_mut
from .functions import OverUtils
from .mixins import OverMixin
from .ops import over, over_deref, over_deref_mut, over_mut, over_ref
from .pipeline import Chain, Over, OverDeref, OverDerefMut, OverFunction, OverMut, OverRef, Tap

__all__ = [
    "BorrowError",
    "BorrowExpired",
    "Box",
    "Cell",
    "Chain",
    "Deref",
    "DerefMut",
    "Err",
    "Over",
    "OverCallable",
    "OverDeref",
    "OverDerefMut",
    "OverError",
    "OverFunction",
    "OverMixin",
    "OverMut",
    "OverRef",
    "OverUtils",
    "SharedView",
    "Tap",
    "UniqueRef",
    "UnsupportedOperation",
    "catch_failed_input",
    "deref",
    "deref_mut",
    "over",
    "over_deref",
    "over_deref_mut",
    "over_mut",
    "over_ref",
]
