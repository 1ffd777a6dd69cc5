"""Utility definitions for internal use. Not part of the public API."""

import functools
import typing as t

if t.TYPE_CHECKING:
    from proplogic import Formula  # noqa: F401

Name = str
Model = t.Dict[Name, bool]

T = t.TypeVar("T")
T_Formula = t.TypeVar("T_Formula", bound="Formula")

memoize = t.cast(t.Callable[[T], T], functools.lru_cache(maxsize=None))
