"""Fresh names for auxiliary variables.

Names look like ``_x1``, ``_x2``, ... by default. They're assumed not to
occur in the formulas being converted; :data:`proplogic.config` has a
``check_collisions`` setting to verify that.
"""

import re
import threading
import typing as t

from proplogic import config
from proplogic.util import Name

__all__ = ("NameGenerator", "names")


class NameGenerator:
    """Produce names that were never produced before.

    >>> gen = NameGenerator("_t")
    >>> gen.next(), next(gen)
    ('_t1', '_t2')
    >>> gen.reset()
    >>> gen.next()
    '_t1'

    A single generator can be shared between threads.
    """

    def __init__(self, prefix: t.Optional[str] = None) -> None:
        """:param prefix: Fixed prefix of every name. If omitted,
                          ``config.aux_prefix`` is read at every call."""
        self._prefix = prefix
        self._lock = threading.Lock()
        self.issued = 0

    @property
    def prefix(self) -> str:
        return config.aux_prefix if self._prefix is None else self._prefix

    def next(self) -> Name:
        """Return a new name."""
        with self._lock:
            self.issued += 1
            num = self.issued
        return self.prefix + str(num)

    __next__ = next

    def __iter__(self) -> 'NameGenerator':
        return self

    def reset(self) -> None:
        """Start counting from the beginning again.

        This is for tests that want predictable names. Names handed out
        before a reset will be handed out again.
        """
        with self._lock:
            self.issued = 0

    def owns(self, name: Name) -> bool:
        """Whether ``name`` could be (or has been) produced by the generator."""
        return re.fullmatch(re.escape(self.prefix) + r"[1-9][0-9]*",
                            name) is not None

    def __repr__(self) -> str:
        return "{}({!r}, issued={})".format(self.__class__.__name__,
                                            self.prefix, self.issued)


#: The default generator, shared by all conversions in the process that
#: don't bring their own.
names = NameGenerator()
