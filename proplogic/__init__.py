# Copyright 2018 Jan Verbeek <jan.verbeek@posteo.nl>
#
# Permission to use, copy, modify, and distribute this software for any
# purpose with or without fee is hereby granted, provided that the above
# copyright notice and this permission notice appear in all copies.
#
# THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
# WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
# ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
# WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN
# ACTION OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF
# OR IN CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.

__version__ = '0.1.0'

import abc
import functools
import threading
import typing as t

from proplogic.cnf import Literal, Clause, Cnf, ProtocolError
from proplogic.util import memoize, Name, Model, T, T_Formula


__all__ = (
    "Formula",
    "Variable",
    "Composite",
    "Negation",
    "Conjunction",
    "Disjunction",
    "Binary",
    "Implication",
    "Equivalence",
    "Literal",
    "Clause",
    "Cnf",
    "ProtocolError",
    "all_models",
    "config",
    "naming",
    "operators",
    "tseitin",
)


def all_models(names: 't.Iterable[Name]') -> t.Iterator[Model]:
    """Yield dictionaries with all possible boolean values for the names.

    >>> list(all_models(["a", "b"]))
    [{'a': False, 'b': False}, {'a': False, 'b': True}, ...
    """
    names = list(names)
    if not names:
        yield {}
    else:
        *rest, name = names
        for model in all_models(rest):
            new = model.copy()
            new[name] = False
            yield new
            new = model.copy()
            new[name] = True
            yield new


class Formula(metaclass=abc.ABCMeta):
    """Base class for all propositional formulas.

    Formulas are immutable trees. Build them from :class:`Variable` leaves
    with the connective classes, or with the operators:

    >>> p, q = Variable('p'), Variable('q')
    >>> print(~p & (p >> q))
    (-p&(p->q))
    """
    __slots__ = ()

    def __and__(self, other: 'Formula') -> 'Conjunction':
        """Conjunction([self, other])"""
        if not isinstance(other, Formula):
            return NotImplemented
        return Conjunction([self, other])

    def __or__(self, other: 'Formula') -> 'Disjunction':
        """Disjunction([self, other])"""
        if not isinstance(other, Formula):
            return NotImplemented
        return Disjunction([self, other])

    def __invert__(self) -> 'Negation':
        """Negation(self)"""
        return Negation(self)

    def __rshift__(self, other: 'Formula') -> 'Implication':
        """Implication(self, other)"""
        if not isinstance(other, Formula):
            return NotImplemented
        return Implication(self, other)

    @abc.abstractmethod
    def subf(self) -> t.Tuple['Formula', ...]:
        """The immediate subformulas, in order."""
        ...

    def to_string(self) -> str:
        return str(self)

    def equals(self, other: 'Formula') -> bool:
        """Structural equality. Same as ``==``."""
        return self == other

    def walk(self) -> t.Iterator['Formula']:
        """Yield all nodes in the formula, depth-first.

        Subformulas that occur more than once are yielded only once.
        """
        seen = {self}
        nodes = [self]
        while nodes:
            node = nodes.pop()
            yield node
            for child in node.subf():
                if child not in seen:
                    seen.add(child)
                    nodes.append(child)

    def size(self) -> int:
        """The number of edges in the formula.

        Equal subformulas are counted once, like in :meth:`walk`.
        """
        return sum(len(node.subf()) for node in self.walk())

    def height(self) -> int:
        """The number of edges between here and the furthest leaf."""
        @memoize
        def height(node: Formula) -> int:
            if node.subf():
                return 1 + max(height(child) for child in node.subf())
            return 0

        return height(self)

    def vars(self) -> t.FrozenSet[Name]:
        """The names of all variables that appear in the formula."""
        return frozenset(node.name
                         for node in self.walk()
                         if isinstance(node, Variable))

    def satisfied_by(self, model: Model) -> bool:
        """The given dictionary of values makes the formula true."""
        @memoize
        def sat(node: Formula) -> bool:
            if isinstance(node, Variable):
                if node.name not in model:
                    raise ValueError("Model does not contain variable {!r}"
                                     .format(node.name))
                return model[node.name]
            elif isinstance(node, Composite):
                return node._truth([sat(child) for child in node.children])
            else:
                raise TypeError(node)

        return sat(self)

    def to_cnf(
            self, names: 't.Optional[naming.NameGenerator]' = None
    ) -> Cnf:
        """Compile the formula to an equisatisfiable CNF theory.

        See :func:`proplogic.tseitin.to_cnf`.
        """
        return tseitin.to_cnf(self, names)

    def __copy__(self: T_Formula) -> T_Formula:
        # Nodes are immutable, so this is ok
        return self

    def __deepcopy__(
            self: T_Formula, memodict: t.Dict[t.Any, t.Any]
    ) -> T_Formula:
        return self


class Variable(Formula):
    """A propositional variable.

    >>> Variable('a')
    Variable('a')
    >>> print(Variable('a'))
    a
    """

    __slots__ = {
        "name": "The name of the variable. A non-empty string.",
    }

    if t.TYPE_CHECKING:
        def __init__(self, name: Name) -> None:
            # For the typechecker
            self.name = name
    else:
        def __init__(self, name: Name) -> None:
            if not isinstance(name, str):
                raise TypeError("Variable names must be strings, not {!r}"
                                .format(name))
            if not name:
                raise ValueError("Variable names can't be empty")
            # For immutability
            object.__setattr__(self, 'name', name)

    def subf(self) -> t.Tuple[Formula, ...]:
        return ()

    def __eq__(self, other: t.Any) -> t.Any:
        if self.__class__ is other.__class__:
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.__class__, self.name))

    def __setattr__(self, key: str, value: object) -> None:
        raise TypeError("{} objects are immutable"
                        .format(self.__class__.__name__))

    def __delattr__(self, name: str) -> None:
        raise TypeError("{} objects are immutable"
                        .format(self.__class__.__name__))

    def __repr__(self) -> str:
        return "{}({!r})".format(self.__class__.__name__, self.name)

    def __str__(self) -> str:
        return self.name

    def __getstate__(self) -> Name:
        return self.name

    def __setstate__(self, state: Name) -> None:
        object.__setattr__(self, 'name', state)


class Composite(Formula):
    """Base class for formulas built from a connective and subformulas."""
    __slots__ = ('children', '_hash')

    #: Token placed between the rendered children.
    connective = ''

    if t.TYPE_CHECKING:
        def __init__(self, children: t.Iterable[Formula] = ()) -> None:
            # For the typechecker
            self.children = tuple(children)
            self._hash = hash((self.__class__, self.children))
    else:
        def __init__(self, children: t.Iterable[Formula] = ()) -> None:
            children = tuple(children)
            for child in children:
                if not isinstance(child, Formula):
                    raise TypeError("{} can only contain formulas, not {!r}"
                                    .format(self.__class__.__name__, child))
            # For immutability
            object.__setattr__(self, 'children', children)
            # Children hash in constant time, so this stays linear
            object.__setattr__(self, '_hash',
                               hash((self.__class__, children)))

    @abc.abstractmethod
    def _truth(self, values: t.Sequence[bool]) -> bool:
        """Apply the connective to the truth values of the children."""
        ...

    def subf(self) -> t.Tuple[Formula, ...]:
        return self.children

    def __eq__(self, other: t.Any) -> t.Any:
        if self is other:
            return True
        if self.__class__ is other.__class__:
            return (self._hash == other._hash
                    and self.children == other.children)
        return NotImplemented

    def __hash__(self) -> int:
        return self._hash

    def __setattr__(self, key: str, value: object) -> None:
        raise TypeError("{} objects are immutable"
                        .format(self.__class__.__name__))

    def __delattr__(self, name: str) -> None:
        raise TypeError("{} objects are immutable"
                        .format(self.__class__.__name__))

    def __repr__(self) -> str:
        return "{}([{}])".format(self.__class__.__name__,
                                 ', '.join(map(repr, self.children)))

    def __str__(self) -> str:
        return "(" + self.connective.join(map(str, self.children)) + ")"

    def __iter__(self) -> t.Iterator[Formula]:
        """A shortcut for iterating over a node's children."""
        return iter(self.children)

    def __len__(self) -> int:
        """A shortcut for checking how many children a node has."""
        return len(self.children)

    def __bool__(self) -> bool:
        """Override the default behavior of empty nodes being ``False``.

        ``Conjunction()`` is true and ``Disjunction()`` is false, so the
        truthiness of a node object shouldn't depend on its children.
        """
        return True

    def __getstate__(self) -> t.Tuple[Formula, ...]:
        return self.children

    def __setstate__(self, state: t.Tuple[Formula, ...]) -> None:
        object.__setattr__(self, 'children', state)
        object.__setattr__(self, '_hash', hash((self.__class__, state)))


class Negation(Composite):
    """The negation of exactly one subformula.

    >>> print(Negation(Variable('p')))
    -p
    """
    __slots__ = ()

    connective = '-'

    def __init__(self, sub: Formula) -> None:
        super().__init__((sub,))

    @property
    def sub(self) -> Formula:
        return self.children[0]

    def _truth(self, values: t.Sequence[bool]) -> bool:
        return not values[0]

    def __repr__(self) -> str:
        return "{}({!r})".format(self.__class__.__name__, self.sub)

    def __str__(self) -> str:
        return "-" + str(self.sub)


class Conjunction(Composite):
    """True if all of the subformulas are. Without subformulas it's true."""
    __slots__ = ()

    connective = '&'

    def _truth(self, values: t.Sequence[bool]) -> bool:
        return all(values)


class Disjunction(Composite):
    """True if any of the subformulas is. Without subformulas it's false."""
    __slots__ = ()

    connective = '|'

    def _truth(self, values: t.Sequence[bool]) -> bool:
        return any(values)


class Binary(Composite):
    """Base class for connectives with an ordered left and right side."""
    __slots__ = ()

    def __init__(self, left: Formula, right: Formula) -> None:
        super().__init__((left, right))

    @property
    def left(self) -> Formula:
        return self.children[0]

    @property
    def right(self) -> Formula:
        return self.children[1]

    def __repr__(self) -> str:
        return "{}({!r}, {!r})".format(self.__class__.__name__,
                                       self.left, self.right)


class Implication(Binary):
    """If the left side is true, so is the right side.

    >>> print(Implication(Variable('p'), Variable('q')))
    (p->q)
    """
    __slots__ = ()

    connective = '->'

    def _truth(self, values: t.Sequence[bool]) -> bool:
        left, right = values
        return not left or right


class Equivalence(Binary):
    """Both sides have the same truth value."""
    __slots__ = ()

    connective = '<->'

    def _truth(self, values: t.Sequence[bool]) -> bool:
        left, right = values
        return left == right


class _Setting(t.Generic[T]):
    """Use the descriptor protocol for a smart settings system."""
    def __init__(
        self, default: T, choices: t.Optional[t.Set[T]] = None
    ) -> None:
        self.choices = choices
        self.default = default
        self.local = threading.local()
        self.name = ''

    def __set_name__(self, owner: object, name: str) -> None:
        self.name = name

    def __get__(self, instance: object, owner: object = None) -> T:
        return getattr(self.local, "value", self.default)  # type: ignore

    def __set__(self, instance: object, value: T) -> None:
        if self.choices is not None and value not in self.choices:
            raise ValueError(
                "Invalid value {!r} for setting {!r}".format(value, self.name)
            )
        self.local.value = value


class _PrefixSetting(_Setting[str]):
    """Auxiliary name prefixes have to be non-empty strings."""
    def __set__(self, instance: object, value: str) -> None:
        if not isinstance(value, str) or not value:
            raise ValueError(
                "Invalid value {!r} for setting {!r}".format(value, self.name)
            )
        super().__set__(instance, value)


_Func = t.TypeVar("_Func", bound=t.Callable[..., object])


class _ConfigContext:
    """An object to apply configuration as a context manager or decorator."""
    def __init__(self, settings: t.Dict[str, t.Any]) -> None:
        self.settings = settings
        self.old_settings = threading.local()

    def __enter__(self) -> None:
        self.old_settings.__dict__.setdefault("stack", []).append(
            {name: getattr(config, name) for name in self.settings}
        )
        for name, value in self.settings.items():
            setattr(config, name, value)

    def __exit__(self, *exc: object) -> None:
        for name, value in self.old_settings.stack.pop().items():
            setattr(config, name, value)

    def __call__(self, func: _Func) -> _Func:
        @functools.wraps(func)
        def newfunc(*args: t.Any, **kwargs: t.Any) -> t.Any:
            with self:
                return func(*args, **kwargs)

        return newfunc  # type: ignore


class _Config:
    """Configuration management.

    We need to instantiate this class to make the __set__ part of the
    descriptor protocol work and to take advantage of __slots__ so people can't
    misspell a setting without noticing.
    """

    # Remember to update the doc comment below whenever adding a setting
    aux_prefix = _PrefixSetting("_x")
    check_collisions = _Setting(False, {True, False})

    __slots__ = ()

    def __call__(self, **settings: t.Any) -> _ConfigContext:
        return _ConfigContext(settings)


#: Configuration management.
#:
#: There are three ways to change a setting. Scoped::
#:
#:   >>> with config(check_collisions=True):
#:   ...     do_something()
#:
#: Indefinite::
#:
#:   >>> config.aux_prefix = "_aux"
#:   >>> do_something()
#:
#: And as a decorator::
#:
#:   >>> @config(check_collisions=True)
#:   ... def some_func():
#:   ...     do_something()
#:
#: Configuration is isolated per thread.
#:
#: The following settings are available:
#:
#: - ``aux_prefix``: The prefix of auxiliary variable names made by
#:   :class:`proplogic.naming.NameGenerator` objects without a prefix of
#:   their own, including the default one. Default: ``"_x"``, giving
#:   ``_x1``, ``_x2``, ...
#:
#: - ``check_collisions``: Whether :func:`proplogic.tseitin.to_cnf` refuses
#:   formulas with variables that look like auxiliary names.
#:
#:   - ``False`` (default): Assume the caller avoids such names.
#:   - ``True``: Raise :class:`ValueError` before converting.
config = _Config()


from proplogic import naming, operators, tseitin  # noqa: E402
