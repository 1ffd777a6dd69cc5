"""Literals, clauses and CNF theories as produced by :mod:`proplogic.tseitin`.

A :class:`Cnf` is an ordered conjunction of :class:`Clause` objects, which
are in turn disjunctions of :class:`Literal` objects. These are the plain
containers a downstream SAT solver consumes.

>>> print(Cnf([Clause([Literal.pos("a")]), Clause([~Literal("a")])]))
(a) & (-a)
"""

import collections
import typing as t

from proplogic.util import Model, Name

__all__ = ("Literal", "Clause", "Cnf", "ProtocolError")


class ProtocolError(AssertionError):
    """The declaration protocol between nodes was violated.

    This always means there's a bug in the conversion itself, so it's a
    subclass of :class:`AssertionError` that's raised explicitly and
    survives ``python -O``.
    """


class Literal:
    """A variable name paired with a polarity.

    >>> Literal('a')
    Literal('a')
    >>> ~Literal('a')
    Literal('a', negated=True)
    >>> str(Literal.neg('a'))
    '-a'
    """

    __slots__ = {
        "variable": "The name of the variable.",
        "negated": "Whether the literal asserts the negation of the variable.",
    }

    if t.TYPE_CHECKING:
        def __init__(self, variable: Name, negated: bool = False) -> None:
            # For the typechecker
            self.variable = variable
            self.negated = negated
    else:
        def __init__(self, variable: Name, negated: bool = False) -> None:
            # For immutability
            object.__setattr__(self, 'variable', variable)
            object.__setattr__(self, 'negated', bool(negated))

    @classmethod
    def pos(cls, variable: Name) -> 'Literal':
        """The literal asserting ``variable``."""
        return cls(variable)

    @classmethod
    def neg(cls, variable: Name) -> 'Literal':
        """The literal asserting the negation of ``variable``."""
        return cls(variable, True)

    def __eq__(self, other: t.Any) -> t.Any:
        if self.__class__ is other.__class__:
            return (self.variable == other.variable
                    and self.negated == other.negated)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.variable, self.negated))

    def __setattr__(self, key: str, value: object) -> None:
        raise TypeError("{} objects are immutable"
                        .format(self.__class__.__name__))

    def __delattr__(self, name: str) -> None:
        raise TypeError("{} objects are immutable"
                        .format(self.__class__.__name__))

    def __invert__(self) -> 'Literal':
        return Literal(self.variable, not self.negated)

    def __repr__(self) -> str:
        if self.negated:
            return "{}({!r}, negated=True)".format(self.__class__.__name__,
                                                   self.variable)
        return "{}({!r})".format(self.__class__.__name__, self.variable)

    def __str__(self) -> str:
        return '-' + self.variable if self.negated else self.variable

    def __getstate__(self) -> t.Tuple[Name, bool]:
        return self.variable, self.negated

    def __setstate__(self, state: t.Tuple[Name, bool]) -> None:
        object.__setattr__(self, 'variable', state[0])
        object.__setattr__(self, 'negated', state[1])

    def satisfied_by(self, model: Model) -> bool:
        """The given dictionary of values makes the literal true."""
        if self.variable not in model:
            raise ValueError("Model does not contain variable {!r}"
                             .format(self.variable))
        return model[self.variable] != self.negated


class Clause:
    """A disjunction of literals.

    Clauses are built by appending literals. The order of appending is kept
    for reproducible output, but two clauses with the same literals (counted
    with multiplicity) compare equal.

    >>> Clause([Literal('a'), Literal.neg('b')]) == Clause(
    ...     [Literal.neg('b'), Literal('a')])
    True
    """

    __slots__ = ('literals',)

    def __init__(self, literals: t.Iterable[Literal] = ()) -> None:
        self.literals = []  # type: t.List[Literal]
        for literal in literals:
            self.append(literal)

    def append(self, literal: Literal) -> None:
        """Add a literal to the disjunction."""
        if not isinstance(literal, Literal):
            raise TypeError("Clauses only contain Literal objects, not {!r}"
                            .format(literal))
        self.literals.append(literal)

    def pop_first(self) -> Literal:
        """Remove and return the first literal.

        Only meant for reading a declaration clause, so an empty clause is
        a fault rather than an ordinary error.
        """
        if not self.literals:
            raise ProtocolError("Can't take a literal from an empty clause")
        return self.literals.pop(0)

    def unit(self) -> bool:
        """The clause contains exactly one literal."""
        return len(self.literals) == 1

    def vars(self) -> t.FrozenSet[Name]:
        """The names of all variables that appear in the clause."""
        return frozenset(literal.variable for literal in self.literals)

    def satisfied_by(self, model: Model) -> bool:
        """At least one of the literals is true under the model."""
        return any(literal.satisfied_by(model) for literal in self.literals)

    def __iter__(self) -> t.Iterator[Literal]:
        return iter(self.literals)

    def __len__(self) -> int:
        return len(self.literals)

    def __contains__(self, item: object) -> bool:
        return item in self.literals

    def __bool__(self) -> bool:
        """All clauses are truthy, even the empty (false) one."""
        return True

    def __eq__(self, other: t.Any) -> t.Any:
        if self.__class__ is other.__class__:
            return (collections.Counter(self.literals)
                    == collections.Counter(other.literals))
        return NotImplemented

    # Clauses are mutable while being built
    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        return "{}([{}])".format(self.__class__.__name__,
                                 ', '.join(map(repr, self.literals)))

    def __str__(self) -> str:
        return "(" + " | ".join(map(str, self.literals)) + ")"


class Cnf:
    """An ordered conjunction of clauses. Empty means true.

    >>> cnf = Cnf()
    >>> cnf.append(Clause([Literal('a')]))
    >>> other = Cnf([Clause([Literal.neg('a'), Literal('b')])])
    >>> cnf.merge(other)
    >>> print(cnf)
    (a) & (-a | b)
    >>> len(other)
    0
    """

    __slots__ = ('clauses',)

    def __init__(self, clauses: t.Iterable[Clause] = ()) -> None:
        self.clauses = collections.deque()  # type: t.Deque[Clause]
        for clause in clauses:
            self.append(clause)

    def append(self, clause: Clause) -> None:
        """Add a clause to the end of the conjunction."""
        if not isinstance(clause, Clause):
            raise TypeError("Cnf objects only contain Clause objects, not {!r}"
                            .format(clause))
        self.clauses.append(clause)

    def merge(self, other: 'Cnf') -> None:
        """Move all clauses of ``other`` to the end, in order.

        ``other`` is left empty, so no clause ends up in two theories.
        """
        if other is self:
            raise ValueError("Can't merge a Cnf into itself")
        self.clauses.extend(other.clauses)
        other.clauses = collections.deque()

    def pop_first(self) -> Clause:
        """Remove and return the first clause.

        Only meant for stripping a declaration clause, so an empty theory is
        a fault rather than an ordinary error.
        """
        if not self.clauses:
            raise ProtocolError("Can't take a clause from an empty Cnf")
        return self.clauses.popleft()

    def vars(self) -> t.FrozenSet[Name]:
        """The names of all variables that appear in the theory."""
        return frozenset(name
                         for clause in self.clauses
                         for name in clause.vars())

    def satisfied_by(self, model: Model) -> bool:
        """Every clause is true under the model."""
        return all(clause.satisfied_by(model) for clause in self.clauses)

    def __iter__(self) -> t.Iterator[Clause]:
        return iter(self.clauses)

    def __len__(self) -> int:
        return len(self.clauses)

    def __getitem__(self, index: int) -> Clause:
        return self.clauses[index]

    def __bool__(self) -> bool:
        """An empty Cnf is still a valid theory (true)."""
        return True

    def __eq__(self, other: t.Any) -> t.Any:
        if self.__class__ is other.__class__:
            return self.clauses == other.clauses
        return NotImplemented

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        return "{}([{}])".format(self.__class__.__name__,
                                 ', '.join(map(repr, self.clauses)))

    def __str__(self) -> str:
        if not self.clauses:
            return "true"
        return " & ".join(map(str, self.clauses))
