"""Transformations using the well-known `Tseitin encoding
<https://en.wikipedia.org/wiki/Tseytin_transformation>`_.

The Tseitin transformation converts any formula to an equisatisfiable one in
CNF in linear time and space. It does so at the cost of introducing new
variables (one for each connective in the formula).

Every node is converted to a theory whose first clause is a unit clause
declaring the node's representative variable, followed by the clauses that
define it. A parent strips its children's declarations, keeps the rest and
ties its own fresh variable to the children's representatives. The defining
clauses of all nodes are collected in one theory as they're made, so nothing
is copied more than once:

>>> from proplogic import Variable, Equivalence
>>> from proplogic.naming import NameGenerator
>>> print(to_cnf(Equivalence(Variable('p'), Variable('q')), NameGenerator()))
(_x1) & (-_x1 | -p | q) & (-_x1 | p | -q) & (_x1 | -p | -q) & (_x1 | p | q)
"""

import logging
import typing as t

from proplogic import (Formula, Variable, Composite, Negation, Conjunction,
                       Disjunction, Implication, Equivalence, Literal, Clause,
                       Cnf, ProtocolError, config, naming)
from proplogic.util import Name

__all__ = ("to_cnf",)

logger = logging.getLogger(__name__)


def to_cnf(
        formula: Formula,
        names: t.Optional[naming.NameGenerator] = None
) -> Cnf:
    """Convert a formula into CNF using the Tseitin Encoding.

    The first clause of the result is a unit clause with the representative
    variable of the whole formula. The formula itself is left untouched.

    :param formula: Formula to convert.
    :param names: Where to get auxiliary variable names from. Defaults to
                  the process-wide :data:`proplogic.naming.names`.
    """
    if not isinstance(formula, Formula):
        raise TypeError("Can only convert formulas, not {!r}".format(formula))
    if names is None:
        names = naming.names

    if config.check_collisions:
        clashes = sorted(name for name in formula.vars() if names.owns(name))
        if clashes:
            raise ValueError(
                "Variables {} look like auxiliary variables from {!r}"
                .format(", ".join(map(repr, clashes)), names)
            )

    definitions = Cnf()

    def process_node(node: Formula) -> Cnf:
        """Return the declaration of the node, after adding the clauses that
        define it to ``definitions``."""
        if isinstance(node, Variable):
            return Cnf([Clause([Literal.pos(node.name)])])

        if not isinstance(node, Composite):
            raise TypeError(node)

        aux = names.next()
        children = []  # type: t.List[Name]
        for child in node.children:
            children.append(_strip_declaration(process_node(child)))

        for clause in _define(node, aux, children):
            definitions.append(clause)
        return Cnf([Clause([Literal.pos(aux)])])

    before = names.issued
    ret = process_node(formula)
    ret.merge(definitions)
    logger.debug("Converted formula to %d clauses with %d auxiliary variables",
                 len(ret), names.issued - before)
    return ret


def _strip_declaration(cnf: Cnf) -> Name:
    """Remove the declaration clause and return the variable it declares."""
    clause = cnf.pop_first()
    if not clause.unit():
        raise ProtocolError("Expected a unit declaration clause, got {}"
                            .format(clause))
    literal = clause.pop_first()
    if literal.negated:
        raise ProtocolError("Declaration of {!r} is negated"
                            .format(literal.variable))
    return literal.variable


def _define(
        node: Composite, aux: Name, children: t.Sequence[Name]
) -> t.List[Clause]:
    """Clauses that make ``aux`` equivalent to the node's connective applied
    to the children's representatives."""
    a, not_a = Literal.pos(aux), Literal.neg(aux)

    if isinstance(node, Negation):
        [b] = children
        return [
            Clause([not_a, Literal.neg(b)]),
            Clause([a, Literal.pos(b)]),
        ]

    elif isinstance(node, Conjunction):
        clauses = [Clause([not_a, Literal.pos(c)]) for c in children]
        clauses.append(Clause([a] + [Literal.neg(c) for c in children]))
        return clauses

    elif isinstance(node, Disjunction):
        clauses = [Clause([a, Literal.neg(c)]) for c in children]
        clauses.append(Clause([not_a] + [Literal.pos(c) for c in children]))
        return clauses

    elif isinstance(node, Implication):
        left, right = children
        return [
            Clause([not_a, Literal.neg(left), Literal.pos(right)]),
            Clause([Literal.pos(left), a]),
            Clause([Literal.neg(right), a]),
        ]

    elif isinstance(node, Equivalence):
        left, right = children
        return [
            Clause([not_a, Literal.neg(left), Literal.pos(right)]),
            Clause([not_a, Literal.pos(left), Literal.neg(right)]),
            Clause([a, Literal.neg(left), Literal.neg(right)]),
            Clause([a, Literal.pos(left), Literal.pos(right)]),
        ]

    else:
        raise TypeError(node)
