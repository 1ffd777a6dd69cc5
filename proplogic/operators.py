"""Convenience functions for building formulas from logical relationships.

Relationships with a connective of their own map directly onto it. The
others are negations of those connectives. Nothing is simplified.
"""

from proplogic import (Formula, Negation, Conjunction, Disjunction,
                       Implication, Equivalence)

__all__ = ('xor', 'nand', 'nor', 'implies', 'implied_by', 'iff', 'and_', 'or_')


def xor(a: Formula, b: Formula) -> Negation:
    """Exactly one of the operands is true."""
    return Negation(Equivalence(a, b))


def nand(a: Formula, b: Formula) -> Negation:
    """At least one of the operands is false."""
    return Negation(Conjunction([a, b]))


def nor(a: Formula, b: Formula) -> Negation:
    """Both of the operands are false."""
    return Negation(Disjunction([a, b]))


def implies(a: Formula, b: Formula) -> Implication:
    """``b`` is true whenever ``a`` is true."""
    return Implication(a, b)


def implied_by(a: Formula, b: Formula) -> Implication:
    """``a`` is true whenever ``b`` is true."""
    return Implication(b, a)


def iff(a: Formula, b: Formula) -> Equivalence:
    """``a`` is true if and only if ``b`` is true."""
    return Equivalence(a, b)


def and_(a: Formula, b: Formula) -> Conjunction:
    """``a`` and ``b`` are both true. Included for completeness."""
    return a & b


def or_(a: Formula, b: Formula) -> Disjunction:
    """``a`` or ``b`` is true. Included for completeness."""
    return a | b
