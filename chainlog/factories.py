"""
Factory functions for creating ChainLog terms.

Shorter spellings for building facts and rule patterns by hand.
"""

from typing import Any
from .terms import Term, Constant, Variable, Predicate


def const(value: Any) -> Constant:
    """
    Create a constant term.

    Examples:
        >>> const("Socrates")
        Constant(value='Socrates')
    """
    return Constant(value)


def var(name: str) -> Variable:
    """
    Create a logical variable.

    Args:
        name: The variable name, without the leading '?'

    Examples:
        >>> str(var("X"))
        '?X'
    """
    return Variable(name)


def pred(functor: str, *args: Any) -> Predicate:
    """
    Create a predicate.

    Plain (non-Term) arguments are wrapped as constants, so
    ``pred("human", "Socrates")`` is ``human(Socrates)``.

    Examples:
        >>> str(pred("teacherOf", "Socrates", var("Y")))
        'teacherOf(Socrates, ?Y)'
    """
    return Predicate(functor, [arg if isinstance(arg, Term) else Constant(arg) for arg in args])
