"""
Utility functions for ChainLog

Common functionality used across multiple modules.
"""

from typing import Iterable, Set
from .terms import Term, Variable


def get_all_variables(terms: Iterable[Term]) -> Set[Variable]:
    """
    Collect all variables from a collection of terms.

    Examples:
        >>> terms = [pred("p", var("X")), pred("q", var("Y"), var("X"))]
        >>> sorted(v.name for v in get_all_variables(terms))
        ['X', 'Y']
    """
    variables = set()
    for term in terms:
        variables.update(term.get_variables())
    return variables


def is_ground(term: Term) -> bool:
    """
    Check if a term contains no variables, at any nesting depth.

    Examples:
        >>> is_ground(pred("p", const("a"), pred("q", const("b"))))
        True
        >>> is_ground(pred("p", pred("q", var("X"))))
        False
    """
    return len(term.get_variables()) == 0
