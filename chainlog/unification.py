"""
Unification for ChainLog

Provides:
- Resolution of variables through chains of bindings
- Substitution application
- The occurs check
- Syntactic unification that extends a substitution in place
"""

import logging
from typing import Optional
from .terms import Term, Variable, Predicate
from .types import Substitution

logger = logging.getLogger(__name__)


def resolve(term: Term, subst: Substitution) -> Term:
    """
    Dereference a term by following variable bindings.

    Returns the first term in the chain that is not a bound variable:
    either a non-variable term or an unbound variable.

    Examples:
        >>> resolve(var("X"), {var("X"): var("Y"), var("Y"): const("a")})
        Constant(value='a')
        >>> resolve(var("Z"), {})
        Variable(name='Z')
    """
    if isinstance(term, Variable) and term in subst:
        return resolve(subst[term], subst)
    return term


def apply_substitution(term: Term, subst: Substitution) -> Term:
    """Replace every reachable variable in ``term`` by its fully resolved binding"""
    return term.substitute(subst)


def occurs_check(variable: Variable, term: Term, subst: Substitution) -> bool:
    """
    Check whether ``variable`` occurs inside ``term`` once bindings are followed.

    Binding a variable to a term that contains it would create an
    infinite structure, so such bindings are rejected.
    """
    if variable == term:
        return True
    if isinstance(term, Variable) and term in subst:
        return occurs_check(variable, subst[term], subst)
    if isinstance(term, Predicate):
        return any(occurs_check(variable, arg, subst) for arg in term.args)
    return False


def unify(x: Term, y: Term, subst: Substitution) -> bool:
    """
    Unify two terms, extending ``subst`` in place.

    Returns True on success. On failure ``subst`` may hold bindings made
    before the mismatch was found; callers that need to roll back should
    pass a copy.

    Examples:
        >>> s = {}
        >>> unify(pred("p", var("X")), pred("p", const("a")), s)
        True
        >>> s[var("X")]
        Constant(value='a')
    """
    if x == y:
        return True

    if isinstance(x, Variable):
        return _unify_variable(x, y, subst)

    if isinstance(y, Variable):
        return _unify_variable(y, x, subst)

    if isinstance(x, Predicate) and isinstance(y, Predicate):
        if x.functor != y.functor or x.arity != y.arity:
            return False
        for arg_x, arg_y in zip(x.args, y.args):
            if not unify(arg_x, arg_y, subst):
                return False
        return True

    # Unequal constants, or a constant against a predicate
    return False


def _unify_variable(variable: Variable, term: Term, subst: Substitution) -> bool:
    """Bind ``variable`` to ``term``, or unify through existing bindings"""
    if variable in subst:
        return unify(subst[variable], term, subst)

    if isinstance(term, Variable) and term in subst:
        return unify(variable, subst[term], subst)

    if occurs_check(variable, term, subst):
        logger.debug(f"Occurs check failed for {variable} in {term}")
        return False

    subst[variable] = term
    return True


def unifies(x: Term, y: Term, subst: Optional[Substitution] = None) -> Optional[Substitution]:
    """
    Non-mutating unification interface.

    Unifies against a copy of ``subst`` and returns the extended copy,
    or None if the terms do not unify. The argument is never modified.

    Examples:
        >>> unifies(pred("p", var("X")), pred("p", const("a")))
        {Variable(name='X'): Constant(value='a')}
        >>> unifies(const("a"), const("b")) is None
        True
    """
    candidate = dict(subst) if subst else {}
    if unify(x, y, candidate):
        return candidate
    return None
