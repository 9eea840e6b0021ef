"""
Rule instantiation search for ChainLog

Finds every substitution that matches all antecedents of a rule against
a fixed set of facts, using depth-first backtracking. Each attempt works
on a private copy of the substitution, so a failed match never leaks
bindings into the branch it came from.
"""

import logging
from typing import AbstractSet, Iterator, Optional, Sequence
from .terms import Predicate, Fact
from .knowledge import Rule
from .types import Substitution, FactSnapshot
from .unification import unify, apply_substitution
from .utils import is_ground

logger = logging.getLogger(__name__)


def find_instantiations(rule: Rule, facts: AbstractSet[Fact],
                        subst: Optional[Substitution] = None) -> Iterator[Substitution]:
    """
    Enumerate all substitutions satisfying every antecedent of ``rule``.

    Antecedents are matched in order; each may match any fact, including
    one already used by an earlier antecedent. A rule without antecedents
    yields the starting substitution once.

    Args:
        rule: The rule whose antecedents are matched
        facts: Facts to match against. Taken as a snapshot before the
               search starts, so callers may keep mutating their own set.
        subst: Optional starting bindings (not modified)

    Yields:
        One complete substitution per instantiation
    """
    snapshot = facts if isinstance(facts, frozenset) else frozenset(facts)
    start = dict(subst) if subst else {}
    yield from _search(rule.antecedents, 0, start, snapshot)


def _search(antecedents: Sequence[Predicate], index: int,
            subst: Substitution, facts: FactSnapshot) -> Iterator[Substitution]:
    if index == len(antecedents):
        yield subst
        return

    pattern = antecedents[index]
    for fact in facts:
        candidate = dict(subst)
        if unify(pattern, fact, candidate):
            # Keep looping afterwards: other facts can give other instantiations
            yield from _search(antecedents, index + 1, candidate, facts)


def derive_facts(rule: Rule, facts: AbstractSet[Fact]) -> Iterator[Fact]:
    """
    Yield the instantiated consequent for every match of ``rule``.

    Instantiations whose consequent still contains a variable cannot
    become facts and are dropped.
    """
    for subst in find_instantiations(rule, facts):
        candidate = apply_substitution(rule.consequent, subst)
        if isinstance(candidate, Predicate) and is_ground(candidate):
            yield candidate
        else:
            logger.debug(f"Discarding non-ground consequent {candidate} from rule {rule}")
