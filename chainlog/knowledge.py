"""
Knowledge representation for ChainLog

This module defines rules and the two stores an engine owns:
the fact store (ground predicates only) and the rule store.
"""

from typing import Dict, FrozenSet, Iterable, Iterator, List, Set, Tuple, Union
from dataclasses import dataclass, field
from .terms import Predicate, Variable, Fact
from .errors import NonGroundFactError
from .utils import get_all_variables, is_ground


@dataclass(frozen=True)
class Rule:
    """Represents a rule: IF all antecedents hold THEN the consequent holds"""
    antecedents: Tuple[Predicate, ...]
    consequent: Predicate
    name: str = field(default="", compare=False)

    def __init__(self, antecedents: Union[List[Predicate], Tuple[Predicate, ...]],
                 consequent: Predicate, name: str = ""):
        if not isinstance(antecedents, (list, tuple)):
            raise TypeError(f"Rule antecedents must be list or tuple, got {type(antecedents)}")
        for term in list(antecedents) + [consequent]:
            if not isinstance(term, Predicate):
                raise TypeError(f"Rule terms must be predicates, got {type(term)}: {term!r}")
        object.__setattr__(self, 'antecedents', tuple(antecedents))
        object.__setattr__(self, 'consequent', consequent)
        object.__setattr__(self, 'name', name)

    def get_variables(self) -> Set[Variable]:
        """Get all variables in this rule"""
        return get_all_variables(self.antecedents + (self.consequent,))

    def unbound_consequent_variables(self) -> Set[Variable]:
        """
        Variables of the consequent that no antecedent mentions.

        Any instantiation of such a rule still contains these variables,
        so the rule can never derive a fact.
        """
        return self.consequent.get_variables() - get_all_variables(self.antecedents)

    def __str__(self) -> str:
        body_str = ", ".join(str(term) for term in self.antecedents)
        if not body_str:
            return f"=> {self.consequent}"
        return f"{body_str} => {self.consequent}"


class FactStore:
    """Set of ground facts, deduplicated by structural equality"""

    def __init__(self, facts: Iterable[Fact] = ()):
        # dict keeps insertion order so listings are stable
        self._facts: Dict[Fact, None] = {}
        for fact in facts:
            self.add(fact)

    def add(self, fact: Fact) -> bool:
        """
        Add a fact to the store.

        Returns True if the fact was new.

        Raises:
            TypeError: if ``fact`` is not a Predicate
            NonGroundFactError: if ``fact`` contains a variable
        """
        if not isinstance(fact, Predicate):
            raise TypeError(f"Facts must be predicates, got {type(fact)}: {fact!r}")
        if not is_ground(fact):
            raise NonGroundFactError(fact)
        if fact in self._facts:
            return False
        self._facts[fact] = None
        return True

    def snapshot(self) -> FrozenSet[Fact]:
        """Immutable copy of the current facts"""
        return frozenset(self._facts)

    def clear(self) -> None:
        self._facts.clear()

    def __contains__(self, fact: object) -> bool:
        return fact in self._facts

    def __iter__(self) -> Iterator[Fact]:
        return iter(list(self._facts))

    def __len__(self) -> int:
        return len(self._facts)


class RuleStore:
    """Set of rules, deduplicated by structural equality, in insertion order"""

    def __init__(self, rules: Iterable[Rule] = ()):
        self._rules: Dict[Rule, None] = {}
        for rule in rules:
            self.add(rule)

    def add(self, rule: Rule) -> bool:
        """Add a rule to the store. Returns True if the rule was new."""
        if not isinstance(rule, Rule):
            raise TypeError(f"Expected a Rule, got {type(rule)}: {rule!r}")
        if rule in self._rules:
            return False
        self._rules[rule] = None
        return True

    def snapshot(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    def clear(self) -> None:
        self._rules.clear()

    def __contains__(self, rule: object) -> bool:
        return rule in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules))

    def __len__(self) -> int:
        return len(self._rules)
