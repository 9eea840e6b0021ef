"""
ChainLog - forward-chaining rule engine with unification

Starts from ground facts, repeatedly applies rules whose antecedents are
matched against the facts by unification, and stops at a fixpoint or at
an iteration cap.
"""

from .terms import Term, Variable, Constant, Predicate, Fact
from .factories import var, const, pred
from .knowledge import Rule, FactStore, RuleStore
from .unification import resolve, apply_substitution, occurs_check, unify, unifies
from .matching import find_instantiations, derive_facts
from .engine import (
    ForwardChainingEngine, InferenceResult, InferenceStatus, PassReport,
    create_philosophers_engine
)
from .errors import ChainLogError, NonGroundFactError, IterationCapExceeded, ParseError
from .parser import parse_term, parse_fact, parse_rule, parse_program

__version__ = "0.1.0"
__all__ = [
    "Term", "Variable", "Constant", "Predicate", "Fact", "var", "const", "pred",
    "Rule", "FactStore", "RuleStore",
    "resolve", "apply_substitution", "occurs_check", "unify", "unifies",
    "find_instantiations", "derive_facts",
    "ForwardChainingEngine", "InferenceResult", "InferenceStatus", "PassReport",
    "create_philosophers_engine",
    "ChainLogError", "NonGroundFactError", "IterationCapExceeded", "ParseError",
    "parse_term", "parse_fact", "parse_rule", "parse_program",
]
