"""
Forward-chaining engine for ChainLog

Owns a fact store and a rule store and saturates the facts: every pass
matches all rules against the facts known at the start of the pass, and
passes repeat until nothing new is derived or the iteration cap is hit.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, List, Optional, Set, Tuple

from .terms import Fact
from .knowledge import Rule, FactStore, RuleStore
from .matching import derive_facts
from .errors import NonGroundFactError, IterationCapExceeded
from .parser import parse_fact, parse_rule, parse_program
from .config import get_config
from .factories import const, var, pred
from .logging_config import get_logger

logger = logging.getLogger(__name__)


class InferenceStatus(Enum):
    """How an inference run ended"""
    FIXPOINT = "fixpoint"  # A full pass derived nothing new
    ITERATION_CAP_EXCEEDED = "iteration_cap_exceeded"  # Stopped at max_iterations


@dataclass(frozen=True)
class PassReport:
    """What a single pass over the rules produced"""
    iteration: int
    candidate_count: int
    new_facts: Tuple[Fact, ...]


@dataclass(frozen=True)
class InferenceResult:
    """
    Outcome of ``ForwardChainingEngine.infer``.

    Acts as a read-only set of the final facts, so ``fact in result``
    works directly. Check ``status`` (or call ``raise_for_status``) to
    tell a fixpoint from a run cut off by the iteration cap.
    """
    facts: FrozenSet[Fact]
    status: InferenceStatus
    iterations: int
    max_iterations: int
    initial_facts: FrozenSet[Fact] = frozenset()
    passes: Tuple[PassReport, ...] = field(default_factory=tuple)

    @property
    def reached_fixpoint(self) -> bool:
        return self.status is InferenceStatus.FIXPOINT

    @property
    def derived(self) -> FrozenSet[Fact]:
        """Facts that were not among the initial facts"""
        return self.facts - self.initial_facts

    def raise_for_status(self) -> None:
        """Raise IterationCapExceeded if the run did not reach a fixpoint"""
        if not self.reached_fixpoint:
            raise IterationCapExceeded(self, self.max_iterations)

    def __contains__(self, fact: object) -> bool:
        return fact in self.facts

    def __iter__(self) -> Iterator[Fact]:
        return iter(self.facts)

    def __len__(self) -> int:
        return len(self.facts)


class ForwardChainingEngine:
    """
    Forward-chaining rule engine with unification

    Facts must be ground predicates. Rules may contain variables; a rule
    fires once for every consistent way its antecedents match known facts.
    """

    def __init__(self, max_iterations: Optional[int] = None):
        """
        Initialize the engine

        Args:
            max_iterations: Cap on inference passes. Defaults to the
                            configured ``inference.max_iterations``.
        """
        if max_iterations is None:
            max_iterations = get_config().inference.max_iterations
        if (not isinstance(max_iterations, int) or isinstance(max_iterations, bool)
                or max_iterations < 1):
            raise ValueError(f"max_iterations must be a positive integer, got {max_iterations!r}")

        self.max_iterations = max_iterations
        self._facts = FactStore()
        self._rules = RuleStore()
        self._events = get_logger(__name__)

    def add_fact(self, fact: Fact) -> bool:
        """
        Add a ground fact.

        Non-ground facts are rejected: the store is left unchanged, a
        warning is logged and False is returned.
        """
        try:
            self._facts.add(fact)
        except NonGroundFactError as e:
            self._events.log_rejected_fact(e.term)
            return False
        return True

    def add_rule(self, rule: Rule) -> None:
        """Add a rule (adding an equal rule again has no effect)"""
        if self._rules.add(rule):
            unbound = rule.unbound_consequent_variables()
            if unbound:
                names = ", ".join(sorted(str(v) for v in unbound))
                logger.debug(f"Rule {rule} can never derive a fact: {names} not bound by any antecedent")

    def add_fact_from_text(self, text: str) -> bool:
        """Parse and add a fact, e.g. ``human(Socrates)``"""
        return self.add_fact(parse_fact(text))

    def add_rule_from_text(self, text: str) -> None:
        """Parse and add a rule, e.g. ``human(?X) => mortal(?X)``"""
        self.add_rule(parse_rule(text))

    def add_program(self, text: str) -> None:
        """Parse a multi-line program and add its facts and rules"""
        facts, rules = parse_program(text)
        for fact in facts:
            self.add_fact(fact)
        for rule in rules:
            self.add_rule(rule)

    def infer(self) -> InferenceResult:
        """
        Run forward chaining until a fixpoint or the iteration cap.

        The fact store itself is not modified; derived facts are only
        part of the returned result.
        """
        start_time = time.perf_counter()
        initial = self._facts.snapshot()
        rules = self._rules.snapshot()
        known: Set[Fact] = set(initial)
        passes: List[PassReport] = []
        status = InferenceStatus.FIXPOINT

        logger.info(f"Starting inference: {len(initial)} facts, {len(rules)} rules")

        iteration = 0
        while True:
            iteration += 1
            if iteration > self.max_iterations:
                status = InferenceStatus.ITERATION_CAP_EXCEEDED
                self._events.log_iteration_cap(self.max_iterations, len(known))
                break

            snapshot = frozenset(known)
            candidates: Set[Fact] = set()
            for rule in rules:
                candidates.update(derive_facts(rule, snapshot))

            new_facts = sorted((f for f in candidates if f not in known), key=str)
            known.update(new_facts)
            passes.append(PassReport(iteration, len(candidates), tuple(new_facts)))

            if new_facts:
                logger.debug(f"Iteration {iteration}: derived {len(new_facts)} new facts: "
                             f"{', '.join(str(f) for f in new_facts)}")
            else:
                logger.debug(f"Iteration {iteration}: no new facts "
                             f"({len(candidates)} candidates already known)")
                break

        result = InferenceResult(
            facts=frozenset(known),
            status=status,
            iterations=len(passes),
            max_iterations=self.max_iterations,
            initial_facts=initial,
            passes=tuple(passes),
        )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        self._events.log_inference_run(status.value, result.iterations, len(result.facts),
                                       len(result.derived), elapsed_ms)
        return result

    def reset(self) -> None:
        """Clear all facts and rules"""
        self._facts.clear()
        self._rules.clear()

    @property
    def facts(self) -> FrozenSet[Fact]:
        """Snapshot of the stored (initial) facts"""
        return self._facts.snapshot()

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """Snapshot of the stored rules"""
        return self._rules.snapshot()

    def __str__(self) -> str:
        return f"ForwardChainingEngine: {len(self._facts)} facts, {len(self._rules)} rules"


def create_philosophers_engine(max_iterations: Optional[int] = None) -> ForwardChainingEngine:
    """Create an engine loaded with the classic Socrates knowledge base"""
    engine = ForwardChainingEngine(max_iterations)
    socrates, plato, aristotle = const("Socrates"), const("Plato"), const("Aristotle")
    x, y = var("X"), var("Y")

    engine.add_fact(pred("human", socrates))
    engine.add_fact(pred("human", plato))
    engine.add_fact(pred("philosopher", socrates))
    engine.add_fact(pred("teacherOf", socrates, plato))
    engine.add_fact(pred("teacherOf", plato, aristotle))

    engine.add_rule(Rule([pred("human", x)], pred("mortal", x), name="mortality"))
    engine.add_rule(Rule([pred("philosopher", x)], pred("human", x), name="philosophers are human"))
    engine.add_rule(Rule([pred("teacherOf", x, y)], pred("studentOf", y, x), name="student of teacher"))

    return engine
