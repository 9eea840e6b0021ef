"""
Term representations for ChainLog

This module defines the three term types the engine reasons over:
- Variable: Pattern variables like ?X, ?Person
- Constant: Opaque atomic values like Socrates, Plato
- Predicate: Structured terms like teacherOf(Socrates, Plato)
"""

from typing import Any, List, Set, Tuple, Union
from dataclasses import dataclass
from abc import ABC, abstractmethod


class Term(ABC):
    """Abstract base class for all terms"""

    @abstractmethod
    def substitute(self, bindings: "dict") -> "Term":
        """
        Apply variable substitutions to this term.

        Args:
            bindings: Dictionary mapping variables to terms.
                     Chains of variables are followed transitively.

        Returns:
            New term with every bound variable replaced by its fully
            resolved binding. Unbound variables are kept as they are.

        Examples:
            >>> term = pred("p", var("X"), var("Y"))
            >>> term.substitute({var("X"): const("a"), var("Y"): const("b")})
            Predicate("p", (Constant("a"), Constant("b")))
        """
        pass

    @abstractmethod
    def get_variables(self) -> Set["Variable"]:
        """Get all variables occurring in this term"""
        pass

    def is_ground(self) -> bool:
        """True if the term contains no variables at any depth"""
        return not self.get_variables()


@dataclass(frozen=True)
class Variable(Term):
    """Represents a logical variable"""
    name: str

    def substitute(self, bindings: "dict") -> Term:
        """Follow the binding chain for this variable"""
        if self in bindings:
            return bindings[self].substitute(bindings)
        return self

    def get_variables(self) -> Set["Variable"]:
        return {self}

    def __str__(self) -> str:
        return f"?{self.name}"


@dataclass(frozen=True)
class Constant(Term):
    """Represents an atomic constant"""
    value: Any

    def substitute(self, bindings: "dict") -> Term:
        """Constants are not affected by substitution"""
        return self

    def get_variables(self) -> Set[Variable]:
        return set()

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Predicate(Term):
    """Represents a predicate (compound term) with a functor and arguments"""
    functor: str
    args: Tuple[Term, ...]

    def __init__(self, functor: str, args: Union[List[Term], Tuple[Term, ...]] = ()):
        if not isinstance(functor, str):
            raise TypeError(f"Predicate functor must be a string, got {type(functor)}: {functor!r}")
        if not isinstance(args, (list, tuple)):
            raise TypeError(f"Predicate args must be list or tuple, got {type(args)}")
        for arg in args:
            if not isinstance(arg, Term):
                raise TypeError(f"Predicate argument must be a Term, got {type(arg)}: {arg!r}")
        object.__setattr__(self, 'functor', functor)
        object.__setattr__(self, 'args', tuple(args))

    @property
    def arity(self) -> int:
        """Number of arguments"""
        return len(self.args)

    def substitute(self, bindings: "dict") -> Term:
        """Rebuild the predicate with substituted arguments"""
        if not bindings:
            return self
        return Predicate(self.functor, [arg.substitute(bindings) for arg in self.args])

    def get_variables(self) -> Set[Variable]:
        variables = set()
        for arg in self.args:
            variables.update(arg.get_variables())
        return variables

    def __str__(self) -> str:
        if not self.args:
            return self.functor
        args_str = ", ".join(str(arg) for arg in self.args)
        return f"{self.functor}({args_str})"


# A fact is a ground predicate. Groundness is checked at runtime by the fact store.
Fact = Predicate
