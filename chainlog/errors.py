"""
Exception types for ChainLog.

Unification failure is not an exception: ``unify`` returns False and the
instantiation search backtracks. The classes here cover the conditions a
caller has to be told about.
"""

from typing import Any, Optional


class ChainLogError(Exception):
    """Base class for ChainLog errors."""
    pass


class NonGroundFactError(ChainLogError, ValueError):
    """Raised when a term containing variables is registered as a fact."""

    def __init__(self, term: Any):
        self.term = term
        super().__init__(f"Cannot add non-ground fact: {term}")


class IterationCapExceeded(ChainLogError):
    """Raised when forward chaining stopped at its pass limit instead of a fixpoint."""

    def __init__(self, result: Any, max_iterations: int):
        self.result = result
        self.max_iterations = max_iterations
        super().__init__(
            f"Inference stopped after {max_iterations} iterations without reaching a fixpoint "
            f"({len(result.facts)} facts known)"
        )


class ParseError(ChainLogError, ValueError):
    """Raised for malformed text notation."""

    def __init__(self, message: str, text: str = "", position: Optional[int] = None):
        self.text = text
        self.position = position
        if position is not None:
            message = f"{message} at position {position} in {text!r}"
        elif text:
            message = f"{message} in {text!r}"
        super().__init__(message)
