"""
Type aliases for ChainLog.

This module provides clear type aliases to improve code readability
and type safety throughout the codebase.
"""

from typing import Dict, FrozenSet
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .terms import Term, Variable, Predicate


# Substitution - map variables to the terms they are bound to
Substitution = Dict['Variable', 'Term']

# Immutable snapshot of the working fact set
FactSnapshot = FrozenSet['Predicate']
