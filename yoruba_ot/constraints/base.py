"""Base classes for OT constraints and their ranked aggregation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Tuple

from ..models import SyllabifiedCandidate


class Constraint(ABC):
    """
    Base class for all constraints.

    A constraint maps a surface candidate to a non-negative number of
    violations. Constraint instances are plain values owned by the caller.
    """

    @abstractmethod
    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        """
        Count the violations incurred by a surface candidate.

        Args:
            surface: The candidate being scored.

        Returns:
            Number of violations (never negative).
        """
        pass

    @property
    def name(self) -> str:
        """Column name used in tableaux."""
        return self.__class__.__name__

    def __repr__(self) -> str:
        """String representation."""
        return f"{self.__class__.__name__}()"


class FaithfulnessConstraint(Constraint):
    """A constraint that compares the surface form against an underlying form."""

    def __init__(self, underlying: SyllabifiedCandidate):
        """
        Initialize the constraint.

        Args:
            underlying: The reference form surface candidates are compared to.
        """
        self.underlying = underlying

    def __repr__(self) -> str:
        """String representation."""
        return f"{self.__class__.__name__}({str(self.underlying)!r})"


@dataclass
class RankedConstraint(Constraint):
    """A constraint paired with its rank (lower rank = higher priority)."""

    constraint: Constraint
    rank: int

    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        return self.constraint.evaluate(surface)

    @property
    def name(self) -> str:
        return self.constraint.name


class ConstraintSet(Constraint):
    """
    A collection of ranked constraints evaluated as one.

    ``evaluate`` is the flat, unweighted sum of every member's violations and
    ignores rank. Strict domination would instead compare candidates on the
    ``profile`` vector lexicographically; no such selection happens here.
    """

    def __init__(self, ranked: Iterable[RankedConstraint] = ()):
        """
        Initialize the set.

        Args:
            ranked: Ranked constraints, in any order.
        """
        # sorted() is stable, so equal ranks keep their given order
        self.ranked: List[RankedConstraint] = sorted(ranked, key=lambda rc: rc.rank)

    @classmethod
    def from_mapping(cls, mapping: Dict[Constraint, int]) -> "ConstraintSet":
        """Create a set from a ``{constraint: rank}`` mapping."""
        return cls(RankedConstraint(constraint, rank) for constraint, rank in mapping.items())

    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        return sum(rc.evaluate(surface) for rc in self.ranked)

    def profile(self, surface: SyllabifiedCandidate) -> List[Tuple[str, int]]:
        """Per-constraint violations ordered by ascending rank."""
        return [(rc.name, rc.evaluate(surface)) for rc in self.ranked]

    def __iter__(self) -> Iterator[RankedConstraint]:
        return iter(self.ranked)

    def __len__(self) -> int:
        return len(self.ranked)

    def __repr__(self) -> str:
        """String representation."""
        members = ", ".join(f"{rc.name}:{rc.rank}" for rc in self.ranked)
        return f"ConstraintSet({members})"
