"""Constraint implementations."""

from .base import Constraint, ConstraintSet, FaithfulnessConstraint, RankedConstraint
from .faithfulness import Dep, Ident, Max, MaxFinalV, MaxInitialV, grapheme_opcodes
from .markedness import Onset, SonSeqPr, Syllabify

__all__ = [
    "Constraint",
    "ConstraintSet",
    "FaithfulnessConstraint",
    "RankedConstraint",
    "Ident",
    "Dep",
    "Max",
    "MaxInitialV",
    "MaxFinalV",
    "Onset",
    "SonSeqPr",
    "Syllabify",
    "grapheme_opcodes",
]
