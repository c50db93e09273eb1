"""Faithfulness constraints: penalize surface deviation from the underlying form."""

import logging
from typing import List, Tuple

import Levenshtein

from .base import FaithfulnessConstraint
from ..models import MorphemeIndex, SyllabifiedCandidate

logger = logging.getLogger(__name__)


def grapheme_opcodes(
    underlying: SyllabifiedCandidate,
    surface: SyllabifiedCandidate,
) -> List[Tuple[str, int, int, int, int]]:
    """
    Align two candidates segment by segment.

    Each segment is one grapheme cluster, possibly several code points.
    Levenshtein works on strings, so every distinct cluster is encoded as a
    single private-use character first; the edit script is then computed at
    cluster level.

    Args:
        underlying: Source of the alignment.
        surface: Target of the alignment.

    Returns:
        Levenshtein opcodes: (tag, i1, i2, j1, j2) with tag one of
        "equal", "replace", "insert", "delete".
    """
    u_chars = [seg.char for seg in underlying.form]
    s_chars = [seg.char for seg in surface.form]

    if not u_chars and not s_chars:
        return []

    all_chars = sorted(set(u_chars) | set(s_chars))
    char_to_code = {c: chr(0xF0000 + i) for i, c in enumerate(all_chars)}

    u_encoded = "".join(char_to_code[c] for c in u_chars)
    s_encoded = "".join(char_to_code[c] for c in s_chars)

    return Levenshtein.opcodes(u_encoded, s_encoded)


def _count_opcodes(underlying: SyllabifiedCandidate, surface: SyllabifiedCandidate, tag: str) -> int:
    return sum(1 for op in grapheme_opcodes(underlying, surface) if op[0] == tag)


def _clamped(difference: int) -> int:
    # Only surfaces derived by deletion guarantee a non-negative difference
    return max(0, difference)


class Ident(FaithfulnessConstraint):
    """One violation per replaced stretch in the alignment."""

    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        return _count_opcodes(self.underlying, surface, "replace")


class Dep(FaithfulnessConstraint):
    """One violation per inserted stretch in the alignment."""

    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        return _count_opcodes(self.underlying, surface, "insert")


class Max(FaithfulnessConstraint):
    """
    Penalize deletion.

    ``weight`` violations per segment missing from the surface, plus one more
    if a non-empty surface no longer starts or ends with the underlying edge
    segments.
    """

    def __init__(self, underlying: SyllabifiedCandidate, weight: int = 3):
        super().__init__(underlying)
        self.weight = weight

    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        u_form = self.underlying.form
        s_form = surface.form

        violations = _clamped(len(u_form) - len(s_form)) * self.weight

        if s_form:
            if not u_form:
                violations += 1
            elif s_form[0].char != u_form[0].char or s_form[-1].char != u_form[-1].char:
                violations += 1

        return violations


class MaxInitialV(FaithfulnessConstraint):
    """Penalize losing segments that began the underlying form."""

    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        return _clamped(
            self.underlying.count(MorphemeIndex.INITIAL) - surface.count(MorphemeIndex.INITIAL)
        )


class MaxFinalV(FaithfulnessConstraint):
    """Penalize losing segments that ended the underlying form."""

    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        return _clamped(
            self.underlying.count(MorphemeIndex.FINAL) - surface.count(MorphemeIndex.FINAL)
        )
