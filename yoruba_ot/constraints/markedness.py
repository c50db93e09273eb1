"""Markedness constraints: penalize disfavored surface structure."""

from .base import Constraint
from ..models import SyllabifiedCandidate, SyllableIndex


# Sonority score keyed by a segment's first code point, so tone marks
# (combining accents) are ignored
SONORITY = {
    "e": 1,
    "ɛ": 1,
    "o": 1,
    "ɔ": 1,
    "u": 2,
    "i": 3,
}


class Onset(Constraint):
    """``weight`` violations per nucleus that has no onset."""

    def __init__(self, weight: int = 3):
        self.weight = weight

    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        nuclei = surface.count(SyllableIndex.NUCLEUS)
        onsets = surface.count(SyllableIndex.ONSET)
        return max(0, nuclei - onsets) * self.weight

    def __repr__(self) -> str:
        return f"Onset(weight={self.weight})"


class SonSeqPr(Constraint):
    """Sum of per-segment sonority scores, a rough sonority-sequencing proxy."""

    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        return sum(SONORITY.get(seg.char[0], 0) for seg in surface.form if seg.char)


class Syllabify(Constraint):
    """One violation per segment left without a syllable role."""

    def evaluate(self, surface: SyllabifiedCandidate) -> int:
        return surface.count(SyllableIndex.NONE)
