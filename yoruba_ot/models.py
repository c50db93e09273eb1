"""Data models for the OT evaluator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .rng import RngState


# Oral vowels of the orthography; toned vowels are separate grapheme clusters
VOWELS = frozenset({"o", "ɛ", "ɔ", "i", "u", "a", "e"})

# Every fresh candidate (parsed or permuted) starts its own stream from this seed
DEFAULT_SEED = 7777777


class SegmentType(Enum):
    """Vowel/consonant class of a segment."""

    VOWEL = "vowel"
    CONSONANT = "consonant"


class SyllableIndex(Enum):
    """Syllable role of a segment."""

    ONSET = "onset"
    NUCLEUS = "nucleus"
    CODA = "coda"
    NONE = "none"  # not yet syllabified, or unsyllabifiable

    @property
    def symbol(self) -> str:
        return {"onset": "O", "nucleus": "N", "coda": "C", "none": "."}[self.value]


class MorphemeIndex(Enum):
    """Position of a segment within the underlying form it came from."""

    INITIAL = "initial"
    FINAL = "final"
    INTERIOR = "interior"


def new_rng_state(seed: int = DEFAULT_SEED) -> RngState:
    """Return a freshly seeded stream state."""
    return RngState.from_seed(seed)


@dataclass(frozen=True)
class Segment:
    """One grapheme cluster with its phonological tags."""

    char: str
    seg_type: SegmentType
    syllable_index: SyllableIndex = SyllableIndex.NONE
    morpheme_index: MorphemeIndex = MorphemeIndex.INTERIOR

    def with_syllable_index(self, syllable_index: SyllableIndex) -> "Segment":
        """Copy of this segment with a different syllable role."""
        return Segment(
            char=self.char,
            seg_type=self.seg_type,
            syllable_index=syllable_index,
            morpheme_index=self.morpheme_index,
        )


@dataclass(frozen=True)
class SyllabifiedCandidate:
    """
    An ordered sequence of segments plus the candidate's own random state.

    Used both as an underlying form and as a surface form. Transforms
    (see ``yoruba_ot.gen``) never mutate a candidate; they return a new one
    carrying the advanced random state.
    """

    form: Tuple[Segment, ...] = ()
    rng_state: RngState = field(default_factory=new_rng_state)

    @classmethod
    def from_str(cls, text: str, seed: Optional[int] = None) -> "SyllabifiedCandidate":
        """Parse and syllabify raw text."""
        from .segments import parse

        return parse(text, seed=DEFAULT_SEED if seed is None else seed)

    def __str__(self) -> str:
        return "".join(seg.char for seg in self.form)

    def __len__(self) -> int:
        return len(self.form)

    @property
    def syllable_parse(self) -> str:
        """Syllable roles abbreviated per segment, e.g. ``NONC`` for owok."""
        return "".join(seg.syllable_index.symbol for seg in self.form)

    def count(self, index: Any) -> int:
        """Number of segments carrying a given syllable or morpheme tag."""
        if isinstance(index, SyllableIndex):
            return sum(1 for seg in self.form if seg.syllable_index == index)
        if isinstance(index, MorphemeIndex):
            return sum(1 for seg in self.form if seg.morpheme_index == index)
        raise TypeError(f"Cannot count segments by {index!r}")


@dataclass
class TableauRow:
    """One competitor's scores for one underlying form."""

    input: str
    candidate: str
    syllable_parse: str
    deleted: int
    violations: Dict[str, int] = None
    total: int = 0

    def __post_init__(self):
        """Initialize violations if not provided."""
        if self.violations is None:
            self.violations = {}

    def to_dict(self, include_parse: bool = True) -> dict:
        """Convert to dictionary for output."""
        result = {
            "input": self.input,
            "candidate": self.candidate,
        }
        if include_parse:
            result["syllable_parse"] = self.syllable_parse
        result["deleted"] = self.deleted
        result.update(self.violations)
        result["total"] = self.total
        return result
