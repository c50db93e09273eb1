"""yoruba-ot - Optimality-Theory evaluation of Yoruba syllabification."""

__version__ = "0.1.0"

from .config import Config
from .constraints import (
    Constraint,
    ConstraintSet,
    Dep,
    Ident,
    Max,
    MaxFinalV,
    MaxInitialV,
    Onset,
    RankedConstraint,
    SonSeqPr,
    Syllabify,
)
from .gen import clear_indices, delete, permute
from .models import (
    DEFAULT_SEED,
    VOWELS,
    MorphemeIndex,
    Segment,
    SegmentType,
    SyllabifiedCandidate,
    SyllableIndex,
)
from .pipeline import TableauPipeline
from .segments import parse, serialize
from .syllabifier import syllabify

__all__ = [
    "Config",
    "Constraint",
    "ConstraintSet",
    "RankedConstraint",
    "Ident",
    "Dep",
    "Max",
    "MaxInitialV",
    "MaxFinalV",
    "Onset",
    "SonSeqPr",
    "Syllabify",
    "clear_indices",
    "delete",
    "permute",
    "DEFAULT_SEED",
    "VOWELS",
    "MorphemeIndex",
    "Segment",
    "SegmentType",
    "SyllabifiedCandidate",
    "SyllableIndex",
    "TableauPipeline",
    "parse",
    "serialize",
    "syllabify",
]
