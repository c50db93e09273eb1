"""Parsing raw text into segments and back."""

import logging
from typing import List

import regex

from .models import (
    DEFAULT_SEED,
    VOWELS,
    MorphemeIndex,
    Segment,
    SegmentType,
    SyllabifiedCandidate,
    new_rng_state,
)
from .syllabifier import syllabify

logger = logging.getLogger(__name__)

# Tie-barred stop + fricative written as two clusters but pronounced as one
AFFRICATE_STOP = "d\u0361"  # d͡
AFFRICATE_FRICATIVE = "\u0292"  # ʒ

GRAPHEME_PATTERN = regex.compile(r"\X")


def split_graphemes(text: str) -> List[str]:
    """Split text into extended grapheme clusters."""
    return GRAPHEME_PATTERN.findall(text)


def get_seg_type(grapheme: str) -> SegmentType:
    if grapheme in VOWELS:
        return SegmentType.VOWEL
    return SegmentType.CONSONANT


def merge_affricates(graphemes: List[str]) -> List[str]:
    """
    Join each d͡ + ʒ pair into a single cluster.

    One left-to-right pass; a merged cluster is never merged again.
    """
    merged = []
    i = 0
    while i < len(graphemes):
        if (
            graphemes[i] == AFFRICATE_STOP
            and i + 1 < len(graphemes)
            and graphemes[i + 1] == AFFRICATE_FRICATIVE
        ):
            merged.append(graphemes[i] + graphemes[i + 1])
            i += 2
        else:
            merged.append(graphemes[i])
            i += 1
    return merged


def _morpheme_index(position: int, length: int) -> MorphemeIndex:
    if position == 0:
        return MorphemeIndex.INITIAL
    if position == length - 1:
        return MorphemeIndex.FINAL
    return MorphemeIndex.INTERIOR


def parse(text: str, seed: int = DEFAULT_SEED) -> SyllabifiedCandidate:
    """
    Build a syllabified candidate from raw text.

    Args:
        text: Any string, including the empty string.
        seed: Seed for the candidate's own random stream.

    Returns:
        The candidate with segment types, morpheme positions and syllable
        roles assigned.
    """
    graphemes = merge_affricates(split_graphemes(text))
    segments = [
        Segment(
            char=grapheme,
            seg_type=get_seg_type(grapheme),
            morpheme_index=_morpheme_index(i, len(graphemes)),
        )
        for i, grapheme in enumerate(graphemes)
    ]
    candidate = SyllabifiedCandidate(form=syllabify(segments), rng_state=new_rng_state(seed))
    logger.debug(f"Parsed {text!r} as {candidate.syllable_parse!r}")
    return candidate


def serialize(candidate: SyllabifiedCandidate) -> str:
    """Concatenate segment content; tags are not preserved."""
    return str(candidate)
