"""Three-pass syllable role assignment.

Nuclei are marked first, then at most one onset is extended leftwards from
each nucleus, then at most one coda rightwards. Whatever is still
``SyllableIndex.NONE`` afterwards could not be syllabified.

The passes only look at content and existing roles, so roles must be cleared
(``yoruba_ot.gen.clear_indices``) before re-running on a mutated form.
"""

from typing import Iterable, List, Sequence, Tuple

from .models import VOWELS, Segment, SyllableIndex


def mark_nuclei(form: Sequence[Segment]) -> List[Segment]:
    """Mark every vowel as a nucleus."""
    return [
        seg.with_syllable_index(SyllableIndex.NUCLEUS) if seg.char in VOWELS else seg
        for seg in form
    ]


def _extend(segments: Iterable[Segment], role: SyllableIndex) -> List[Segment]:
    """Assign ``role`` to an unassigned segment that directly follows a nucleus
    in iteration order."""
    marked = []
    previous = SyllableIndex.NONE
    for seg in segments:
        if previous == SyllableIndex.NUCLEUS and seg.syllable_index == SyllableIndex.NONE:
            marked.append(seg.with_syllable_index(role))
            previous = role
        else:
            marked.append(seg)
            previous = seg.syllable_index
    return marked


def mark_onsets(form: Sequence[Segment]) -> List[Segment]:
    """Right-to-left: the segment before a nucleus becomes its onset."""
    return list(reversed(_extend(reversed(form), SyllableIndex.ONSET)))


def mark_codas(form: Sequence[Segment]) -> List[Segment]:
    """Left-to-right: the segment after a nucleus becomes its coda."""
    return _extend(form, SyllableIndex.CODA)


def syllabify(form: Sequence[Segment]) -> Tuple[Segment, ...]:
    return tuple(mark_codas(mark_onsets(mark_nuclei(form))))
