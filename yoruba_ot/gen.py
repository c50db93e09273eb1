"""Candidate generation (GEN) by segment deletion."""

import itertools
import logging
from typing import List, Optional

from .models import DEFAULT_SEED, SyllabifiedCandidate, SyllableIndex, new_rng_state
from .rng import gen_index
from .syllabifier import syllabify

logger = logging.getLogger(__name__)


def clear_indices(candidate: SyllabifiedCandidate) -> SyllabifiedCandidate:
    """Reset every syllable role to NONE, keeping content and other tags."""
    return SyllabifiedCandidate(
        form=tuple(seg.with_syllable_index(SyllableIndex.NONE) for seg in candidate.form),
        rng_state=candidate.rng_state,
    )


def resyllabify(candidate: SyllabifiedCandidate) -> SyllabifiedCandidate:
    """Clear roles and run the syllabifier again."""
    cleared = clear_indices(candidate)
    return SyllabifiedCandidate(form=syllabify(cleared.form), rng_state=cleared.rng_state)


def delete(candidate: SyllabifiedCandidate) -> SyllabifiedCandidate:
    """
    Delete one uniformly chosen segment and re-syllabify.

    The index is drawn from the candidate's own stream; the returned candidate
    carries the advanced state. Deleting from an empty candidate returns it
    unchanged.
    """
    if not candidate.form:
        return candidate

    index, rng_state = gen_index(candidate.rng_state, len(candidate.form))

    remaining = candidate.form[:index] + candidate.form[index + 1:]
    logger.debug(f"Deleted {candidate.form[index].char!r} at {index} from {str(candidate)!r}")

    return resyllabify(SyllabifiedCandidate(form=remaining, rng_state=rng_state))


def permute(
    candidate: SyllabifiedCandidate,
    max_deletions: Optional[int] = None,
    seed: int = DEFAULT_SEED,
) -> List[SyllabifiedCandidate]:
    """
    Generate every competitor obtainable by deleting a subset of segments.

    Surviving segments keep their relative order. Competitors are ordered by
    number of deleted segments (identity first, empty form last), then by the
    positions deleted. One competitor per subset, so identical strings reached
    through different deletions are all kept.

    Args:
        candidate: The underlying form.
        max_deletions: Largest number of segments a competitor may lose
            (None = up to all of them).
        seed: Seed given to every competitor's fresh random stream.

    Returns:
        List of re-syllabified competitors.
    """
    n = len(candidate.form)
    limit = n if max_deletions is None else min(max_deletions, n)

    competitors = []
    for k in range(limit + 1):
        for deleted in itertools.combinations(range(n), k):
            skip = set(deleted)
            form = tuple(seg for i, seg in enumerate(candidate.form) if i not in skip)
            competitors.append(
                resyllabify(SyllabifiedCandidate(form=form, rng_state=new_rng_state(seed)))
            )

    logger.debug(f"Generated {len(competitors)} competitors for {str(candidate)!r}")
    return competitors
