"""
The random stream each candidate carries.

Indices come from a ChaCha12 keystream (``randomgen.ChaCha``) whose key is the
PCG32 expansion of a 64-bit seed. The keystream is read as consecutive
little-endian 64-bit words and mapped to ``range(n)`` by a widening multiply
with rejection. A seed therefore always produces the same deletions, which is
what the literal deletion scenarios in the tests rely on.

States are immutable values: every draw returns the advanced state instead of
mutating a generator.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

import numpy as np
from randomgen import ChaCha

CHACHA_ROUNDS = 12
BLOCK_WORDS = 16
KEY_WORDS = 8

# PCG32 step used to expand a 64-bit seed into the key
PCG_MULTIPLIER = 6364136223846793005
PCG_INCREMENT = 11634580027462260723

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF


def expand_seed(seed: int) -> Tuple[int, ...]:
    """Eight 32-bit key words, one PCG32 output per word."""
    state = seed & MASK64
    words = []
    for _ in range(KEY_WORDS):
        state = (state * PCG_MULTIPLIER + PCG_INCREMENT) & MASK64
        xorshifted = (((state >> 18) ^ state) >> 27) & MASK32
        rot = state >> 59
        words.append(((xorshifted >> rot) | (xorshifted << ((32 - rot) & 31))) & MASK32)
    return tuple(words)


@dataclass(frozen=True)
class RngState:
    """Keystream key plus the position of the next unread 32-bit word."""

    key: Tuple[int, ...]
    position: int = 0

    @classmethod
    def from_seed(cls, seed: int) -> "RngState":
        return cls(key=expand_seed(seed))


@lru_cache(maxsize=1024)
def keystream_block(key: Tuple[int, ...], block: int) -> Tuple[int, ...]:
    """The sixteen 32-bit words of keystream block ``block``."""
    bit_generator = ChaCha(
        key=np.array(key, dtype=np.uint32).view(np.uint64),
        counter=0,
        rounds=CHACHA_ROUNDS,
    )
    # Each raw draw consumes two words, so draw 8 * block + 1 falls in ``block``
    bit_generator.random_raw(BLOCK_WORDS // 2 * block + 1, output=False)
    return tuple(int(word) for word in bit_generator.state["state"]["block"])


def next_u64(state: RngState) -> Tuple[int, RngState]:
    """Next 64-bit word, low half first, and the advanced state."""
    block, offset = divmod(state.position, BLOCK_WORDS)
    words = keystream_block(state.key, block)
    # Positions stay even, so a word pair never straddles two blocks
    value = words[offset] | (words[offset + 1] << 32)
    return value, RngState(key=state.key, position=state.position + 2)


def gen_index(state: RngState, n: int) -> Tuple[int, RngState]:
    """
    Draw a uniform index in ``range(n)``.

    The index is the high half of ``value * n``. Draws whose low half lies
    above the acceptance zone are rejected and redrawn, which keeps the
    result unbiased.

    Args:
        state: Current stream state.
        n: Size of the range; must be positive.

    Returns:
        The index and the advanced state.
    """
    if n <= 0:
        raise ValueError(f"Cannot draw an index from an empty range (n={n})")

    zone = ((n << (64 - n.bit_length())) - 1) & MASK64
    while True:
        value, state = next_u64(state)
        product = value * n
        if product & MASK64 <= zone:
            return product >> 64, state
