"""
Identifier generation without a database.

Team IDs and access codes come from a 64-bit linear congruential generator whose
state (the seed) is passed in and handed back explicitly. Member and match IDs come
from the store-wide monotonic counter, which is likewise passed in and returned.
Nothing here reads or writes module-level state.

Team IDs and access codes are collision-improbable, not collision-free; callers
do not retry on collision.
"""

from __future__ import annotations

import os
from typing import Tuple

# Knuth's MMIX constants
_MULTIPLIER = 6364136223846793005
_INCREMENT = 1442695040888963407
_MASK = (1 << 64) - 1

TEAM_ID_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
TEAM_ID_LENGTH = 8
ACCESS_CODE_DIGITS = 4

MEMBER_ID_PREFIX = "member"
MATCH_ID_PREFIX = "match"


def _step(seed: int) -> Tuple[int, int]:
    """Advance the generator once. Returns (output, new_seed); output uses the high 31 bits."""
    new_seed = (seed * _MULTIPLIER + _INCREMENT) & _MASK
    return new_seed >> 33, new_seed


def initial_seed() -> int:
    """Fresh 64-bit seed from OS entropy (used once at startup when no seed is configured)."""
    return int.from_bytes(os.urandom(8), "big")


def next_team_id(seed: int) -> Tuple[str, int]:
    """Return (team_id, new_seed). Team IDs are 8 lowercase base-36 characters."""
    chars = []
    for _ in range(TEAM_ID_LENGTH):
        value, seed = _step(seed)
        chars.append(TEAM_ID_ALPHABET[value % len(TEAM_ID_ALPHABET)])
    return "".join(chars), seed


def next_access_code(seed: int) -> Tuple[str, int]:
    """Return (access_code, new_seed). Access codes are exactly four decimal digits."""
    value, seed = _step(seed)
    code = value % (10 ** ACCESS_CODE_DIGITS)
    return str(code).zfill(ACCESS_CODE_DIGITS), seed


def next_member_id(counter: int) -> Tuple[str, int]:
    """Return (member_id, new_counter)."""
    return f"{MEMBER_ID_PREFIX}-{counter}", counter + 1


def next_match_id(counter: int) -> Tuple[str, int]:
    """Return (match_id, new_counter)."""
    return f"{MATCH_ID_PREFIX}-{counter}", counter + 1
