"""Domain-separated deterministic RNG using xxhash.

Every random draw in a game is a pure function of the session seed and
where the draw happens, so two sessions with the same seed and the same
inputs play out identically.

Formula: RNG_Value = Hash(Seed, Domain, Key, Counter)
"""

from __future__ import annotations

import struct

import xxhash

from neuromaze.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, key, counter); there is
    no internal mutable state to reset between levels or tests.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, counter: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, key, counter)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, counter: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, counter) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, key: int, counter: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, counter)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, counter: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, key, counter) < probability

    def choice(self, domain: Domain, key: int, counter: int, items: list):
        """Pick one element of a non-empty list."""
        return items[self.next_int(domain, key, counter, 0, len(items) - 1)]
