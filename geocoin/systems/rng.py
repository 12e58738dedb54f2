"""Keyed deterministic RNG using xxhash.

Every value is a pure function of (WorldSeed, Key). There is no hidden
state and no per-process salt, so the same key gives the same value in
every run on every machine.

Formula: RNG_Value = (xxh64(Key, seed=WorldSeed) >> 11) / 2**53

Keeping the top 53 bits makes the division exact, so the result is
always strictly below 1.0.
"""

from __future__ import annotations

import xxhash


class DeterministicRNG:
    """Stateless string-keyed pseudo-random number generator."""

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1
    _SCALE = float(1 << 53)

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed & self._MAX_UINT64

    @property
    def seed(self) -> int:
        return self._seed

    def seeded_value(self, key: str) -> float:
        """Return a deterministic float in [0.0, 1.0) for *key*."""
        digest = xxhash.xxh64(key.encode("utf-8"), seed=self._seed).intdigest()
        return (digest >> 11) / self._SCALE

    def luck(self, *parts: object) -> float:
        """Join *parts* with commas and hash them, e.g. ``luck(3, -2, "initialValue")``."""
        return self.seeded_value(",".join(str(p) for p in parts))
