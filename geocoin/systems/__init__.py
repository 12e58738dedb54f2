"""Engine systems: keyed RNG and cache generation."""

from geocoin.systems.rng import DeterministicRNG
from geocoin.systems.cache_factory import CacheFactory

__all__ = ["CacheFactory", "DeterministicRNG"]
