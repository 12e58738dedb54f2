"""geocoin — deterministic grid and token-economy engine for a location-based coin game."""

__version__ = "0.1.0"
