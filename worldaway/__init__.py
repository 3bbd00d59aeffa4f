"""A World Away: exoplanet candidate classification service."""

__version__ = "1.0.0"
