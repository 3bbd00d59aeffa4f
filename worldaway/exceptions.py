"""
Exception classes for the classification service.

Endpoints translate these into HTTP errors; everything else propagates.
"""

from typing import Dict


class WorldAwayError(Exception):
    """Base exception for all service errors."""

    pass


class FeatureValidationError(WorldAwayError):
    """Raised when a single record has fields outside their allowed ranges.

    ``errors`` maps each failing field to a human readable message.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid feature values: {fields}")


class IngestionError(WorldAwayError):
    """Raised when a CSV upload cannot be turned into any feature records."""

    pass
