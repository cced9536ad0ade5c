"""Packing failures raised to callers."""

from __future__ import annotations


class PackingError(ValueError):
    """Base class for deterministic packing failures. Never retried."""


class ConfigurationError(PackingError):
    """Box template has no usable volume or weight capacity."""


class EmptyShipmentError(PackingError):
    """Nothing physical to pack."""


class UnitTooLargeError(PackingError):
    """A unit is larger or heavier than the box template itself."""


class DegenerateUnitError(PackingError):
    """A unit has a non-positive weight or dimension, so no usable volume."""


class CapacityExhaustedError(PackingError):
    """The box cap was reached and some units could not be placed."""
