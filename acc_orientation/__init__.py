"""Resolve measured vectors into up/front/right magnitudes of a device frame."""

from .errors import CollinearInputError, DegenerateInputError, OrientationError
from .frame import OrientationFrame
from .orientation import (
    Orientation,
    OrientationMagnitude,
    default_orientation,
    find_orientation,
    find_vector_components,
    find_vector_magnitudes,
)

__all__ = [
    "CollinearInputError",
    "DegenerateInputError",
    "Orientation",
    "OrientationError",
    "OrientationFrame",
    "OrientationMagnitude",
    "default_orientation",
    "find_orientation",
    "find_vector_components",
    "find_vector_magnitudes",
]
