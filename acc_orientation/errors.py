"""Exceptions raised when reference vectors cannot define a basis."""
from __future__ import annotations


class OrientationError(ValueError):
    """Base class for invalid orientation inputs."""


class DegenerateInputError(OrientationError):
    """A zero vector was given where a direction is required."""


class CollinearInputError(OrientationError):
    """Two reference vectors are parallel and do not span a plane."""
