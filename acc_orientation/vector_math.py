"""Vector helpers and rotation operators for orientation frames."""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from .errors import CollinearInputError, DegenerateInputError

Vector = np.ndarray

# Relative size of the in-plane residual below which two vectors are parallel.
COLLINEAR_TOLERANCE = 1e-9


def to_vector(value: Iterable[float] | Vector) -> Vector:
    """Convert any iterable to a float64 numpy 3-vector."""
    vec = np.asarray(list(value), dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {vec.shape}")
    return vec


def magnitude(vec: Vector) -> float:
    return float(np.linalg.norm(vec))


def unit_vector(vec: Vector) -> Vector:
    vec = np.asarray(vec, dtype=np.float64)
    norm = magnitude(vec)
    if norm == 0:
        raise DegenerateInputError("Cannot normalize the zero vector")
    return vec / norm


def dot_product(v1: Vector, v2: Vector) -> float:
    return float(np.dot(v1, v2))


def subtract(v1: Vector, v2: Vector) -> Vector:
    return np.subtract(v1, v2, dtype=np.float64)


def cross_product(v1: Vector, v2: Vector) -> Vector:
    return np.cross(v1, v2).astype(np.float64)


def is_opposite_direction(v1: Vector, v2: Vector) -> bool:
    """True when the angle between v1 and v2 exceeds 90 degrees."""
    return dot_product(v1, v2) < 0


def parallel_component(vec: Vector, onto: Vector) -> Vector:
    """Project vec onto onto. The result is parallel to onto."""
    onto_sq = dot_product(onto, onto)
    if onto_sq == 0:
        raise DegenerateInputError("Cannot project onto the zero vector")
    return (dot_product(vec, onto) / onto_sq) * np.asarray(onto, dtype=np.float64)


def perpendicular_component(vec: Vector, basis: Vector) -> Vector:
    return subtract(vec, parallel_component(vec, basis))


def rotate_toward(vec: Vector, target: Vector, angle_degrees: float) -> Vector:
    """Rotate vec inside the plane it shares with target.

    The angle is measured from vec toward target and the length of vec is
    kept. An orthonormal in-plane pair ``e1, e2`` is built by Gram-Schmidt,
    then ``|vec| * (cos(a) * e1 + sin(a) * e2)`` is returned.
    """
    vec = np.asarray(vec, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)
    if magnitude(target) == 0:
        raise DegenerateInputError("Target direction must be non-zero")
    e1 = unit_vector(vec)
    in_plane = subtract(target, dot_product(target, e1) * e1)
    if magnitude(in_plane) <= COLLINEAR_TOLERANCE * magnitude(target):
        raise CollinearInputError("Vectors are collinear; rotation plane is undefined")
    e2 = unit_vector(in_plane)

    length = magnitude(vec)
    radians = math.radians(angle_degrees)
    return (length * math.cos(radians)) * e1 + (length * math.sin(radians)) * e2


def rotate_about_axis(vec: Vector, axis: Vector, angle_degrees: float) -> Vector:
    """Rotate vec around axis using the right-hand rule."""
    axis = np.asarray(axis, dtype=np.float64)
    if magnitude(axis) == 0:
        raise DegenerateInputError("Rotation axis must be non-zero")
    vec = np.asarray(vec, dtype=np.float64)
    parallel = parallel_component(vec, axis)
    perpendicular = subtract(vec, parallel)
    perp_norm = magnitude(perpendicular)
    if perp_norm <= COLLINEAR_TOLERANCE * magnitude(vec):
        # vec lies on the axis
        return vec.copy()

    w = cross_product(axis, perpendicular)
    radians = math.radians(angle_degrees)
    return (
        parallel
        + perpendicular * math.cos(radians)
        + perp_norm * unit_vector(w) * math.sin(radians)
    )
