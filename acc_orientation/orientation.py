"""Up/Front/Right basis construction and vector decomposition."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np

from .vector_math import (
    Vector,
    is_opposite_direction,
    magnitude,
    parallel_component,
    rotate_about_axis,
    rotate_toward,
    to_vector,
    unit_vector,
)

logger = logging.getLogger(__name__)

QUARTER_TURN = 90.0  # degrees


@dataclass(frozen=True, slots=True, eq=False)
class Orientation:
    """Three mutually orthogonal axes of a body-fixed frame."""

    v_up: Vector
    v_front: Vector
    v_right: Vector

    def __iter__(self) -> Iterator[Vector]:
        return iter((self.v_up, self.v_front, self.v_right))

    def normalized(self) -> Orientation:
        return Orientation(
            v_up=unit_vector(self.v_up),
            v_front=unit_vector(self.v_front),
            v_right=unit_vector(self.v_right),
        )

    def as_matrix(self) -> np.ndarray:
        """Rows are up, front and right."""
        return np.vstack((self.v_up, self.v_front, self.v_right))


@dataclass(frozen=True, slots=True)
class OrientationMagnitude:
    """Signed lengths of a vector along up, front and right.

    Negative values mean down, back and left respectively.
    """

    up: float
    front: float
    right: float

    def as_tuple(self) -> tuple[float, float, float]:
        return self.up, self.front, self.right


def default_orientation(scale: float = 1.0) -> Orientation:
    """Axis-aligned frame: up is +Z, front is +Y, right is +X."""
    return Orientation(
        v_up=np.array([0.0, 0.0, scale]),
        v_front=np.array([0.0, scale, 0.0]),
        v_right=np.array([scale, 0.0, 0.0]),
    )


def find_orientation(
    v_up: Iterable[float] | Vector,
    v_up_front: Iterable[float] | Vector,
) -> Orientation:
    """Build the Up/Front/Right basis from two reference readings.

    ``v_up`` is usually gravity measured at rest and ``v_up_front`` a second
    reading that leans toward the front, e.g. gravity plus forward
    acceleration. Front is ``v_up`` turned toward ``v_up_front`` and right is
    ``v_up`` turned around front. Every axis keeps the length of ``v_up``.

    Raises ``DegenerateInputError`` for zero inputs and
    ``CollinearInputError`` when the two readings are parallel.
    """
    up = to_vector(v_up)
    up_front = to_vector(v_up_front)

    v_front = rotate_toward(up, up_front, QUARTER_TURN)
    v_right = rotate_about_axis(up, v_front, QUARTER_TURN)
    logger.debug("Built orientation up=%s front=%s right=%s", up, v_front, v_right)
    return Orientation(v_up=up.copy(), v_front=v_front, v_right=v_right)


def find_vector_components(
    vec: Iterable[float] | Vector,
    orientation: Orientation,
) -> Orientation:
    """Project vec onto each axis of the orientation."""
    v = to_vector(vec)
    return Orientation(
        v_up=parallel_component(v, orientation.v_up),
        v_front=parallel_component(v, orientation.v_front),
        v_right=parallel_component(v, orientation.v_right),
    )


def _signed_length(axis: Vector, component: Vector) -> float:
    length = magnitude(component)
    if is_opposite_direction(axis, component):
        return -length
    return length


def find_vector_magnitudes(
    vec: Iterable[float] | Vector,
    orientation: Orientation,
) -> OrientationMagnitude:
    components = find_vector_components(vec, orientation)
    return OrientationMagnitude(
        up=_signed_length(orientation.v_up, components.v_up),
        front=_signed_length(orientation.v_front, components.v_front),
        right=_signed_length(orientation.v_right, components.v_right),
    )
