from __future__ import annotations

import logging
from typing import Iterable

from .orientation import (
    Orientation,
    OrientationMagnitude,
    find_orientation,
    find_vector_components,
    find_vector_magnitudes,
)
from .vector_math import Vector

logger = logging.getLogger(__name__)


class OrientationFrame:
    """Orientation built once from reference readings and reused per sample."""

    def __init__(
        self,
        v_up: Iterable[float] | Vector,
        v_up_front: Iterable[float] | Vector,
    ) -> None:
        self.orientation = find_orientation(v_up, v_up_front)

    def recalibrate(
        self,
        v_up: Iterable[float] | Vector,
        v_up_front: Iterable[float] | Vector,
    ) -> None:
        """Replace the basis with one built from new reference readings.

        The current basis is kept if the new readings are rejected.
        """
        self.orientation = find_orientation(v_up, v_up_front)
        logger.debug("Frame recalibrated")

    def components(self, vec: Iterable[float] | Vector) -> Orientation:
        return find_vector_components(vec, self.orientation)

    def magnitudes(self, vec: Iterable[float] | Vector) -> OrientationMagnitude:
        return find_vector_magnitudes(vec, self.orientation)

    def snapshot(self) -> Orientation:
        return Orientation(
            v_up=self.orientation.v_up.copy(),
            v_front=self.orientation.v_front.copy(),
            v_right=self.orientation.v_right.copy(),
        )
