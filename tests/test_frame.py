from __future__ import annotations

import numpy as np
import pytest

from acc_orientation import CollinearInputError, OrientationFrame, find_orientation
from acc_orientation.vector_math import dot_product, magnitude


def test_frame_matches_find_orientation():
    frame = OrientationFrame((0.0, 0.0, -9.8), (0.0, 3.0, -9.8))
    expected = find_orientation((0.0, 0.0, -9.8), (0.0, 3.0, -9.8))
    for a, b in zip(frame.orientation, expected):
        assert np.array_equal(a, b)


def test_frame_resolves_stream_of_samples():
    frame = OrientationFrame((0.0, 0.0, 1.0), (1.0, 0.0, 1.0))
    samples = [(0.0, 0.0, 9.8), (2.0, 0.0, 9.8), (-1.0, 0.5, 9.8)]
    fronts = [frame.magnitudes(sample).front for sample in samples]
    assert fronts == pytest.approx([0.0, 2.0, -1.0], abs=1e-9)
    rights = [frame.magnitudes(sample).right for sample in samples]
    assert rights == pytest.approx([0.0, 0.0, -0.5], abs=1e-9)
    assert np.allclose(frame.components(samples[1]).v_front, [2.0, 0.0, 0.0])


def test_recalibrate_replaces_basis():
    frame = OrientationFrame((0.0, 0.0, 1.0), (1.0, 0.0, 1.0))
    frame.recalibrate((0.0, 0.0, 1.0), (0.0, 1.0, 1.0))
    assert np.allclose(frame.orientation.v_front, [0.0, 1.0, 0.0])


def test_recalibrate_with_collinear_readings_keeps_basis():
    frame = OrientationFrame((0.0, 0.0, 1.0), (1.0, 0.0, 1.0))
    before = frame.snapshot()
    with pytest.raises(CollinearInputError):
        frame.recalibrate((0.0, 0.0, 1.0), (0.0, 0.0, 4.0))
    assert np.array_equal(frame.orientation.v_front, before.v_front)


def test_snapshot_is_a_copy():
    frame = OrientationFrame((0.0, 0.0, 1.0), (1.0, 0.0, 1.0))
    snapshot = frame.snapshot()
    snapshot.v_up[2] = 42.0
    assert frame.orientation.v_up[2] == 1.0



def test_recalibrated_frames_stay_orthogonal():
    frame = OrientationFrame((0.0, 0.0, 1.0), (1.0, 0.0, 1.0))
    readings = [
        ((0.0, 0.0, 2.0), (1.0, 0.0, 1.0)),
        ((0.1, -0.2, 9.8), (1.5, 0.3, 9.6)),
        ((-16.0, -15.0, -975.0), (-185.0, 300.0, -910.0)),
    ]
    for v_up, v_up_front in readings:
        frame.recalibrate(v_up, v_up_front)
        up, front, right = frame.orientation
        scale = magnitude(up) ** 2
        assert abs(dot_product(up, front)) < 1e-9 * scale
        assert abs(dot_product(up, right)) < 1e-9 * scale
        assert abs(dot_product(front, right)) < 1e-9 * scale
        assert magnitude(front) == pytest.approx(magnitude(up))
        assert magnitude(right) == pytest.approx(magnitude(up))
        result = frame.magnitudes(up)
        assert result.front == pytest.approx(0.0, abs=1e-9 * magnitude(up))
        assert result.right == pytest.approx(0.0, abs=1e-9 * magnitude(up))
