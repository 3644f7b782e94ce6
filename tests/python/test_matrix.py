# SPDX-FileCopyrightText: 2025 LichtFeld Studio Authors
# SPDX-License-Identifier: GPL-3.0-or-later
"""Tests for the affine transform helpers."""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

_SRC = Path(__file__).parent.parent.parent / "src" / "python"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from dataref_anim import matrix as mx  # noqa: E402


class TestStoredLayout:
    def test_translation_in_last_axis(self):
        arr = mx.to_array(mx.translation(1, 2, 3))
        assert len(arr) == 16
        assert arr[12:16] == [1.0, 2.0, 3.0, 1.0]
        assert arr[0:4] == [1.0, 0.0, 0.0, 0.0]

    def test_axes_are_contiguous(self):
        arr = mx.to_array(mx.scaling((2, 3, 4)))
        assert arr[0] == 2.0 and arr[5] == 3.0 and arr[10] == 4.0

    def test_decode(self):
        m = mx.rotation((0, 1, 0), 0.7) @ mx.translation(4, 5, 6)
        np.testing.assert_allclose(mx.from_array(mx.to_array(m)), m)

    @pytest.mark.parametrize("size", [0, 12, 17])
    def test_wrong_size(self, size):
        with pytest.raises(ValueError, match="16 elements"):
            mx.from_array([0.0] * size)


class TestBasisScale:
    def test_non_uniform(self):
        m = mx.rotation((1, 1, 0), 0.4) @ mx.scaling((2, 3, 4))
        np.testing.assert_allclose(mx.basis_scale(m), [2, 3, 4])

    def test_identity(self):
        np.testing.assert_allclose(mx.basis_scale(mx.identity()), [1, 1, 1])


class TestInterpolate:
    def test_endpoints_exact(self):
        a = mx.rotation((0, 0, 1), 0.2)
        b = mx.translation(1, 1, 1)
        assert np.array_equal(mx.interpolate(a, b, 0.0), a)
        assert np.array_equal(mx.interpolate(a, b, 1.0), b)

    def test_translation_lerp(self):
        out = mx.interpolate(mx.translation(0, 0, 0), mx.translation(2, 4, 6), 0.25)
        np.testing.assert_allclose(out, mx.translation(0.5, 1, 1.5), atol=1e-12)

    def test_rotation_extrapolates(self):
        a = mx.identity()
        b = mx.rotation((0, 0, 1), math.pi / 4)
        np.testing.assert_allclose(mx.interpolate(a, b, 2.0), mx.rotation((0, 0, 1), math.pi / 2), atol=1e-9)
        np.testing.assert_allclose(mx.interpolate(a, b, -1.0), mx.rotation((0, 0, 1), -math.pi / 4), atol=1e-9)

    def test_result_is_rigid(self):
        a = mx.rotation((1, 2, 3), 0.5)
        b = mx.rotation((3, -1, 0), 2.0) @ mx.translation(1, 0, 0)
        out = mx.interpolate(a, b, 0.37)
        r = out[:3, :3]
        np.testing.assert_allclose(r @ r.T, np.eye(3), atol=1e-9)
        np.testing.assert_allclose(out[3], [0, 0, 0, 1])

    def test_mirrored_pose_keeps_reflection(self):
        m = mx.scaling((-1, 1, 1)) @ mx.translation(1, 0, 0)
        np.testing.assert_allclose(mx.interpolate(m, m, 0.5), m, atol=1e-9)

    def test_mirrored_rotation_is_slerped(self):
        flip = mx.scaling((1, -1, 1))
        a = flip
        b = mx.rotation((0, 0, 1), math.pi / 2) @ flip
        out = mx.interpolate(a, b, 0.5)
        np.testing.assert_allclose(out, mx.rotation((0, 0, 1), math.pi / 4) @ flip, atol=1e-9)
        assert np.linalg.det(out[:3, :3]) == pytest.approx(-1.0)

    def test_quaternion_round_trip(self):
        for axis, angle in (((1, 0, 0), 3.0), ((0, 1, 0), -2.5), ((1, 1, 1), math.pi)):
            r = mx.rotation(axis, angle)[:3, :3]
            q = mx.rotation_to_quaternion(r)
            np.testing.assert_allclose(mx.quaternion_to_rotation(q), r, atol=1e-9)
