# -*- coding: utf-8 -*-
# Tint: Measuring the distance between colors
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Tests for single-color conversions in tint_colorengine.

Test cases:
1. RGB -> HSV reference values, achromatic colors and hue range
2. RGB -> HSL reference values and both saturation branches
3. HSV / HSL inverses round-trip
4. RGB -> XYZ reference white and sRGB linear segment
5. RGB -> XYZ -> RGB and RGB -> Lab -> RGB round-trips
6. XYZ -> Lab -> XYZ round-trips for several white points
7. Lab linear branch near black
8. No clamping of out-of-gamut values
9. Degenerate white points warn and produce non-finite output
10. Wrongly tagged input is rejected
"""

import math

import numpy as np
import pytest

from tint_colorengine import (
    LAB_EPSILON,
    LAB_KAPPA,
    M_SRGB_TO_XYZ,
    REF_WHITE_D50,
    REF_WHITE_D65,
    TWO_PI,
    ColorSpaceEngine,
    hsl_to_rgb,
    hsv_to_rgb,
    lab_to_rgb,
    lab_to_xyz,
    rgb_to_hsl,
    rgb_to_hsv,
    rgb_to_lab,
    rgb_to_xyz,
    xyz_to_lab,
    xyz_to_rgb,
)
from tint_types import HSL, HSV, InvalidInputError, Lab, RGB, XYZ

# The published 7-digit sRGB matrices are inverse to about 1e-7, which the
# dark end of the transfer curve amplifies to a few 1e-4 on the 0..255 scale.
RGB_ROUND_TRIP_ABS = 1e-3

SAMPLE_COLORS = [
    (0, 0, 0),
    (255, 255, 255),
    (128, 128, 128),
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 0),
    (0, 255, 255),
    (255, 0, 255),
    (255, 0, 1),
    (12, 200, 97),
    (240, 128, 128),
    (1, 2, 3),
]


def assert_triplet(actual, expected, **tol):
    assert tuple(actual) == pytest.approx(tuple(expected), **tol)


# ============================================================================
# HSV
# ============================================================================

@pytest.mark.parametrize("rgb, expected", [
    ((255, 0, 0), (0.0, 1.0, 1.0)),
    ((0, 255, 0), (2.0 * math.pi / 3.0, 1.0, 1.0)),
    ((0, 0, 255), (4.0 * math.pi / 3.0, 1.0, 1.0)),
    ((255, 255, 0), (math.pi / 3.0, 1.0, 1.0)),
    ((0, 0, 0), (0.0, 0.0, 0.0)),
    ((255, 255, 255), (0.0, 0.0, 1.0)),
    ((128, 128, 128), (0.0, 0.0, 128.0 / 255.0)),
])
def test_rgb_to_hsv_reference(rgb, expected):
    """Primaries, secondaries and greys map to their textbook HSV values."""
    hsv = rgb_to_hsv(rgb)
    assert isinstance(hsv, HSV)
    assert_triplet(hsv, expected, abs=1e-12)


def test_rgb_to_hsv_hue_just_below_full_turn():
    """Red with a trace of blue wraps to just under 2*pi, never to a negative hue."""
    h = rgb_to_hsv((255, 0, 1)).h
    assert 0.0 <= h < TWO_PI
    assert h == pytest.approx(math.radians(360.0 - 60.0 / 255.0), rel=1e-12)


def test_rgb_to_hsv_hue_range(rgb_grid):
    """Hue stays in [0, 2*pi) and s, v in [0, 1] for all in-gamut inputs."""
    for rgb in rgb_grid:
        h, s, v = rgb_to_hsv(rgb)
        assert 0.0 <= h < TWO_PI
        assert 0.0 <= s <= 1.0
        assert 0.0 <= v <= 1.0


# ============================================================================
# HSL
# ============================================================================

@pytest.mark.parametrize("rgb, expected", [
    ((255, 0, 0), (0.0, 1.0, 0.5)),
    ((0, 128, 0), (2.0 * math.pi / 3.0, 1.0, 64.0 / 255.0)),
    ((255, 128, 128), (0.0, 1.0, (255.0 + 128.0) / 510.0)),
    ((0, 0, 0), (0.0, 0.0, 0.0)),
    ((255, 255, 255), (0.0, 0.0, 1.0)),
])
def test_rgb_to_hsl_reference(rgb, expected):
    """Dark and light colors both use the right saturation branch."""
    hsl = rgb_to_hsl(rgb)
    assert isinstance(hsl, HSL)
    assert_triplet(hsl, expected, abs=1e-12)


def test_rgb_to_hsl_saturation_bounded(rgb_grid):
    """Saturation never exceeds 1, even for very light colors."""
    for rgb in rgb_grid:
        h, s, lightness = rgb_to_hsl(rgb)
        assert 0.0 <= h < TWO_PI
        assert 0.0 <= s <= 1.0 + 1e-12
        assert 0.0 <= lightness <= 1.0


# ============================================================================
# Inverses
# ============================================================================

@pytest.mark.parametrize("rgb", SAMPLE_COLORS)
def test_hsv_round_trip(rgb):
    """hsv_to_rgb undoes rgb_to_hsv."""
    back = hsv_to_rgb(rgb_to_hsv(rgb))
    assert isinstance(back, RGB)
    assert_triplet(back, rgb, abs=1e-9)


@pytest.mark.parametrize("rgb", SAMPLE_COLORS)
def test_hsl_round_trip(rgb):
    """hsl_to_rgb undoes rgb_to_hsl."""
    back = hsl_to_rgb(rgb_to_hsl(rgb))
    assert isinstance(back, RGB)
    assert_triplet(back, rgb, abs=1e-9)


def test_hsv_to_rgb_reduces_hue():
    """Hue angles outside [0, 2*pi) are reduced modulo a full turn."""
    assert_triplet(hsv_to_rgb((TWO_PI + 2.0 * math.pi / 3.0, 1.0, 1.0)), (0, 255, 0), abs=1e-9)
    assert_triplet(hsv_to_rgb((-math.pi / 3.0, 1.0, 1.0)), (255, 0, 255), abs=1e-9)


# ============================================================================
# XYZ
# ============================================================================

def test_rgb_to_xyz_white():
    """sRGB white lands on the sum of the matrix rows, with Y = 1."""
    xyz = rgb_to_xyz((255, 255, 255))
    assert isinstance(xyz, XYZ)
    assert_triplet(xyz, M_SRGB_TO_XYZ.sum(axis=1), rel=1e-12)
    assert xyz.y == pytest.approx(1.0, abs=1e-6)


def test_rgb_to_xyz_black():
    """Black maps to the origin."""
    assert_triplet(rgb_to_xyz((0, 0, 0)), (0.0, 0.0, 0.0), abs=0.0)


def test_rgb_to_xyz_linear_segment():
    """Dark channels are linearised with the 12.92 slope."""
    linear = (10.0 / 255.0) / 12.92
    assert_triplet(rgb_to_xyz((10, 10, 10)), M_SRGB_TO_XYZ.sum(axis=1) * linear, rel=1e-12)


def test_rgb_to_xyz_power_segment():
    """Brighter channels follow the 2.4 power curve."""
    linear = ((128.0 / 255.0 + 0.055) / 1.055) ** 2.4
    assert_triplet(rgb_to_xyz((128, 0, 0)), M_SRGB_TO_XYZ[:, 0] * linear, rel=1e-12)


def test_rgb_xyz_round_trip(rgb_grid):
    """xyz_to_rgb undoes rgb_to_xyz across the linear/power threshold."""
    for rgb in rgb_grid:
        assert_triplet(xyz_to_rgb(rgb_to_xyz(rgb)), rgb, abs=RGB_ROUND_TRIP_ABS)


def test_xyz_to_rgb_does_not_clamp():
    """Out-of-gamut XYZ comes back outside 0..255."""
    r, g, b = xyz_to_rgb((0.9, 0.1, 0.0))
    assert r > 255.0
    assert g < 0.0


# ============================================================================
# Lab
# ============================================================================

@pytest.mark.parametrize("white", [REF_WHITE_D65, REF_WHITE_D50, (1.0, 1.0, 1.0)])
def test_white_point_maps_to_l100(white):
    """The reference white itself is L* = 100 with no chroma."""
    assert_triplet(xyz_to_lab(white, white), (100.0, 0.0, 0.0), abs=1e-9)
    assert_triplet(lab_to_xyz((100.0, 0.0, 0.0), white), tuple(white), rel=1e-12)


def test_black_maps_to_origin():
    """Zero XYZ is L* = 0 through the linear branch."""
    assert_triplet(xyz_to_lab((0.0, 0.0, 0.0)), (0.0, 0.0, 0.0), abs=1e-12)


def test_xyz_to_lab_linear_branch():
    """Below epsilon the cube root is replaced by kappa * t."""
    xyz = (0.005, 0.005, 0.005)
    assert all(c / w <= LAB_EPSILON for c, w in zip(xyz, REF_WHITE_D65))
    xr, yr, zr = (c / w for c, w in zip(xyz, REF_WHITE_D65))
    L, a, b = xyz_to_lab(xyz)
    assert L == pytest.approx(LAB_KAPPA * yr, rel=1e-12)
    assert a == pytest.approx(500.0 * LAB_KAPPA * (xr - yr) / 116.0, rel=1e-9)
    assert b == pytest.approx(200.0 * LAB_KAPPA * (yr - zr) / 116.0, rel=1e-9)


def test_lab_to_xyz_linear_branch():
    """Lightness at or below 8 recovers Y as L / kappa."""
    x, y, z = lab_to_xyz((4.0, 0.0, 0.0))
    assert y == pytest.approx(4.0 / LAB_KAPPA * REF_WHITE_D65.y, rel=1e-12)


def test_xyz_lab_round_trip(white_points, rgb_grid):
    """lab_to_xyz undoes xyz_to_lab for any strictly positive white point."""
    for white in white_points:
        for rgb in rgb_grid[::7]:
            xyz = rgb_to_xyz(rgb)
            back = lab_to_xyz(xyz_to_lab(xyz, white), white)
            assert_triplet(back, xyz, rel=1e-9, abs=1e-12)


def test_xyz_lab_round_trip_threshold():
    """Values straddling epsilon survive the round-trip on both branches."""
    for y in (LAB_EPSILON * 0.999, LAB_EPSILON, LAB_EPSILON * 1.001):
        xyz = (y * REF_WHITE_D65.x, y, y * REF_WHITE_D65.z)
        assert_triplet(lab_to_xyz(xyz_to_lab(xyz)), xyz, rel=1e-9)


def test_rgb_to_lab_white_and_black():
    """sRGB white is L* ~ 100 against D65; black is the origin."""
    L, a, b = rgb_to_lab((255, 255, 255))
    assert L == pytest.approx(100.0, abs=1e-3)
    assert a == pytest.approx(0.0, abs=1e-2)
    assert b == pytest.approx(0.0, abs=1e-2)
    assert_triplet(rgb_to_lab((0, 0, 0)), (0.0, 0.0, 0.0), abs=1e-12)


def test_rgb_to_lab_matches_two_step():
    """The pipeline equals rgb_to_xyz followed by xyz_to_lab."""
    for rgb in SAMPLE_COLORS:
        for white in (REF_WHITE_D65, REF_WHITE_D50):
            lab = rgb_to_lab(rgb, white)
            assert isinstance(lab, Lab)
            assert_triplet(lab, xyz_to_lab(rgb_to_xyz(rgb), white), rel=1e-12, abs=1e-12)


def test_rgb_lab_round_trip(rgb_grid):
    """lab_to_rgb undoes rgb_to_lab."""
    for rgb in rgb_grid:
        assert_triplet(lab_to_rgb(rgb_to_lab(rgb)), rgb, abs=RGB_ROUND_TRIP_ABS)


def test_known_lab_value():
    """Pure sRGB red against D65 has the familiar Lab coordinates."""
    assert_triplet(rgb_to_lab((255, 0, 0)), (53.24, 80.09, 67.20), abs=0.05)


# ============================================================================
# Degenerate input
# ============================================================================

@pytest.mark.parametrize("white", [(0.0, 1.0, 1.0), (0.95, 0.0, 1.09)])
def test_zero_white_point_warns(white):
    """A zero white component warns and yields non-finite Lab instead of raising."""
    with pytest.warns(RuntimeWarning, match="non-positive"):
        lab = xyz_to_lab((0.5, 0.5, 0.5), white)
    assert not all(np.isfinite(tuple(lab)))


def test_negative_white_point_warns():
    """Negative white components are flagged too, though the result stays finite."""
    with pytest.warns(RuntimeWarning, match="non-positive"):
        xyz_to_lab((0.5, 0.5, 0.5), (0.95, -1.0, 1.09))


def test_zero_white_point_lab_to_xyz_warns():
    """The inverse direction reports the same degenerate white point."""
    with pytest.warns(RuntimeWarning):
        lab_to_xyz((50.0, 10.0, 10.0), (0.0, 0.0, 0.0))


@pytest.mark.parametrize("call", [
    lambda: rgb_to_hsv("red"),
    lambda: rgb_to_hsv((255, 0)),
    lambda: rgb_to_hsl((255, "0", 0)),
    lambda: xyz_to_lab(Lab(50.0, 0.0, 0.0)),
    lambda: lab_to_xyz(XYZ(0.5, 0.5, 0.5)),
    lambda: xyz_to_lab((0.5, 0.5, 0.5), white=Lab(100.0, 0.0, 0.0)),
    lambda: xyz_to_rgb(None),
    lambda: hsv_to_rgb(RGB(1, 2, 3)),
])
def test_invalid_input_rejected(call):
    """Non-numeric, wrongly sized or wrongly tagged input raises InvalidInputError."""
    with pytest.raises(InvalidInputError):
        call()


def test_engine_and_module_functions_agree():
    """Module-level functions are the engine's static methods."""
    assert ColorSpaceEngine.rgb_to_lab((12, 34, 56)) == rgb_to_lab((12, 34, 56))
    assert ColorSpaceEngine.rgb_to_hsv is rgb_to_hsv


def test_numpy_input_accepted():
    """A 1-D NumPy vector is a valid triplet."""
    assert rgb_to_xyz(np.array([10, 20, 30], dtype=np.uint8)) == rgb_to_xyz((10, 20, 30))
