# -*- coding: utf-8 -*-
# Tint: Measuring the distance between colors
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Shared fixtures for the Tint test suite."""

import itertools

import pytest

# Channel levels chosen to hit both sides of the sRGB linear/power threshold
# (10/255 is linear, 11/255 is on the power curve) plus the extremes.
CHANNEL_LEVELS = (0, 1, 10, 11, 64, 128, 200, 254, 255)


@pytest.fixture(scope="session")
def rgb_grid():
    """Every combination of CHANNEL_LEVELS as (r, g, b) tuples."""
    return list(itertools.product(CHANNEL_LEVELS, repeat=3))


@pytest.fixture(scope="session")
def white_points():
    """Strictly positive reference whites, including non-standard ones."""
    return [
        (0.950455, 1.0, 1.088753),   # D65
        (0.96422, 1.0, 0.82521),     # D50
        (1.0, 1.0, 1.0),             # equal-energy E
        (0.5, 2.0, 0.25),            # arbitrary, far from daylight
    ]
