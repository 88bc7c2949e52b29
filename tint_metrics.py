# -*- coding: utf-8 -*-
"""
Tint: Measuring the distance between colors
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Perceptual color-difference metrics on pairs of L*a*b* colors.

``delta_E_2000`` implements CIEDE2000 following the implementation notes of
Sharma, Wu & Dalal, including their conventions for achromatic colors:
when either chroma is zero the hue difference is 0 and the mean hue is the
plain sum of the two hue angles.  The metric is symmetric in its arguments.

References:
    - Sharma, G., Wu, W., & Dalal, E. N. (2005). "The CIEDE2000
      color-difference formula: Implementation notes, supplementary test
      data, and mathematical observations". Color Res. Appl. 30(1).
    - CIE 15:2004 "Colorimetry" (CIE 1976 colour difference).
"""

import numpy as np
from numba import njit, float64
from typing import Final, Optional, Sequence, Tuple, Union

from tint_colorengine import DEG2RAD
from tint_types import DE2000Weights, Lab, TripletLike

__all__ = [
    "C25_7",
    "ColorMetrics",
    "delta_E_2000",
    "delta_E_76",
]

C25_7: Final[float] = 25.0**7
_HUE_TIE_DEG: Final[float] = 1e-9


@njit(float64(float64, float64), cache=True, error_model="numpy")
def _hue_angle_deg(b: float, a_p: float) -> float:
    """Hue angle of (a', b) in degrees [0, 360); 0 for the zero vector."""
    if a_p == 0.0 and b == 0.0:
        return 0.0
    h = np.degrees(np.arctan2(b, a_p))
    if h < 0.0:
        h += 360.0
    return h

@njit(float64(float64, float64, float64, float64, float64, float64, float64, float64, float64), cache=True, error_model="numpy")
def _delta_e_2000_single(L1: float, a1: float, b1: float, L2: float, a2: float, b2: float, k_L: float, k_C: float, k_H: float) -> float:
    """Single-pair CIEDE2000 with parametric factors."""
    C1 = np.hypot(a1, b1)
    C2 = np.hypot(a2, b2)
    C_bar = (C1 + C2) * 0.5
    C_bar_7 = C_bar**7
    G = 0.5 * (1.0 - np.sqrt(C_bar_7 / (C_bar_7 + C25_7)))
    scale = 1.0 + G
    a1_p = scale * a1
    a2_p = scale * a2
    C1_p = np.hypot(a1_p, b1)
    C2_p = np.hypot(a2_p, b2)
    # Hue arithmetic is done in degrees, the units of the reference data set;
    # the 180-degree branch tests are sensitive to the last bit.
    h1_p = _hue_angle_deg(b1, a1_p)
    h2_p = _hue_angle_deg(b2, a2_p)

    dL_p = L2 - L1
    dC_p = C2_p - C1_p

    # An achromatic color has no hue; it must not contribute a hue difference.
    # Exact 180-degree ties belong to the unwrapped branch in both dh' and the
    # mean hue; atan2 rounding can push such a tie a few ulps over.
    C_prod = C1_p * C2_p
    dh_p = 0.0
    if C_prod != 0.0:
        diff = h2_p - h1_p
        if abs(diff) <= 180.0 + _HUE_TIE_DEG:
            dh_p = diff
        elif diff > 180.0:
            dh_p = diff - 360.0
        else:
            dh_p = diff + 360.0
    dH_p = 2.0 * np.sqrt(C_prod) * np.sin((dh_p * DEG2RAD) * 0.5)

    L_bar_p = (L1 + L2) * 0.5
    C_bar_p = (C1_p + C2_p) * 0.5
    h_bar_p = h1_p + h2_p
    if C_prod != 0.0:
        if abs(h1_p - h2_p) <= 180.0 + _HUE_TIE_DEG:
            h_bar_p *= 0.5
        elif h_bar_p < 360.0:
            h_bar_p = (h_bar_p + 360.0) * 0.5
        else:
            h_bar_p = (h_bar_p - 360.0) * 0.5

    T = 1.0 - 0.17 * np.cos((h_bar_p - 30.0) * DEG2RAD) + \
        0.24 * np.cos((2.0 * h_bar_p) * DEG2RAD) + \
        0.32 * np.cos((3.0 * h_bar_p + 6.0) * DEG2RAD) - \
        0.20 * np.cos((4.0 * h_bar_p - 63.0) * DEG2RAD)
    d_theta = 30.0 * np.exp(-((h_bar_p - 275.0) / 25.0)**2)
    C_bar_p_7 = C_bar_p**7
    RC = 2.0 * np.sqrt(C_bar_p_7 / (C_bar_p_7 + C25_7))
    RT = -np.sin((2.0 * d_theta) * DEG2RAD) * RC
    L_term = (L_bar_p - 50.0)**2
    SL = 1.0 + (0.015 * L_term) / np.sqrt(20.0 + L_term)
    SC = 1.0 + 0.045 * C_bar_p
    SH = 1.0 + 0.015 * C_bar_p * T

    term_L = dL_p / (k_L * SL)
    term_C = dC_p / (k_C * SC)
    term_H = dH_p / (k_H * SH)
    return np.sqrt(term_L * term_L + term_C * term_C + term_H * term_H + RT * term_C * term_H)

@njit(float64(float64, float64, float64, float64, float64, float64), cache=True, error_model="numpy")
def _delta_e_76_single(L1: float, a1: float, b1: float, L2: float, a2: float, b2: float) -> float:
    dL = L1 - L2
    da = a1 - a2
    db = b1 - b2
    return np.sqrt(dL*dL + da*da + db*db)


class ColorMetrics:
    @staticmethod
    def _prepare_inputs(lab1: TripletLike, lab2: TripletLike) -> Tuple[Lab, Lab]:
        """Tag both operands as Lab, rejecting anything else before computing."""
        return Lab.coerce(lab1), Lab.coerce(lab2)

    @staticmethod
    def delta_E_2000(lab1: TripletLike, lab2: TripletLike,
                     weights: Optional[Union[DE2000Weights, Sequence[float]]] = None) -> float:
        """
        Calculates CIEDE2000 Color Difference.

        Args:
            lab1: First color (``Lab`` or a 3-sequence of numbers).
            lab2: Second color.
            weights: Parametric factors k_L, k_C, k_H, as ``DE2000Weights``
                     or a plain 3-sequence.  Defaults to ``DE2000Weights()``
                     (all 1.0, reference conditions);
                     ``DE2000Weights.textiles()`` gives the textile preset.

        Returns:
            Non-negative distance.  0 for identical inputs, and
            ``delta_E_2000(c1, c2) == delta_E_2000(c2, c1)``.
        """
        weights = DE2000Weights() if weights is None else DE2000Weights.coerce(weights)
        l1, l2 = ColorMetrics._prepare_inputs(lab1, lab2)
        return float(_delta_e_2000_single(l1.L, l1.a, l1.b, l2.L, l2.a, l2.b,
                                          weights.k_L, weights.k_C, weights.k_H))

    @staticmethod
    def delta_E_76(lab1: TripletLike, lab2: TripletLike) -> float:
        """
        Calculates CIE Delta E 1976 (Euclidean distance in Lab).

        Args:
            lab1: First color.
            lab2: Second color.
        """
        l1, l2 = ColorMetrics._prepare_inputs(lab1, lab2)
        return float(_delta_e_76_single(l1.L, l1.a, l1.b, l2.L, l2.a, l2.b))


delta_E_2000 = ColorMetrics.delta_E_2000
delta_E_76 = ColorMetrics.delta_E_76
