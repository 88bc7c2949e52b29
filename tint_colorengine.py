# -*- coding: utf-8 -*-
"""
Tint: Measuring the distance between colors
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Space Engine
==================
Single-color conversions between sRGB and the perceptual color spaces
HSV, HSL, CIE XYZ and CIE L*a*b*.

Every public operation takes one triplet and returns one triplet.  The
arithmetic lives in small Numba kernels compiled once per process (and
cached on disk); the Python layer only validates and tags values.

Numerical conventions:
1. Hue is expressed in radians, in [0, 2*pi).
2. RGB channels are on the 0..255 scale at the API boundary.  Values are
   never clamped, so out-of-gamut XYZ produces RGB outside 0..255.
3. Kernels run with IEEE 754 semantics (``error_model="numpy"``): a zero
   white-point component gives ``inf``/``nan`` instead of raising.
4. The sRGB linear segment uses the IEC 61966-2-1 slope of exactly 12.92
   in both directions, so RGB -> XYZ -> RGB round-trips for dark channels.

References:
    - CIE 15:2004 "Colorimetry"
    - IEC 61966-2-1:1999 (sRGB Standard)
    - Lindbloom, B. "RGB/XYZ Matrices", "Lab to XYZ" (brucelindbloom.com)
"""

import warnings
import numpy as np
from numba import njit, float64
from numba.types import UniTuple
from typing import Final

from tint_types import HSL, HSV, Lab, RGB, XYZ, TripletLike, coerce_input

__all__ = [
    # --- Constants ---
    "REF_WHITE_D65",
    "REF_WHITE_D50",
    "LAB_EPSILON",
    "LAB_KAPPA",
    "DEG2RAD",
    "RAD2DEG",
    "TWO_PI",

    # --- Matrices ---
    "M_SRGB_TO_XYZ",
    "M_XYZ_TO_SRGB",

    # --- Classes ---
    "ColorSpaceEngine",

    # --- Functions ---
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_xyz",
    "xyz_to_rgb",
    "xyz_to_lab",
    "lab_to_xyz",
    "rgb_to_lab",
    "lab_to_rgb",
]

# --- Constants ---

# Standard Illuminants (Y=1.0)
# D65: Average daylight (approx 6500K)
REF_WHITE_D65: Final[XYZ] = XYZ(0.950455, 1.0, 1.088753)
# D50: Horizon daylight (approx 5000K), standard for printing (ICC)
REF_WHITE_D50: Final[XYZ] = XYZ(0.96422, 1.0, 0.82521)

# sRGB Matrices (D65), IEC 61966-2-1 primaries.
# Read-only so the Numba kernels can freeze them as compile-time constants.
M_SRGB_TO_XYZ: Final[np.ndarray] = np.array([
    [ 0.4124564,  0.3575761,  0.1804375],
    [ 0.2126729,  0.7151522,  0.0721750],
    [ 0.0193339,  0.1191920,  0.9503041]
], dtype=np.float64)
M_SRGB_TO_XYZ.setflags(write=False)

M_XYZ_TO_SRGB: Final[np.ndarray] = np.array([
    [ 3.2404542, -1.5371385, -0.4985314],
    [-0.9692660,  1.8760108,  0.0415560],
    [ 0.0556434, -0.2040259,  1.0572252]
], dtype=np.float64)
M_XYZ_TO_SRGB.setflags(write=False)

# --- Exact Rational Math Constants ---
# Defined by CIE 1976 for the Lab transformation.
# epsilon = (6/29)^3 is where f(t) switches from the cube root to the line.
LAB_EPSILON: Final[float] = 216.0 / 24389.0   # ~0.008856
LAB_KAPPA: Final[float]   = 24389.0 / 27.0    # ~903.296

DEG2RAD: Final[float]     = np.pi / 180.0
RAD2DEG: Final[float]     = 180.0 / np.pi
TWO_PI: Final[float]      = 2.0 * np.pi

_TRIPLET = UniTuple(float64, 3)


# =============================================================================
# 1. TRANSFER FUNCTIONS (Numba)
# =============================================================================

@njit(float64(float64), cache=True, error_model="numpy")
def _gamma_srgb(linear: float) -> float:
    """sRGB OETF (linear light -> encoded), IEC 61966-2-1."""
    if linear <= 0.0031308:
        return 12.92 * linear
    return 1.055 * (linear ** (1.0 / 2.4)) - 0.055

@njit(float64(float64), cache=True, error_model="numpy")
def _inverse_gamma_srgb(srgb: float) -> float:
    """sRGB EOTF (encoded -> linear light), IEC 61966-2-1."""
    # IEC 61966-2-1 defines the slope as exactly 12.92
    if srgb <= 0.04045:
        return srgb / 12.92
    return ((srgb + 0.055) / 1.055) ** 2.4

@njit(float64(float64), cache=True, error_model="numpy")
def _lab_f(t: float) -> float:
    """
    Non-linear transfer function f(t) for CIELAB.

    Cube root above epsilon, with a linear segment near zero to avoid the
    infinite slope of t^(1/3) at the origin.
    """
    if t > LAB_EPSILON:
        return t ** (1.0 / 3.0)
    return (LAB_KAPPA * t + 16.0) / 116.0

@njit(float64(float64), cache=True, error_model="numpy")
def _lab_f_inv(f: float) -> float:
    """
    Inverse of ``_lab_f`` for the X and Z axes.

    Uses the multiplication form (116*f - 16)/kappa to keep the linear
    branch exact near the threshold.
    """
    f3 = f * f * f
    if f3 > LAB_EPSILON:
        return f3
    return (116.0 * f - 16.0) / LAB_KAPPA

@njit(float64(float64, float64, float64), cache=True, error_model="numpy")
def _hue_to_channel(p: float, q: float, t: float) -> float:
    """HSL helper: one channel from the hue position t (in turns)."""
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


# =============================================================================
# 2. CONVERSION KERNELS (Numba)
# =============================================================================

@njit(_TRIPLET(float64, float64, float64), cache=True, error_model="numpy")
def _rgb_to_hsv_kernel(r: float, g: float, b: float) -> tuple:
    mx = max(r, g, b)
    mn = min(r, g, b)
    # Achromatic: hue is undefined, report 0 before any division by (mx - mn)
    if mx == mn:
        h = 0.0
    elif mx == r:
        if g >= b:
            h = 60.0 * (g - b) / (mx - mn)
        else:
            h = 360.0 + 60.0 * (g - b) / (mx - mn)
    elif mx == g:
        h = 120.0 + 60.0 * (b - r) / (mx - mn)
    else:
        h = 240.0 + 60.0 * (r - g) / (mx - mn)
    h = (h * DEG2RAD) % TWO_PI

    s = 0.0 if mx == 0.0 else 1.0 - mn / mx
    return h, s, mx / 255.0

@njit(_TRIPLET(float64, float64, float64), cache=True, error_model="numpy")
def _hsv_to_rgb_kernel(h: float, s: float, v: float) -> tuple:
    c = v * s
    sector = (h % TWO_PI) / (np.pi / 3.0)
    x = c * (1.0 - abs(sector % 2.0 - 1.0))
    m = v - c
    if sector < 1.0:
        r, g, b = c, x, 0.0
    elif sector < 2.0:
        r, g, b = x, c, 0.0
    elif sector < 3.0:
        r, g, b = 0.0, c, x
    elif sector < 4.0:
        r, g, b = 0.0, x, c
    elif sector < 5.0:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x
    return (r + m) * 255.0, (g + m) * 255.0, (b + m) * 255.0

@njit(_TRIPLET(float64, float64, float64), cache=True, error_model="numpy")
def _rgb_to_hsl_kernel(r: float, g: float, b: float) -> tuple:
    r /= 255.0
    g /= 255.0
    b /= 255.0
    mx = max(r, g, b)
    mn = min(r, g, b)
    delta = mx - mn
    lightness = (mx + mn) * 0.5

    if mx == mn:
        return 0.0, 0.0, lightness

    if mx == r:
        h = (g - b) / delta + (6.0 if g < b else 0.0)
    elif mx == g:
        h = (b - r) / delta + 2.0
    else:
        h = (r - g) / delta + 4.0
    h = h / 6.0 * TWO_PI

    # Two-branch form keeps saturation <= 1 for light colours
    if lightness > 0.5:
        s = delta / (2.0 - mx - mn)
    else:
        s = delta / (mx + mn)
    return h, s, lightness

@njit(_TRIPLET(float64, float64, float64), cache=True, error_model="numpy")
def _hsl_to_rgb_kernel(h: float, s: float, lightness: float) -> tuple:
    if s == 0.0:
        grey = lightness * 255.0
        return grey, grey, grey
    if lightness < 0.5:
        q = lightness * (1.0 + s)
    else:
        q = lightness + s - lightness * s
    p = 2.0 * lightness - q
    turn = (h % TWO_PI) / TWO_PI
    return (_hue_to_channel(p, q, turn + 1.0 / 3.0) * 255.0,
            _hue_to_channel(p, q, turn) * 255.0,
            _hue_to_channel(p, q, turn - 1.0 / 3.0) * 255.0)

@njit(_TRIPLET(float64, float64, float64), cache=True, error_model="numpy")
def _rgb_to_xyz_kernel(r: float, g: float, b: float) -> tuple:
    lr = _inverse_gamma_srgb(r / 255.0)
    lg = _inverse_gamma_srgb(g / 255.0)
    lb = _inverse_gamma_srgb(b / 255.0)
    m = M_SRGB_TO_XYZ
    return (m[0, 0] * lr + m[0, 1] * lg + m[0, 2] * lb,
            m[1, 0] * lr + m[1, 1] * lg + m[1, 2] * lb,
            m[2, 0] * lr + m[2, 1] * lg + m[2, 2] * lb)

@njit(_TRIPLET(float64, float64, float64), cache=True, error_model="numpy")
def _xyz_to_rgb_kernel(x: float, y: float, z: float) -> tuple:
    m = M_XYZ_TO_SRGB
    lr = m[0, 0] * x + m[0, 1] * y + m[0, 2] * z
    lg = m[1, 0] * x + m[1, 1] * y + m[1, 2] * z
    lb = m[2, 0] * x + m[2, 1] * y + m[2, 2] * z
    return (_gamma_srgb(lr) * 255.0,
            _gamma_srgb(lg) * 255.0,
            _gamma_srgb(lb) * 255.0)

@njit(_TRIPLET(float64, float64, float64, float64, float64, float64), cache=True, error_model="numpy")
def _xyz_to_lab_kernel(x: float, y: float, z: float, xw: float, yw: float, zw: float) -> tuple:
    fx = _lab_f(x / xw)
    fy = _lab_f(y / yw)
    fz = _lab_f(z / zw)
    return 116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)

@njit(_TRIPLET(float64, float64, float64, float64, float64, float64), cache=True, error_model="numpy")
def _lab_to_xyz_kernel(L: float, a: float, b: float, xw: float, yw: float, zw: float) -> tuple:
    fy = (L + 16.0) / 116.0
    fz = fy - b / 200.0
    fx = a / 500.0 + fy

    # Y is recovered from L directly; the threshold kappa*epsilon == 8
    if L > LAB_KAPPA * LAB_EPSILON:
        yr = fy * fy * fy
    else:
        yr = L / LAB_KAPPA
    return _lab_f_inv(fx) * xw, yr * yw, _lab_f_inv(fz) * zw


# =============================================================================
# 3. COLOR SPACE ENGINE
# =============================================================================

def _reference_white(white: TripletLike) -> XYZ:
    """Tag *white* as XYZ and flag white points the Lab formulas cannot use."""
    wp = XYZ.coerce(white)
    if not (wp.x > 0.0 and wp.y > 0.0 and wp.z > 0.0):
        warnings.warn(
            f"Reference white {wp.as_tuple()} has a non-positive component; "
            "Lab values computed against it are not meaningful.",
            RuntimeWarning,
            stacklevel=4,
        )
    return wp


class ColorSpaceEngine:
    """
    Static utility class for single-color space transformations.

    All methods are pure: they read nothing but their arguments and the
    module constants, so they are safe to call from any number of threads.
    """

    # =====================================================================
    #  Linear / perceptual
    # =====================================================================

    @staticmethod
    @coerce_input(RGB)
    def rgb_to_hsv(rgb: RGB) -> HSV:
        """
        Converts sRGB [0..255] to HSV.

        Args:
            rgb: Input color, ``RGB`` or any 3-sequence of numbers.

        Returns:
            ``HSV`` with hue in radians [0, 2*pi), saturation and value in
            [0, 1].  Greys (including black and white) report hue 0;
            black also reports saturation 0.
        """
        return HSV(*_rgb_to_hsv_kernel(rgb.r, rgb.g, rgb.b))

    @staticmethod
    @coerce_input(HSV)
    def hsv_to_rgb(hsv: HSV) -> RGB:
        """
        Converts HSV back to sRGB [0..255].

        Hue may be any angle in radians; it is reduced modulo 2*pi.
        """
        return RGB(*_hsv_to_rgb_kernel(hsv.h, hsv.s, hsv.v))

    @staticmethod
    @coerce_input(RGB)
    def rgb_to_hsl(rgb: RGB) -> HSL:
        """
        Converts sRGB [0..255] to HSL.

        Returns:
            ``HSL`` with hue in radians [0, 2*pi), saturation and lightness
            in [0, 1].
        """
        return HSL(*_rgb_to_hsl_kernel(rgb.r, rgb.g, rgb.b))

    @staticmethod
    @coerce_input(HSL)
    def hsl_to_rgb(hsl: HSL) -> RGB:
        """Converts HSL back to sRGB [0..255]."""
        return RGB(*_hsl_to_rgb_kernel(hsl.h, hsl.s, hsl.l))

    # =====================================================================
    #  Colorimetric
    # =====================================================================

    @staticmethod
    @coerce_input(RGB)
    def rgb_to_xyz(rgb: RGB) -> XYZ:
        """
        Converts sRGB [0..255] to CIE XYZ (D65, Y of white = 1).

        Channels are linearised with the sRGB EOTF and mixed with
        ``M_SRGB_TO_XYZ``.  Input outside 0..255 is not clamped.
        """
        return XYZ(*_rgb_to_xyz_kernel(rgb.r, rgb.g, rgb.b))

    @staticmethod
    @coerce_input(XYZ)
    def xyz_to_rgb(xyz: XYZ) -> RGB:
        """
        Converts CIE XYZ (D65) to sRGB [0..255].

        Out-of-gamut colors come back with channels below 0 or above 255;
        clamping is left to the caller.
        """
        return RGB(*_xyz_to_rgb_kernel(xyz.x, xyz.y, xyz.z))

    @staticmethod
    @coerce_input(XYZ)
    def xyz_to_lab(xyz: XYZ, white: TripletLike = REF_WHITE_D65) -> Lab:
        """
        Converts XYZ to CIELAB (L*a*b*).

        Args:
            xyz: Input XYZ color.
            white: Reference white point (default D65).  Components must be
                   positive for the result to be meaningful; a zero component
                   yields non-finite output and a ``RuntimeWarning``.

        Returns:
            Lab coordinates.
        """
        wp = _reference_white(white)
        return Lab(*_xyz_to_lab_kernel(xyz.x, xyz.y, xyz.z, wp.x, wp.y, wp.z))

    @staticmethod
    @coerce_input(Lab)
    def lab_to_xyz(lab: Lab, white: TripletLike = REF_WHITE_D65) -> XYZ:
        """
        Converts CIELAB to XYZ.

        Exact inverse of ``xyz_to_lab`` (to floating-point rounding) for any
        white point with strictly positive components.

        Args:
            lab: Input Lab color.
            white: Reference white point (default D65).

        Returns:
            XYZ coordinates.
        """
        wp = _reference_white(white)
        return XYZ(*_lab_to_xyz_kernel(lab.L, lab.a, lab.b, wp.x, wp.y, wp.z))

    # =====================================================================
    #  Convenience pipelines
    # =====================================================================

    @staticmethod
    @coerce_input(RGB)
    def rgb_to_lab(rgb: RGB, white: TripletLike = REF_WHITE_D65) -> Lab:
        """sRGB [0..255] -> XYZ (D65) -> Lab relative to *white*."""
        wp = _reference_white(white)
        x, y, z = _rgb_to_xyz_kernel(rgb.r, rgb.g, rgb.b)
        return Lab(*_xyz_to_lab_kernel(x, y, z, wp.x, wp.y, wp.z))

    @staticmethod
    @coerce_input(Lab)
    def lab_to_rgb(lab: Lab, white: TripletLike = REF_WHITE_D65) -> RGB:
        """Lab relative to *white* -> XYZ (D65) -> sRGB [0..255]."""
        wp = _reference_white(white)
        x, y, z = _lab_to_xyz_kernel(lab.L, lab.a, lab.b, wp.x, wp.y, wp.z)
        return RGB(*_xyz_to_rgb_kernel(x, y, z))


rgb_to_hsv = ColorSpaceEngine.rgb_to_hsv
hsv_to_rgb = ColorSpaceEngine.hsv_to_rgb
rgb_to_hsl = ColorSpaceEngine.rgb_to_hsl
hsl_to_rgb = ColorSpaceEngine.hsl_to_rgb
rgb_to_xyz = ColorSpaceEngine.rgb_to_xyz
xyz_to_rgb = ColorSpaceEngine.xyz_to_rgb
xyz_to_lab = ColorSpaceEngine.xyz_to_lab
lab_to_xyz = ColorSpaceEngine.lab_to_xyz
rgb_to_lab = ColorSpaceEngine.rgb_to_lab
lab_to_rgb = ColorSpaceEngine.lab_to_rgb
