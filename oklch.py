#!/usr/bin/env python3
"""
OKLCH color-space kernel.

Converts between hex strings, sRGB, linear RGB, Oklab and OKLCH, and maps
out-of-gamut colors back into sRGB by reducing chroma. Array conversions work
on (n, 3) arrays the way the LAB helpers in the extractor do; the scalar
helpers wrap them for single colors.
"""

import re
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Optional

import numpy as np


# =============================================================================
# Constants
# =============================================================================

GAMUT_SEARCH_TOLERANCE = 0.001  # Chroma precision of the gamut clamp
GAMUT_SEARCH_MAX_ITERATIONS = 12  # Binary search bound for the gamut clamp

# Round-trip tolerances for gamut membership
GAMUT_L_TOLERANCE = 0.01
GAMUT_C_TOLERANCE = 0.02
GAMUT_H_TOLERANCE = 5.0  # Degrees
NEGLIGIBLE_CHROMA = 0.01  # Below this, hue is meaningless

MAX_CHROMA_CEILING = 0.4  # Upper bound used when probing the gamut edge

_HEX_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')
_OKLCH_PATTERN = re.compile(
    r'^oklch\(\s*([\d.]+)%?\s+([\d.]+)\s+([\d.]+)(?:deg)?\s*\)$', re.IGNORECASE
)

# Linear sRGB -> LMS
_RGB_TO_LMS = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073970037],
    [0.0883024619, 0.2817188376, 0.6299787005],
])

# Cube-rooted LMS -> Oklab
_LMS_TO_OKLAB = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
])

# Oklab -> cube-rooted LMS
_OKLAB_TO_LMS = np.array([
    [1.0, 0.3963377774, 0.2158037573],
    [1.0, -0.1055613458, -0.0638541728],
    [1.0, -0.0894841775, -1.2914855480],
])

# LMS -> linear sRGB
_LMS_TO_RGB = np.array([
    [4.0767416621, -3.3077115913, 0.2309699292],
    [-1.2684380046, 2.6097574011, -0.3413193965],
    [-0.0041960863, -0.7034186147, 1.7076147010],
])


@dataclass(frozen=True)
class OklchColor:
    """A color in OKLCH coordinates."""
    L: float  # Perceptual lightness, 0-1
    C: float  # Chroma, 0 to ~0.4
    H: float  # Hue angle in degrees, 0-360


# =============================================================================
# Array Conversions
# =============================================================================

def srgb_to_linear(rgb: np.ndarray) -> np.ndarray:
    """Convert sRGB values in [0, 1] to linear light."""
    mask = rgb > 0.04045
    return np.where(mask, ((rgb + 0.055) / 1.055) ** 2.4, rgb / 12.92)


def linear_to_srgb(rgb_linear: np.ndarray) -> np.ndarray:
    """Convert linear light to sRGB values in [0, 1] (unclipped)."""
    mask = rgb_linear > 0.0031308
    return np.where(
        mask,
        1.055 * np.power(np.clip(rgb_linear, 0, None), 1/2.4) - 0.055,
        12.92 * rgb_linear,
    )


def rgb_to_oklab(rgb: np.ndarray) -> np.ndarray:
    """Convert an (n, 3) RGB array (0-255) to Oklab."""
    rgb_linear = srgb_to_linear(np.asarray(rgb, dtype=np.float64) / 255.0)
    lms = rgb_linear @ _RGB_TO_LMS.T
    return np.cbrt(lms) @ _LMS_TO_OKLAB.T


def oklab_to_rgb(lab: np.ndarray) -> np.ndarray:
    """Convert an (n, 3) Oklab array to RGB (0-255 floats, unclipped)."""
    lms = (np.asarray(lab, dtype=np.float64) @ _OKLAB_TO_LMS.T) ** 3
    rgb_linear = lms @ _LMS_TO_RGB.T
    return linear_to_srgb(rgb_linear) * 255


def oklab_to_oklch(lab: np.ndarray) -> np.ndarray:
    """Convert an (n, 3) Oklab array to OKLCH columns [L, C, H]."""
    L, a, b = lab[:, 0], lab[:, 1], lab[:, 2]
    C = np.sqrt(a**2 + b**2)
    H = np.degrees(np.arctan2(b, a)) % 360
    return np.column_stack([L, C, H])


def oklch_to_oklab(lch: np.ndarray) -> np.ndarray:
    """Convert an (n, 3) OKLCH array to Oklab."""
    L, C, H = lch[:, 0], lch[:, 1], np.radians(lch[:, 2])
    return np.column_stack([L, C * np.cos(H), C * np.sin(H)])


# =============================================================================
# Hex Parsing
# =============================================================================

def parse_hex(value) -> Optional[str]:
    """Normalize a 3- or 6-digit hex string to '#rrggbb', or None if invalid."""
    if not isinstance(value, str):
        return None
    match = _HEX_PATTERN.match(value.strip())
    if not match:
        return None
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    return f"#{digits}"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """
    Convert a hex string to an (r, g, b) tuple.

    Raises:
        ValueError: If the string is not a 3- or 6-digit hex color.
    """
    normalized = parse_hex(hex_color)
    if normalized is None:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return tuple(int(normalized[i:i + 2], 16) for i in (1, 3, 5))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert 0-255 channels to a lowercase hex string."""
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


# =============================================================================
# Scalar Conversions
# =============================================================================

@lru_cache(maxsize=16384)
def to_oklch(hex_color: str) -> OklchColor:
    """Convert a hex string to OKLCH."""
    rgb = np.array([hex_to_rgb(hex_color)], dtype=np.float64)
    L, C, H = oklab_to_oklch(rgb_to_oklab(rgb))[0]
    return OklchColor(float(L), float(C), float(H))


@lru_cache(maxsize=65536)
def to_hex(color: OklchColor) -> str:
    """
    Convert an OKLCH color to a hex string.

    Channels outside [0, 255] are clipped, so callers that care about gamut
    should clamp first. Lightness at or beyond the ends maps to pure black
    or white.
    """
    if color.L <= 0:
        return '#000000'
    if color.L >= 1:
        return '#ffffff'
    lab = oklch_to_oklab(np.array([[color.L, color.C, color.H]]))
    rgb = np.clip(np.round(oklab_to_rgb(lab)[0]), 0, 255)
    return rgb_to_hex(*rgb)


def to_oklab(color: OklchColor) -> np.ndarray:
    """Convert an OKLCH color to an Oklab vector."""
    return oklch_to_oklab(np.array([[color.L, color.C, color.H]]))[0]


# =============================================================================
# Gamut Mapping
# =============================================================================

def hue_difference(h1: float, h2: float) -> float:
    """Minimum angular distance between two hues (0-180)."""
    diff = abs(h1 - h2) % 360
    return min(diff, 360 - diff)


def signed_hue_delta(h_from: float, h_to: float) -> float:
    """Shortest signed rotation taking h_from to h_to, in [-180, 180)."""
    return (h_to - h_from + 180) % 360 - 180


def mix_hue(h_from: float, h_to: float, t: float) -> float:
    """Interpolate along the shortest arc between two hues."""
    return (h_from + signed_hue_delta(h_from, h_to) * t) % 360


def is_in_srgb_gamut(color: OklchColor) -> bool:
    """Check that a color survives the hex round trip within tolerance."""
    back = to_oklch(to_hex(color))
    if abs(back.L - color.L) >= GAMUT_L_TOLERANCE:
        return False
    if abs(back.C - color.C) >= GAMUT_C_TOLERANCE:
        return False
    if color.C >= NEGLIGIBLE_CHROMA and hue_difference(back.H, color.H) >= GAMUT_H_TOLERANCE:
        return False
    return True


@lru_cache(maxsize=65536)
def clamp_to_srgb_gamut(color: OklchColor) -> OklchColor:
    """
    Reduce chroma until the color fits sRGB, keeping lightness and hue.

    Binary search on chroma, stopping at GAMUT_SEARCH_TOLERANCE or after
    GAMUT_SEARCH_MAX_ITERATIONS.
    """
    color = OklchColor(min(1.0, max(0.0, color.L)), max(0.0, color.C), color.H % 360)
    if is_in_srgb_gamut(color):
        return color

    low, high = 0.0, color.C
    for _ in range(GAMUT_SEARCH_MAX_ITERATIONS):
        if high - low <= GAMUT_SEARCH_TOLERANCE:
            break
        mid = (low + high) / 2
        if is_in_srgb_gamut(replace(color, C=mid)):
            low = mid
        else:
            high = mid
    return replace(color, C=low)


def clamp_color(L: float, C: float, H: float) -> OklchColor:
    """Build a gamut-clamped color from raw coordinates."""
    return clamp_to_srgb_gamut(OklchColor(L, C, H))


def max_chroma(L: float, H: float) -> float:
    """Largest in-gamut chroma at the given lightness and hue."""
    return clamp_color(L, MAX_CHROMA_CEILING, H).C


def delta_e(c1: OklchColor, c2: OklchColor) -> float:
    """Euclidean distance between two colors in Oklab."""
    return float(np.linalg.norm(to_oklab(c1) - to_oklab(c2)))


# =============================================================================
# Color Utilities
# =============================================================================

def adjust_lightness(color: OklchColor, amount: float) -> OklchColor:
    """Shift lightness by amount, then clamp into gamut."""
    return clamp_color(color.L + amount, color.C, color.H)


def adjust_chroma(color: OklchColor, factor: float) -> OklchColor:
    """Scale chroma by factor, then clamp into gamut."""
    return clamp_color(color.L, color.C * factor, color.H)


def shift_hue(color: OklchColor, degrees: float) -> OklchColor:
    return clamp_color(color.L, color.C, (color.H + degrees) % 360)


def create_neutral(L: float, hue: float = 0.0, chroma: float = 0.0) -> OklchColor:
    """Create a (possibly faintly tinted) neutral."""
    return clamp_color(L, chroma, hue)


def generate_scale(base: OklchColor, steps: tuple = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900)) -> dict:
    """
    Build a lightness ladder around a base color.

    Step n sits at L = 1 - n/1000; chroma tapers toward both ends.

    Returns:
        Dict mapping step -> hex string.
    """
    scale = {}
    for step in steps:
        L = 1 - step / 1000
        chroma_factor = max(0.3, 1 - abs(L - 0.5) * 1.2)
        scale[step] = to_hex(clamp_color(L, base.C * chroma_factor, base.H))
    return scale


def format_oklch(color: OklchColor) -> str:
    """Format as a CSS oklch() string."""
    return f"oklch({color.L * 100:.1f}% {color.C:.3f} {color.H:.1f})"


def parse_oklch(value: str) -> Optional[OklchColor]:
    """Parse a CSS oklch() string; lightness may be a percentage or 0-1."""
    match = _OKLCH_PATTERN.match(value.strip())
    if not match:
        return None
    L = float(match.group(1))
    if '%' in value or L > 1:
        L /= 100
    return OklchColor(L, float(match.group(2)), float(match.group(3)) % 360)
