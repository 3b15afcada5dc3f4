"""
Colour allocation for the Ancestry Chart Viewer.

Up to twelve wedges use the fixed base palette in order.  Beyond that,
extra colours are produced by golden-ratio hue stepping from a random
starting hue, which keeps consecutive hues close to maximally apart for
any count.  Saturation and lightness cycle on short, co-prime periods
so that neighbouring extra colours also differ in tone.
"""

import colorsys
import random
from typing import List, Optional

from .constants import (
    BASE_PALETTE, GOLDEN_RATIO_CONJUGATE, SATURATION_CYCLE, LIGHTNESS_CYCLE,
)

_MAX_NUDGES = 64


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Convert HSL (hue in [0, 1), saturation and lightness in percent)."""
    r, g, b = colorsys.hls_to_rgb(hue, lightness / 100.0, saturation / 100.0)
    return '#{:02X}{:02X}{:02X}'.format(
        round(r * 255), round(g * 255), round(b * 255),
    )


def generate_colors(
    count: int,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Return exactly *count* hex colours.

    Parameters
    ----------
    count : int
        Number of wedges.  Zero or negative returns an empty list.
    rng : random.Random, optional
        Source of the starting hue for colours past the base palette.
        Pass a seeded instance for reproducible output.

    Examples
    --------
    >>> generate_colors(2)
    ['#FF6384', '#36A2EB']
    """
    if count <= 0:
        return []
    if count <= len(BASE_PALETTE):
        return BASE_PALETTE[:count]

    rng = rng or random.Random()
    colors = list(BASE_PALETTE)
    used = set(colors)
    hue = rng.random()

    for step in range(count - len(BASE_PALETTE)):
        hue = (hue + GOLDEN_RATIO_CONJUGATE) % 1.0
        saturation = SATURATION_CYCLE[step % len(SATURATION_CYCLE)]
        lightness = LIGHTNESS_CYCLE[step % len(LIGHTNESS_CYCLE)]
        candidate = hsl_to_hex(hue, saturation, lightness)
        # Rounding to 8-bit channels can collide with an earlier colour.
        # Each saturation/lightness pair has only ~500-1300 distinct hex
        # values, so after _MAX_NUDGES tries a repeat is accepted.
        for _ in range(_MAX_NUDGES):
            if candidate not in used:
                break
            hue = (hue + GOLDEN_RATIO_CONJUGATE / 7.0) % 1.0
            candidate = hsl_to_hex(hue, saturation, lightness)
        used.add(candidate)
        colors.append(candidate)

    return colors
