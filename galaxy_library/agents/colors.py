"""Deterministic per-session colors.

The same session id yields the same color in every process, so an agent keeps
its identity across reconnects and restarts. The built-in ``hash()`` is salted
per process, hence blake2b.
"""

import colorsys
import hashlib

from galaxy_library.models.geometry import Color


def stable_hash(value: str) -> int:
    """64-bit hash of ``value`` that does not vary between processes."""
    digest = hashlib.blake2b(value.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> Color:
    """Convert HSL to RGB.

    Args:
        hue: Degrees, 0-360
        saturation: 0.0-1.0
        lightness: 0.0-1.0

    Returns:
        RGB color with channels in 0.0-1.0
    """
    r, g, b = colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness, saturation)
    return Color(r, g, b)


def generate_agent_color(session_id: str) -> Color:
    """Derive a bright, saturated color from a session id.

    Hue covers the full circle, saturation stays in 0.70-0.99 and lightness
    in 0.60-0.79.
    """
    value = stable_hash(session_id)
    hue = float(value % 360)
    saturation = 0.7 + ((value >> 8) % 30) / 100.0
    lightness = 0.6 + ((value >> 16) % 20) / 100.0
    return hsl_to_rgb(hue, saturation, lightness)
