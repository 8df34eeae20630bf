"""Shared numeric and color helpers used by the gradient engine and the label adapter."""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

_HSL_PATTERN = re.compile(
    r"^\s*hsla?\(\s*(-?\d+(?:\.\d+)?)(?:deg)?\s*,\s*(\d+(?:\.\d+)?)%\s*,\s*(\d+(?:\.\d+)?)%"
    r"\s*(?:,\s*\d*(?:\.\d+)?%?\s*)?\)\s*$",
    re.IGNORECASE,
)
_HEX_PATTERN = re.compile(r"^\s*#([0-9a-f]{3}|[0-9a-f]{6})\s*$", re.IGNORECASE)
_BARE_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]{6}$")


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``."""

    return max(lower, min(upper, value))


def js_round(value: float) -> int:
    """Round half up, matching ``Math.round`` in browsers."""

    return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """Render a number the way it appears in CSS: integers without a trailing ``.0``."""

    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class HslColor:
    """A color in HSL space: hue in degrees, saturation and lightness in percent."""

    hue: float
    saturation: float
    lightness: float

    def css(self) -> str:
        return (
            f"hsl({format_number(self.hue)}, {format_number(self.saturation)}%, "
            f"{format_number(self.lightness)}%)"
        )


@dataclass(frozen=True)
class HexColor:
    """A ``#rrggbb`` color; three digit input is expanded on parse."""

    value: str

    @property
    def rgb(self) -> RGB:
        return int(self.value[1:3], 16), int(self.value[3:5], 16), int(self.value[5:7], 16)


@dataclass(frozen=True)
class OpaqueColor:
    """A color string we pass through untouched and cannot analyse."""

    value: str


ColorValue = Union[HslColor, HexColor, OpaqueColor]


def parse_color(value: object) -> ColorValue:
    """Best-effort parse of a CSS color string.

    Only ``hsl()``/``hsla()`` and ``#rgb``/``#rrggbb`` are understood; every other input,
    including non-strings, comes back as :class:`OpaqueColor`.
    """

    if not isinstance(value, str):
        return OpaqueColor(str(value))

    match = _HSL_PATTERN.match(value)
    if match:
        hue = float(match.group(1)) % 360
        saturation = clamp(float(match.group(2)), 0.0, 100.0)
        lightness = clamp(float(match.group(3)), 0.0, 100.0)
        return HslColor(hue, saturation, lightness)

    match = _HEX_PATTERN.match(value)
    if match:
        digits = match.group(1).lower()
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return HexColor(f"#{digits}")

    return OpaqueColor(value)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """Convert HSL (degrees, percent, percent) to 8-bit RGB."""

    h = (hue % 360) / 360
    s = clamp(saturation, 0.0, 100.0) / 100
    l = clamp(lightness, 0.0, 100.0) / 100

    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return js_round(r * 255), js_round(g * 255), js_round(b * 255)


def color_to_rgb(color: ColorValue) -> Optional[RGB]:
    """RGB for parseable variants, ``None`` for opaque ones."""

    if isinstance(color, HslColor):
        return hsl_to_rgb(color.hue, color.saturation, color.lightness)
    if isinstance(color, HexColor):
        return color.rgb
    return None


def _shade_hex(color: str, percent: float, direction: int) -> str:
    if not isinstance(color, str):
        logger.warning("Invalid color format: %r. Using original color.", color)
        return color
    digits = color.replace("#", "")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if not _BARE_HEX_PATTERN.match(digits):
        logger.warning("Invalid color format: %s. Using original color.", color)
        return color

    amount = direction * js_round(2.55 * abs(percent))
    num = int(digits, 16)
    channels = [(num >> shift) & 0xFF for shift in (16, 8, 0)]
    r, g, b = (int(clamp(channel + amount, 0, 255)) for channel in channels)
    return f"#{r:02x}{g:02x}{b:02x}"


def lighten_hex(color: str, percent: float) -> str:
    """Lighten a hex color (``#`` optional, 3 or 6 digits) by ``percent`` of full range.

    Invalid input is logged and returned unchanged.
    """

    return _shade_hex(color, percent, 1)


def darken_hex(color: str, percent: float) -> str:
    """Darken a hex color; the inverse of :func:`lighten_hex`."""

    return _shade_hex(color, percent, -1)


__all__ = [
    "ColorValue",
    "HexColor",
    "HslColor",
    "OpaqueColor",
    "clamp",
    "color_to_rgb",
    "darken_hex",
    "format_number",
    "hsl_to_rgb",
    "js_round",
    "lighten_hex",
    "parse_color",
]
