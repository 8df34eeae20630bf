"""Deterministic label gradients with a contrast-safe text color.

The same label text always yields the same palette, gradient geometry and text color.
Every function here is pure and tolerant: degenerate input falls back to a fixed value
instead of raising.

Pipeline::

    text ──derive_seed──> seed ──generate_palette──> 2-3 pastel HSL colors
                           │
                           └──make_random_stream──> shape (auto) + angle / center
                                                     └──render_gradient_css──> CSS string
    colors ──choose_text_color──> #ffffff / #000000 + matching shadow

The palette and the geometry each read from their own stream built from the same seed,
so an ``auto`` shape is picked with the same draw that chose the base hue.
"""
from __future__ import annotations

import logging
import math
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from .colors import ColorValue, HexColor, HslColor, OpaqueColor, color_to_rgb, js_round, parse_color

logger = logging.getLogger(__name__)

RandomStream = Callable[[], float]
PaletteEntry = Union[str, HslColor, HexColor, OpaqueColor]

DEFAULT_SEED = 12345
FALLBACK_GRADIENT = "linear-gradient(135deg, #667eea 0%, #764ba2 100%)"
FALLBACK_STOPS: Tuple[str, ...] = ("#667eea", "#764ba2")

WHITE = "#ffffff"
BLACK = "#000000"
SHADOW_FOR_WHITE_TEXT = "0 1px 3px rgba(0, 0, 0, 0.3), 0 1px 2px rgba(0, 0, 0, 0.2)"
SHADOW_FOR_BLACK_TEXT = "0 1px 2px rgba(255, 255, 255, 0.8), 0 0 1px rgba(255, 255, 255, 0.5)"

_UINT32 = 0xFFFFFFFF
_MULBERRY_INCREMENT = 0x6D2B79F5

# palette bands
_HUE_STEP_MIN = 15.0
_HUE_STEP_SPREAD = 30.0
_SATURATION_MIN = 25.0
_SATURATION_SPREAD = 25.0
_LIGHTNESS_MIN = 65.0
_LIGHTNESS_SPREAD = 20.0

# auto shape thresholds: [0, 0.5) linear, [0.5, 0.8) radial, [0.8, 1) conic
_LINEAR_CUTOFF = 0.5
_RADIAL_CUTOFF = 0.8


class GradientShape(str, Enum):
    """Layout of the gradient stops."""

    LINEAR = "linear"
    RADIAL = "radial"
    CONIC = "conic"
    AUTO = "auto"


class GradientOptions(BaseModel):
    """Overrides for :func:`generate_label_gradient`; each one applies independently."""

    model_config = ConfigDict(frozen=True)

    seed: Optional[int] = None
    colors: Optional[Tuple[str, ...]] = None
    angle: Optional[float] = None


class GradientConfig(BaseModel):
    """Paint values for one label."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    gradient: str
    text_color: str
    text_shadow: str
    colors: Tuple[str, ...]


@dataclass(frozen=True)
class ContrastDecision:
    """Text color plus a shadow of the opposite polarity."""

    text_color: str
    text_shadow: str


def _to_int32(value: int) -> int:
    value &= _UINT32
    return value - 0x100000000 if value & 0x80000000 else value


def derive_seed(text: Optional[str]) -> int:
    """Hash ``text`` into a non-negative 32-bit seed.

    Iterates UTF-16 code units with ``hash * 31 + unit`` in signed 32-bit arithmetic and
    returns the absolute value, so seeds match those computed by browsers for the same
    label. Empty text maps to :data:`DEFAULT_SEED`.
    """

    if not text:
        return DEFAULT_SEED
    if not isinstance(text, str):
        text = str(text)

    value = 0
    for (unit,) in struct.iter_unpack("<H", text.encode("utf-16-le", "surrogatepass")):
        value = _to_int32((value << 5) - value + unit)
    return abs(value)


def _normalize_seed(seed: Any) -> int:
    if isinstance(seed, float) and not math.isfinite(seed):
        return DEFAULT_SEED
    try:
        return int(seed) & _UINT32
    except (TypeError, ValueError):
        return DEFAULT_SEED


def make_random_stream(seed: int) -> RandomStream:
    """Mulberry32 generator yielding floats in ``[0, 1)``.

    Two streams built from the same seed produce identical sequences.
    """

    state = _normalize_seed(seed)

    def next_value() -> float:
        nonlocal state
        state = (state + _MULBERRY_INCREMENT) & _UINT32
        t = ((state ^ (state >> 15)) * (state | 1)) & _UINT32
        t = ((t + ((t ^ (t >> 7)) * (t | 61))) & _UINT32) ^ t
        return ((t ^ (t >> 14)) & _UINT32) / 4294967296

    return next_value


def generate_palette(seed: int) -> List[HslColor]:
    """Two or three analogous pastel colors for ``seed``.

    Each step moves the hue by 15-45 degrees from the base, saturation stays in 25-50%
    and lightness in 65-85%. Values are rounded to whole numbers.
    """

    random = make_random_stream(seed)
    base_hue = random() * 360
    count = 2 + math.floor(random() * 2)

    palette = []
    for index in range(count):
        hue_offset = (random() * _HUE_STEP_SPREAD + _HUE_STEP_MIN) * index
        hue = (base_hue + hue_offset) % 360
        saturation = _SATURATION_MIN + random() * _SATURATION_SPREAD
        lightness = _LIGHTNESS_MIN + random() * _LIGHTNESS_SPREAD
        palette.append(HslColor(js_round(hue) % 360, js_round(saturation), js_round(lightness)))
    return palette


def coerce_shape(value: Any) -> GradientShape:
    """Map a shape name to :class:`GradientShape`; unknown names become ``auto``."""

    if isinstance(value, GradientShape):
        return value
    try:
        return GradientShape(str(value).strip().lower())
    except ValueError:
        logger.warning("Unknown gradient shape %r, using auto", value)
        return GradientShape.AUTO


def resolve_gradient_shape(requested: Any, random: RandomStream) -> GradientShape:
    """Concrete shape for ``requested``; only ``auto`` consumes a value from ``random``."""

    shape = coerce_shape(requested)
    if shape is not GradientShape.AUTO:
        return shape

    choice = random()
    if choice < _LINEAR_CUTOFF:
        return GradientShape.LINEAR
    if choice < _RADIAL_CUTOFF:
        return GradientShape.RADIAL
    return GradientShape.CONIC


def _css(entry: PaletteEntry) -> str:
    if isinstance(entry, HslColor):
        return entry.css()
    if isinstance(entry, (HexColor, OpaqueColor)):
        return entry.value
    return str(entry)


def _normalize_angle(angle: Any) -> Optional[int]:
    if angle is None or isinstance(angle, bool):
        return None
    try:
        value = float(angle)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return js_round(value) % 360


def _percent_stops(colors: Sequence[str]) -> str:
    last = len(colors) - 1
    return ", ".join(f"{color} {js_round(index / last * 100)}%" for index, color in enumerate(colors))


def render_gradient_css(
    colors: Sequence[PaletteEntry],
    shape: Any,
    random: RandomStream,
    angle: Optional[float] = None,
) -> str:
    """Serialize ``colors`` into a CSS gradient of the given shape.

    No colors gives :data:`FALLBACK_GRADIENT` and a single color is returned as a flat
    fill. ``angle`` only affects linear gradients; when absent the angle is drawn from
    ``random``. An ``auto`` shape is resolved from ``random`` first.
    """

    stops = [_css(color) for color in colors]
    if not stops:
        return FALLBACK_GRADIENT
    if len(stops) == 1:
        return stops[0]

    concrete = resolve_gradient_shape(shape, random)

    if concrete is GradientShape.RADIAL:
        x = 30 + js_round(random() * 40)
        y = 30 + js_round(random() * 40)
        return f"radial-gradient(circle at {x}% {y}%, {_percent_stops(stops)})"

    if concrete is GradientShape.CONIC:
        start = js_round(random() * 360)
        count = len(stops)
        conic_stops = ", ".join(
            f"{color} {js_round(index / count * 360)}deg" for index, color in enumerate(stops)
        )
        return f"conic-gradient(from {start}deg, {conic_stops})"

    resolved_angle = _normalize_angle(angle)
    if resolved_angle is None:
        resolved_angle = js_round(random() * 360)
    return f"linear-gradient({resolved_angle}deg, {_percent_stops(stops)})"


def luminance(r: float, g: float, b: float) -> float:
    """WCAG relative luminance of an 8-bit sRGB color."""

    def linear(channel: float) -> float:
        value = channel / 255
        return value / 12.92 if value <= 0.03928 else ((value + 0.055) / 1.055) ** 2.4

    return 0.2126 * linear(r) + 0.7152 * linear(g) + 0.0722 * linear(b)


def contrast_ratio(first: float, second: float) -> float:
    """WCAG contrast ratio between two luminances, in ``[1, 21]``."""

    lighter = max(first, second)
    darker = min(first, second)
    return (lighter + 0.05) / (darker + 0.05)


# Colors we cannot parse count as mid-gray.
NEUTRAL_LUMINANCE = luminance(128, 128, 128)


def _as_color(entry: PaletteEntry) -> ColorValue:
    if isinstance(entry, (HslColor, HexColor, OpaqueColor)):
        return entry
    return parse_color(entry)


def palette_luminance(colors: Sequence[PaletteEntry]) -> float:
    """Mean luminance over the palette stops.

    An empty palette is measured as the fallback gradient it renders to.
    """

    entries = list(colors) or list(FALLBACK_STOPS)
    total = 0.0
    for entry in entries:
        rgb = color_to_rgb(_as_color(entry))
        total += luminance(*rgb) if rgb is not None else NEUTRAL_LUMINANCE
    return total / len(entries)


def choose_text_color(colors: Sequence[PaletteEntry]) -> ContrastDecision:
    """Pick white or black text, whichever contrasts more with the palette.

    Equal contrast resolves to black.
    """

    background = palette_luminance(colors)
    against_white = contrast_ratio(background, 1.0)
    against_black = contrast_ratio(background, 0.0)
    if against_white > against_black:
        return ContrastDecision(WHITE, SHADOW_FOR_WHITE_TEXT)
    return ContrastDecision(BLACK, SHADOW_FOR_BLACK_TEXT)


def coerce_options(options: Union[GradientOptions, Mapping[str, Any], None]) -> GradientOptions:
    """Build :class:`GradientOptions` from a model or mapping.

    Each field is validated on its own, so an invalid value drops only that override.
    """

    if options is None:
        return GradientOptions()
    if isinstance(options, GradientOptions):
        return options
    try:
        raw = dict(options)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring invalid gradient options: %s", exc)
        return GradientOptions()

    fields = {}
    for name in GradientOptions.model_fields:
        if name not in raw:
            continue
        try:
            fields[name] = getattr(GradientOptions.model_validate({name: raw[name]}), name)
        except ValidationError as exc:
            logger.warning("Ignoring invalid gradient option %s: %s", name, exc)
    return GradientOptions(**fields)


def generate_label_gradient(
    text: Optional[str],
    shape: Union[GradientShape, str] = GradientShape.AUTO,
    options: Union[GradientOptions, Mapping[str, Any], None] = None,
) -> GradientConfig:
    """Full gradient configuration for a label.

    ``options.seed`` replaces the seed derived from ``text``, ``options.colors`` (when
    non-empty) replaces the generated palette, and ``options.angle`` fixes the angle of
    linear gradients. Identical arguments always give identical results.
    """

    opts = coerce_options(options)
    seed = opts.seed if opts.seed is not None else derive_seed(text)
    random = make_random_stream(seed)

    if opts.colors:
        colors = tuple(opts.colors)
    else:
        colors = tuple(color.css() for color in generate_palette(seed))

    concrete = resolve_gradient_shape(shape, random)
    gradient = render_gradient_css(colors, concrete, random, opts.angle)
    decision = choose_text_color(colors)

    return GradientConfig(
        gradient=gradient,
        text_color=decision.text_color,
        text_shadow=decision.text_shadow,
        colors=colors,
    )


__all__ = [
    "BLACK",
    "DEFAULT_SEED",
    "FALLBACK_GRADIENT",
    "NEUTRAL_LUMINANCE",
    "WHITE",
    "ContrastDecision",
    "GradientConfig",
    "GradientOptions",
    "GradientShape",
    "choose_text_color",
    "coerce_options",
    "coerce_shape",
    "contrast_ratio",
    "derive_seed",
    "generate_label_gradient",
    "generate_palette",
    "luminance",
    "make_random_stream",
    "palette_luminance",
    "render_gradient_css",
    "resolve_gradient_shape",
]
