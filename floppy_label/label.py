"""Per-render paint resolution for a disk label.

This is the caller side of the gradient engine: it decides whether a gradient is drawn
at all and falls back to the flat theme colors otherwise.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .cache import MemoCache
from .colors import darken_hex, lighten_hex
from .gradient import (
    GradientConfig,
    GradientOptions,
    GradientShape,
    coerce_options,
    coerce_shape,
    generate_label_gradient,
)
from .presets import DEFAULT_THEME

NO_SHADOW = "none"
DISK_SHADE_PERCENT = 10


class LabelTheme(BaseModel):
    """Theme values the label paint depends on."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    disk_color: str = DEFAULT_THEME["disk_color"]
    label_color: str = DEFAULT_THEME["label_color"]
    label_text_color: str = DEFAULT_THEME["label_text_color"]
    enable_gradient: bool = False
    gradient_type: GradientShape = GradientShape.AUTO
    gradient_options: Optional[GradientOptions] = None


class LabelPaint(BaseModel):
    """Resolved paint values for the label and disk body."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    label_color: str
    label_text_color: str
    label_text_shadow: str
    disk_highlight: str
    disk_shadow: str


def label_lines(name: Optional[str], author: Optional[str] = None) -> List[str]:
    """Display lines for a label. Line 0, the name, is the primary line."""

    return [name or "", author or ""]


def cached_label_gradient(
    text: str,
    shape: GradientShape,
    options: Union[GradientOptions, Mapping[str, Any], None],
    cache: Optional[MemoCache[GradientConfig]] = None,
) -> GradientConfig:
    """:func:`generate_label_gradient`, memoized on ``(text, shape, options)`` when a cache is given."""

    shape = coerce_shape(shape)
    options = coerce_options(options)
    if cache is None:
        return generate_label_gradient(text, shape, options)
    return cache.get_or_compute(
        (text, shape, options),
        lambda: generate_label_gradient(text, shape, options),
    )


def resolve_label_paint(
    name: Optional[str],
    theme: Optional[LabelTheme] = None,
    cache: Optional[MemoCache[GradientConfig]] = None,
) -> LabelPaint:
    """Paint values for a label named ``name``.

    The gradient engine only runs when the theme enables gradients and the name is
    non-empty.
    """

    theme = theme or LabelTheme()
    highlight = lighten_hex(theme.disk_color, DISK_SHADE_PERCENT)
    shadow = darken_hex(theme.disk_color, DISK_SHADE_PERCENT)

    if theme.enable_gradient and name:
        config = cached_label_gradient(name, theme.gradient_type, theme.gradient_options, cache)
        return LabelPaint(
            label_color=config.gradient,
            label_text_color=config.text_color,
            label_text_shadow=config.text_shadow,
            disk_highlight=highlight,
            disk_shadow=shadow,
        )

    return LabelPaint(
        label_color=theme.label_color,
        label_text_color=theme.label_text_color,
        label_text_shadow=NO_SHADOW,
        disk_highlight=highlight,
        disk_shadow=shadow,
    )


__all__ = [
    "LabelPaint",
    "LabelTheme",
    "cached_label_gradient",
    "label_lines",
    "resolve_label_paint",
]
