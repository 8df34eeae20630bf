"""Horizontal text scaling for the fixed-width label area.

``compute_scale`` is a pure function of two widths. Measuring those widths is left to the
caller, who must measure the line with any previous scale transform removed; measuring
an already scaled line feeds the last result back into the next one.

Only the primary line (the label name) is scaled. Secondary lines such as the author
always keep a scale of ``1.0``; :func:`fit_line_scales` applies that policy.
"""
from __future__ import annotations

import math
from typing import List, Optional, Protocol, Sequence

from .colors import clamp

LABEL_WIDTH_RATIO = 0.88
SCALE_MIN = 0.4
SCALE_MAX = 1.5
NO_SCALE = 1.0
PRIMARY_LINE = 0


def _usable_width(value: float) -> bool:
    try:
        return math.isfinite(value) and value > 0
    except TypeError:
        return False


def compute_scale(
    natural_width: float,
    container_width: float,
    padding_ratio: float = LABEL_WIDTH_RATIO,
    min_scale: float = SCALE_MIN,
    max_scale: float = SCALE_MAX,
) -> float:
    """Scale factor that fits a line of ``natural_width`` into ``container_width``.

    The container is padded by ``padding_ratio`` and the result clamped to
    ``[min_scale, max_scale]``. A zero, negative or non-finite width on either side
    means there is nothing to fit yet, and ``1.0`` is returned. Text that needs less
    than ``min_scale`` is clamped and may still overflow slightly.
    """

    if not (_usable_width(natural_width) and _usable_width(container_width)):
        return NO_SCALE
    if not _usable_width(padding_ratio):
        padding_ratio = LABEL_WIDTH_RATIO

    available = container_width * padding_ratio
    return clamp(available / natural_width, min_scale, max_scale)


def fit_line_scales(
    natural_widths: Sequence[float],
    container_width: float,
    primary_index: int = PRIMARY_LINE,
    padding_ratio: float = LABEL_WIDTH_RATIO,
    min_scale: float = SCALE_MIN,
    max_scale: float = SCALE_MAX,
) -> List[float]:
    """One scale per line; only ``primary_index`` is fitted, the rest stay at ``1.0``."""

    return [
        compute_scale(width, container_width, padding_ratio, min_scale, max_scale)
        if index == primary_index
        else NO_SCALE
        for index, width in enumerate(natural_widths)
    ]


class TextMeasurer(Protocol):
    """Measures the untransformed rendered width of a line of text."""

    def measure(self, text: str) -> float:
        ...


def fit_label_lines(
    lines: Sequence[Optional[str]],
    container_width: float,
    measurer: TextMeasurer,
    primary_index: int = PRIMARY_LINE,
    padding_ratio: float = LABEL_WIDTH_RATIO,
    min_scale: float = SCALE_MIN,
    max_scale: float = SCALE_MAX,
) -> List[float]:
    """Measure the primary line through ``measurer`` and compute every line's scale.

    Empty lines and secondary lines are never measured.
    """

    widths = [
        measurer.measure(line) if line and index == primary_index else 0.0
        for index, line in enumerate(lines)
    ]
    return fit_line_scales(widths, container_width, primary_index, padding_ratio, min_scale, max_scale)


__all__ = [
    "LABEL_WIDTH_RATIO",
    "NO_SCALE",
    "PRIMARY_LINE",
    "SCALE_MAX",
    "SCALE_MIN",
    "TextMeasurer",
    "compute_scale",
    "fit_label_lines",
    "fit_line_scales",
]
