"""Disk size catalog and default theme served to the front end."""

from __future__ import annotations

import logging
from typing import Dict, List, TypedDict, Union

from .colors import js_round

logger = logging.getLogger(__name__)

SIZE_WARNING_MIN = 10
SIZE_WARNING_MAX = 1000
BORDER_THICKNESS_DIVISOR = 200
DEFAULT_SIZE = "medium"


class SizePreset(TypedDict):
    id: str
    pixels: int
    slide_hover: bool


class SizeProfile(TypedDict):
    pixels: float
    border: int
    slide_hover: bool


class DiskTheme(TypedDict):
    disk_color: str
    slide_color: str
    background_color: str
    label_color: str
    label_text_color: str


SIZE_PRESETS: List[SizePreset] = [
    {"id": "tiny", "pixels": 60, "slide_hover": False},
    {"id": "small", "pixels": 120, "slide_hover": False},
    {"id": "medium", "pixels": 200, "slide_hover": True},
    {"id": "large", "pixels": 400, "slide_hover": True},
    {"id": "hero", "pixels": 600, "slide_hover": True},
]

SIZE_MAP: Dict[str, int] = {preset["id"]: preset["pixels"] for preset in SIZE_PRESETS}

DEFAULT_THEME: DiskTheme = {
    "disk_color": "#2a2a2a",
    "slide_color": "#c0c0c0",
    "background_color": "#ceb",
    "label_color": "#ffffff",
    "label_text_color": "#000000",
}


def resolve_size(size: Union[str, int, float]) -> float:
    """Pixel size for a preset name or an explicit number.

    Unknown names fall back to ``medium``. Numbers outside the recommended range are
    logged and used as given.
    """

    if isinstance(size, str):
        if size not in SIZE_MAP:
            logger.warning("Unknown size preset %r, using %s", size, DEFAULT_SIZE)
        return SIZE_MAP.get(size, SIZE_MAP[DEFAULT_SIZE])

    if size < SIZE_WARNING_MIN or size > SIZE_WARNING_MAX:
        logger.warning(
            "size %spx is outside recommended range (%s-%spx)", size, SIZE_WARNING_MIN, SIZE_WARNING_MAX
        )
    return size


def slide_hover_default(size: Union[str, int, float]) -> bool:
    """Slide hover is on for medium and larger disks."""

    if isinstance(size, str):
        return any(preset["id"] == size and preset["slide_hover"] for preset in SIZE_PRESETS)
    return size >= SIZE_MAP["medium"]


def border_thickness(pixels: float) -> int:
    return max(1, js_round(pixels / BORDER_THICKNESS_DIVISOR))


def describe_size(size: Union[str, int, float]) -> SizeProfile:
    """Pixels, border thickness and slide hover default for a preset name or pixel size."""

    pixels = resolve_size(size)
    return {
        "pixels": pixels,
        "border": border_thickness(pixels),
        "slide_hover": slide_hover_default(size),
    }


__all__ = [
    "DEFAULT_THEME",
    "SIZE_MAP",
    "SIZE_PRESETS",
    "DiskTheme",
    "SizePreset",
    "SizeProfile",
    "border_thickness",
    "describe_size",
    "resolve_size",
    "slide_hover_default",
]
