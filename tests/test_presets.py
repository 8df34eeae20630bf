import logging

import pytest

from floppy_label.presets import (
    DEFAULT_THEME,
    SIZE_MAP,
    SIZE_PRESETS,
    border_thickness,
    describe_size,
    resolve_size,
    slide_hover_default,
)


def test_size_catalog():
    assert SIZE_MAP == {"tiny": 60, "small": 120, "medium": 200, "large": 400, "hero": 600}
    assert {"id", "pixels", "slide_hover"} <= set(SIZE_PRESETS[0])


def test_resolve_named_and_numeric_sizes():
    assert resolve_size("large") == 400
    assert resolve_size(250) == 250


def test_unknown_preset_falls_back_to_medium(caplog):
    with caplog.at_level(logging.WARNING):
        assert resolve_size("gigantic") == 200
    assert "Unknown size preset" in caplog.text


@pytest.mark.parametrize("size", [5, 1200])
def test_out_of_range_size_is_logged_but_used(caplog, size):
    with caplog.at_level(logging.WARNING):
        assert resolve_size(size) == size
    assert "outside recommended range" in caplog.text


def test_in_range_size_is_quiet(caplog):
    with caplog.at_level(logging.WARNING):
        resolve_size(10)
        resolve_size(1000)
    assert caplog.text == ""


def test_slide_hover_defaults():
    assert slide_hover_default("tiny") is False
    assert slide_hover_default("small") is False
    assert slide_hover_default("medium") is True
    assert slide_hover_default("hero") is True
    assert slide_hover_default(199) is False
    assert slide_hover_default(200) is True


@pytest.mark.parametrize("pixels, expected", [(60, 1), (200, 1), (300, 2), (400, 2), (600, 3)])
def test_border_thickness(pixels, expected):
    assert border_thickness(pixels) == expected


def test_default_theme_colors():
    assert DEFAULT_THEME["disk_color"] == "#2a2a2a"
    assert DEFAULT_THEME["label_color"] == "#ffffff"
    assert DEFAULT_THEME["label_text_color"] == "#000000"


def test_describe_named_size():
    assert describe_size("hero") == {"pixels": 600, "border": 3, "slide_hover": True}
    assert describe_size("tiny") == {"pixels": 60, "border": 1, "slide_hover": False}


def test_describe_custom_size():
    assert describe_size(300) == {"pixels": 300, "border": 2, "slide_hover": True}
