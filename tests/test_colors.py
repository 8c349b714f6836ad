"""
Tests for hex color validation and helpers
"""
import pytest

from backup_tags.colors import DEFAULT_TAG_COLORS, should_use_light_text, validate_color
from backup_tags.errors import InvalidColorError


@pytest.mark.parametrize("color", ["#FF5733", "#F53", "#FF5733AA", "#abc", "#aBc123"])
def test_valid_colors(color):
    assert validate_color(color) == color


@pytest.mark.parametrize("color", ["FF5733", "#FF5", "#FF57333", "#GG5733", "#", "", "  "])
def test_invalid_colors(color):
    with pytest.raises(InvalidColorError) as exc_info:
        validate_color(color)
    assert exc_info.value.value == color
    assert str(exc_info.value) == f"Invalid color format: {color}"


def test_validate_color_trims_but_keeps_case():
    assert validate_color("  #ffAA00 \n") == "#ffAA00"


def test_default_palette_is_valid():
    assert len(DEFAULT_TAG_COLORS) == 8
    for entry in DEFAULT_TAG_COLORS:
        assert validate_color(entry["value"]) == entry["value"]


def test_should_use_light_text():
    assert should_use_light_text("#000000") is True
    assert should_use_light_text("#FFFFFF") is False
    assert should_use_light_text("#FFF") is False
    assert should_use_light_text("#00000080") is True


def test_should_use_light_text_rejects_bad_color():
    with pytest.raises(InvalidColorError):
        should_use_light_text("blue")
