"""
Hex color handling for tags: validation, the default palette and text contrast.
Accepted formats are #RGB, #RRGGBB and #RRGGBBAA (hex digits in any case).
"""
import string

from backup_tags.errors import InvalidColorError

VALID_HEX_LENGTHS = (3, 6, 8)
HEX_DIGITS = set(string.hexdigits)

# Palette offered by GET /colors: id, label, value
DEFAULT_TAG_COLORS = [
    {"id": "red", "label": "Red", "value": "#EF4444"},
    {"id": "orange", "label": "Orange", "value": "#F97316"},
    {"id": "yellow", "label": "Yellow", "value": "#EAB308"},
    {"id": "green", "label": "Green", "value": "#22C55E"},
    {"id": "blue", "label": "Blue", "value": "#3B82F6"},
    {"id": "purple", "label": "Purple", "value": "#A855F7"},
    {"id": "pink", "label": "Pink", "value": "#EC4899"},
    {"id": "gray", "label": "Gray", "value": "#6B7280"},
]


def validate_color(color: str) -> str:
    """Validate a hex color and return it trimmed (no other normalization).
    Raises InvalidColorError carrying the value as given.
    """
    trimmed = (color or "").strip()
    if not trimmed.startswith("#"):
        raise InvalidColorError(color)
    hex_part = trimmed[1:]
    if len(hex_part) not in VALID_HEX_LENGTHS:
        raise InvalidColorError(color)
    if not all(c in HEX_DIGITS for c in hex_part):
        raise InvalidColorError(color)
    return trimmed


def _rgb(color: str) -> tuple:
    hex_part = validate_color(color)[1:]
    if len(hex_part) == 3:
        hex_part = "".join(c * 2 for c in hex_part)
    return tuple(int(hex_part[i:i + 2], 16) for i in (0, 2, 4))


def should_use_light_text(background_color: str) -> bool:
    """True when white text reads better than black on this background (alpha ignored)."""
    r, g, b = _rgb(background_color)
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return luminance < 0.5
