"""Color conversion utilities

Hex validation and normalization for element colours, plus the mapping from
catalog colour names ("Navy", "Red", ...) to garment fill colours.
"""

import re
from typing import Optional, Tuple


_HEX_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')

# Garment colour names used by the product catalog
GARMENT_COLORS = {
    'black': '#212529',
    'white': '#ffffff',
    'red': '#e03131',
    'blue': '#1c7ed6',
    'navy': '#1b2a4a',
    'gray': '#adb5bd',
    'grey': '#adb5bd',
    'green': '#2f9e44',
    'gold': '#fcc419',
    'purple': '#7048e8',
    'maroon': '#800000',
}


def is_valid_hex_color(value: str) -> bool:
    """Check whether value is a #RGB or #RRGGBB colour (leading # optional)."""
    return isinstance(value, str) and bool(_HEX_PATTERN.match(value.strip()))


def normalize_hex_color(value: str) -> str:
    """
    Normalize a hex colour to lowercase '#rrggbb'.

    Args:
        value: Colour like '#F00', 'ff0000' or '#FF0000'

    Returns:
        Normalized colour string

    Raises:
        ValueError: If value is not a hex colour

    Example:
        >>> normalize_hex_color('#F00')
        '#ff0000'
    """
    if not is_valid_hex_color(value):
        raise ValueError(f"Invalid hex colour: {value!r}")

    digits = value.strip().lstrip('#')
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    return '#' + digits.lower()


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """
    Convert hex color to RGB tuple (0-255 range)

    Args:
        hex_color: Hex color string (e.g., '#AABBCC' or 'AABBCC')

    Returns:
        Tuple of (r, g, b) values in 0-255 range
    """
    digits = normalize_hex_color(hex_color)[1:]
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def relative_luminance(hex_color: str) -> float:
    """Perceived brightness in 0-1 (Rec. 709 weights)."""
    r, g, b = hex_to_rgb(hex_color)
    return (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255.0


def garment_color_hex(name: Optional[str], default: str = '#ffffff') -> str:
    """
    Resolve a catalog colour name or hex string to a fill colour.

    Unknown names fall back to default so an odd catalog entry never breaks
    rendering.
    """
    if not name:
        return default
    if is_valid_hex_color(name):
        return normalize_hex_color(name)
    return GARMENT_COLORS.get(name.strip().lower(), default)


def outline_color_for(fill_hex: str) -> str:
    """Pick an outline colour that stays visible on the given garment fill."""
    return '#dee2e6' if relative_luminance(fill_hex) >= 0.5 else '#495057'


__all__ = [
    'GARMENT_COLORS',
    'is_valid_hex_color',
    'normalize_hex_color',
    'hex_to_rgb',
    'relative_luminance',
    'garment_color_hex',
    'outline_color_for',
]
