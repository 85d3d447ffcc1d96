"""Rendering for Apparel Designer"""

from .surface import DrawingSurface, QPainterSurface, RecordingSurface
from .image_cache import ImageCache, get_image_cache
from .renderer import DesignRenderer, render_to_image, encode_png, render_to_svg

__all__ = [
    'DrawingSurface',
    'QPainterSurface',
    'RecordingSurface',
    'ImageCache',
    'get_image_cache',
    'DesignRenderer',
    'render_to_image',
    'encode_png',
    'render_to_svg',
]
