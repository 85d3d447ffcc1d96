"""Utility functions for Apparel Designer"""

from .color_utils import hex_to_rgb, normalize_hex_color, garment_color_hex, outline_color_for
from .image_utils import file_to_data_uri, load_image_reference, content_bounds
from .logging_config import LoggingConfig

__all__ = [
    'hex_to_rgb',
    'normalize_hex_color',
    'garment_color_hex',
    'outline_color_for',
    'file_to_data_uri',
    'load_image_reference',
    'content_bounds',
    'LoggingConfig',
]
