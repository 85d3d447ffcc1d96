"""Core design model for Apparel Designer"""

from .errors import DesignCanvasError, RasterExportError, DesignFileError
from .templates import GarmentTemplate, resolve_template, list_templates
from .elements import DesignElement, TextElement, ImageElement, TextOptions
from .product import Product, DEFAULT_CATALOG, find_product

__all__ = [
    'DesignCanvasError',
    'RasterExportError',
    'DesignFileError',
    'GarmentTemplate',
    'resolve_template',
    'list_templates',
    'DesignElement',
    'TextElement',
    'ImageElement',
    'TextOptions',
    'Product',
    'DEFAULT_CATALOG',
    'find_product',
]
