"""
Apparel Designer

Interactive garment design canvas built on Qt6.
"""

__version__ = "1.0.0"
__author__ = "Apparel Designer"

from .config import Config

__all__ = [
    'Config',
]
