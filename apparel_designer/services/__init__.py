"""Services for Apparel Designer"""

from .design_storage import DesignStorage, get_design_storage

__all__ = [
    'DesignStorage',
    'get_design_storage',
]
