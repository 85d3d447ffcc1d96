"""
Product descriptor consumed by the canvas, and the built-in catalog.

The canvas only needs a name (to pick a garment template and label the
drawing); the other fields feed the window's size and colour selectors.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Product:
    name: str
    id: Optional[int] = None
    category: str = ''
    base_price: str = ''
    sizes: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)

    def display_label(self) -> str:
        return f"{self.name} - ${self.base_price}" if self.base_price else self.name


DEFAULT_CATALOG: List[Product] = [
    Product("Classic Wrestling Singlet", 1, "Singlets", "45.00",
            ["XS", "S", "M", "L", "XL", "XXL"], ["Red", "Blue", "Black", "White", "Navy"]),
    Product("Team Hoodie", 2, "Hoodies", "65.00",
            ["S", "M", "L", "XL", "XXL"], ["Black", "Navy", "Gray", "White", "Red"]),
    Product("Athletic Shorts", 3, "Shorts", "35.00",
            ["S", "M", "L", "XL"], ["Black", "Navy", "Red", "Blue"]),
    Product("Team Jersey", 4, "Jerseys", "55.00",
            ["XS", "S", "M", "L", "XL"], ["White", "Red", "Blue", "Black"]),
    Product("Performance T-Shirt", 5, "Shirts", "25.00",
            ["S", "M", "L", "XL"], ["White", "Black", "Gray", "Navy"]),
    Product("Baseball Jersey", 6, "Jerseys", "60.00",
            ["S", "M", "L", "XL"], ["White", "Gray", "Navy"]),
    Product("Team Polo", 7, "Shirts", "40.00",
            ["S", "M", "L", "XL"], ["White", "Navy", "Black"]),
    Product("Training Tank", 8, "Shirts", "22.00",
            ["S", "M", "L", "XL"], ["Black", "White", "Red"]),
]


def find_product(catalog: List[Product], name_or_id) -> Optional[Product]:
    """Find a product by id, exact name, or case-insensitive name fragment."""
    for product in catalog:
        if product.id is not None and product.id == name_or_id:
            return product
    if isinstance(name_or_id, str):
        needle = name_or_id.strip().lower()
        if not needle:
            return None
        for product in catalog:
            if product.name.lower() == needle:
                return product
        for product in catalog:
            if needle in product.name.lower():
                return product
    return None


__all__ = ['Product', 'DEFAULT_CATALOG', 'find_product']
