"""
DesignScene - the element list, selection and change notifications for one
design session.

Features:
- Text/image element creation with configured defaults
- Forgiving partial updates and deletes (unknown ids are ignored)
- Undo/redo of add, delete and committed edits
- PNG and SVG export
- JSON design data import/export
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QImage, QUndoStack

from ..config import Config
from ..utils.image_utils import file_to_data_uri
from .elements import (
    DesignElement, TextElement, ImageElement, TextOptions,
    generate_element_id, element_from_dict,
)
from .errors import DesignFileError
from .product import Product, find_product
from .undo_commands import AddElementCommand, DeleteElementCommand, EditElementCommand
from ..rendering.renderer import DesignRenderer, encode_png, render_to_image, render_to_svg

logger = logging.getLogger(__name__)


class DesignScene(QObject):
    """
    Ordered element list plus the selected id.

    List order is paint order; the last element is topmost. Signals fire
    synchronously after each change so a host can persist or repaint.
    """

    # Signals
    element_added = pyqtSignal(str)      # element_id
    element_updated = pyqtSignal(str)    # element_id
    element_deleted = pyqtSignal(str)    # element_id
    selection_changed = pyqtSignal(object)  # element_id or None
    product_changed = pyqtSignal(object)  # Product or None
    scene_changed = pyqtSignal()

    def __init__(self, product: Optional[Product] = None, parent: Optional[QObject] = None,
                 renderer=None):
        super().__init__(parent)
        self._elements: List[DesignElement] = []
        self._selected_id: Optional[str] = None
        self._product = product
        self._undo_stack = QUndoStack(self)
        self._renderer = renderer

        # Order options chosen alongside the design
        self.size: str = ''
        self.garment_color: str = ''

    # ==================== Properties ====================

    @property
    def elements(self) -> List[DesignElement]:
        """Copy of the element list in z-order."""
        return list(self._elements)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def undo_stack(self) -> QUndoStack:
        return self._undo_stack

    @property
    def product(self) -> Optional[Product]:
        return self._product

    @product.setter
    def product(self, value: Optional[Product]):
        if value == self._product:
            return
        self._product = value
        self.product_changed.emit(value)
        self.scene_changed.emit()

    @property
    def renderer(self):
        if self._renderer is None:
            self._renderer = DesignRenderer()
        return self._renderer

    def __len__(self) -> int:
        return len(self._elements)

    # ==================== Lookup ====================

    def get(self, element_id: Optional[str]) -> Optional[DesignElement]:
        if element_id is None:
            return None
        for element in self._elements:
            if element.id == element_id:
                return element
        return None

    def index_of(self, element_id: str) -> int:
        """Index of the element in z-order, or -1."""
        for i, element in enumerate(self._elements):
            if element.id == element_id:
                return i
        return -1

    def selected_element(self) -> Optional[DesignElement]:
        return self.get(self._selected_id)

    def element_at(self, x: float, y: float) -> Optional[DesignElement]:
        """Topmost element whose unrotated box contains the point."""
        for element in reversed(self._elements):
            if element.contains(x, y):
                return element
        return None

    # ==================== Creation ====================

    def add_text(self, content: str, options: Optional[TextOptions] = None) -> TextElement:
        """
        Add a text element at the default text position and size.

        Args:
            content: Text to display
            options: Style overrides; unset fields take the defaults

        Returns:
            The new element (now topmost)
        """
        style = (options or TextOptions()).resolved()
        x, y = Config.TEXT_DEFAULT_POS
        w, h = Config.TEXT_DEFAULT_SIZE
        element = TextElement(
            id=self._unique_id(), content=content,
            x=float(x), y=float(y), width=float(w), height=float(h),
            **style,
        )
        self._undo_stack.push(AddElementCommand(self, element))
        return element

    def add_image(self, src: str) -> ImageElement:
        """Add an image element at the default image position and size."""
        x, y = Config.IMAGE_DEFAULT_POS
        w, h = Config.IMAGE_DEFAULT_SIZE
        element = ImageElement(
            id=self._unique_id(), content=src,
            x=float(x), y=float(y), width=float(w), height=float(h),
        )
        self._undo_stack.push(AddElementCommand(self, element))
        return element

    def add_image_file(self, path: Union[str, Path]) -> ImageElement:
        """
        Read a local image, embed it as a data URI and add it.

        Raises:
            DesignFileError: If the file cannot be read or is not an image
        """
        try:
            uri = file_to_data_uri(Path(path))
        except (OSError, ValueError) as e:
            raise DesignFileError(f"Could not load image {path}: {e}") from e
        logger.info(f"Embedded image {Path(path).name} ({len(uri)} chars)")
        return self.add_image(uri)

    def add_element(self, element: DesignElement) -> DesignElement:
        """Append a caller-built element; a clashing id is replaced."""
        if self.get(element.id) is not None:
            element.id = self._unique_id()
        self._undo_stack.push(AddElementCommand(self, element))
        return element

    def _unique_id(self) -> str:
        element_id = generate_element_id()
        while self.get(element_id) is not None:
            element_id = generate_element_id()
        return element_id

    # ==================== Mutation ====================

    def update(self, element_id: str, **changes: Any) -> bool:
        """
        Merge field changes into an element (live, not recorded for undo).

        Unknown ids are ignored. Width and height are clamped to the minimum
        element size.

        Returns:
            True if any value changed

        Raises:
            ValueError: For a field the element type does not have
        """
        element = self.get(element_id)
        if element is None:
            logger.debug(f"update: no element {element_id!r}, ignoring")
            return False

        applied = element.apply(changes)
        if not applied:
            return False
        self.element_updated.emit(element_id)
        self.scene_changed.emit()
        return True

    def edit(self, element_id: str, text: str = "Edit Element", **changes: Any) -> bool:
        """Apply changes as one undoable step. Unknown ids are ignored."""
        element = self.get(element_id)
        if element is None:
            logger.debug(f"edit: no element {element_id!r}, ignoring")
            return False
        before = {name: getattr(element, name) for name in changes if hasattr(element, name)}
        if not self.update(element_id, **changes):
            return False
        after = {name: getattr(element, name) for name in before}
        self._undo_stack.push(EditElementCommand(self, element_id, before, after, text,
                                                 already_applied=True))
        return True

    def commit_edit(self, element_id: str, before: Dict[str, Any], text: str = "Edit Element") -> bool:
        """
        Record an edit that has already been applied live (e.g. a drag).

        Args:
            element_id: Edited element
            before: Field values captured before the live edit started

        Returns:
            True if a command was recorded (some field differs)
        """
        element = self.get(element_id)
        if element is None:
            return False
        after = {name: getattr(element, name) for name in before}
        if after == before:
            return False
        self._undo_stack.push(EditElementCommand(self, element_id, before, after, text,
                                                 already_applied=True))
        return True

    def delete(self, element_id: Optional[str]) -> bool:
        """
        Remove an element; clears the selection if it was selected.

        Unknown ids are ignored.
        """
        index = self.index_of(element_id) if element_id is not None else -1
        if index < 0:
            logger.debug(f"delete: no element {element_id!r}, ignoring")
            return False
        element = self._elements[index]
        self._undo_stack.push(DeleteElementCommand(self, element, index))
        return True

    def delete_selected(self) -> bool:
        if self._selected_id is None:
            return False
        return self.delete(self._selected_id)

    def select(self, element_id: Optional[str]):
        """Set the selection; an unknown id clears it."""
        if element_id is not None and self.get(element_id) is None:
            element_id = None
        if element_id == self._selected_id:
            return
        self._selected_id = element_id
        self.selection_changed.emit(element_id)
        self.scene_changed.emit()

    def clear(self):
        """Remove every element and reset undo history."""
        removed = [element.id for element in self._elements]
        self._elements.clear()
        self._undo_stack.clear()
        if self._selected_id is not None:
            self._selected_id = None
            self.selection_changed.emit(None)
        for element_id in removed:
            self.element_deleted.emit(element_id)
        self.scene_changed.emit()

    # ==================== List Mutators (used by undo commands) ====================

    def _insert_element(self, element: DesignElement, index: Optional[int] = None):
        if index is None or index >= len(self._elements):
            self._elements.append(element)
        else:
            self._elements.insert(max(0, index), element)
        logger.debug(f"Added {element.kind.value} element {element.id}")
        self.element_added.emit(element.id)
        self.scene_changed.emit()

    def _remove_element(self, element_id: str):
        index = self.index_of(element_id)
        if index < 0:
            return
        del self._elements[index]
        logger.debug(f"Removed element {element_id}")
        if self._selected_id == element_id:
            self._selected_id = None
            self.selection_changed.emit(None)
        self.element_deleted.emit(element_id)
        self.scene_changed.emit()

    # ==================== Export ====================

    def render_image(self, width: int = Config.CANVAS_WIDTH, height: int = Config.CANVAS_HEIGHT,
                     transparent: bool = False) -> QImage:
        """Render the scene (without selection decorations) to a QImage."""
        return render_to_image(self.renderer, self._elements, width, height,
                               self._product, self.garment_color or None,
                               transparent=transparent)

    def export_raster(self, width: int = Config.CANVAS_WIDTH,
                      height: int = Config.CANVAS_HEIGHT) -> bytes:
        """
        Render the scene and encode it as PNG.

        Raises:
            RasterExportError: If the surface cannot be created or encoded
        """
        return encode_png(self.render_image(width, height))

    def export_svg(self, width: int = Config.CANVAS_WIDTH,
                   height: int = Config.CANVAS_HEIGHT) -> bytes:
        title = self._product.name if self._product else ''
        return render_to_svg(self.renderer, self._elements, width, height,
                             self._product, self.garment_color or None, title)

    # ==================== Serialization ====================

    def to_dict(self) -> Dict[str, Any]:
        """Design data: elements plus the product and order options."""
        return {
            'version': Config.DESIGN_JSON_VERSION,
            'product': self._product.name if self._product else None,
            'product_id': self._product.id if self._product else None,
            'size': self.size,
            'color': self.garment_color,
            'canvas_size': [Config.CANVAS_WIDTH, Config.CANVAS_HEIGHT],
            'elements': [element.to_dict() for element in self._elements],
        }

    def load_dict(self, data: Dict[str, Any], catalog: Optional[List[Product]] = None):
        """
        Replace the scene contents with design data.

        The product is looked up in catalog by id or name when given;
        otherwise a bare Product is built from the stored name.

        Raises:
            DesignFileError: If the data or any element is malformed
        """
        if not isinstance(data, dict):
            raise DesignFileError("Design data must be an object")
        raw_elements = data.get('elements', [])
        if not isinstance(raw_elements, list):
            raise DesignFileError("'elements' must be a list")

        elements = [element_from_dict(item) for item in raw_elements]
        seen = set()
        for element in elements:
            if element.id in seen:
                element.id = generate_element_id()
            seen.add(element.id)

        self.clear()
        self._elements.extend(elements)

        product_ref = data.get('product_id', data.get('productId'))
        product_name = data.get('product')
        product = None
        if catalog:
            product = find_product(catalog, product_ref) or find_product(catalog, product_name or '')
        if product is None and product_name:
            product = Product(product_name, product_ref if isinstance(product_ref, int) else None)
        self.product = product
        self.size = data.get('size') or ''
        self.garment_color = data.get('color') or ''

        for element in elements:
            self.element_added.emit(element.id)
        self.scene_changed.emit()
        logger.info(f"Loaded design with {len(elements)} element(s)")


__all__ = ['DesignScene']
