"""
DesignRenderer - paints a design scene onto a DrawingSurface

Paint order per frame:
- Background
- Garment silhouette for the product (T-Shirt when none)
- Translucent chest and lower design zones
- Product name below the garment
- Elements in list order, each rotated about its own centre
- Selection decorations for the selected element
"""

import logging
from typing import Iterable, Optional, Tuple, Union

from PyQt6.QtCore import QBuffer, QByteArray, QIODevice, QRect, QSize
from PyQt6.QtGui import QColor, QImage, QPainter
from PyQt6.QtSvg import QSvgGenerator

from ..config import Config
from ..core.elements import DesignElement, ImageElement, TextElement
from ..core.errors import RasterExportError
from ..core.product import Product
from ..core.templates import GarmentTemplate, resolve_template
from ..utils.color_utils import garment_color_hex, outline_color_for
from .image_cache import ImageCache, get_image_cache
from .surface import DrawingSurface, QPainterSurface

logger = logging.getLogger(__name__)

Box = Tuple[float, float, float, float]
ProductLike = Union[Product, str, None]


def _product_name(product: ProductLike) -> Optional[str]:
    if product is None:
        return None
    if isinstance(product, str):
        return product or None
    return product.name or None


class DesignRenderer:
    """Stateless apart from the decoded-image cache."""

    def __init__(self, image_cache: Optional[ImageCache] = None, render_bitmaps: bool = True):
        self._images = image_cache or get_image_cache()
        self.render_bitmaps = render_bitmaps

    # ==================== Layout ====================

    @staticmethod
    def garment_box(width: float, height: float) -> Box:
        """Centred garment box: height is 60% of canvas width, width 80% of that."""
        budget = width * Config.GARMENT_BUDGET_RATIO
        box_w = budget * Config.GARMENT_WIDTH_RATIO
        box_h = budget
        return ((width - box_w) / 2, (height - box_h) / 2, box_w, box_h)

    @staticmethod
    def zone_boxes(garment: Box) -> Tuple[Box, Box]:
        """Chest and lower design zones inside the garment box."""
        gx, gy, gw, gh = garment
        zone_w = gw * Config.ZONE_WIDTH_RATIO
        zone_x = gx + (gw - zone_w) / 2
        boxes = []
        for top, bottom in (Config.CHEST_ZONE, Config.LOWER_ZONE):
            boxes.append((zone_x, gy + top * gh, zone_w, (bottom - top) * gh))
        return tuple(boxes)

    # ==================== Frame ====================

    def render(
        self,
        surface: DrawingSurface,
        elements: Iterable[DesignElement],
        selected_id: Optional[str] = None,
        product: ProductLike = None,
        garment_color: Optional[str] = None,
        include_backdrop: bool = True,
    ):
        """
        Paint one full frame.

        Args:
            surface: Target surface (its width/height define the canvas)
            elements: Elements in z-order (first painted first)
            selected_id: Element that gets selection decorations
            product: Product or product name used for template and label
            garment_color: Catalog colour name or hex for the garment fill
            include_backdrop: False paints elements only (transparent export)
        """
        width, height = surface.width, surface.height
        name = _product_name(product)

        if include_backdrop:
            surface.clear(Config.BACKGROUND_COLOR)
            template = resolve_template(name or 't-shirt')
            garment = self.garment_box(width, height)
            self._draw_garment(surface, template, garment, garment_color)
            self._draw_zones(surface, garment)
            if name:
                self._draw_label(surface, name, garment, width)

        for element in elements:
            self._draw_element(surface, element, element.id == selected_id)

    def _draw_garment(self, surface: DrawingSurface, template: GarmentTemplate, box: Box,
                      garment_color: Optional[str]):
        fill = garment_color_hex(garment_color, Config.GARMENT_FILL_COLOR)
        stroke = outline_color_for(fill) if garment_color else Config.GARMENT_STROKE_COLOR
        # Seams, buttons and drawstrings read lighter than the silhouette
        detail = stroke if garment_color else Config.GARMENT_DETAIL_COLOR
        x, y, w, h = box
        for fragment in template.outline:
            commands = fragment.scaled(x, y, w, h)
            if fragment.filled:
                surface.draw_path(commands, fill=fill, stroke=stroke, width=Config.GARMENT_STROKE_WIDTH)
            else:
                surface.draw_path(commands, stroke=detail, width=Config.GARMENT_STROKE_WIDTH)

    def _draw_zones(self, surface: DrawingSurface, garment: Box):
        for x, y, w, h in self.zone_boxes(garment):
            surface.fill_rect(x, y, w, h, Config.ZONE_FILL_COLOR, Config.ZONE_OPACITY)

    def _draw_label(self, surface: DrawingSurface, name: str, garment: Box, width: float):
        _, gy, _, gh = garment
        center_y = gy + gh + Config.LABEL_OFFSET
        surface.draw_text(0, center_y - Config.LABEL_FONT_SIZE, width, Config.LABEL_FONT_SIZE * 2,
                          name, Config.LABEL_FONT_FAMILY, Config.LABEL_FONT_SIZE, Config.LABEL_COLOR)

    # ==================== Elements ====================

    def _draw_element(self, surface: DrawingSurface, element: DesignElement, is_selected: bool):
        w, h = element.width, element.height
        cx, cy = element.center

        # Local space: (0, 0) is the unrotated top-left corner
        with surface.with_transform(cx, cy, element.rotation, -w / 2, -h / 2):
            if isinstance(element, TextElement):
                surface.draw_text(0, 0, w, h, element.content, element.font_family,
                                  element.font_size, element.color)
            elif isinstance(element, ImageElement):
                self._draw_image(surface, element)

            if is_selected:
                self._draw_selection(surface, w, h)

    def _draw_image(self, surface: DrawingSurface, element: ImageElement):
        w, h = element.width, element.height
        image = self._images.get(element.content) if self.render_bitmaps else None
        if image is not None:
            surface.draw_image(0, 0, w, h, image)
            return

        surface.fill_rect(0, 0, w, h, Config.PLACEHOLDER_FILL)
        surface.stroke_rect(0, 0, w, h, Config.PLACEHOLDER_BORDER, 1.0)
        surface.draw_text(0, 0, w, h, Config.PLACEHOLDER_LABEL, Config.LABEL_FONT_FAMILY,
                          Config.LABEL_FONT_SIZE, Config.PLACEHOLDER_TEXT_COLOR)

    def _draw_selection(self, surface: DrawingSurface, w: float, h: float):
        inset = Config.SELECTION_INSET
        surface.stroke_rect(-inset, -inset, w + inset * 2, h + inset * 2, Config.SELECTION_COLOR,
                            Config.SELECTION_WIDTH, Config.SELECTION_DASH)

        half = Config.HANDLE_SIZE / 2
        for hx, hy in ((0, 0), (w, 0), (0, h), (w, h)):
            surface.fill_rect(hx - half, hy - half, Config.HANDLE_SIZE, Config.HANDLE_SIZE,
                              Config.SELECTION_COLOR)

        radius = Config.ROTATION_HANDLE_RADIUS
        surface.draw_ellipse(w / 2, -Config.ROTATION_HANDLE_OFFSET, radius, radius,
                             fill=Config.SELECTION_COLOR)


# ==================== Export ====================

def render_to_image(
    renderer: DesignRenderer,
    elements: Iterable[DesignElement],
    width: int = Config.CANVAS_WIDTH,
    height: int = Config.CANVAS_HEIGHT,
    product: ProductLike = None,
    garment_color: Optional[str] = None,
    selected_id: Optional[str] = None,
    transparent: bool = False,
) -> QImage:
    """
    Render a scene into a new ARGB QImage.

    Raises:
        RasterExportError: If the image surface cannot be allocated
    """
    if width <= 0 or height <= 0:
        raise RasterExportError(f"Cannot export a {width}x{height} surface")

    image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
    if image.isNull():
        raise RasterExportError(f"Could not allocate a {width}x{height} image")
    image.fill(QColor(0, 0, 0, 0))

    painter = QPainter(image)
    try:
        surface = QPainterSurface(painter, width, height)
        renderer.render(surface, elements, selected_id, product, garment_color,
                        include_backdrop=not transparent)
    finally:
        painter.end()
    return image


def encode_png(image: QImage) -> bytes:
    """
    Encode a QImage as PNG bytes.

    Raises:
        RasterExportError: If encoding fails
    """
    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    ok = image.save(buffer, 'PNG')
    buffer.close()
    if not ok or data.isEmpty():
        raise RasterExportError("PNG encoding failed")
    return bytes(data)


def render_to_svg(
    renderer: DesignRenderer,
    elements: Iterable[DesignElement],
    width: int = Config.CANVAS_WIDTH,
    height: int = Config.CANVAS_HEIGHT,
    product: ProductLike = None,
    garment_color: Optional[str] = None,
    title: str = '',
) -> bytes:
    """Render a scene as an SVG document."""
    if width <= 0 or height <= 0:
        raise RasterExportError(f"Cannot export a {width}x{height} surface")

    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)

    generator = QSvgGenerator()
    generator.setOutputDevice(buffer)
    generator.setSize(QSize(width, height))
    generator.setViewBox(QRect(0, 0, width, height))
    generator.setTitle(title or Config.APP_NAME)

    painter = QPainter()
    if not painter.begin(generator):
        buffer.close()
        raise RasterExportError("Could not start SVG painter")
    try:
        surface = QPainterSurface(painter, width, height)
        renderer.render(surface, elements, None, product, garment_color)
    finally:
        painter.end()
    buffer.close()
    return bytes(data)


__all__ = ['DesignRenderer', 'render_to_image', 'encode_png', 'render_to_svg']
