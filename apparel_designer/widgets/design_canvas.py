"""
DesignCanvas - Interactive garment design surface

Paints the scene through DesignRenderer and forwards input to the
InteractionController:
- Left click selects, drag moves, corner handles resize
- Delete/Backspace removes the selected element
- Cursor follows the handle or element under the pointer
"""

from typing import Optional

from PyQt6.QtCore import Qt, QSize, pyqtSignal
from PyQt6.QtGui import QCursor, QPainter
from PyQt6.QtWidgets import QSizePolicy, QWidget

from ..config import Config
from ..core.interaction import InteractionController
from ..core.scene import DesignScene
from ..rendering.surface import QPainterSurface

_CURSORS = {
    'nwse': Qt.CursorShape.SizeFDiagCursor,
    'nesw': Qt.CursorShape.SizeBDiagCursor,
    'move': Qt.CursorShape.SizeAllCursor,
    'default': Qt.CursorShape.ArrowCursor,
}

KEY_NAMES = {
    Qt.Key.Key_Delete.value: 'Delete',
    Qt.Key.Key_Backspace.value: 'Backspace',
}


class DesignCanvas(QWidget):
    """
    Fixed-size canvas widget showing one DesignScene.

    The widget keeps no element state of its own; every paint reads the
    scene, and every scene change schedules a repaint.
    """

    # Signals
    element_pressed = pyqtSignal(object)  # element_id or None

    def __init__(self, scene: DesignScene, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._scene = scene
        self._controller = InteractionController(scene)

        self.setFixedSize(Config.CANVAS_WIDTH, Config.CANVAS_HEIGHT)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMouseTracking(True)

        self._scene.scene_changed.connect(self.update)

    # ==================== Properties ====================

    @property
    def scene(self) -> DesignScene:
        return self._scene

    @property
    def controller(self) -> InteractionController:
        return self._controller

    def sizeHint(self) -> QSize:
        return QSize(Config.CANVAS_WIDTH, Config.CANVAS_HEIGHT)

    # ==================== Painting ====================

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            surface = QPainterSurface(painter, self.width(), self.height())
            self._scene.renderer.render(
                surface,
                self._scene.elements,
                self._scene.selected_id,
                self._scene.product,
                self._scene.garment_color or None,
            )
        finally:
            painter.end()

    # ==================== Mouse Events ====================

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self.setFocus(Qt.FocusReason.MouseFocusReason)
            hit_id = self._controller.pointer_down(pos.x(), pos.y())
            self.element_pressed.emit(hit_id)
            self._update_cursor(pos.x(), pos.y())
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        pos = event.position()
        if self._controller.is_active:
            self._controller.pointer_move(pos.x(), pos.y())
            event.accept()
        else:
            self._update_cursor(pos.x(), pos.y())
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self._controller.pointer_up(pos.x(), pos.y())
            self._update_cursor(pos.x(), pos.y())
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        """Drop any resize/move cursor when the pointer leaves."""
        self.setCursor(QCursor(Qt.CursorShape.ArrowCursor))
        super().leaveEvent(event)

    def _update_cursor(self, x: float, y: float):
        hint = self._controller.cursor_hint(x, y)
        self.setCursor(QCursor(_CURSORS.get(hint, Qt.CursorShape.ArrowCursor)))

    # ==================== Keyboard ====================

    def keyPressEvent(self, event):
        key = event.key()
        key_name = KEY_NAMES.get(getattr(key, 'value', key))
        if key_name and self._controller.key_press(key_name):
            event.accept()
            return
        super().keyPressEvent(event)


__all__ = ['DesignCanvas']
