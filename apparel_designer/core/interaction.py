"""
InteractionController - pointer and keyboard state machine for the canvas.

States:
- IDLE: nothing in progress
- DRAGGING(element_id): pointer moves translate the element
- RESIZING(element_id, handle): pointer moves resize from a corner handle

An element has to be selected before it can be dragged or resized: the first
press on an unselected element only selects it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from ..config import Config
from .elements import DesignElement, GEOMETRY_FIELDS, clamp_size
from .scene import DesignScene

logger = logging.getLogger(__name__)


class InteractionMode(Enum):
    IDLE = 0
    DRAGGING = 1
    RESIZING = 2


class ResizeHandle(Enum):
    """Corner handles, named by compass direction."""
    NW = 'nw'
    NE = 'ne'
    SW = 'sw'
    SE = 'se'


@dataclass(frozen=True)
class InteractionState:
    mode: InteractionMode = InteractionMode.IDLE
    element_id: Optional[str] = None
    handle: Optional[ResizeHandle] = None


IDLE_STATE = InteractionState()

DELETE_KEYS = ('Delete', 'Backspace')


def handle_positions(element: DesignElement) -> Dict[ResizeHandle, Tuple[float, float]]:
    """Canvas-space corner points (rotation is not applied)."""
    x, y, w, h = element.bounds
    return {
        ResizeHandle.NW: (x, y),
        ResizeHandle.NE: (x + w, y),
        ResizeHandle.SW: (x, y + h),
        ResizeHandle.SE: (x + w, y + h),
    }


def resized_geometry(element: DesignElement, handle: ResizeHandle,
                     dx: float, dy: float) -> Dict[str, float]:
    """
    New x/y/width/height for a handle drag of (dx, dy).

    Sizes are clamped to the minimum; when a clamp applies to a moving edge
    the edge stops there, so the corner opposite the handle stays fixed.
    """
    x, y, w, h = element.bounds

    if handle is ResizeHandle.SE:
        return {'x': x, 'y': y, 'width': clamp_size(w + dx), 'height': clamp_size(h + dy)}

    if handle is ResizeHandle.NW:
        new_w = clamp_size(w - dx)
        new_h = clamp_size(h - dy)
        return {'x': x + (w - new_w), 'y': y + (h - new_h), 'width': new_w, 'height': new_h}

    if handle is ResizeHandle.NE:
        new_h = clamp_size(h - dy)
        return {'x': x, 'y': y + (h - new_h), 'width': clamp_size(w + dx), 'height': new_h}

    # SW
    new_w = clamp_size(w - dx)
    return {'x': x + (w - new_w), 'y': y, 'width': new_w, 'height': clamp_size(h + dy)}


class InteractionController:
    """Translates pointer and key events into DesignScene mutations."""

    def __init__(self, scene: DesignScene):
        self._scene = scene
        self._state = IDLE_STATE
        self._anchor: Tuple[float, float] = (0.0, 0.0)
        self._before: Optional[Dict[str, float]] = None

    # ==================== Properties ====================

    @property
    def scene(self) -> DesignScene:
        return self._scene

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def anchor(self) -> Tuple[float, float]:
        return self._anchor

    @property
    def is_active(self) -> bool:
        return self._state.mode is not InteractionMode.IDLE

    # ==================== Hit Testing ====================

    def handle_at(self, element: DesignElement, x: float, y: float) -> Optional[ResizeHandle]:
        """Corner handle whose square hit region contains the point."""
        half = Config.HANDLE_SIZE / 2
        for handle, (hx, hy) in handle_positions(element).items():
            if abs(x - hx) <= half and abs(y - hy) <= half:
                return handle
        return None

    def cursor_hint(self, x: float, y: float) -> str:
        """
        Cursor to show at a point: 'nwse', 'nesw', 'move' or 'default'.
        """
        element = self._scene.element_at(x, y)
        if element is None:
            return 'default'
        if element.id == self._scene.selected_id:
            handle = self.handle_at(element, x, y)
            if handle in (ResizeHandle.NW, ResizeHandle.SE):
                return 'nwse'
            if handle in (ResizeHandle.NE, ResizeHandle.SW):
                return 'nesw'
            return 'move'
        return 'default'

    # ==================== Pointer Events ====================

    def pointer_down(self, x: float, y: float) -> Optional[str]:
        """
        Handle a primary-button press.

        Returns:
            Id of the element under the pointer, or None
        """
        # A press without a release (lost grab) still ends the running edit
        if self.is_active:
            self.pointer_up()

        previously_selected = self._scene.selected_id
        element = self._scene.element_at(x, y)
        hit_id = element.id if element else None

        self._scene.select(hit_id)
        self._state = IDLE_STATE

        if element is not None and hit_id == previously_selected:
            handle = self.handle_at(element, x, y)
            if handle is not None:
                self._state = InteractionState(InteractionMode.RESIZING, hit_id, handle)
            else:
                self._state = InteractionState(InteractionMode.DRAGGING, hit_id)
            self._before = {name: getattr(element, name) for name in GEOMETRY_FIELDS}
            logger.debug(f"{self._state.mode.name} {hit_id}"
                         + (f" via {handle.value}" if handle else ""))

        self._anchor = (x, y)
        return hit_id

    def pointer_move(self, x: float, y: float) -> bool:
        """
        Handle a pointer move; applies the delta since the last event.

        Returns:
            True if the scene changed
        """
        state = self._state
        if state.mode is InteractionMode.IDLE:
            return False

        dx = x - self._anchor[0]
        dy = y - self._anchor[1]
        self._anchor = (x, y)

        element = self._scene.get(state.element_id)
        if element is None:
            # Deleted mid-interaction
            self._reset()
            return False

        if state.mode is InteractionMode.DRAGGING:
            return self._scene.update(element.id, x=element.x + dx, y=element.y + dy)

        return self._scene.update(element.id, **resized_geometry(element, state.handle, dx, dy))

    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None):
        """End any drag or resize; a changed geometry becomes one undo step."""
        state = self._state
        if state.mode is not InteractionMode.IDLE and self._before is not None:
            label = "Move" if state.mode is InteractionMode.DRAGGING else "Resize"
            self._scene.commit_edit(state.element_id, self._before, label)
        self._reset()

    def _reset(self):
        self._state = IDLE_STATE
        self._before = None

    # ==================== Keyboard ====================

    def key_press(self, key: str) -> bool:
        """
        Handle a key name ('Delete', 'Backspace', ...).

        Returns:
            True if the key deleted the selected element
        """
        if key not in DELETE_KEYS:
            return False
        selected = self._scene.selected_id
        if selected is None:
            return False
        if self._state.element_id == selected:
            self._reset()
        return self._scene.delete(selected)


__all__ = [
    'InteractionMode',
    'ResizeHandle',
    'InteractionState',
    'InteractionController',
    'DELETE_KEYS',
    'handle_positions',
    'resized_geometry',
]
