"""
Undo commands for design scene operations.

Provides QUndoCommand subclasses for element add, delete and edit. Commands
call the scene's private list mutators so they never re-enter the stack.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from PyQt6.QtGui import QUndoCommand

from .elements import DesignElement

if TYPE_CHECKING:
    from .scene import DesignScene


class AddElementCommand(QUndoCommand):
    """Undo command for adding an element."""

    def __init__(self, scene: 'DesignScene', element: DesignElement, index: Optional[int] = None):
        super().__init__(f"Add {element.kind.value.title()}")
        self._scene = scene
        self._element = element
        self._index = index

    def redo(self):
        self._scene._insert_element(self._element, self._index)

    def undo(self):
        self._scene._remove_element(self._element.id)


class DeleteElementCommand(QUndoCommand):
    """Undo command for deleting an element (restored at its old z position)."""

    def __init__(self, scene: 'DesignScene', element: DesignElement, index: int):
        super().__init__(f"Delete {element.kind.value.title()}")
        self._scene = scene
        self._element = element
        self._index = index

    def redo(self):
        self._scene._remove_element(self._element.id)

    def undo(self):
        self._scene._insert_element(self._element, self._index)


class EditElementCommand(QUndoCommand):
    """
    Undo command for a field edit.

    With already_applied=True the first redo (triggered by QUndoStack.push)
    is skipped, for edits the user has already made live such as a drag.
    """

    def __init__(self, scene: 'DesignScene', element_id: str, before: Dict[str, Any],
                 after: Dict[str, Any], text: str = "Edit Element", already_applied: bool = False):
        super().__init__(text)
        self._scene = scene
        self._element_id = element_id
        self._before = dict(before)
        self._after = dict(after)
        self._skip_redo = already_applied

    def redo(self):
        if self._skip_redo:
            self._skip_redo = False
            return
        self._scene.update(self._element_id, **self._after)

    def undo(self):
        self._scene.update(self._element_id, **self._before)


__all__ = ['AddElementCommand', 'DeleteElementCommand', 'EditElementCommand']
