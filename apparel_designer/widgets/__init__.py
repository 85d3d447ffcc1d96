"""UI Widgets for Apparel Designer"""

from .design_canvas import DesignCanvas
from .tool_panel import ToolPanel
from .design_window import DesignWindow

__all__ = [
    'DesignCanvas',
    'ToolPanel',
    'DesignWindow',
]
