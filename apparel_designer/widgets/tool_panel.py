"""
Tool Panel Widget

Left-hand panel of the design window with:
- Text entry with font family, size and colour
- Preset graphics and image upload
- Colour palette (applies to the selected text, or the next one added)
- Element list mirroring the scene in z-order
"""

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton,
    QLineEdit, QComboBox, QSpinBox, QListWidget, QListWidgetItem, QFrame
)

from ..config import Config
from ..core.elements import DesignElement, TextElement, TextOptions
from ..core.scene import DesignScene


def _section_label(text: str) -> QLabel:
    label = QLabel(text)
    label.setStyleSheet("font-weight: bold; color: #495057; padding-top: 6px;")
    return label


def _separator() -> QFrame:
    sep = QFrame()
    sep.setFrameShape(QFrame.Shape.HLine)
    sep.setStyleSheet("background: #dee2e6;")
    return sep


class ToolPanel(QWidget):
    """
    Design tools bound to a DesignScene.

    Text and image creation go straight to the scene; style changes made
    while a text element is selected are recorded as undoable edits.

    Usage:
        panel = ToolPanel(scene)
        panel.image_file_requested.connect(window.open_image_file)
    """

    # Signals
    image_file_requested = pyqtSignal()
    element_activated = pyqtSignal(str)  # element_id

    def __init__(self, scene: DesignScene, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._scene = scene
        self._current_color = Config.DEFAULT_TEXT_COLOR
        self._syncing = False

        self._build_ui()
        self._connect_scene()
        self._refresh_element_list()

    # ==================== UI ====================

    def _build_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        # Text tools
        layout.addWidget(_section_label("Add Text"))
        self._text_input = QLineEdit()
        self._text_input.setPlaceholderText("Enter text...")
        self._text_input.returnPressed.connect(self._on_add_text)
        layout.addWidget(self._text_input)

        style_row = QHBoxLayout()
        self._font_combo = QComboBox()
        self._font_combo.addItems(Config.FONT_FAMILIES)
        self._font_combo.setCurrentText(Config.DEFAULT_FONT_FAMILY)
        self._font_combo.currentTextChanged.connect(self._on_font_family_changed)
        style_row.addWidget(self._font_combo, 1)

        self._size_spin = QSpinBox()
        self._size_spin.setRange(Config.MIN_FONT_SIZE, Config.MAX_FONT_SIZE)
        self._size_spin.setValue(Config.DEFAULT_FONT_SIZE)
        self._size_spin.setSuffix(" px")
        self._size_spin.valueChanged.connect(self._on_font_size_changed)
        style_row.addWidget(self._size_spin)
        layout.addLayout(style_row)

        self._add_text_btn = QPushButton("Add Text")
        self._add_text_btn.clicked.connect(self._on_add_text)
        layout.addWidget(self._add_text_btn)

        layout.addWidget(_separator())

        # Palette
        layout.addWidget(_section_label("Text Color"))
        palette = QGridLayout()
        palette.setSpacing(4)
        self._swatches = []
        for i, color in enumerate(Config.COLOR_PALETTE):
            swatch = QPushButton()
            swatch.setFixedSize(28, 28)
            swatch.setToolTip(color)
            swatch.setCheckable(True)
            swatch.setStyleSheet(
                f"QPushButton {{ background-color: {color}; border: 1px solid #adb5bd; }}"
                f"QPushButton:checked {{ border: 2px solid {Config.SELECTION_COLOR}; }}"
            )
            swatch.clicked.connect(lambda checked=False, c=color: self._on_color_clicked(c))
            palette.addWidget(swatch, i // 4, i % 4)
            self._swatches.append((color, swatch))
        layout.addLayout(palette)
        self._mark_swatch(self._current_color)

        layout.addWidget(_separator())

        # Graphics
        layout.addWidget(_section_label("Graphics"))
        presets = QGridLayout()
        presets.setSpacing(4)
        for i, url in enumerate(Config.PRESET_GRAPHICS):
            btn = QPushButton(f"Graphic {i + 1}")
            btn.setToolTip(url)
            btn.clicked.connect(lambda checked=False, u=url: self._scene.add_image(u))
            presets.addWidget(btn, i // 2, i % 2)
        layout.addLayout(presets)

        self._upload_btn = QPushButton("Upload Image...")
        self._upload_btn.clicked.connect(self.image_file_requested)
        layout.addWidget(self._upload_btn)

        layout.addWidget(_separator())

        # Element list
        layout.addWidget(_section_label("Elements"))
        self._element_list = QListWidget()
        self._element_list.currentItemChanged.connect(self._on_list_selection_changed)
        layout.addWidget(self._element_list, 1)

        self._delete_btn = QPushButton("Delete Selected")
        self._delete_btn.setEnabled(False)
        self._delete_btn.clicked.connect(self._scene.delete_selected)
        layout.addWidget(self._delete_btn)

    def _connect_scene(self):
        self._scene.element_added.connect(self._refresh_element_list)
        self._scene.element_deleted.connect(self._refresh_element_list)
        self._scene.element_updated.connect(self._on_element_updated)
        self._scene.selection_changed.connect(self._on_selection_changed)

    # ==================== Properties ====================

    @property
    def current_color(self) -> str:
        return self._current_color

    @property
    def element_list(self) -> QListWidget:
        return self._element_list

    def text_options(self) -> TextOptions:
        """Style for the next text element."""
        return TextOptions(
            font_size=self._size_spin.value(),
            color=self._current_color,
            font_family=self._font_combo.currentText(),
        )

    # ==================== Tool Actions ====================

    def _on_add_text(self):
        content = self._text_input.text().strip()
        if not content:
            return
        element = self._scene.add_text(content, self.text_options())
        self._scene.select(element.id)
        self._text_input.clear()

    def _selected_text(self) -> Optional[TextElement]:
        element = self._scene.selected_element()
        return element if isinstance(element, TextElement) else None

    def _on_color_clicked(self, color: str):
        self._current_color = color
        self._mark_swatch(color)
        element = self._selected_text()
        if element is not None:
            self._scene.edit(element.id, "Change Color", color=color)

    def _on_font_family_changed(self, family: str):
        if self._syncing:
            return
        element = self._selected_text()
        if element is not None:
            self._scene.edit(element.id, "Change Font", font_family=family)

    def _on_font_size_changed(self, size: int):
        if self._syncing:
            return
        element = self._selected_text()
        if element is not None:
            self._scene.edit(element.id, "Change Font Size", font_size=size)

    def _mark_swatch(self, color: str):
        for swatch_color, swatch in self._swatches:
            swatch.setChecked(swatch_color.lower() == color.lower())

    # ==================== Scene Sync ====================

    @staticmethod
    def _describe(element: DesignElement) -> str:
        if isinstance(element, TextElement):
            return f"Text: {element.content}"
        if element.content.startswith('data:'):
            return "Image: uploaded"
        return f"Image: {element.content.rsplit('/', 1)[-1][:32]}"

    def _refresh_element_list(self, *_):
        self._syncing = True
        try:
            self._element_list.clear()
            # Topmost first
            for element in reversed(self._scene.elements):
                item = QListWidgetItem(self._describe(element))
                item.setData(Qt.ItemDataRole.UserRole, element.id)
                self._element_list.addItem(item)
                if element.id == self._scene.selected_id:
                    self._element_list.setCurrentItem(item)
        finally:
            self._syncing = False

    def _on_element_updated(self, element_id: str):
        element = self._scene.get(element_id)
        if element is None:
            return
        for row in range(self._element_list.count()):
            item = self._element_list.item(row)
            if item.data(Qt.ItemDataRole.UserRole) == element_id:
                item.setText(self._describe(element))
                break
        if element_id == self._scene.selected_id:
            self._sync_style_controls(element)

    def _on_selection_changed(self, element_id):
        self._delete_btn.setEnabled(element_id is not None)
        self._syncing = True
        try:
            if element_id is None:
                self._element_list.setCurrentItem(None)
            else:
                for row in range(self._element_list.count()):
                    item = self._element_list.item(row)
                    if item.data(Qt.ItemDataRole.UserRole) == element_id:
                        self._element_list.setCurrentItem(item)
                        break
        finally:
            self._syncing = False

        element = self._scene.get(element_id)
        if element is not None:
            self._sync_style_controls(element)

    def _sync_style_controls(self, element: DesignElement):
        """Show the selected text element's style in the controls."""
        if not isinstance(element, TextElement):
            return
        self._syncing = True
        try:
            self._font_combo.setCurrentText(element.font_family)
            self._size_spin.setValue(element.font_size)
            self._current_color = element.color
            self._mark_swatch(element.color)
        finally:
            self._syncing = False

    def _on_list_selection_changed(self, current: Optional[QListWidgetItem], previous):
        if self._syncing or current is None:
            return
        element_id = current.data(Qt.ItemDataRole.UserRole)
        self._scene.select(element_id)
        self.element_activated.emit(element_id)


__all__ = ['ToolPanel']
