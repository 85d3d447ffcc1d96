"""
DesignWindow - Main application window

Pattern: QMainWindow with tool panel, canvas and a log dock
"""

import logging
from pathlib import Path
from typing import List, Optional

from PyQt6.QtCore import Qt, QSettings
from PyQt6.QtGui import QAction, QCloseEvent, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QComboBox,
    QToolBar, QStatusBar, QDockWidget, QPlainTextEdit, QFileDialog,
    QInputDialog, QMessageBox, QLineEdit, QTextEdit, QSplitter
)

from ..config import Config
from ..core.errors import DesignCanvasError, DesignFileError
from ..core.product import DEFAULT_CATALOG, Product
from ..core.scene import DesignScene
from ..services.design_storage import DesignStorage, get_design_storage
from ..utils.logging_config import LoggingConfig
from .design_canvas import KEY_NAMES, DesignCanvas
from .tool_panel import ToolPanel

logger = logging.getLogger(__name__)


class DesignWindow(QMainWindow):
    """
    Main application window

    Features:
    - Product, size and colour selectors
    - Tool panel (text, graphics, palette, element list)
    - Design canvas with drag/resize/delete
    - Undo/redo, save/open, PNG and SVG export
    - Log dock mirroring the application log

    Layout:
        +------------------------------------------+
        |  Toolbar (undo/redo, file, export)       |
        +------------------------------------------+
        |  Product | Size | Color                  |
        +------------------------------------------+
        | ToolPanel  |        DesignCanvas         |
        +------------------------------------------+
        |  Log dock                                |
        +------------------------------------------+
    """

    def __init__(self, product: Optional[Product] = None,
                 catalog: Optional[List[Product]] = None,
                 storage: Optional[DesignStorage] = None,
                 parent=None):
        super().__init__(parent)

        self._catalog = list(catalog) if catalog is not None else list(DEFAULT_CATALOG)
        self._storage = storage or get_design_storage()
        self._design_name = ''
        self._scene = DesignScene(parent=self)

        self._setup_window()
        self._create_widgets()
        self._create_actions()
        self._create_layout()
        self._connect_signals()
        self._load_settings()

        if product is None and self._catalog:
            product = self._catalog[0]
        self._select_product(product)

    def _setup_window(self):
        """Configure window properties"""
        self.setWindowTitle(f"{Config.APP_NAME} {Config.APP_VERSION}")
        self.setGeometry(100, 100, Config.DEFAULT_WINDOW_WIDTH, Config.DEFAULT_WINDOW_HEIGHT)

    def _create_widgets(self):
        """Create UI widgets"""

        # Product options
        self._product_combo = QComboBox()
        for item in self._catalog:
            self._product_combo.addItem(item.display_label(), item.id)
        self._size_combo = QComboBox()
        self._color_combo = QComboBox()

        # Tools and canvas
        self._tool_panel = ToolPanel(self._scene)
        self._tool_panel.setMinimumWidth(240)
        self._canvas = DesignCanvas(self._scene)

        # Log dock
        self._log_view = QPlainTextEdit()
        self._log_view.setReadOnly(True)
        self._log_view.setMaximumBlockCount(500)
        self._log_dock = QDockWidget("Log", self)
        self._log_dock.setObjectName("log_dock")
        self._log_dock.setWidget(self._log_view)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, self._log_dock)
        LoggingConfig.add_widget_handler(self._log_view)

        # Status bar
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready")

    def _create_actions(self):
        """Create toolbar actions"""
        stack = self._scene.undo_stack

        self._undo_action = stack.createUndoAction(self, "Undo")
        self._undo_action.setShortcut(QKeySequence.StandardKey.Undo)
        self._redo_action = stack.createRedoAction(self, "Redo")
        self._redo_action.setShortcut(QKeySequence.StandardKey.Redo)

        self._new_action = QAction("New", self)
        self._new_action.setShortcut(QKeySequence.StandardKey.New)
        self._new_action.triggered.connect(self.new_design)

        self._open_action = QAction("Open...", self)
        self._open_action.setShortcut(QKeySequence.StandardKey.Open)
        self._open_action.triggered.connect(self.open_design)

        self._save_action = QAction("Save...", self)
        self._save_action.setShortcut(QKeySequence.StandardKey.Save)
        self._save_action.triggered.connect(self.save_design)

        self._export_png_action = QAction("Export PNG...", self)
        self._export_png_action.triggered.connect(self.export_png)

        self._export_svg_action = QAction("Export SVG...", self)
        self._export_svg_action.triggered.connect(self.export_svg)

        toolbar = QToolBar("Main")
        toolbar.setObjectName("main_toolbar")
        toolbar.setMovable(False)
        for action in (self._new_action, self._open_action, self._save_action):
            toolbar.addAction(action)
        toolbar.addSeparator()
        toolbar.addAction(self._undo_action)
        toolbar.addAction(self._redo_action)
        toolbar.addSeparator()
        toolbar.addAction(self._export_png_action)
        toolbar.addAction(self._export_svg_action)
        self.addToolBar(toolbar)

    def _create_layout(self):
        """Create window layout"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QVBoxLayout(central_widget)
        main_layout.setContentsMargins(8, 8, 8, 8)
        main_layout.setSpacing(6)

        options_row = QHBoxLayout()
        options_row.addWidget(QLabel("Product:"))
        options_row.addWidget(self._product_combo, 1)
        options_row.addWidget(QLabel("Size:"))
        options_row.addWidget(self._size_combo)
        options_row.addWidget(QLabel("Color:"))
        options_row.addWidget(self._color_combo)
        main_layout.addLayout(options_row)

        # Canvas centred in its pane
        canvas_pane = QWidget()
        canvas_layout = QHBoxLayout(canvas_pane)
        canvas_layout.addStretch()
        canvas_layout.addWidget(self._canvas, 0, Qt.AlignmentFlag.AlignCenter)
        canvas_layout.addStretch()

        self._splitter = QSplitter(Qt.Orientation.Horizontal)
        self._splitter.addWidget(self._tool_panel)
        self._splitter.addWidget(canvas_pane)
        self._splitter.setStretchFactor(0, 0)
        self._splitter.setStretchFactor(1, 1)
        main_layout.addWidget(self._splitter, 1)

    def _connect_signals(self):
        """Connect widget and scene signals"""
        self._product_combo.currentIndexChanged.connect(self._on_product_index_changed)
        self._size_combo.currentTextChanged.connect(self._on_size_changed)
        self._color_combo.currentTextChanged.connect(self._on_color_changed)
        self._tool_panel.image_file_requested.connect(self.open_image_file)
        self._scene.undo_stack.cleanChanged.connect(self._update_title)
        self._scene.product_changed.connect(self._update_title)

    # ==================== Properties ====================

    @property
    def scene(self) -> DesignScene:
        return self._scene

    @property
    def canvas(self) -> DesignCanvas:
        return self._canvas

    @property
    def tool_panel(self) -> ToolPanel:
        return self._tool_panel

    # ==================== Product Options ====================

    def _select_product(self, product: Optional[Product]):
        if product is None:
            return
        index = self._product_combo.findData(product.id) if product.id is not None else -1
        if index >= 0 and index != self._product_combo.currentIndex():
            # Triggers _on_product_index_changed
            self._product_combo.setCurrentIndex(index)
            return
        self._apply_product(product)

    def _on_product_index_changed(self, index: int):
        if 0 <= index < len(self._catalog):
            self._apply_product(self._catalog[index])

    def _apply_product(self, product: Product):
        self._scene.product = product

        self._fill_option_combos(product)

        self._scene.size = product.sizes[0] if product.sizes else ''
        self._scene.garment_color = product.colors[0] if product.colors else ''
        self._canvas.update()

        Config.save_setting('last_product', product.name)
        logger.info(f"Product selected: {product.name}")

    def _fill_option_combos(self, product: Product):
        for combo, values in ((self._size_combo, product.sizes),
                              (self._color_combo, product.colors)):
            combo.blockSignals(True)
            combo.clear()
            combo.addItems(values)
            combo.blockSignals(False)

    def _on_size_changed(self, size: str):
        self._scene.size = size

    def _on_color_changed(self, color: str):
        self._scene.garment_color = color
        self._canvas.update()

    def _sync_option_combos(self):
        """Show the scene's size/colour (e.g. after loading a design)."""
        for combo, value in ((self._size_combo, self._scene.size),
                             (self._color_combo, self._scene.garment_color)):
            combo.blockSignals(True)
            index = combo.findText(value)
            if index >= 0:
                combo.setCurrentIndex(index)
            combo.blockSignals(False)

    # ==================== Design Actions ====================

    def new_design(self):
        self._scene.clear()
        self._design_name = ''
        self._update_title()
        self._status_bar.showMessage("New design")

    def open_image_file(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Upload Image", str(Path.home()),
            "Images (*.png *.jpg *.jpeg *.gif *.bmp *.svg)"
        )
        if not path:
            return
        try:
            element = self._scene.add_image_file(path)
        except DesignFileError as e:
            logger.warning(str(e))
            QMessageBox.warning(self, "Upload Image", str(e))
            return
        self._scene.select(element.id)

    def save_design(self):
        name, ok = QInputDialog.getText(self, "Save Design", "Design name:",
                                        QLineEdit.EchoMode.Normal, self._design_name)
        name = name.strip()
        if not ok or not name:
            return

        if not self._storage.save_design(name, self._scene.to_dict()):
            QMessageBox.warning(self, "Save Design", f"Could not save design '{name}'.")
            return

        try:
            image = self._scene.render_image(transparent=True)
        except DesignCanvasError as e:
            logger.warning(f"Design saved without print PNG: {e}")
        else:
            self._storage.export_png(name, image)

        self._design_name = name
        self._scene.undo_stack.setClean()
        self._status_bar.showMessage(f"Saved '{name}'")

    def open_design(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Design", str(self._storage.base_path), "Designs (*.json)"
        )
        if path:
            self.load_design_file(Path(path))

    def load_design_file(self, path: Path) -> bool:
        """Load a saved design into the scene; shows a warning on failure."""
        data = self._storage.load_design_file(path)
        if data is None:
            QMessageBox.warning(self, "Open Design", f"Could not read {path.name}.")
            return False
        try:
            self._scene.load_dict(data, self._catalog)
        except DesignFileError as e:
            logger.error(f"Invalid design file {path}: {e}")
            QMessageBox.warning(self, "Open Design", f"{path.name} is not a valid design:\n{e}")
            return False

        product = self._scene.product
        if product is not None and product.id is not None:
            index = self._product_combo.findData(product.id)
            if index >= 0:
                self._product_combo.blockSignals(True)
                self._product_combo.setCurrentIndex(index)
                self._product_combo.blockSignals(False)
                self._fill_option_combos(product)
        self._sync_option_combos()

        self._design_name = data.get('name', path.stem)
        self._update_title()
        self._status_bar.showMessage(f"Opened '{self._design_name}'")
        return True

    def export_png(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export PNG", str(self._storage.base_path / "design.png"), "PNG (*.png)"
        )
        if not path:
            return
        try:
            data = self._scene.export_raster()
        except DesignCanvasError as e:
            logger.error(f"PNG export failed: {e}")
            QMessageBox.warning(self, "Export PNG", f"Could not export the design:\n{e}")
            return
        self._write_export(Path(path), data)

    def export_svg(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export SVG", str(self._storage.base_path / "design.svg"), "SVG (*.svg)"
        )
        if not path:
            return
        try:
            data = self._scene.export_svg()
        except DesignCanvasError as e:
            logger.error(f"SVG export failed: {e}")
            QMessageBox.warning(self, "Export SVG", f"Could not export the design:\n{e}")
            return
        self._write_export(Path(path), data)

    def _write_export(self, path: Path, data: bytes):
        try:
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"Could not write {path}: {e}")
            QMessageBox.warning(self, "Export", f"Could not write {path}:\n{e}")
            return
        logger.info(f"Exported {path} ({len(data)} bytes)")
        self._status_bar.showMessage(f"Exported {path.name}")

    def _update_title(self, *_):
        title = f"{Config.APP_NAME} {Config.APP_VERSION}"
        if self._design_name:
            title += f" - {self._design_name}"
        if not self._scene.undo_stack.isClean():
            title += " *"
        self.setWindowTitle(title)

    # ==================== Settings ====================

    def _load_settings(self):
        """Load window geometry and dock state"""
        settings = QSettings(Config.APP_AUTHOR, Config.APP_NAME)
        if settings.contains("window/geometry"):
            self.restoreGeometry(settings.value("window/geometry"))
        if settings.contains("window/state"):
            self.restoreState(settings.value("window/state"))

    def _save_settings(self):
        """Save window geometry and dock state"""
        settings = QSettings(Config.APP_AUTHOR, Config.APP_NAME)
        settings.setValue("window/geometry", self.saveGeometry())
        settings.setValue("window/state", self.saveState())

    # ==================== EVENTS ====================

    def keyPressEvent(self, event):
        """Delete/Backspace remove the selected element unless typing"""
        key = event.key()
        name = KEY_NAMES.get(getattr(key, 'value', key))
        if name:
            focus = self.focusWidget()
            if not isinstance(focus, (QLineEdit, QTextEdit, QPlainTextEdit)):
                if self._canvas.controller.key_press(name):
                    event.accept()
                    return

        super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent):
        """Handle window close"""
        LoggingConfig.remove_widget_handler()
        self._save_settings()
        event.accept()


__all__ = ['DesignWindow']
