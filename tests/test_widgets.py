import pytest
from PyQt6.QtCore import QEvent, QPointF, Qt
from PyQt6.QtGui import QKeyEvent, QMouseEvent

from apparel_designer.config import Config
from apparel_designer.core.elements import TextElement
from apparel_designer.core.product import DEFAULT_CATALOG
from apparel_designer.core.scene import DesignScene
from apparel_designer.services.design_storage import DesignStorage
from apparel_designer.widgets import design_window
from apparel_designer.widgets.design_canvas import DesignCanvas
from apparel_designer.widgets.design_window import DesignWindow
from apparel_designer.widgets.tool_panel import ToolPanel


def mouse(kind, x, y, button=Qt.MouseButton.LeftButton):
    buttons = Qt.MouseButton.NoButton if kind == QEvent.Type.MouseButtonRelease else button
    if kind == QEvent.Type.MouseMove:
        button = Qt.MouseButton.NoButton
    pos = QPointF(x, y)
    return QMouseEvent(kind, pos, pos, button, buttons, Qt.KeyboardModifier.NoModifier)


def key(code):
    return QKeyEvent(QEvent.Type.KeyPress, code, Qt.KeyboardModifier.NoModifier)


@pytest.fixture
def canvas(scene):
    widget = DesignCanvas(scene)
    yield widget
    widget.deleteLater()


@pytest.fixture
def window(tmp_path):
    widget = DesignWindow(storage=DesignStorage(tmp_path / 'designs'))
    yield widget
    widget.close()
    widget.deleteLater()


# ==================== Canvas ====================

def test_canvas_paints_scene(canvas, scene):
    scene.add_text("TEAM")
    pixmap = canvas.grab()
    assert (pixmap.width(), pixmap.height()) == (Config.CANVAS_WIDTH, Config.CANVAS_HEIGHT)
    assert not pixmap.isNull()


def test_canvas_click_drag_and_release(canvas, scene):
    element = scene.add_image("a.png")

    canvas.mousePressEvent(mouse(QEvent.Type.MouseButtonPress, 200, 200))
    assert scene.selected_id == element.id
    canvas.mouseReleaseEvent(mouse(QEvent.Type.MouseButtonRelease, 200, 200))

    canvas.mousePressEvent(mouse(QEvent.Type.MouseButtonPress, 200, 200))
    canvas.mouseMoveEvent(mouse(QEvent.Type.MouseMove, 210, 230))
    canvas.mouseReleaseEvent(mouse(QEvent.Type.MouseButtonRelease, 210, 230))

    assert (element.x, element.y) == (160, 180)
    scene.undo_stack.undo()
    assert (element.x, element.y) == (150, 150)


def test_canvas_delete_key(canvas, scene):
    element = scene.add_text("TEAM")
    scene.select(element.id)
    canvas.keyPressEvent(key(Qt.Key.Key_Backspace))
    assert scene.get(element.id) is None


def test_canvas_right_click_is_ignored(canvas, scene):
    scene.add_image("a.png")
    canvas.mousePressEvent(mouse(QEvent.Type.MouseButtonPress, 200, 200, Qt.MouseButton.RightButton))
    assert scene.selected_id is None


# ==================== Tool Panel ====================

def test_tool_panel_adds_styled_text(scene):
    panel = ToolPanel(scene)
    panel._text_input.setText("  CHAMPS ")
    panel._size_spin.setValue(40)
    panel._font_combo.setCurrentText("Impact")
    panel._on_color_clicked('#FF0000')
    panel._add_text_btn.click()

    element = scene.elements[-1]
    assert isinstance(element, TextElement)
    assert element.content == "CHAMPS"
    assert (element.font_size, element.font_family, element.color) == (40, "Impact", '#ff0000')
    assert scene.selected_id == element.id
    assert panel.element_list.count() == 1
    assert panel._text_input.text() == ''


def test_tool_panel_styles_selected_text_undoably(scene):
    panel = ToolPanel(scene)
    element = scene.add_text("A")
    scene.select(element.id)

    panel._on_color_clicked('#0000FF')
    panel._size_spin.setValue(50)
    assert (element.color, element.font_size) == ('#0000ff', 50)

    scene.undo_stack.undo()
    scene.undo_stack.undo()
    assert (element.color, element.font_size) == (Config.DEFAULT_TEXT_COLOR, Config.DEFAULT_FONT_SIZE)


def test_tool_panel_list_follows_scene(scene):
    panel = ToolPanel(scene)
    first = scene.add_text("A")
    second = scene.add_image("https://example.com/logo.png")
    assert panel.element_list.count() == 2
    # Topmost first
    assert panel.element_list.item(0).data(Qt.ItemDataRole.UserRole) == second.id

    panel.element_list.setCurrentRow(1)
    assert scene.selected_id == first.id

    scene.delete(first.id)
    assert panel.element_list.count() == 1


# ==================== Window ====================

def test_window_starts_with_first_product(window):
    assert window.scene.product == DEFAULT_CATALOG[0]
    assert window.scene.size == DEFAULT_CATALOG[0].sizes[0]
    assert window.scene.garment_color == DEFAULT_CATALOG[0].colors[0]
    assert Config.load_setting('last_product') == DEFAULT_CATALOG[0].name


def test_window_product_selection(window):
    window._product_combo.setCurrentIndex(1)
    assert window.scene.product == DEFAULT_CATALOG[1]
    assert window._size_combo.count() == len(DEFAULT_CATALOG[1].sizes)
    window._color_combo.setCurrentText('Navy')
    assert window.scene.garment_color == 'Navy'


def test_window_preselects_product(tmp_path):
    widget = DesignWindow(product=DEFAULT_CATALOG[2], storage=DesignStorage(tmp_path / 'd'))
    try:
        assert widget.scene.product == DEFAULT_CATALOG[2]
        assert widget._product_combo.currentIndex() == 2
    finally:
        widget.close()


def test_window_loads_saved_design(window, tmp_path):
    source = DesignScene()
    source.product = DEFAULT_CATALOG[3]
    source.size = 'XL'
    source.garment_color = 'Red'
    source.add_text("HOME")
    storage = DesignStorage(tmp_path / 'designs')
    storage.save_design("Home Kit", source.to_dict())

    assert window.load_design_file(storage.get_design_path("Home Kit"))
    assert window.scene.product == DEFAULT_CATALOG[3]
    assert (window.scene.size, window.scene.garment_color) == ('XL', 'Red')
    assert window._size_combo.currentText() == 'XL'
    assert window._color_combo.currentText() == 'Red'
    assert [e.content for e in window.scene.elements] == ["HOME"]
    assert "Home Kit" in window.windowTitle()


def test_window_warns_on_invalid_design(window, tmp_path, monkeypatch):
    warnings = []
    monkeypatch.setattr(design_window.QMessageBox, 'warning',
                        lambda *args, **kwargs: warnings.append(args))
    path = tmp_path / 'bad.json'
    path.write_text('{"elements": [{"type": "hologram"}]}', encoding='utf-8')

    assert window.load_design_file(path) is False
    assert len(warnings) == 1


def test_window_delete_key(window):
    element = window.scene.add_text("A")
    window.scene.select(element.id)
    window.keyPressEvent(key(Qt.Key.Key_Delete))
    assert window.scene.get(element.id) is None


def test_new_design_clears_scene(window):
    window.scene.add_text("A")
    window.new_design()
    assert len(window.scene) == 0


def test_new_design_empties_element_list(window):
    window.scene.add_text("A")
    window.scene.add_text("B")
    assert window.tool_panel.element_list.count() == 2

    window.new_design()
    assert window.tool_panel.element_list.count() == 0


def test_opening_empty_design_empties_element_list(window, tmp_path):
    window.scene.add_text("A")
    path = tmp_path / 'blank.json'
    path.write_text('{"elements": []}', encoding='utf-8')

    assert window.load_design_file(path)
    assert window.tool_panel.element_list.count() == 0
