import pytest
from PyQt6.QtGui import QImage

from apparel_designer.config import Config
from apparel_designer.core.elements import ImageElement, TextElement, TextOptions
from apparel_designer.core.errors import DesignFileError, RasterExportError
from apparel_designer.core.product import DEFAULT_CATALOG, Product
from apparel_designer.core.scene import DesignScene


# ==================== Creation ====================

def test_add_text_uses_defaults(scene, record):
    added = record(scene.element_added)
    element = scene.add_text("TEAM")

    assert isinstance(element, TextElement)
    assert (element.x, element.y) == Config.TEXT_DEFAULT_POS
    assert (element.width, element.height) == Config.TEXT_DEFAULT_SIZE
    assert element.font_size == 24
    assert element.color == '#000000'
    assert element.font_family == 'Arial'
    assert added.calls == [element.id]


def test_add_text_with_overrides(scene):
    element = scene.add_text("GO", TextOptions(font_size=32, color='#FF0000'))
    assert element.font_size == 32
    assert element.color == '#ff0000'
    assert element.font_family == Config.DEFAULT_FONT_FAMILY


def test_add_image_uses_defaults(scene):
    element = scene.add_image("https://example.com/logo.png")
    assert isinstance(element, ImageElement)
    assert (element.x, element.y, element.width, element.height) == (150, 150, 100, 100)
    assert element.content == "https://example.com/logo.png"


def test_new_elements_are_appended_topmost(scene):
    first = scene.add_text("A")
    second = scene.add_image("b.png")
    assert [e.id for e in scene.elements] == [first.id, second.id]
    assert len({first.id, second.id}) == 2


def test_add_image_file_embeds_data_uri(scene, png_file):
    element = scene.add_image_file(png_file)
    assert element.content.startswith('data:image/png;base64,')


def test_add_image_file_errors(scene, tmp_path):
    with pytest.raises(DesignFileError):
        scene.add_image_file(tmp_path / 'missing.png')
    not_image = tmp_path / 'notes.txt'
    not_image.write_text('hello')
    with pytest.raises(DesignFileError):
        scene.add_image_file(not_image)
    assert len(scene) == 0


def test_add_element_replaces_clashing_id(scene):
    first = scene.add_text("A")
    clash = ImageElement(id=first.id, content='x.png', x=0, y=0, width=40, height=40)
    scene.add_element(clash)
    assert clash.id != first.id
    assert len(scene) == 2


# ==================== Update / Delete ====================

def test_update_merges_fields(scene, record):
    element = scene.add_text("TEAM")
    updated = record(scene.element_updated)

    assert scene.update(element.id, x=300, content="TEAM 2")
    assert scene.get(element.id).x == 300
    assert scene.get(element.id).content == "TEAM 2"
    assert scene.get(element.id).y == Config.TEXT_DEFAULT_POS[1]
    assert updated.calls == [element.id]


def test_update_clamps_size(scene):
    element = scene.add_image("a.png")
    scene.update(element.id, width=-10, height=5)
    assert (element.width, element.height) == (20, 20)


def test_update_unknown_id_is_noop(scene, record):
    scene.add_text("A")
    changed = record(scene.scene_changed)
    assert scene.update('nope', x=1) is False
    assert len(changed) == 0


def test_update_without_change_emits_nothing(scene, record):
    element = scene.add_text("A")
    updated = record(scene.element_updated)
    assert scene.update(element.id, x=element.x) is False
    assert len(updated) == 0


def test_update_unknown_field_raises(scene):
    element = scene.add_image("a.png")
    with pytest.raises(ValueError):
        scene.update(element.id, font_size=12)


def test_delete_selected_clears_selection(scene, record):
    element = scene.add_text("A")
    scene.select(element.id)
    selection = record(scene.selection_changed)
    deleted = record(scene.element_deleted)

    assert scene.delete(element.id)
    assert scene.selected_id is None
    assert selection.calls == [None]
    assert deleted.calls == [element.id]


def test_delete_other_element_keeps_selection(scene):
    keep = scene.add_text("A")
    other = scene.add_text("B")
    scene.select(keep.id)
    scene.delete(other.id)
    assert scene.selected_id == keep.id
    assert [e.id for e in scene.elements] == [keep.id]


def test_delete_unknown_id_is_noop(scene):
    scene.add_text("A")
    assert scene.delete('nope') is False
    assert scene.delete(None) is False
    assert len(scene) == 1


def test_select_unknown_id_clears(scene):
    element = scene.add_text("A")
    scene.select(element.id)
    scene.select('nope')
    assert scene.selected_id is None


def test_element_at_prefers_topmost(scene):
    bottom = scene.add_image("a.png")
    top = scene.add_image("b.png")
    assert scene.element_at(160, 160).id == top.id
    scene.delete(top.id)
    assert scene.element_at(160, 160).id == bottom.id
    assert scene.element_at(5, 5) is None


# ==================== Undo ====================

def test_undo_redo_add(scene):
    element = scene.add_text("A")
    scene.undo_stack.undo()
    assert len(scene) == 0
    scene.undo_stack.redo()
    assert scene.get(element.id) is element


def test_undo_delete_restores_z_order(scene):
    a = scene.add_text("A")
    b = scene.add_text("B")
    c = scene.add_text("C")
    scene.delete(b.id)
    scene.undo_stack.undo()
    assert [e.id for e in scene.elements] == [a.id, b.id, c.id]


def test_edit_is_undoable(scene):
    element = scene.add_text("A")
    assert scene.edit(element.id, "Change Color", color='#00ff00')
    assert element.color == '#00ff00'
    scene.undo_stack.undo()
    assert element.color == '#000000'
    scene.undo_stack.redo()
    assert element.color == '#00ff00'


def test_live_update_is_not_recorded(scene):
    element = scene.add_text("A")
    count = scene.undo_stack.count()
    scene.update(element.id, x=1)
    assert scene.undo_stack.count() == count


def test_commit_edit_records_one_step(scene):
    element = scene.add_text("A")
    before = element.geometry()
    for x in (160, 170, 180):
        scene.update(element.id, x=x)
    assert scene.commit_edit(element.id, before, "Move")
    assert scene.undo_stack.count() == 2
    scene.undo_stack.undo()
    assert element.x == 150


def test_commit_edit_without_change_records_nothing(scene):
    element = scene.add_text("A")
    assert scene.commit_edit(element.id, element.geometry()) is False
    assert scene.undo_stack.count() == 1


def test_clear_resets_history(scene):
    scene.add_text("A")
    scene.clear()
    assert len(scene) == 0
    assert scene.undo_stack.count() == 0


def test_clear_reports_each_removed_element(scene, record):
    first = scene.add_text("A")
    second = scene.add_image("b.png")
    scene.select(second.id)
    deleted = record(scene.element_deleted)
    selection = record(scene.selection_changed)

    scene.clear()
    assert deleted.calls == [first.id, second.id]
    assert selection.calls == [None]


def test_load_dict_reports_replaced_elements(scene, record):
    old = scene.add_text("A")
    deleted = record(scene.element_deleted)
    scene.load_dict({'elements': []})
    assert deleted.calls == [old.id]
    assert len(scene) == 0


# ==================== Product ====================

def test_product_setter_emits_once(scene, record):
    changes = record(scene.product_changed)
    product = DEFAULT_CATALOG[1]
    scene.product = product
    scene.product = product
    assert changes.calls == [product]


# ==================== Export ====================

def test_round_trip_export(scene):
    element = scene.add_text("TEAM", TextOptions(font_size=32))
    scene.update(element.id, x=300)

    data = scene.export_raster()
    image = QImage.fromData(data)

    assert data.startswith(b'\x89PNG')
    assert (image.width(), image.height()) == (Config.CANVAS_WIDTH, Config.CANVAS_HEIGHT)


def test_empty_scene_export():
    data = DesignScene().export_raster()
    image = QImage.fromData(data)
    assert not image.isNull()
    assert (image.width(), image.height()) == (400, 500)


def test_export_zero_size_raises(scene):
    with pytest.raises(RasterExportError):
        scene.export_raster(0, 500)


def test_transparent_render_has_no_backdrop(scene):
    image = scene.render_image(transparent=True)
    assert image.pixelColor(5, 5).alpha() == 0
    opaque = scene.render_image()
    assert opaque.pixelColor(5, 5).alpha() == 255


def test_export_svg(scene):
    scene.product = Product("Team Hoodie")
    scene.add_text("TEAM")
    svg = scene.export_svg()
    assert b'<svg' in svg
    assert b'Team Hoodie' in svg


# ==================== Serialization ====================

def test_to_dict_load_dict_round_trip(scene):
    scene.product = DEFAULT_CATALOG[0]
    scene.size = 'M'
    scene.garment_color = 'Red'
    text = scene.add_text("TEAM", TextOptions(font_size=32))
    image = scene.add_image("logo.png")
    scene.update(image.id, rotation=45)

    data = scene.to_dict()
    restored = DesignScene()
    restored.load_dict(data, DEFAULT_CATALOG)

    assert [e.id for e in restored.elements] == [text.id, image.id]
    assert restored.get(text.id) == text
    assert restored.get(image.id).rotation == 45
    assert restored.product == DEFAULT_CATALOG[0]
    assert (restored.size, restored.garment_color) == ('M', 'Red')
    assert restored.undo_stack.count() == 0


def test_load_dict_without_catalog_builds_product(scene):
    scene.load_dict({'product': 'Custom Tee', 'elements': []})
    assert scene.product.name == 'Custom Tee'


def test_load_dict_rejects_bad_data_and_keeps_scene(scene):
    existing = scene.add_text("KEEP")
    with pytest.raises(DesignFileError):
        scene.load_dict({'elements': [{'type': 'text', 'content': 'x'}]})
    with pytest.raises(DesignFileError):
        scene.load_dict({'elements': 'nope'})
    with pytest.raises(DesignFileError):
        scene.load_dict([])
    assert [e.id for e in scene.elements] == [existing.id]


def test_load_dict_deduplicates_ids(scene):
    entry = {'id': 'same', 'type': 'image', 'content': 'a.png',
             'x': 0, 'y': 0, 'width': 30, 'height': 30}
    scene.load_dict({'elements': [entry, dict(entry)]})
    ids = [e.id for e in scene.elements]
    assert len(set(ids)) == 2
