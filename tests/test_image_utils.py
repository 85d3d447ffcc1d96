import base64

import numpy as np
import pytest
from PyQt6.QtGui import QColor, QImage

from apparel_designer.utils.image_utils import (
    content_bounds, decode_data_uri, file_to_data_uri, load_image_reference,
    qimage_to_array,
)


def test_file_to_data_uri(png_file):
    uri = file_to_data_uri(png_file)
    header, payload = uri.split(',', 1)
    assert header == 'data:image/png;base64'
    assert base64.b64decode(payload) == png_file.read_bytes()


def test_file_to_data_uri_rejects_non_images(tmp_path):
    path = tmp_path / 'fake.png'
    path.write_bytes(b'not really a png')
    with pytest.raises(ValueError):
        file_to_data_uri(path)
    with pytest.raises(OSError):
        file_to_data_uri(tmp_path / 'missing.png')


def test_decode_data_uri():
    assert decode_data_uri('data:text/plain;base64,aGk=') == b'hi'
    assert decode_data_uri('data:text/plain,a%20b') == b'a b'
    assert decode_data_uri('https://example.com/x.png') is None


def test_load_image_reference(png_file):
    assert load_image_reference(file_to_data_uri(png_file)).size().width() == 16
    assert load_image_reference(str(png_file)).height() == 12
    assert load_image_reference(png_file.as_uri()) is not None
    assert load_image_reference('https://example.com/x.png') is None
    assert load_image_reference(str(png_file.parent / 'missing.png')) is None
    assert load_image_reference('data:image/png;base64,AAAA') is None
    assert load_image_reference('') is None


def test_qimage_to_array_drops_padding():
    image = QImage(3, 2, QImage.Format.Format_RGBA8888)
    image.fill(QColor(10, 20, 30, 255))
    array = qimage_to_array(image)
    assert array.shape == (2, 3, 4)
    assert np.all(array[:, :, 0] == 10)
    assert np.all(array[:, :, 3] == 255)


def test_content_bounds():
    image = QImage(20, 10, QImage.Format.Format_ARGB32)
    image.fill(QColor(0, 0, 0, 0))
    assert content_bounds(image) is None

    for x in range(5, 8):
        for y in range(2, 6):
            image.setPixelColor(x, y, QColor(255, 0, 0, 255))
    assert content_bounds(image) == (5, 2, 3, 4)
