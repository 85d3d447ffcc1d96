"""
Image utilities for loading and inspecting rasters

Covers data-URI encoding of uploaded files, decoding of image references
the canvas can resolve locally, and numpy views of rendered QImages.
"""

import base64
import binascii
import mimetypes
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import unquote, urlparse

import numpy as np
from PyQt6.QtGui import QImage


def file_to_data_uri(image_path: Path) -> str:
    """
    Read an image file and encode it as a data URI.

    Args:
        image_path: Path to image file

    Returns:
        'data:<mime>;base64,<payload>'

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not a decodable image
    """
    image_path = Path(image_path)
    payload = image_path.read_bytes()

    decoded = QImage()
    if not decoded.loadFromData(payload):
        raise ValueError(f"Not an image file: {image_path.name}")

    mime, _ = mimetypes.guess_type(image_path.name)
    if not mime or not mime.startswith('image/'):
        mime = 'image/png'
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


def decode_data_uri(uri: str) -> Optional[bytes]:
    """Return the payload of a base64 data URI, or None if it is not one."""
    if not uri.startswith('data:') or ',' not in uri:
        return None
    header, payload = uri.split(',', 1)
    if not header.endswith(';base64'):
        return unquote(payload).encode('utf-8')
    try:
        return base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError):
        return None


def _reference_path(reference: str) -> Optional[Path]:
    parsed = urlparse(reference)
    if parsed.scheme == 'file':
        return Path(unquote(parsed.path))
    # A one-letter scheme is a Windows drive
    if not parsed.scheme or (len(parsed.scheme) == 1 and reference[1:3] in (':\\', ':/')):
        return Path(reference)
    return None


def is_local_path(reference: str) -> bool:
    """True for plain or file:// paths (not data URIs or remote URLs)."""
    if not reference or reference.startswith('data:'):
        return False
    return _reference_path(reference) is not None


def load_image_reference(reference: str) -> Optional[QImage]:
    """
    Decode an image reference without touching the network.

    Data URIs and local paths (plain or file://) are decoded; remote URLs
    and anything undecodable give None.
    """
    if not reference:
        return None

    if reference.startswith('data:'):
        payload = decode_data_uri(reference)
        if payload is None:
            return None
        image = QImage()
        return image if image.loadFromData(payload) else None

    path = _reference_path(reference)
    if path is None or not path.is_file():
        return None
    image = QImage(str(path))
    return None if image.isNull() else image


def qimage_to_array(image: QImage) -> np.ndarray:
    """
    Copy a QImage into an (height, width, 4) uint8 RGBA array.
    """
    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width, height = rgba.width(), rgba.height()
    ptr = rgba.constBits()
    ptr.setsize(rgba.sizeInBytes())
    stride = rgba.bytesPerLine()
    array = np.frombuffer(ptr, dtype=np.uint8).reshape((height, stride))
    # Drop row padding and copy so the array outlives the QImage
    return array[:, :width * 4].reshape((height, width, 4)).copy()


def content_bounds(image: QImage, alpha_threshold: int = 0) -> Optional[Tuple[int, int, int, int]]:
    """
    Bounding box (x, y, width, height) of pixels with alpha above the threshold.

    Used on transparent renders to find the printed area of a design.
    Returns None for a fully transparent image.
    """
    alpha = qimage_to_array(image)[:, :, 3]
    rows = np.flatnonzero((alpha > alpha_threshold).any(axis=1))
    cols = np.flatnonzero((alpha > alpha_threshold).any(axis=0))
    if rows.size == 0 or cols.size == 0:
        return None
    x0, x1 = int(cols[0]), int(cols[-1])
    y0, y1 = int(rows[0]), int(rows[-1])
    return (x0, y0, x1 - x0 + 1, y1 - y0 + 1)


__all__ = [
    'file_to_data_uri',
    'decode_data_uri',
    'is_local_path',
    'load_image_reference',
    'qimage_to_array',
    'content_bounds',
]
