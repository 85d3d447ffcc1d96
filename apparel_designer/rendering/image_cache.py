"""
ImageCache - LRU cache of decoded image references.

Decoding a data URI on every paint would be wasteful, so decoded images are
kept per reference. Failed decodes are remembered too, except for local paths,
which may appear on disk later.
"""

import hashlib
import logging
from collections import OrderedDict
from typing import Optional

from PyQt6.QtGui import QImage

from ..config import Config
from ..utils.image_utils import is_local_path, load_image_reference

logger = logging.getLogger(__name__)

_MISSING = object()


class ImageCache:
    """LRU cache mapping image references to decoded QImages (or None)."""

    def __init__(self, max_size: int = Config.IMAGE_CACHE_SIZE):
        self._cache: 'OrderedDict[str, Optional[QImage]]' = OrderedDict()
        self._max_size = max_size

    def _make_key(self, reference: str) -> str:
        # Data URIs can be megabytes long
        if len(reference) > 256:
            return 'sha1:' + hashlib.sha1(reference.encode('utf-8')).hexdigest()
        return reference

    def get(self, reference: str) -> Optional[QImage]:
        """Return the decoded image for reference, decoding on first use."""
        key = self._make_key(reference)
        cached = self._cache.get(key, _MISSING)
        if cached is not _MISSING:
            self._cache.move_to_end(key)
            return cached

        image = load_image_reference(reference)
        if image is None:
            logger.debug("Image reference not decodable locally, using placeholder")
            if is_local_path(reference):
                return None
        self._cache[key] = image
        while len(self._cache) > self._max_size:
            self._cache.popitem(last=False)
        return image

    def invalidate(self, reference: str):
        self._cache.pop(self._make_key(reference), None)

    def clear(self):
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


_cache_instance: Optional[ImageCache] = None


def get_image_cache() -> ImageCache:
    """Get singleton ImageCache instance."""
    global _cache_instance
    if _cache_instance is None:
        _cache_instance = ImageCache()
    return _cache_instance


__all__ = ['ImageCache', 'get_image_cache']
