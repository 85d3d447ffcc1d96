"""
Exceptions raised by the design canvas.

Editing operations are forgiving and never raise for stale ids; these cover
the few conditions a caller has to react to.
"""


class DesignCanvasError(Exception):
    """Base class for design canvas errors."""


class RasterExportError(DesignCanvasError):
    """The export surface could not be created or encoded.

    Recoverable: the caller may retry after the next paint or with a valid size.
    """


class DesignFileError(DesignCanvasError):
    """A design document or image file could not be read or is malformed."""


__all__ = ['DesignCanvasError', 'RasterExportError', 'DesignFileError']
