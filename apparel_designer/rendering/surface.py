"""
Drawing surfaces - the small command interface the renderer paints through.

QPainterSurface targets any QPaintDevice (QImage, a widget, QSvgGenerator).
RecordingSurface keeps a list of the commands it receives together with the
transform that was active, for headless inspection.
"""

import math
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPainter, QPainterPath, QPen, QBrush, QColor, QFont, QImage

from ..core.templates import PathCommand, PathOp


Color = str


class DrawingSurface(ABC):
    """Backend-neutral 2D drawing commands used by DesignRenderer."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    @abstractmethod
    def clear(self, color: Color):
        """Fill the whole surface with color."""

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color, opacity: float = 1.0):
        ...

    @abstractmethod
    def stroke_rect(self, x: float, y: float, w: float, h: float, color: Color,
                    width: float = 1.0, dash: Optional[Sequence[float]] = None):
        ...

    @abstractmethod
    def draw_path(self, commands: Sequence[PathCommand], fill: Optional[Color] = None,
                  stroke: Optional[Color] = None, width: float = 1.0):
        ...

    @abstractmethod
    def draw_text(self, x: float, y: float, w: float, h: float, text: str,
                  font_family: str, font_size: int, color: Color):
        """Draw text centred horizontally and vertically in the box."""

    @abstractmethod
    def draw_ellipse(self, cx: float, cy: float, rx: float, ry: float,
                     fill: Optional[Color] = None, stroke: Optional[Color] = None, width: float = 1.0):
        ...

    @abstractmethod
    def draw_image(self, x: float, y: float, w: float, h: float, image: QImage):
        ...

    @abstractmethod
    def with_transform(self, dx: float, dy: float, rotation: float = 0.0,
                       post_dx: float = 0.0, post_dy: float = 0.0):
        """
        Context manager: translate(dx, dy), rotate(rotation degrees),
        translate(post_dx, post_dy). The previous transform is restored on exit.
        """


# ==================== QPainter Backend ====================

def build_painter_path(commands: Sequence[PathCommand]) -> QPainterPath:
    """Convert absolute path commands into a QPainterPath."""
    path = QPainterPath()
    for cmd in commands:
        p = cmd.points
        if cmd.op is PathOp.MOVE:
            path.moveTo(p[0], p[1])
        elif cmd.op is PathOp.LINE:
            path.lineTo(p[0], p[1])
        elif cmd.op is PathOp.QUAD:
            path.quadTo(p[0], p[1], p[2], p[3])
        elif cmd.op is PathOp.CUBIC:
            path.cubicTo(p[0], p[1], p[2], p[3], p[4], p[5])
        elif cmd.op is PathOp.CLOSE:
            path.closeSubpath()
        elif cmd.op is PathOp.ELLIPSE:
            path.addEllipse(QPointF(p[0], p[1]), p[2], p[3])
        elif cmd.op is PathOp.RECT:
            path.addRect(QRectF(p[0], p[1], p[2], p[3]))
    return path


class QPainterSurface(DrawingSurface):
    """Paints onto an active QPainter. The caller owns begin()/end()."""

    def __init__(self, painter: QPainter, width: int, height: int):
        super().__init__(width, height)
        self._painter = painter
        self._painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        self._painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        self._painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)

    @property
    def painter(self) -> QPainter:
        return self._painter

    def _pen(self, color: Optional[Color], width: float = 1.0,
             dash: Optional[Sequence[float]] = None) -> QPen:
        if color is None:
            return QPen(Qt.PenStyle.NoPen)
        pen = QPen(QColor(color), width)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        if dash:
            # Qt dash patterns are expressed in pen widths
            unit = width if width > 0 else 1.0
            pen.setDashPattern([d / unit for d in dash])
        return pen

    def _brush(self, color: Optional[Color], opacity: float = 1.0) -> QBrush:
        if color is None:
            return QBrush(Qt.BrushStyle.NoBrush)
        qcolor = QColor(color)
        qcolor.setAlphaF(max(0.0, min(1.0, opacity)))
        return QBrush(qcolor)

    def clear(self, color: Color):
        self._painter.fillRect(QRectF(0, 0, self.width, self.height), QColor(color))

    def fill_rect(self, x, y, w, h, color, opacity=1.0):
        self._painter.fillRect(QRectF(x, y, w, h), self._brush(color, opacity))

    def stroke_rect(self, x, y, w, h, color, width=1.0, dash=None):
        self._painter.setPen(self._pen(color, width, dash))
        self._painter.setBrush(Qt.BrushStyle.NoBrush)
        self._painter.drawRect(QRectF(x, y, w, h))

    def draw_path(self, commands, fill=None, stroke=None, width=1.0):
        self._painter.setPen(self._pen(stroke, width))
        self._painter.setBrush(self._brush(fill))
        self._painter.drawPath(build_painter_path(commands))

    def draw_text(self, x, y, w, h, text, font_family, font_size, color):
        font = QFont(font_family)
        font.setPixelSize(max(1, int(font_size)))
        self._painter.setFont(font)
        self._painter.setPen(QColor(color))
        flags = Qt.AlignmentFlag.AlignCenter.value | Qt.TextFlag.TextDontClip.value
        self._painter.drawText(QRectF(x, y, w, h), flags, text)

    def draw_ellipse(self, cx, cy, rx, ry, fill=None, stroke=None, width=1.0):
        self._painter.setPen(self._pen(stroke, width))
        self._painter.setBrush(self._brush(fill))
        self._painter.drawEllipse(QPointF(cx, cy), rx, ry)

    def draw_image(self, x, y, w, h, image):
        self._painter.drawImage(QRectF(x, y, w, h), image)

    @contextmanager
    def with_transform(self, dx, dy, rotation=0.0, post_dx=0.0, post_dy=0.0):
        self._painter.save()
        try:
            self._painter.translate(dx, dy)
            if rotation:
                self._painter.rotate(rotation)
            self._painter.translate(post_dx, post_dy)
            yield self
        finally:
            self._painter.restore()


# ==================== Recording Backend ====================

# Affine matrix (a, b, c, d, e, f): x' = a*x + c*y + e, y' = b*x + d*y + f
Affine = Tuple[float, float, float, float, float, float]
IDENTITY: Affine = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def _multiply(m: Affine, n: Affine) -> Affine:
    """Return m * n (n applied first)."""
    a1, b1, c1, d1, e1, f1 = m
    a2, b2, c2, d2, e2, f2 = n
    return (
        a1 * a2 + c1 * b2,
        b1 * a2 + d1 * b2,
        a1 * c2 + c1 * d2,
        b1 * c2 + d1 * d2,
        a1 * e2 + c1 * f2 + e1,
        b1 * e2 + d1 * f2 + f1,
    )


def _translate(dx: float, dy: float) -> Affine:
    return (1.0, 0.0, 0.0, 1.0, dx, dy)


def _rotate(degrees: float) -> Affine:
    rad = math.radians(degrees)
    cos, sin = math.cos(rad), math.sin(rad)
    return (cos, sin, -sin, cos, 0.0, 0.0)


def map_point(matrix: Affine, x: float, y: float) -> Tuple[float, float]:
    a, b, c, d, e, f = matrix
    return (a * x + c * y + e, b * x + d * y + f)


@dataclass
class DrawCommand:
    name: str
    args: Dict[str, Any] = field(default_factory=dict)
    transform: Affine = IDENTITY

    def map(self, x: float, y: float) -> Tuple[float, float]:
        """Map a point from this command's local space to surface space."""
        return map_point(self.transform, x, y)


class RecordingSurface(DrawingSurface):
    """Surface that records commands instead of painting pixels."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.commands: List[DrawCommand] = []
        self._matrix: Affine = IDENTITY

    def _record(self, name: str, **args):
        self.commands.append(DrawCommand(name, args, self._matrix))

    def named(self, name: str) -> List[DrawCommand]:
        return [cmd for cmd in self.commands if cmd.name == name]

    def clear(self, color):
        self.commands.clear()
        self._record('clear', color=color)

    def fill_rect(self, x, y, w, h, color, opacity=1.0):
        self._record('fill_rect', x=x, y=y, w=w, h=h, color=color, opacity=opacity)

    def stroke_rect(self, x, y, w, h, color, width=1.0, dash=None):
        self._record('stroke_rect', x=x, y=y, w=w, h=h, color=color, width=width,
                     dash=list(dash) if dash else None)

    def draw_path(self, commands, fill=None, stroke=None, width=1.0):
        self._record('draw_path', commands=list(commands), fill=fill, stroke=stroke, width=width)

    def draw_text(self, x, y, w, h, text, font_family, font_size, color):
        self._record('draw_text', x=x, y=y, w=w, h=h, text=text,
                     font_family=font_family, font_size=font_size, color=color)

    def draw_ellipse(self, cx, cy, rx, ry, fill=None, stroke=None, width=1.0):
        self._record('draw_ellipse', cx=cx, cy=cy, rx=rx, ry=ry, fill=fill, stroke=stroke, width=width)

    def draw_image(self, x, y, w, h, image):
        self._record('draw_image', x=x, y=y, w=w, h=h, image=image)

    @contextmanager
    def with_transform(self, dx, dy, rotation=0.0, post_dx=0.0, post_dy=0.0) -> Iterator['RecordingSurface']:
        saved = self._matrix
        step = _multiply(_translate(dx, dy), _multiply(_rotate(rotation), _translate(post_dx, post_dy)))
        self._matrix = _multiply(saved, step)
        try:
            yield self
        finally:
            self._matrix = saved


__all__ = [
    'DrawingSurface',
    'QPainterSurface',
    'RecordingSurface',
    'DrawCommand',
    'build_painter_path',
    'map_point',
]
