"""
Design elements - the plain data the scene is made of.

Elements carry geometry and style only. Selection, z-order and ownership are
held by the scene.
"""

import uuid as uuid_lib
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..config import Config
from ..utils.color_utils import normalize_hex_color
from .errors import DesignFileError


class ElementKind(Enum):
    TEXT = 'text'
    IMAGE = 'image'


GEOMETRY_FIELDS = ('x', 'y', 'width', 'height', 'rotation')

# Camel-case keys written by the web design tool, accepted on import
_LEGACY_KEYS = {
    'fontSize': 'font_size',
    'fontFamily': 'font_family',
}


def generate_element_id() -> str:
    """New element id. Uniqueness within a scene is enforced by the scene."""
    return f"elem_{uuid_lib.uuid4().hex[:12]}"


def clamp_size(value: float) -> float:
    """Floor a width or height at the minimum element size."""
    return max(float(Config.MIN_ELEMENT_SIZE), float(value))


@dataclass
class TextOptions:
    """Optional style overrides for a new text element.

    Each field left as None takes the configured default.
    """
    font_size: Optional[int] = None
    color: Optional[str] = None
    font_family: Optional[str] = None

    def resolved(self) -> Dict[str, Any]:
        return {
            'font_size': int(self.font_size) if self.font_size is not None else Config.DEFAULT_FONT_SIZE,
            'color': normalize_hex_color(self.color) if self.color is not None else Config.DEFAULT_TEXT_COLOR,
            'font_family': self.font_family or Config.DEFAULT_FONT_FAMILY,
        }


@dataclass
class DesignElement:
    id: str
    content: str
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0

    kind = None  # set by subclasses

    def __post_init__(self):
        self.width = clamp_size(self.width)
        self.height = clamp_size(self.height)

    # ==================== Geometry ====================

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def contains(self, px: float, py: float) -> bool:
        """Axis-aligned hit test, edges inclusive. Rotation is ignored."""
        return (self.x <= px <= self.x + self.width
                and self.y <= py <= self.y + self.height)

    def geometry(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in GEOMETRY_FIELDS}

    # ==================== Mutation ====================

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def apply(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge changes into this element.

        Width and height are re-clamped to the minimum size. The id cannot be
        changed.

        Returns:
            The subset of changes that actually altered a value

        Raises:
            ValueError: If a field does not exist on this element type
        """
        allowed = set(self.field_names()) - {'id'}
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(
                f"Unknown field(s) for {self.kind.value} element: {', '.join(sorted(unknown))}"
            )

        applied = {}
        for name, value in changes.items():
            if name in ('width', 'height'):
                value = clamp_size(value)
            elif name == 'color':
                value = normalize_hex_color(value)
            elif name in ('x', 'y', 'rotation'):
                value = float(value)
            elif name == 'font_size':
                value = int(value)
            if getattr(self, name) != value:
                setattr(self, name, value)
                applied[name] = value
        return applied

    def copy(self) -> 'DesignElement':
        return type(self)(**asdict(self))

    # ==================== Serialization ====================

    def to_dict(self) -> Dict[str, Any]:
        data = {'type': self.kind.value}
        data.update(asdict(self))
        return data


@dataclass
class TextElement(DesignElement):
    font_size: int = Config.DEFAULT_FONT_SIZE
    color: str = Config.DEFAULT_TEXT_COLOR
    font_family: str = Config.DEFAULT_FONT_FAMILY

    kind = ElementKind.TEXT


@dataclass
class ImageElement(DesignElement):
    kind = ElementKind.IMAGE


_ELEMENT_TYPES = {
    ElementKind.TEXT.value: TextElement,
    ElementKind.IMAGE.value: ImageElement,
}


def element_from_dict(data: Dict[str, Any]) -> DesignElement:
    """
    Build an element from its serialized form.

    Accepts both the snake_case keys written by to_dict() and the camelCase
    keys of designs saved by the web tool.

    Raises:
        DesignFileError: If the type is unknown or required fields are missing
    """
    if not isinstance(data, dict):
        raise DesignFileError(f"Element entry is not an object: {data!r}")

    element_type = _ELEMENT_TYPES.get(data.get('type'))
    if element_type is None:
        raise DesignFileError(f"Unknown element type: {data.get('type')!r}")

    normalized = {_LEGACY_KEYS.get(k, k): v for k, v in data.items() if k != 'type'}
    known = set(element_type.field_names())
    kwargs = {k: v for k, v in normalized.items() if k in known and v is not None}

    try:
        kwargs.setdefault('id', generate_element_id())
        element = element_type(**kwargs)
        element.x = float(element.x)
        element.y = float(element.y)
        element.rotation = float(element.rotation)
        if isinstance(element, TextElement):
            element.color = normalize_hex_color(element.color)
            element.font_size = int(element.font_size)
    except (TypeError, ValueError) as e:
        raise DesignFileError(f"Invalid element data: {e}") from e
    return element


__all__ = [
    'ElementKind',
    'TextOptions',
    'DesignElement',
    'TextElement',
    'ImageElement',
    'GEOMETRY_FIELDS',
    'generate_element_id',
    'clamp_size',
    'element_from_dict',
]
