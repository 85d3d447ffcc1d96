"""
Garment template registry.

Each garment is a set of vector path fragments (body, sleeves or straps,
collar, ornaments) whose coordinates are fractions of a unit box, so one
outline renders at any size. resolve_template() maps a free-text product name
to a template and never fails.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class PathOp(Enum):
    """Path command kinds. Coordinates follow the op in `points`."""
    MOVE = 'move'        # x, y
    LINE = 'line'        # x, y
    QUAD = 'quad'        # cx, cy, x, y
    CUBIC = 'cubic'      # c1x, c1y, c2x, c2y, x, y
    CLOSE = 'close'      # -
    ELLIPSE = 'ellipse'  # cx, cy, rx, ry
    RECT = 'rect'        # x, y, w, h


# Which points entries are x coordinates (the rest are y) for scaling
_X_INDICES = {
    PathOp.MOVE: (0,),
    PathOp.LINE: (0,),
    PathOp.QUAD: (0, 2),
    PathOp.CUBIC: (0, 2, 4),
    PathOp.CLOSE: (),
    PathOp.ELLIPSE: (0, 2),
    PathOp.RECT: (0, 2),
}

# Entries that are lengths rather than positions (no offset applied)
_LENGTH_INDICES = {
    PathOp.ELLIPSE: (2, 3),
    PathOp.RECT: (2, 3),
}


@dataclass(frozen=True)
class PathCommand:
    op: PathOp
    points: Tuple[float, ...] = ()

    def scaled(self, x: float, y: float, width: float, height: float) -> 'PathCommand':
        """Map unit-box coordinates into the box (x, y, width, height)."""
        x_indices = _X_INDICES[self.op]
        lengths = _LENGTH_INDICES.get(self.op, ())
        out = []
        for i, value in enumerate(self.points):
            scale = width if i in x_indices else height
            offset = 0.0 if i in lengths else (x if i in x_indices else y)
            out.append(offset + value * scale)
        return PathCommand(self.op, tuple(out))


@dataclass(frozen=True)
class PathFragment:
    """One drawable piece of a garment outline."""
    role: str  # 'body', 'sleeve', 'strap', 'collar', 'ornament'
    commands: Tuple[PathCommand, ...]
    filled: bool = True

    def scaled(self, x: float, y: float, width: float, height: float) -> List[PathCommand]:
        return [cmd.scaled(x, y, width, height) for cmd in self.commands]


@dataclass(frozen=True)
class GarmentTemplate:
    key: str
    name: str
    outline: Tuple[PathFragment, ...]
    bounding_width: float = 0.8
    bounding_height: float = 1.0
    colors: Tuple[str, ...] = field(default_factory=tuple)


# ==================== Path Builders ====================

def _m(x, y):
    return PathCommand(PathOp.MOVE, (x, y))


def _l(x, y):
    return PathCommand(PathOp.LINE, (x, y))


def _q(cx, cy, x, y):
    return PathCommand(PathOp.QUAD, (cx, cy, x, y))


def _c(c1x, c1y, c2x, c2y, x, y):
    return PathCommand(PathOp.CUBIC, (c1x, c1y, c2x, c2y, x, y))


def _z():
    return PathCommand(PathOp.CLOSE)


def _ellipse(cx, cy, rx, ry):
    return PathCommand(PathOp.ELLIPSE, (cx, cy, rx, ry))


def _rect(x, y, w, h):
    return PathCommand(PathOp.RECT, (x, y, w, h))


def _frag(role, *commands, filled=True):
    return PathFragment(role, tuple(commands), filled)


def _mirror(fragment: PathFragment) -> PathFragment:
    """Reflect a fragment across the vertical centre line (x -> 1 - x)."""
    mirrored = []
    for cmd in fragment.commands:
        pts = list(cmd.points)
        lengths = _LENGTH_INDICES.get(cmd.op, ())
        for i in _X_INDICES[cmd.op]:
            if cmd.op is PathOp.RECT and i == 0:
                pts[0] = 1.0 - pts[0] - pts[2]
            elif i not in lengths:
                pts[i] = 1.0 - pts[i]
        mirrored.append(PathCommand(cmd.op, tuple(pts)))
    return PathFragment(fragment.role, tuple(mirrored), fragment.filled)


# ==================== Templates ====================

_TSHIRT_SLEEVE = _frag('sleeve', _m(0.22, 0.12), _l(0.0, 0.26), _l(0.10, 0.42), _l(0.22, 0.34), _z())

TSHIRT = GarmentTemplate(
    key='tshirt',
    name='T-Shirt',
    outline=(
        _TSHIRT_SLEEVE,
        _mirror(_TSHIRT_SLEEVE),
        _frag('body', _m(0.22, 0.12), _l(0.40, 0.04), _q(0.5, 0.14, 0.60, 0.04),
              _l(0.78, 0.12), _l(0.78, 1.0), _l(0.22, 1.0), _z()),
        _frag('collar', _m(0.40, 0.04), _q(0.5, 0.18, 0.60, 0.04), filled=False),
        _frag('ornament', _m(0.22, 0.96), _l(0.78, 0.96), filled=False),
    ),
    colors=('#000000', '#FFFFFF', '#FF0000', '#0066CC', '#228B22'),
)

_HOODIE_SLEEVE = _frag('sleeve', _m(0.20, 0.14), _l(0.02, 0.40), _l(0.04, 0.92),
                       _l(0.16, 0.92), _l(0.20, 0.50), _z())

HOODIE = GarmentTemplate(
    key='hoodie',
    name='Hoodie',
    outline=(
        _HOODIE_SLEEVE,
        _mirror(_HOODIE_SLEEVE),
        _frag('body', _m(0.20, 0.14), _l(0.38, 0.06), _l(0.62, 0.06), _l(0.80, 0.14),
              _l(0.80, 1.0), _l(0.20, 1.0), _z()),
        _frag('collar', _m(0.36, 0.08), _c(0.36, 0.0, 0.64, 0.0, 0.64, 0.08),
              _q(0.5, 0.22, 0.36, 0.08), _z()),
        _frag('ornament', _m(0.32, 0.66), _l(0.68, 0.66), _l(0.74, 0.86), _l(0.26, 0.86), _z(),
              filled=False),
        _frag('ornament', _m(0.46, 0.14), _l(0.45, 0.30), _m(0.54, 0.14), _l(0.55, 0.30),
              filled=False),
        _frag('ornament', _m(0.20, 0.94), _l(0.80, 0.94), filled=False),
    ),
    colors=('#000000', '#FFFFFF', '#808080', '#0066CC', '#8B0000'),
)

TANK_TOP = GarmentTemplate(
    key='tank',
    name='Tank Top',
    outline=(
        _frag('body', _m(0.30, 0.02), _l(0.38, 0.02), _q(0.5, 0.24, 0.62, 0.02),
              _l(0.70, 0.02), _q(0.72, 0.26, 0.84, 0.30), _l(0.84, 1.0), _l(0.16, 1.0),
              _l(0.16, 0.30), _q(0.28, 0.26, 0.30, 0.02), _z()),
        _frag('strap', _m(0.30, 0.02), _q(0.28, 0.26, 0.16, 0.30), filled=False),
        _frag('strap', _m(0.70, 0.02), _q(0.72, 0.26, 0.84, 0.30), filled=False),
        _frag('collar', _m(0.38, 0.02), _q(0.5, 0.24, 0.62, 0.02), filled=False),
    ),
    colors=('#000000', '#FFFFFF', '#FF0000', '#0066CC'),
)

_SINGLET_STRIPE = _frag('ornament', _m(0.22, 0.34), _l(0.22, 0.80), filled=False)

WRESTLING_SINGLET = GarmentTemplate(
    key='singlet',
    name='Wrestling Singlet',
    outline=(
        _frag('body', _m(0.32, 0.0), _l(0.40, 0.0), _q(0.5, 0.16, 0.60, 0.0), _l(0.68, 0.0),
              _q(0.70, 0.24, 0.80, 0.30), _l(0.80, 0.80), _l(0.88, 0.98), _l(0.58, 1.0),
              _l(0.5, 0.86), _l(0.42, 1.0), _l(0.12, 0.98), _l(0.20, 0.80), _l(0.20, 0.30),
              _q(0.30, 0.24, 0.32, 0.0), _z()),
        _frag('strap', _m(0.32, 0.0), _q(0.30, 0.24, 0.20, 0.30), filled=False),
        _frag('strap', _m(0.68, 0.0), _q(0.70, 0.24, 0.80, 0.30), filled=False),
        _frag('collar', _m(0.40, 0.0), _q(0.5, 0.16, 0.60, 0.0), filled=False),
        _SINGLET_STRIPE,
        _mirror(_SINGLET_STRIPE),
    ),
    colors=('#FF0000', '#0066CC', '#000000', '#FFFFFF', '#FFD700'),
)

BASEBALL_JERSEY = GarmentTemplate(
    key='baseball_jersey',
    name='Baseball Jersey',
    outline=(
        _TSHIRT_SLEEVE,
        _mirror(_TSHIRT_SLEEVE),
        _frag('body', _m(0.22, 0.12), _l(0.40, 0.04), _l(0.5, 0.18), _l(0.60, 0.04),
              _l(0.78, 0.12), _l(0.78, 1.0), _l(0.22, 1.0), _z()),
        _frag('collar', _m(0.40, 0.04), _l(0.5, 0.18), _l(0.60, 0.04), filled=False),
        _frag('ornament', _m(0.5, 0.18), _l(0.5, 1.0), filled=False),
        _frag('ornament', *(_ellipse(0.53, y, 0.012, 0.01) for y in (0.28, 0.42, 0.56, 0.70, 0.84))),
    ),
    colors=('#FFFFFF', '#0066CC', '#FF0000', '#000000', '#808080'),
)

_BASKETBALL_PANEL = _frag('ornament', _m(0.16, 0.40), _l(0.16, 0.98), filled=False)

BASKETBALL_JERSEY = GarmentTemplate(
    key='basketball_jersey',
    name='Basketball Jersey',
    outline=(
        _frag('body', _m(0.28, 0.02), _l(0.38, 0.02), _q(0.5, 0.20, 0.62, 0.02), _l(0.72, 0.02),
              _q(0.74, 0.30, 0.88, 0.34), _l(0.88, 1.0), _l(0.12, 1.0), _l(0.12, 0.34),
              _q(0.26, 0.30, 0.28, 0.02), _z()),
        _frag('strap', _m(0.28, 0.02), _q(0.26, 0.30, 0.12, 0.34), filled=False),
        _frag('strap', _m(0.72, 0.02), _q(0.74, 0.30, 0.88, 0.34), filled=False),
        _frag('collar', _m(0.38, 0.02), _l(0.5, 0.18), _l(0.62, 0.02), filled=False),
        _BASKETBALL_PANEL,
        _mirror(_BASKETBALL_PANEL),
    ),
    colors=('#FF0000', '#0066CC', '#FFD700', '#228B22', '#000000'),
)

_POLO_SLEEVE = _frag('sleeve', _m(0.22, 0.12), _l(0.02, 0.28), _l(0.12, 0.40), _l(0.22, 0.32), _z())
_POLO_FLAP = _frag('collar', _m(0.38, 0.04), _l(0.5, 0.10), _l(0.44, 0.18), _l(0.34, 0.08), _z())

POLO_SHIRT = GarmentTemplate(
    key='polo',
    name='Polo Shirt',
    outline=(
        _POLO_SLEEVE,
        _mirror(_POLO_SLEEVE),
        _frag('body', _m(0.22, 0.12), _l(0.38, 0.04), _l(0.62, 0.04), _l(0.78, 0.12),
              _l(0.78, 1.0), _l(0.22, 1.0), _z()),
        _POLO_FLAP,
        _mirror(_POLO_FLAP),
        _frag('ornament', _rect(0.47, 0.10, 0.06, 0.16), filled=False),
        _frag('ornament', _ellipse(0.5, 0.15, 0.01, 0.008), _ellipse(0.5, 0.22, 0.01, 0.008)),
    ),
    colors=('#000000', '#FFFFFF', '#000080', '#0066CC', '#228B22'),
)

ATHLETIC_SHORTS = GarmentTemplate(
    key='shorts',
    name='Athletic Shorts',
    outline=(
        _frag('body', _m(0.08, 0.06), _l(0.92, 0.06), _l(1.0, 0.92), _l(0.56, 1.0), _l(0.5, 0.42),
              _l(0.44, 1.0), _l(0.0, 0.92), _z()),
        _frag('ornament', _rect(0.08, 0.06, 0.84, 0.08)),
        _frag('ornament', _m(0.46, 0.14), _l(0.44, 0.26), _m(0.54, 0.14), _l(0.56, 0.26),
              filled=False),
        _frag('ornament', _m(0.06, 0.30), _l(0.02, 0.90), _m(0.94, 0.30), _l(0.98, 0.90),
              filled=False),
    ),
    bounding_width=1.0,
    bounding_height=0.8,
    colors=('#000000', '#FFFFFF', '#0066CC', '#FF0000', '#800080'),
)

DEFAULT_TEMPLATE = TSHIRT

TEMPLATES: Dict[str, GarmentTemplate] = {
    t.key: t for t in (
        WRESTLING_SINGLET, TSHIRT, HOODIE, TANK_TOP, BASEBALL_JERSEY,
        BASKETBALL_JERSEY, POLO_SHIRT, ATHLETIC_SHORTS,
    )
}

# (required substrings, any-of substrings, template) in priority order
_MATCH_RULES = (
    ((), ('singlet',), WRESTLING_SINGLET),
    ((), ('t-shirt', 'tee'), TSHIRT),
    ((), ('hoodie', 'sweatshirt'), HOODIE),
    ((), ('tank',), TANK_TOP),
    (('baseball', 'jersey'), (), BASEBALL_JERSEY),
    (('basketball', 'jersey'), (), BASKETBALL_JERSEY),
    ((), ('polo',), POLO_SHIRT),
    ((), ('shorts',), ATHLETIC_SHORTS),
    ((), ('jersey',), BASKETBALL_JERSEY),
)


# ==================== Lookup ====================

def resolve_template(product_name: Optional[str]) -> GarmentTemplate:
    """
    Resolve the garment template for a product name.

    Matching is case-insensitive substring containment, first rule wins.
    Anything unmatched (including None or an empty name) gets the T-Shirt.

    Example:
        >>> resolve_template("Baseball Team Jersey").name
        'Baseball Jersey'
    """
    if not isinstance(product_name, str) or not product_name:
        return DEFAULT_TEMPLATE

    name = product_name.lower()
    for required, any_of, template in _MATCH_RULES:
        if required and not all(word in name for word in required):
            continue
        if any_of and not any(word in name for word in any_of):
            continue
        return template
    return DEFAULT_TEMPLATE


def get_template(key: str) -> Optional[GarmentTemplate]:
    """Look up a template by its key ('tshirt', 'hoodie', ...)."""
    return TEMPLATES.get(key)


def list_templates() -> List[GarmentTemplate]:
    return list(TEMPLATES.values())


def template_palette(product_name: Optional[str]) -> Tuple[str, ...]:
    """Suggested design colours for the garment a product resolves to."""
    return resolve_template(product_name).colors


__all__ = [
    'PathOp',
    'PathCommand',
    'PathFragment',
    'GarmentTemplate',
    'TEMPLATES',
    'DEFAULT_TEMPLATE',
    'resolve_template',
    'get_template',
    'list_templates',
    'template_palette',
]
