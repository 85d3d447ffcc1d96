import pytest

from apparel_designer.core.templates import (
    DEFAULT_TEMPLATE, PathOp, TEMPLATES, get_template, list_templates,
    resolve_template, template_palette,
)


@pytest.mark.parametrize('name, expected', [
    ("Pro Wrestling Singlet XL", "Wrestling Singlet"),
    ("Classic Wrestling Singlet", "Wrestling Singlet"),
    ("Performance T-Shirt", "T-Shirt"),
    ("Vintage Tee", "T-Shirt"),
    ("Team Hoodie", "Hoodie"),
    ("Crewneck Sweatshirt", "Hoodie"),
    ("Training Tank", "Tank Top"),
    ("Baseball Team Jersey", "Baseball Jersey"),
    ("Basketball Home Jersey", "Basketball Jersey"),
    ("Team Polo", "Polo Shirt"),
    ("Athletic Shorts", "Athletic Shorts"),
    ("Team Jersey", "Basketball Jersey"),
    ("Mystery Garment", "T-Shirt"),
    ("", "T-Shirt"),
])
def test_resolve_template(name, expected):
    assert resolve_template(name).name == expected


def test_resolve_is_case_insensitive():
    assert resolve_template("TEAM HOODIE").name == "Hoodie"
    assert resolve_template("wReStLiNg SiNgLeT").name == "Wrestling Singlet"


def test_first_rule_wins():
    # Contains both "singlet" and "tee"
    assert resolve_template("Singlet for the steelers").name == "Wrestling Singlet"
    # "tank" is checked before "jersey"
    assert resolve_template("Tank Jersey").name == "Tank Top"


def test_resolve_is_total_for_odd_input():
    assert resolve_template(None) is DEFAULT_TEMPLATE
    assert resolve_template("   ") is DEFAULT_TEMPLATE
    assert resolve_template(42) is DEFAULT_TEMPLATE


def test_registry():
    assert len(list_templates()) == 8
    assert get_template('hoodie') is TEMPLATES['hoodie']
    assert get_template('cape') is None
    assert DEFAULT_TEMPLATE.name == "T-Shirt"


@pytest.mark.parametrize('template', list_templates(), ids=lambda t: t.key)
def test_outline_is_fractional_with_a_filled_body(template):
    assert any(f.role == 'body' and f.filled for f in template.outline)
    for fragment in template.outline:
        assert fragment.commands
        for command in fragment.commands:
            if command.op in (PathOp.MOVE, PathOp.LINE, PathOp.QUAD, PathOp.CUBIC):
                assert all(-0.01 <= v <= 1.01 for v in command.points)


def test_fragment_scales_to_box():
    body = next(f for f in TEMPLATES['tshirt'].outline if f.role == 'body')
    small = body.scaled(0, 0, 100, 100)
    large = body.scaled(10, 20, 200, 200)
    first_small, first_large = small[0], large[0]
    assert first_small.op is PathOp.MOVE
    assert first_large.points[0] == pytest.approx(10 + first_small.points[0] * 2)
    assert first_large.points[1] == pytest.approx(20 + first_small.points[1] * 2)


def test_template_palette():
    palette = template_palette("Team Hoodie")
    assert palette == TEMPLATES['hoodie'].colors
    assert all(color.startswith('#') for color in palette)
