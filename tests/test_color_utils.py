import pytest

from apparel_designer.utils.color_utils import (
    garment_color_hex, hex_to_rgb, is_valid_hex_color, normalize_hex_color,
    outline_color_for, relative_luminance,
)


@pytest.mark.parametrize('value, expected', [
    ('#F00', '#ff0000'),
    ('ff0000', '#ff0000'),
    ('#AbCdEf', '#abcdef'),
    ('  #123456 ', '#123456'),
])
def test_normalize_hex_color(value, expected):
    assert normalize_hex_color(value) == expected


@pytest.mark.parametrize('value', ['red', '#12345', '#ggg', '', None, 123])
def test_invalid_colours(value):
    assert not is_valid_hex_color(value)
    with pytest.raises(ValueError):
        normalize_hex_color(value)


def test_hex_to_rgb():
    assert hex_to_rgb('#007bff') == (0, 123, 255)
    assert hex_to_rgb('fff') == (255, 255, 255)


def test_relative_luminance_bounds():
    assert relative_luminance('#000000') == 0.0
    assert relative_luminance('#ffffff') == pytest.approx(1.0)


def test_garment_color_hex():
    assert garment_color_hex('Navy') == '#1b2a4a'
    assert garment_color_hex('  GRAY ') == garment_color_hex('grey')
    assert garment_color_hex('#ABC') == '#aabbcc'
    assert garment_color_hex('Plaid', default='#eeeeee') == '#eeeeee'
    assert garment_color_hex(None) == '#ffffff'


def test_outline_contrasts_with_fill():
    assert outline_color_for('#ffffff') == '#dee2e6'
    assert outline_color_for('#212529') == '#495057'
