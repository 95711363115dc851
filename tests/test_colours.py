import pytest

from raycub.colours import change_colour, rgb


def test_rgb_known_constants():
    assert rgb(255, 0, 0) == 0xFF0000
    assert rgb(0x41, 0x69, 0xE1) == 0x4169E1


def test_rgb_channels_round_trip():
    for red, green, blue in [(1, 2, 3), (255, 255, 255), (0, 128, 64)]:
        value = rgb(red, green, blue)
        assert (value >> 16) & 0xFF == red
        assert (value >> 8) & 0xFF == green
        assert value & 0xFF == blue


def test_rgb_masks_channels():
    assert rgb(257, 2, 3) == rgb(1, 2, 3)


def test_change_colour_matches_rgb():
    assert change_colour("65,105,225") == 0x4169E1
    assert change_colour("220,100,0") == rgb(220, 100, 0)


def test_change_colour_skips_leading_whitespace():
    assert change_colour(" 10, 20,30") == rgb(10, 20, 30)


def test_change_colour_ignores_empty_pieces():
    assert change_colour("1,,2,3") == rgb(1, 2, 3)


def test_change_colour_too_few_components():
    with pytest.raises(ValueError):
        change_colour("1,2")