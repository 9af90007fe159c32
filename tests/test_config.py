import pytest

from connect4.config import GameConfig
from connect4.exceptions import Connect4Error, InvalidDimensionError


def test_defaults():
    config = GameConfig().validate()
    assert (config.width, config.height) == (7, 6)
    assert config.colors == (None, None)


def test_players_carry_colors():
    first, second = GameConfig(colors=("blue", "orange")).players()
    assert (first.number, first.color) == (1, "blue")
    assert (second.number, second.color) == (2, "orange")


@pytest.mark.parametrize("width,height", [(0, 6), (7, -2), (3.5, 6)])
def test_bad_dimensions(width, height):
    with pytest.raises(InvalidDimensionError):
        GameConfig(width=width, height=height).validate()


def test_players_cannot_share_a_color():
    with pytest.raises(Connect4Error, match="cannot use the color"):
        GameConfig(colors=("Red", "red")).validate()


def test_colors_must_be_a_pair():
    with pytest.raises(Connect4Error):
        GameConfig(colors=("red",)).validate()


def test_uncolored_players_are_allowed():
    GameConfig(colors=(None, None)).validate()


@pytest.mark.parametrize("colors", [None, "red", ("red", "blue", "green")])
def test_colors_must_be_a_pair_of_values(colors):
    with pytest.raises(Connect4Error, match="pair of player colors"):
        GameConfig(colors=colors).validate()


def test_colors_must_be_strings():
    with pytest.raises(Connect4Error, match="must be a string or None"):
        GameConfig(colors=(5, "red")).validate()
