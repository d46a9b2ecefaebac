import pytest

from dotpop.components.palette import Palette
from dotpop.components.palette_registry import PaletteRegistry
from dotpop.errors import InvalidConfiguration
from dotpop.systems.board_ops import get_palette
from dotpop.world import create_world


def test_palette_drops_duplicates_preserving_order():
    palette = Palette(colors=['red', 'blue', 'red', 'green', 'blue'])
    assert palette.all_colors() == ['red', 'blue', 'green']
    assert 'green' in palette
    assert 'purple' not in palette
    assert len(palette) == 3


def test_world_registers_single_palette_entity():
    world = create_world(palette=[(255, 0, 0), (0, 0, 255)])
    registries = list(world.get_component(PaletteRegistry))
    assert len(registries) == 1
    assert get_palette(world).all_colors() == [(255, 0, 0), (0, 0, 255)]


def test_world_rejects_empty_palette():
    with pytest.raises(InvalidConfiguration):
        create_world(palette=[])


def test_world_rejects_none_color():
    with pytest.raises(InvalidConfiguration):
        create_world(palette=['red', None])
