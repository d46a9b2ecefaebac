import random
from typing import Hashable, Iterable

from esper import World
from dotpop.components.palette_registry import PaletteRegistry
from dotpop.components.palette import Palette
from dotpop.constants import DEFAULT_PALETTE
from dotpop.errors import InvalidConfiguration


def create_world(
    *,
    palette: Iterable[Hashable] = DEFAULT_PALETTE,
    rng: random.Random | None = None,
) -> World:
    """Create a world holding the shared random source and the palette entity.

    Board and tile entities are added by BoardSystem.
    """
    colors = Palette(colors=list(palette))
    if not len(colors):
        raise InvalidConfiguration("palette must contain at least one color")
    if None in colors:
        raise InvalidConfiguration("palette colors cannot be None; None marks an empty cell")
    world = World()
    setattr(world, "random", rng or random.Random())

    # Single registry entity with the ordered palette
    world.create_entity(PaletteRegistry(), colors)
    return world
