from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable, Tuple

from dotpop.constants import DEFAULT_PALETTE, GRID_HEIGHT, GRID_WIDTH, SPAWN_OFFSET
from dotpop.errors import InvalidConfiguration


@dataclass(slots=True)
class BoardConfig:
    """Construction-time board settings.

    Normalizes the palette to an ordered, duplicate-free tuple and validates every
    field in ``__post_init__`` so a bad configuration never reaches world creation.
    """

    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    palette: Iterable[Hashable] = field(default=DEFAULT_PALETTE)
    spawn_offset: Tuple[int, int] = SPAWN_OFFSET

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise InvalidConfiguration(f"{name} must be positive, got {value}")
        if self.palette is None:
            raise InvalidConfiguration("palette must contain at least one color")
        try:
            colors = list(self.palette)
        except TypeError as exc:
            raise InvalidConfiguration(f"palette must be iterable, got {self.palette!r}") from exc
        seen: set = set()
        ordered = []
        for color in colors:
            if color is None:
                raise InvalidConfiguration("palette colors cannot be None; None marks an empty cell")
            try:
                duplicate = color in seen
            except TypeError as exc:
                raise InvalidConfiguration(f"palette colors must be hashable, got {color!r}") from exc
            if not duplicate:
                ordered.append(color)
                seen.add(color)
        if not ordered:
            raise InvalidConfiguration("palette must contain at least one color")
        self.palette = tuple(ordered)
        try:
            dx, dy = self.spawn_offset
            self.spawn_offset = (int(dx), int(dy))
        except (TypeError, ValueError) as exc:
            raise InvalidConfiguration(f"spawn_offset must be an (x, y) pair, got {self.spawn_offset!r}") from exc
