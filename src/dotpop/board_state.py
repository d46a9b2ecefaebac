"""Owned board facade.

A ``BoardState`` holds its own world, event bus and board system. Callers pick
cells with :meth:`BoardState.apply_selection` and animate from the returned
:class:`~dotpop.systems.board_ops.SelectionReport`, or subscribe to the events
published on :attr:`BoardState.event_bus` while the selection resolves.
"""
from __future__ import annotations

import random
from typing import Hashable, Iterable, List, Optional, Sequence, Set, Tuple

from dotpop.config import BoardConfig
from dotpop.constants import SPAWN_OFFSET
from dotpop.errors import InvalidConfiguration
from dotpop.events.bus import EventBus
from dotpop.systems import board_ops
from dotpop.systems.board import BoardSystem
from dotpop.systems.board_ops import GravityMove, Position, RefillEntry, SelectionReport
from dotpop.world import create_world


class BoardState:
    def __init__(
        self,
        width: int,
        height: int,
        palette: Iterable[Hashable],
        *,
        rng: random.Random | None = None,
        event_bus: EventBus | None = None,
        spawn_offset: Tuple[int, int] = SPAWN_OFFSET,
    ) -> None:
        self.config = BoardConfig(width=width, height=height, palette=palette, spawn_offset=spawn_offset)
        self.event_bus = event_bus or EventBus()
        self.world = create_world(palette=self.config.palette, rng=rng)
        self.system = BoardSystem(
            self.world,
            self.event_bus,
            self.config.width,
            self.config.height,
            spawn_offset=self.config.spawn_offset,
        )

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def palette(self) -> Tuple[Hashable, ...]:
        return tuple(self.config.palette)

    @property
    def initial_fill(self) -> List[RefillEntry]:
        return list(self.system.initial_fill)

    # -- queries -------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return board_ops.in_bounds(self.world, x, y)

    def color_at(self, x: int, y: int) -> Optional[Hashable]:
        return board_ops.color_at(self.world, x, y)

    def is_empty(self, x: int, y: int) -> bool:
        """True for in-bounds cells without a token."""
        return self.in_bounds(x, y) and self.color_at(x, y) is None

    def empty_cells(self) -> List[Position]:
        return board_ops.empty_positions(self.world)

    def snapshot(self) -> Tuple[Tuple[Optional[Hashable], ...], ...]:
        """Columns left-to-right, each listed bottom-to-top; ``None`` marks an empty cell."""
        return board_ops.snapshot(self.world)

    def rows(self) -> List[List[Optional[Hashable]]]:
        """Rows listed top-to-bottom."""
        return board_ops.render_rows(self.world)

    def pretty(self) -> str:
        lines: List[str] = []
        for row in self.rows():
            lines.append(" ".join("." if color is None else str(color) for color in row))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.pretty()

    # -- operations ----------------------------------------------------------

    def find_connected_region(self, x: int, y: int) -> Set[Position]:
        return board_ops.find_connected_region(self.world, x, y)

    def remove_cells(self, positions: Iterable[Position]) -> List[Position]:
        return self.system.remove_cells(list(positions))

    def compact_columns(self) -> List[GravityMove]:
        return self.system.compact_columns()

    def refill_empty_cells(self) -> List[RefillEntry]:
        return self.system.refill_empty_cells()

    def apply_selection(self, x: int, y: int) -> SelectionReport:
        return self.system.apply_selection(x, y)

    def load_rows(self, rows: Sequence[Sequence[Hashable]]) -> List[Position]:
        """Replace every token from rows listed top-to-bottom, as the board reads on screen."""
        if len(rows) != self.height or any(len(row) != self.width for row in rows):
            raise InvalidConfiguration(f"layout does not match a {self.width}x{self.height} board")
        columns = [[rows[self.height - 1 - y][x] for y in range(self.height)] for x in range(self.width)]
        return self.system.load_columns(columns)
