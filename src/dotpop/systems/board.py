import logging
from typing import Hashable, List, Sequence, Set, Tuple

from esper import World
from dotpop.events.bus import (
    EventBus,
    EVENT_TILE_CLICK,
    EVENT_SELECTION_IGNORED,
    EVENT_REGION_FOUND,
    EVENT_CELLS_REMOVED,
    EVENT_GRAVITY_APPLIED,
    EVENT_REFILL_COMPLETED,
    EVENT_SELECTION_RESOLVED,
    EVENT_BOARD_LOADED,
)
from dotpop.components.active_switch import ActiveSwitch
from dotpop.components.board import Board
from dotpop.components.board_position import BoardPosition
from dotpop.components.tile import TileColor
from dotpop.constants import GRID_HEIGHT, GRID_WIDTH, SPAWN_OFFSET
from dotpop.errors import InvalidConfiguration
from dotpop.systems.board_ops import (
    GravityMove,
    Position,
    RefillEntry,
    SelectionReport,
    color_at,
    compact_columns,
    find_connected_region,
    in_bounds,
    index_tiles,
    place_layout,
    refill_empty_cells,
    remove_cells,
)

logger = logging.getLogger(__name__)


class BoardSystem:
    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        *,
        spawn_offset: Tuple[int, int] = SPAWN_OFFSET,
    ):
        if width <= 0 or height <= 0:
            raise InvalidConfiguration(f"board must be at least 1x1, got {width}x{height}")
        self.world = world
        self.event_bus = event_bus
        # Create a single board entity with Board component
        self.board_entity = self.world.create_entity()
        self.world.add_component(
            self.board_entity,
            Board(width=width, height=height, spawn_offset=tuple(spawn_offset)),
        )
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.initial_fill: List[RefillEntry] = self._init_board()

    def _init_board(self) -> List[RefillEntry]:
        board: Board = self.world.component_for_entity(self.board_entity, Board)
        for x in range(board.width):
            for y in range(board.height):
                # Tiles start empty so the first fill goes through the regular refill path.
                self.world.create_entity(BoardPosition(x=x, y=y), TileColor(), ActiveSwitch(active=False))
        index_tiles(self.world)
        return refill_empty_cells(self.world)

    def on_tile_click(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        self.apply_selection(x, y)

    def apply_selection(self, x: int, y: int) -> SelectionReport:
        """Pop the region under (x, y), let the columns settle and refill the gaps.

        The grid is full again before any step event is published, so handlers
        only ever see a settled board.
        """
        origin = (x, y)
        if not in_bounds(self.world, x, y):
            return self._ignore(origin, 'out_of_bounds')
        region = find_connected_region(self.world, x, y)
        if not region:
            return self._ignore(origin, 'empty')
        color = color_at(self.world, x, y)
        ordered = sorted(region)

        removed = remove_cells(self.world, region)
        moves = compact_columns(self.world)
        refills = refill_empty_cells(self.world)

        report = SelectionReport(origin=origin, removed=removed, moves=moves, refills=refills)
        logger.debug(
            "Selection at %s removed %d, moved %d, refilled %d",
            origin, len(removed), len(moves), len(refills),
        )
        self.event_bus.emit(EVENT_REGION_FOUND, origin=origin, positions=ordered, size=len(ordered), color=color)
        self._publish_removed(removed)
        self._publish_moves(moves)
        self._publish_refills(refills)
        self.event_bus.emit(EVENT_SELECTION_RESOLVED, report=report)
        return report

    def remove_cells(self, positions: Set[Position] | Sequence[Position]) -> List[Position]:
        removed = remove_cells(self.world, positions)
        self._publish_removed(removed)
        return removed

    def compact_columns(self) -> List[GravityMove]:
        moves = compact_columns(self.world)
        self._publish_moves(moves)
        return moves

    def refill_empty_cells(self) -> List[RefillEntry]:
        new_tiles = refill_empty_cells(self.world)
        self._publish_refills(new_tiles)
        return new_tiles

    def _publish_removed(self, removed: List[Position]) -> None:
        if removed:
            self.event_bus.emit(EVENT_CELLS_REMOVED, positions=removed)

    def _publish_moves(self, moves: List[GravityMove]) -> None:
        if moves:
            columns = sorted({move.source[0] for move in moves})
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves, columns=columns)

    def _publish_refills(self, new_tiles: List[RefillEntry]) -> None:
        if new_tiles:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles)

    def load_columns(self, columns: Sequence[Sequence[Hashable]]) -> List[Position]:
        placed = place_layout(self.world, columns)
        self.event_bus.emit(EVENT_BOARD_LOADED, positions=placed)
        return placed

    def _ignore(self, origin: Position, reason: str) -> SelectionReport:
        logger.debug("Ignoring selection at %s (%s)", origin, reason)
        self.event_bus.emit(EVENT_SELECTION_IGNORED, x=origin[0], y=origin[1], reason=reason)
        return SelectionReport.noop(origin)
