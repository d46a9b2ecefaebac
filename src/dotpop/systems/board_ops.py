from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Set, Tuple

from esper import World

from dotpop.components.active_switch import ActiveSwitch
from dotpop.components.board import Board
from dotpop.components.board_position import BoardPosition
from dotpop.components.palette import Palette
from dotpop.components.palette_registry import PaletteRegistry
from dotpop.components.tile import TileColor
from dotpop.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Color = Hashable

NEIGHBOR_OFFSETS: Tuple[Position, ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    color: Color


@dataclass(slots=True)
class RefillEntry:
    position: Position
    color: Color
    spawn_from: Position


@dataclass(slots=True)
class SelectionReport:
    """Everything a presentation layer needs to animate one selection."""

    origin: Position
    removed: List[Position] = field(default_factory=list)
    moves: List[GravityMove] = field(default_factory=list)
    refills: List[RefillEntry] = field(default_factory=list)
    applied: bool = True

    @classmethod
    def noop(cls, origin: Position) -> "SelectionReport":
        return cls(origin=origin, applied=False)

    def __bool__(self) -> bool:
        return self.applied


def get_palette(world: World) -> Palette:
    for entity, _ in world.get_component(PaletteRegistry):
        return world.component_for_entity(entity, Palette)
    raise RuntimeError("Palette definitions not found")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.width, board.height
    return None


def in_bounds(world: World, x: int, y: int) -> bool:
    dims = board_dimensions(world)
    if not dims:
        return False
    width, height = dims
    return 0 <= x < width and 0 <= y < height


def index_tiles(world: World) -> Dict[Position, int]:
    """Build the position -> tile entity map and keep it on the world.

    Tile positions never change after the board is built, so the map stays valid.
    """
    index = {(pos.x, pos.y): entity for entity, pos in world.get_component(BoardPosition)}
    setattr(world, "tile_index", index)
    return index


def position_index(world: World) -> Dict[Position, int]:
    """Return mapping of every board position to its tile entity."""
    index = getattr(world, "tile_index", None)
    if index is None:
        index = index_tiles(world)
    return index


def get_entity_at(world: World, x: int, y: int) -> int | None:
    return position_index(world).get((x, y))


def tile_color_map(world: World) -> Dict[Position, Color]:
    """Return mapping of occupied positions to their token colors."""
    mapping: Dict[Position, Color] = {}
    for _, (position, switch, tile) in world.get_components(BoardPosition, ActiveSwitch, TileColor):
        if not switch.active:
            continue
        mapping[(position.x, position.y)] = tile.color
    return mapping


def color_at(world: World, x: int, y: int) -> Optional[Color]:
    entity = get_entity_at(world, x, y)
    if entity is None:
        return None
    if not world.component_for_entity(entity, ActiveSwitch).active:
        return None
    return world.component_for_entity(entity, TileColor).color


def empty_positions(world: World) -> List[Position]:
    empties: List[Position] = []
    for _, (position, switch) in world.get_components(BoardPosition, ActiveSwitch):
        if not switch.active:
            empties.append((position.x, position.y))
    return sorted(empties)


def snapshot(world: World) -> Tuple[Tuple[Optional[Color], ...], ...]:
    """Return the grid as a tuple of columns, each listed bottom-to-top (None = empty)."""
    dims = board_dimensions(world)
    if not dims:
        return ()
    width, height = dims
    colors = tile_color_map(world)
    return tuple(tuple(colors.get((x, y)) for y in range(height)) for x in range(width))


def find_connected_region(world: World, x: int, y: int) -> Set[Position]:
    """Collect the 4-connected same-color region containing (x, y).

    Returns an empty set when the cell is out of bounds or empty, otherwise a set
    that always contains the origin itself.
    """
    colors = tile_color_map(world)
    if (x, y) not in colors:
        return set()
    target = colors[(x, y)]
    region: Set[Position] = {(x, y)}
    stack: List[Position] = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        for dx, dy in NEIGHBOR_OFFSETS:
            neighbor = (cx + dx, cy + dy)
            if neighbor in region:
                continue
            if neighbor in colors and colors[neighbor] == target:
                region.add(neighbor)
                stack.append(neighbor)
    return region


def remove_cells(world: World, positions: Iterable[Position]) -> List[Position]:
    """Clear the tokens at positions and return the cells that were actually occupied.

    Out-of-bounds and already-empty positions are skipped, so repeating a call is a no-op.
    """
    index = position_index(world)
    removed: List[Position] = []
    for pos in positions:
        entity = index.get(tuple(pos))
        if entity is None:
            continue
        tile_switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if not tile_switch.active:
            continue
        tile_switch.active = False
        world.component_for_entity(entity, TileColor).color = None
        removed.append((pos[0], pos[1]))
    return sorted(removed)


def compute_gravity_moves(world: World) -> List[GravityMove]:
    """Plan a stable per-column compaction of the occupied cells toward y=0."""
    dims = board_dimensions(world)
    if not dims:
        return []
    width, height = dims
    colors = tile_color_map(world)
    moves: List[GravityMove] = []
    for x in range(width):
        filled_rows = [y for y in range(height) if (x, y) in colors]
        for target_y, source_y in enumerate(filled_rows):
            if source_y == target_y:
                continue
            moves.append(GravityMove(source=(x, source_y), target=(x, target_y), color=colors[(x, source_y)]))
    return moves


def apply_gravity_moves(world: World, moves: Sequence[GravityMove]) -> None:
    # Moves within a column must run in ascending target order; each target is
    # either empty or was vacated by an earlier move.
    index = position_index(world)
    for move in moves:
        src_entity = index.get(move.source)
        dst_entity = index.get(move.target)
        if src_entity is None or dst_entity is None:
            continue
        src_switch: ActiveSwitch = world.component_for_entity(src_entity, ActiveSwitch)
        dst_switch: ActiveSwitch = world.component_for_entity(dst_entity, ActiveSwitch)
        if not src_switch.active:
            continue
        src_tile: TileColor = world.component_for_entity(src_entity, TileColor)
        dst_tile: TileColor = world.component_for_entity(dst_entity, TileColor)
        dst_tile.color = src_tile.color
        dst_switch.active = True
        src_tile.color = None
        src_switch.active = False


def compact_columns(world: World) -> List[GravityMove]:
    moves = compute_gravity_moves(world)
    if moves:
        apply_gravity_moves(world, moves)
        logger.debug("Compacted %d tokens across %d columns", len(moves), len({m.source[0] for m in moves}))
    return moves


def _world_rng(world: World, rng: random.Random | None = None) -> random.Random:
    if rng is not None:
        return rng
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    return random.Random()


def refill_empty_cells(world: World, *, rng: random.Random | None = None) -> List[RefillEntry]:
    """Give every empty cell a token of a uniformly random palette color."""
    choices = get_palette(world).all_colors()
    if not choices:
        raise RuntimeError("Palette has no colors to refill with")
    board = get_board(world)
    offset_x, offset_y = board.spawn_offset
    chooser = _world_rng(world, rng)
    entries: List[RefillEntry] = []
    index = position_index(world)
    for position in sorted(index):
        entity = index[position]
        tile_switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if tile_switch.active:
            continue
        color = chooser.choice(choices)
        world.component_for_entity(entity, TileColor).color = color
        tile_switch.active = True
        x, y = position
        entries.append(RefillEntry(position=position, color=color, spawn_from=(x + offset_x, y + offset_y)))
    if entries:
        logger.debug("Refilled %d empty cells", len(entries))
    return entries


def place_layout(world: World, columns: Sequence[Sequence[Color]]) -> List[Position]:
    """Overwrite every cell from a column-major layout listed bottom-to-top."""
    dims = board_dimensions(world)
    if not dims:
        raise RuntimeError("Board component not found")
    width, height = dims
    if len(columns) != width or any(len(column) != height for column in columns):
        raise InvalidConfiguration(f"layout does not match a {width}x{height} board")
    palette = get_palette(world)
    for column in columns:
        for color in column:
            if color not in palette:
                raise InvalidConfiguration(f"color {color!r} is not in the palette")
    index = position_index(world)
    placed: List[Position] = []
    for x, column in enumerate(columns):
        for y, color in enumerate(column):
            entity = index[(x, y)]
            world.component_for_entity(entity, TileColor).color = color
            world.component_for_entity(entity, ActiveSwitch).active = True
            placed.append((x, y))
    return placed


def render_rows(world: World) -> List[List[Optional[Color]]]:
    """Return the grid as rows listed top-to-bottom, the way it reads on screen."""
    columns = snapshot(world)
    if not columns:
        return []
    height = len(columns[0])
    return [[column[y] for column in columns] for y in reversed(range(height))]
