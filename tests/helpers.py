from __future__ import annotations

import random
from typing import Dict, Hashable, List, Sequence, Set, Tuple

from dotpop.board_state import BoardState
from dotpop.events.bus import EventBus

Position = Tuple[int, int]


def make_board(
    rows: Sequence[Sequence[Hashable]],
    palette: Sequence[Hashable] | None = None,
    *,
    seed: int = 0,
) -> BoardState:
    """Build a board whose tokens match rows (listed top-to-bottom)."""

    height = len(rows)
    width = len(rows[0])
    if palette is None:
        seen: List[Hashable] = []
        for row in rows:
            for color in row:
                if color not in seen:
                    seen.append(color)
        palette = seen
    state = BoardState(width, height, palette, rng=random.Random(seed))
    state.load_rows(rows)
    return state


def record_events(bus: EventBus, *names: str) -> List[Tuple[str, dict]]:
    """Subscribe to names and collect (name, payload) pairs in emission order."""

    received: List[Tuple[str, dict]] = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: received.append((_name, payload)))
    return received


def oracle_region(columns: Sequence[Sequence[Hashable]], x: int, y: int) -> Set[Position]:
    """Breadth-first reference region over a column-major snapshot."""

    width = len(columns)
    height = len(columns[0])
    color = columns[x][y]
    frontier = [(x, y)]
    seen: Set[Position] = {(x, y)}
    while frontier:
        nxt: List[Position] = []
        for cx, cy in frontier:
            for nx, ny in ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)):
                if 0 <= nx < width and 0 <= ny < height and (nx, ny) not in seen:
                    if columns[nx][ny] is not None and columns[nx][ny] == color:
                        seen.add((nx, ny))
                        nxt.append((nx, ny))
        frontier = nxt
    return seen


def column_counts(columns: Sequence[Sequence[Hashable]]) -> Dict[int, int]:
    return {x: sum(1 for color in column if color is not None) for x, column in enumerate(columns)}
