from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class Board:
    width: int
    height: int
    # Offset added to a refilled cell to give the point its new token spawns from.
    spawn_offset: Tuple[int, int] = (0, 10)
