from dataclasses import dataclass
from typing import Hashable, Optional

@dataclass(slots=True)
class TileColor:
    """Per-tile color assignment.

    Holds the token's palette color while the cell is occupied. Occupancy itself is
    tracked by ActiveSwitch; a cleared cell keeps ``color=None``.
    """
    color: Optional[Hashable] = None
