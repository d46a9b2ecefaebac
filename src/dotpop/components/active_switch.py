from dataclasses import dataclass

@dataclass(slots=True)
class ActiveSwitch:
    """Per-tile occupancy flag.

    active: True if the cell currently holds a token; False if cleared/empty.
    Color information lives in a separate TileColor component.
    """
    active: bool = True
