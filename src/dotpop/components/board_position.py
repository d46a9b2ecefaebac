from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    """Fixed grid cell of a tile entity. y grows upward; gravity pulls toward y=0."""
    x: int
    y: int
