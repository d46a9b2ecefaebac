from dataclasses import dataclass, field
from typing import Hashable, List

@dataclass(slots=True)
class Palette:
    """Ordered, duplicate-free list of colors tokens are drawn from.

    Lives alongside PaletteRegistry (tag) on a single entity.
    """
    colors: List[Hashable] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Preserve order while dropping repeats.
        seen: set = set()
        filtered: List[Hashable] = []
        for color in self.colors:
            if color not in seen:
                filtered.append(color)
                seen.add(color)
        self.colors = filtered

    def all_colors(self) -> List[Hashable]:
        return list(self.colors)

    def __contains__(self, color: Hashable) -> bool:
        return color in self.colors

    def __len__(self) -> int:
        return len(self.colors)
