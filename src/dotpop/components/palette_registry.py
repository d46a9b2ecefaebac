from dataclasses import dataclass

@dataclass(slots=True)
class PaletteRegistry:
    """Empty tag component marking the single entity that stores the board palette.

    The same entity also carries a Palette component with the ordered colors.
    """
    pass
