GRID_WIDTH = 8
GRID_HEIGHT = 8

# Spawn point of refilled tokens relative to their target cell (x, y).
# Presentation layers animate new tokens from here down into place.
SPAWN_OFFSET = (0, 10)

# Named colors with their display RGB. Only the names enter the board; the RGB
# values are for whoever draws it.
DEFAULT_COLORS = {
    'red':     (180, 60, 60),    # #B43C3C
    'green':   (80, 170, 80),    # #50AA50
    'blue':    (70, 90, 180),    # #465AB4
    'yellow':  (200, 190, 80),   # #C8BE50
    'magenta': (170, 80, 160),   # #AA50A0
}
DEFAULT_PALETTE = tuple(DEFAULT_COLORS.keys())
