class BoardError(Exception):
    """Base class for errors raised by the board core."""


class InvalidConfiguration(BoardError, ValueError):
    """Board dimensions, palette or layout cannot form a valid grid."""
