"""Errors raised by the downhill core.

None of these are fatal to a running simulation. Callers catch them at the
seam where the affected object can simply be skipped.
"""


class DownhillError(Exception):
    """Base class for downhill errors."""


class InvalidPlacementRegion(DownhillError):
    """Placement rectangle is inverted or has zero area."""

    def __init__(self, min_x: float, max_x: float, min_y: float, max_y: float) -> None:
        super().__init__(
            f"Invalid placement region x=[{min_x}, {max_x}] y=[{min_y}, {max_y}]"
        )
        self.region = (min_x, max_x, min_y, max_y)


class MissingSpriteDimensions(DownhillError):
    """Asset layer has not supplied a width/height for a sprite yet."""

    def __init__(self, sprite) -> None:
        super().__init__(f"No dimensions known for sprite {sprite}")
        self.sprite = sprite


class PersistenceUnavailable(DownhillError):
    """The all-time high score could not be read or written."""
