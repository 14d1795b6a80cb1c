from enum import Enum


class Direction(Enum):
    """Directions for flipping or rotating an image."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"
