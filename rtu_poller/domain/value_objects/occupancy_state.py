"""Occupancy state reported by the ventilation unit."""

from enum import Enum


class OccupancyState(str, Enum):
    """Home/away mode derived from bit 0 of the state register."""

    HOME = "home"
    AWAY = "away"

    def __str__(self) -> str:
        return self.value
