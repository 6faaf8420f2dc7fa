from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Travel state of a car; IDLE is distinct from moving with no goals."""

    UP = "up"
    DOWN = "down"
    IDLE = "idle"

    @classmethod
    def parse(cls, value: "Direction | str") -> "Direction":
        """Accept a member or its name/value in any case; raise ValueError otherwise."""
        if isinstance(value, Direction):
            return value
        return cls(str(value).lower())
