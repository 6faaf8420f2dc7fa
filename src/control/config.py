from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

MAX_FLEET_SIZE = 16


@dataclass
class BuildingConfig:
    """Building geometry and fleet limits shared by the dispatcher and its drivers."""

    floor_min: int = 1
    floor_max: int = 10
    max_cars: int = MAX_FLEET_SIZE
    default_capacity: int = 4
    scheduler_name: str = "closest"
    scheduler_options: Dict[str, Any] = field(default_factory=dict)
    strict: bool = False

    def __post_init__(self) -> None:
        if self.floor_min >= self.floor_max:
            raise ValueError(f"floor_min ({self.floor_min}) must be below floor_max ({self.floor_max})")
        if not 0 < self.max_cars <= MAX_FLEET_SIZE:
            raise ValueError(f"max_cars must be between 1 and {MAX_FLEET_SIZE}")
        if self.default_capacity <= 0:
            raise ValueError("default_capacity must be positive")

    def in_range(self, floor: int) -> bool:
        return self.floor_min <= floor <= self.floor_max

    @property
    def span(self) -> int:
        return self.floor_max - self.floor_min

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuildingConfig":
        known = {name for name in cls.__dataclass_fields__}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown building settings: {', '.join(sorted(unknown))}")
        return cls(**data)
