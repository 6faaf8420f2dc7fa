from __future__ import annotations

from typing import Dict, Type

from .closest import ClosestCarScheduler
from .interface import Assignment, CarView, HallCall, Scheduler

__all__ = [
    "Assignment",
    "CarView",
    "ClosestCarScheduler",
    "HallCall",
    "Scheduler",
    "get_scheduler",
]


SCHEDULER_REGISTRY: Dict[str, Type[Scheduler]] = {
    "closest": ClosestCarScheduler,
}


def get_scheduler(name: str, **kwargs) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)
