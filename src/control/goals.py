from __future__ import annotations

import logging
from bisect import insort
from dataclasses import dataclass, field
from typing import List, Optional

from .direction import Direction

logger = logging.getLogger(__name__)


@dataclass
class GoalQueue:
    """Floors a car still has to visit, split around its current floor.

    ``above`` is kept strictly ascending and ``below`` strictly descending, so
    the next stop in either travel direction is always at index 0.
    """

    above: List[int] = field(default_factory=list)
    below: List[int] = field(default_factory=list)

    def add(self, goal: int, floor: int) -> bool:
        """Insert ``goal`` relative to ``floor``. Returns False when nothing changed."""
        if goal == floor:
            logger.debug("Ignoring goal %s: car is already on that floor", goal)
            return False
        if goal > floor:
            if goal in self.above:
                return False
            insort(self.above, goal)
            return True
        if goal in self.below:
            return False
        # below is descending; insert in front of the first smaller floor
        for index, existing in enumerate(self.below):
            if existing < goal:
                self.below.insert(index, goal)
                return True
        self.below.append(goal)
        return True

    def head(self, direction: Direction) -> Optional[int]:
        queue = self._queue(direction)
        return queue[0] if queue else None

    def pop(self, direction: Direction) -> int:
        return self._queue(direction).pop(0)

    def is_empty(self) -> bool:
        return not self.above and not self.below

    def _queue(self, direction: Direction) -> List[int]:
        if direction is Direction.UP:
            return self.above
        if direction is Direction.DOWN:
            return self.below
        raise ValueError("An idle car has no goal queue to follow")

    def __contains__(self, floor: object) -> bool:
        return floor in self.above or floor in self.below

    def __len__(self) -> int:
        return len(self.above) + len(self.below)
