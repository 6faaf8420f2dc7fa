from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from .direction import Direction
from .goals import GoalQueue
from .passenger import Passenger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CarSnapshot:
    """Read-only view of a car between ticks."""

    id: int
    floor: int
    direction: Direction
    capacity: int
    manifest_size: int
    goals_above: List[int]
    goals_below: List[int]


@dataclass(frozen=True)
class Stop:
    """What happened when a car consumed a goal floor."""

    car_id: int
    floor: int
    dropped: int
    boarded: int


@dataclass
class Car:
    """A single elevator car and its UP/DOWN/IDLE state machine."""

    car_id: int
    floor: int
    capacity: int
    direction: Direction = Direction.IDLE
    manifest: List[Passenger] = field(default_factory=list)
    goals: GoalQueue = field(default_factory=GoalQueue)

    @property
    def goals_above(self) -> List[int]:
        return self.goals.above

    @property
    def goals_below(self) -> List[int]:
        return self.goals.below

    @property
    def load(self) -> int:
        return len(self.manifest)

    def has_room_for(self, count: int) -> bool:
        return self.load + count <= self.capacity

    def add_goal(self, goal: int) -> bool:
        return self.goals.add(goal, self.floor)

    def board(self, passengers: Iterable[Passenger]) -> int:
        """Take passengers on board, registering each destination as a goal first."""
        count = 0
        for passenger in passengers:
            self.add_goal(passenger.destination)
            self.manifest.append(passenger)
            count += 1
        return count

    def drop_off(self, floor: int) -> int:
        remaining = [p for p in self.manifest if p.destination != floor]
        dropped = len(self.manifest) - len(remaining)
        self.manifest = remaining
        return dropped

    def step(self, claim: Callable[["Car"], List[Passenger]]) -> Optional[Stop]:
        """Advance one tick.

        ``claim`` is called on arrival at a goal floor and returns the waiting
        passengers promised to this car there, if any.
        """
        if self.direction is Direction.IDLE:
            self._depart()
            return None

        head = self.goals.head(self.direction)
        if head != self.floor:
            self.floor += 1 if self.direction is Direction.UP else -1
            logger.debug("Car %s moved %s to floor %s", self.car_id, self.direction.value, self.floor)
        if self.goals.head(self.direction) != self.floor:
            return None
        return self._arrive(claim)

    def _arrive(self, claim: Callable[["Car"], List[Passenger]]) -> Stop:
        self.goals.pop(self.direction)
        dropped = self.drop_off(self.floor)
        boarded = self.board(claim(self))
        if self.direction is Direction.UP and not self.goals.above:
            self.direction = Direction.DOWN if self.goals.below else Direction.IDLE
        elif self.direction is Direction.DOWN and not self.goals.below:
            self.direction = Direction.UP if self.goals.above else Direction.IDLE
        return Stop(car_id=self.car_id, floor=self.floor, dropped=dropped, boarded=boarded)

    def _depart(self) -> None:
        # with goals on both sides an idle car heads down first
        if self.goals.above and not self.goals.below:
            self.direction = Direction.UP
        elif self.goals.below:
            self.direction = Direction.DOWN

    def snapshot(self) -> CarSnapshot:
        return CarSnapshot(
            id=self.car_id,
            floor=self.floor,
            direction=self.direction,
            capacity=self.capacity,
            manifest_size=len(self.manifest),
            goals_above=list(self.goals.above),
            goals_below=list(self.goals.below),
        )
