from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from control.direction import Direction


@dataclass(frozen=True)
class CarView:
    """Lightweight view of a car for assignment decisions."""

    car_id: int
    floor: int
    direction: Direction
    load: int
    capacity: int

    @property
    def available_capacity(self) -> int:
        return max(0, self.capacity - self.load)


@dataclass(frozen=True)
class HallCall:
    """A pickup request as seen by schedulers."""

    origin: int
    direction: Direction
    passenger_count: int


@dataclass(frozen=True)
class Assignment:
    car_id: int
    board_now: bool


class Scheduler(Protocol):
    """Strategy interface for assigning a hall call to one car."""

    def assign(self, cars: Sequence[CarView], call: HallCall) -> Optional[Assignment]:
        """
        Return the car that should serve ``call``, or None when no car can.

        ``board_now`` is set when the chosen car is already at the origin and
        takes the passengers immediately instead of being sent there.
        """
        ...
