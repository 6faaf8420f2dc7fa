from __future__ import annotations

from typing import Optional, Sequence

from .interface import Assignment, CarView, HallCall
from .utils import eligible, floor_distance


class ClosestCarScheduler:
    """Boards at the origin when a car is already there, else sends the nearest car.

    Both passes consider only cars with room for the whole group that are idle
    or travelling in the requested direction. Ties go to the earliest car in
    fleet order.
    """

    def assign(self, cars: Sequence[CarView], call: HallCall) -> Optional[Assignment]:
        candidates = eligible(cars, call)
        for car in candidates:
            if car.floor == call.origin:
                return Assignment(car_id=car.car_id, board_now=True)

        closest: Optional[CarView] = None
        for car in candidates:
            if closest is None or floor_distance(car, call.origin) < floor_distance(closest, call.origin):
                closest = car
        if closest is None:
            return None
        return Assignment(car_id=closest.car_id, board_now=False)
