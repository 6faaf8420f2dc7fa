from __future__ import annotations

from typing import Iterable, List

from control.direction import Direction

from .interface import CarView, HallCall


def floor_distance(car: CarView, floor: int) -> int:
    return abs(car.floor - floor)


def accepts(car: CarView, call: HallCall) -> bool:
    """Whether the car has room for the whole group and is idle or heading the same way."""
    if call.passenger_count > car.available_capacity:
        return False
    return car.direction in (Direction.IDLE, call.direction)


def eligible(cars: Iterable[CarView], call: HallCall) -> List[CarView]:
    return [car for car in cars if accepts(car, call)]
