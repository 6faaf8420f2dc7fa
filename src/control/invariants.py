"""Consistency checks over cars and the pending table.

A failure here is a programming error; callers are expected to let
:class:`InvariantViolation` propagate.
"""

from __future__ import annotations

from typing import Iterable, List

from .car import Car
from .config import BuildingConfig
from .direction import Direction
from .errors import InvariantViolation
from .pending import PendingTable


def car_problems(car: Car, config: BuildingConfig, settled: bool = False) -> List[str]:
    """List every broken invariant of a single car.

    ``settled`` means the car has just been stepped, so an idle car must also
    have no goals left. Between a tick and the next, pickups may hand goals to
    an idle car that it only acts on at the following tick.
    """
    problems: List[str] = []
    above, below = car.goals_above, car.goals_below
    prefix = f"car {car.car_id}"

    if not config.in_range(car.floor):
        problems.append(f"{prefix}: floor {car.floor} outside building")
    if set(above) & set(below):
        problems.append(f"{prefix}: floors {sorted(set(above) & set(below))} queued in both directions")
    if car.floor in above or car.floor in below:
        problems.append(f"{prefix}: current floor {car.floor} is still a goal")
    if any(goal <= car.floor for goal in above) or any(goal >= car.floor for goal in below):
        problems.append(f"{prefix}: goals on the wrong side of floor {car.floor}")
    if any(a >= b for a, b in zip(above, above[1:])):
        problems.append(f"{prefix}: goals_above {above} not strictly ascending")
    if any(a <= b for a, b in zip(below, below[1:])):
        problems.append(f"{prefix}: goals_below {below} not strictly descending")

    if car.direction is Direction.UP and not above:
        problems.append(f"{prefix}: moving up with no goals above")
    if car.direction is Direction.DOWN and not below:
        problems.append(f"{prefix}: moving down with no goals below")
    if settled and car.direction is Direction.IDLE and (above or below):
        problems.append(f"{prefix}: idle after a tick with goals {above} / {below}")

    for passenger in car.manifest:
        if passenger.destination != car.floor and passenger.destination not in car.goals:
            problems.append(f"{prefix}: passenger bound for {passenger.destination} has no goal")
    return problems


def check_fleet(
    cars: Iterable[Car],
    pending: PendingTable,
    config: BuildingConfig,
    settled: bool = False,
) -> None:
    cars = list(cars)
    problems: List[str] = []
    for car in cars:
        problems.extend(car_problems(car, config, settled=settled))

    by_id = {car.car_id: car for car in cars}
    if len(by_id) != len(cars):
        problems.append("duplicate car ids in fleet")
    for floor, request in pending.items():
        car = by_id.get(request.car_id)
        if car is None:
            problems.append(f"pending request at floor {floor} promised to missing car {request.car_id}")
        elif floor not in car.goals:
            problems.append(f"pending request at floor {floor} is not a goal of car {car.car_id}")
        if not request.passengers:
            problems.append(f"pending request at floor {floor} has no passengers")

    if problems:
        raise InvariantViolation("; ".join(problems))
