from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Union

from .errors import InvalidRequest


@dataclass(frozen=True)
class Passenger:
    """A rider identified only by where they are going."""

    destination: int


def is_floor(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def as_passengers(riders: Iterable[Union[Passenger, int]]) -> List[Passenger]:
    passengers: List[Passenger] = []
    for rider in riders:
        if isinstance(rider, Passenger):
            passengers.append(rider)
        elif is_floor(rider):
            passengers.append(Passenger(rider))
        else:
            raise InvalidRequest(f"Destination {rider!r} is not a whole floor number")
    return passengers
