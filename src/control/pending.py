from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .passenger import Passenger


@dataclass
class PendingRequest:
    """Passengers waiting at a floor for the car promised to collect them."""

    passengers: List[Passenger]
    car_id: int


@dataclass
class PendingTable:
    """Hall calls keyed by origin floor, at most one entry per floor."""

    requests: Dict[int, PendingRequest] = field(default_factory=dict)

    def promise(self, floor: int, passengers: List[Passenger], car_id: int) -> bool:
        """Record waiting passengers. An existing entry keeps its promised car.

        Returns True when a new entry was created.
        """
        existing = self.requests.get(floor)
        if existing is not None:
            existing.passengers.extend(passengers)
            return False
        self.requests[floor] = PendingRequest(passengers=list(passengers), car_id=car_id)
        return True

    def claim(self, floor: int, car_id: int) -> List[Passenger]:
        request = self.requests.get(floor)
        if request is None or request.car_id != car_id:
            return []
        del self.requests[floor]
        return request.passengers

    def get(self, floor: int) -> Optional[PendingRequest]:
        return self.requests.get(floor)

    def items(self) -> Iterator[Tuple[int, PendingRequest]]:
        return iter(self.requests.items())

    def __contains__(self, floor: object) -> bool:
        return floor in self.requests

    def __len__(self) -> int:
        return len(self.requests)
