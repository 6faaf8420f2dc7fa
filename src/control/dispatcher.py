from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence, Union

import scheduler

from .car import Car, CarSnapshot, Stop
from .config import BuildingConfig
from .direction import Direction
from .errors import CarBusy, FleetFull, InvalidRequest, NoServiceableCar, UnknownCar
from .invariants import check_fleet
from .metrics import FleetMetrics, MetricsSnapshot
from .passenger import Passenger, as_passengers, is_floor
from .pending import PendingTable

logger = logging.getLogger(__name__)


class Dispatcher:
    """Group controller for a fleet of cars in one building.

    Every public method is synchronous and expects to be called serially;
    hosts that share a dispatcher between callers must hold one lock around
    each call. Time only advances through :meth:`tick`.
    """

    def __init__(self, config: Optional[BuildingConfig] = None) -> None:
        self.config = config or BuildingConfig()
        self.scheduler: scheduler.Scheduler = scheduler.get_scheduler(
            self.config.scheduler_name, **self.config.scheduler_options
        )
        self.fleet: List[Car] = []
        self.pending = PendingTable()
        self.metrics = FleetMetrics()
        self.current_time: int = 0
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self._next_car_id = 1

    # Fleet management

    def add_car(self, initial_floor: int, capacity: Optional[int] = None) -> int:
        if len(self.fleet) >= self.config.max_cars:
            raise FleetFull(f"Fleet already has {len(self.fleet)} cars")
        capacity = self.config.default_capacity if capacity is None else capacity
        if not is_floor(capacity) or capacity <= 0:
            raise InvalidRequest(f"Capacity must be a positive whole number, got {capacity!r}")
        self._require_floor(initial_floor)

        car = Car(car_id=self._next_car_id, floor=initial_floor, capacity=capacity)
        self._next_car_id += 1
        self.fleet.append(car)
        logger.info("Added car %s at floor %s (capacity %s)", car.car_id, initial_floor, capacity)
        return car.car_id

    def remove_car(self, car_id: int) -> None:
        car = self._get_car(car_id)
        self._require_unoccupied(car, "removed")
        self.fleet.remove(car)
        logger.info("Removed car %s", car_id)

    def reposition(self, car_id: int, floor: int) -> CarSnapshot:
        """Move an empty idle car to another floor, e.g. after manual service."""
        car = self._get_car(car_id)
        self._require_floor(floor)
        self._require_unoccupied(car, "repositioned")
        car.floor = floor
        logger.info("Repositioned car %s to floor %s", car_id, floor)
        self._validate()
        return car.snapshot()

    def status(self, car_id: int) -> CarSnapshot:
        return self._get_car(car_id).snapshot()

    def cars(self) -> List[CarSnapshot]:
        return [car.snapshot() for car in self.fleet]

    # Requests

    def pickup(
        self,
        origin_floor: int,
        passengers: Sequence[Union[Passenger, int]],
        requested_direction: Union[Direction, str],
    ) -> None:
        riders = as_passengers(passengers)
        direction = self._validate_pickup(origin_floor, riders, requested_direction)

        call = scheduler.HallCall(origin=origin_floor, direction=direction, passenger_count=len(riders))
        views = [
            scheduler.CarView(
                car_id=car.car_id,
                floor=car.floor,
                direction=car.direction,
                load=car.load,
                capacity=car.capacity,
            )
            for car in self.fleet
        ]
        assignment = self.scheduler.assign(views, call)
        if assignment is None:
            self.metrics.record_pickup(accepted=False)
            raise NoServiceableCar(
                f"No car can take {len(riders)} passenger(s) {direction.value} from floor {origin_floor}"
            )

        car = self._get_car(assignment.car_id)
        self.metrics.record_pickup(accepted=True)
        if assignment.board_now:
            car.board(riders)
            self.metrics.record_boarding(len(riders))
            logger.info("Boarded %s passenger(s) into car %s at floor %s", len(riders), car.car_id, origin_floor)
            self._emit("board", {"car_id": car.car_id, "floor": origin_floor, "count": len(riders)})
        elif self.pending.promise(origin_floor, riders, car.car_id):
            car.add_goal(origin_floor)
            logger.info("Assigned pickup at floor %s to car %s", origin_floor, car.car_id)
        else:
            logger.info(
                "Joined %s passenger(s) to the pickup at floor %s already promised to car %s",
                len(riders),
                origin_floor,
                self.pending.get(origin_floor).car_id,
            )
        self._emit(
            "pickup",
            {
                "origin": origin_floor,
                "direction": direction.value,
                "count": len(riders),
                "car_id": car.car_id,
                "boarded": assignment.board_now,
            },
        )
        self._validate()

    def select_destination(self, car_id: int, floor: int) -> CarSnapshot:
        """Register a floor button pressed inside a car."""
        car = self._get_car(car_id)
        self._require_floor(floor)
        car.add_goal(floor)
        self._validate()
        return car.snapshot()

    # Time

    def tick(self) -> None:
        for car in self.fleet:
            stop = car.step(self._claim_pending)
            if stop is not None:
                self._record_stop(stop)
        self.current_time += 1
        self._emit("tick", {"time": self.current_time, "cars": self.cars()})
        self._validate(settled=True)

    def run(self, ticks: int) -> None:
        for _ in range(ticks):
            self.tick()

    def is_quiescent(self) -> bool:
        return not self.pending and all(
            car.direction is Direction.IDLE and car.goals.is_empty() for car in self.fleet
        )

    # Observation

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def metrics_snapshot(self) -> MetricsSnapshot:
        waiting = sum(len(request.passengers) for _, request in self.pending.items())
        riding = sum(car.load for car in self.fleet)
        return self.metrics.snapshot(self.current_time, riding=riding, waiting=waiting)

    def snapshot(self) -> dict:
        return {
            "time": self.current_time,
            "cars": [
                {
                    "id": car.car_id,
                    "floor": car.floor,
                    "direction": car.direction.value,
                    "capacity": car.capacity,
                    "manifest_size": car.load,
                    "goals_above": list(car.goals_above),
                    "goals_below": list(car.goals_below),
                }
                for car in self.fleet
            ],
            "pending": {
                floor: {"car_id": request.car_id, "passengers": len(request.passengers)}
                for floor, request in self.pending.items()
            },
        }

    def validate(self, settled: bool = False) -> None:
        check_fleet(self.fleet, self.pending, self.config, settled=settled)

    # Internals

    def _claim_pending(self, car: Car) -> List[Passenger]:
        return self.pending.claim(car.floor, car.car_id)

    def _record_stop(self, stop: Stop) -> None:
        self.metrics.record_delivery(stop.dropped)
        self.metrics.record_boarding(stop.boarded)
        if stop.dropped:
            self._emit("drop_off", {"car_id": stop.car_id, "floor": stop.floor, "count": stop.dropped})
        if stop.boarded:
            logger.info("Car %s collected %s passenger(s) at floor %s", stop.car_id, stop.boarded, stop.floor)
            self._emit("board", {"car_id": stop.car_id, "floor": stop.floor, "count": stop.boarded})

    def _validate_pickup(
        self,
        origin_floor: int,
        riders: List[Passenger],
        requested_direction: Union[Direction, str],
    ) -> Direction:
        if not riders:
            raise InvalidRequest("A pickup needs at least one passenger")
        self._require_floor(origin_floor)
        try:
            direction = Direction.parse(requested_direction)
        except ValueError:
            raise InvalidRequest(f"Unknown direction {requested_direction!r}") from None
        if direction is Direction.IDLE:
            raise InvalidRequest("A pickup must request UP or DOWN")

        for rider in riders:
            self._require_floor(rider.destination)
            if rider.destination == origin_floor:
                raise InvalidRequest(f"Destination {rider.destination} equals the origin floor")
            heading = Direction.UP if rider.destination > origin_floor else Direction.DOWN
            if heading is not direction:
                raise InvalidRequest(
                    f"Destination {rider.destination} is not {direction.value} from floor {origin_floor}"
                )
        return direction

    def _require_floor(self, floor: int) -> None:
        if not is_floor(floor):
            raise InvalidRequest(f"Floor {floor!r} is not a whole floor number")
        if not self.config.in_range(floor):
            raise InvalidRequest(
                f"Floor {floor} is outside the building [{self.config.floor_min}, {self.config.floor_max}]"
            )

    def _require_unoccupied(self, car: Car, action: str) -> None:
        if car.manifest or not car.goals.is_empty() or car.direction is not Direction.IDLE:
            raise CarBusy(f"Car {car.car_id} must be idle and empty to be {action}")

    def _validate(self, settled: bool = False) -> None:
        if self.config.strict:
            self.validate(settled=settled)

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)

    def _get_car(self, car_id: int) -> Car:
        for car in self.fleet:
            if car.car_id == car_id:
                return car
        raise UnknownCar(car_id)

    def __len__(self) -> int:
        return len(self.fleet)
