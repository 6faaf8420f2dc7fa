"""Exceptions raised at the dispatcher boundary."""

from __future__ import annotations


class DispatchError(Exception):
    """Base class for recoverable dispatcher errors."""


class FleetFull(DispatchError):
    pass


class UnknownCar(DispatchError, LookupError):
    def __init__(self, car_id: int) -> None:
        super().__init__(f"No car with id {car_id}")
        self.car_id = car_id


class InvalidRequest(DispatchError, ValueError):
    pass


class NoServiceableCar(DispatchError):
    pass


class CarBusy(DispatchError):
    pass


class InvariantViolation(AssertionError):
    """Internal state is inconsistent. Never caught by the dispatcher."""
