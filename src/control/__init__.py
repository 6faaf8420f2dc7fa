"""Elevator group control primitives."""

from .direction import Direction
from .passenger import Passenger
from .goals import GoalQueue
from .car import Car, CarSnapshot
from .pending import PendingRequest, PendingTable
from .config import BuildingConfig
from .errors import (
    CarBusy,
    DispatchError,
    FleetFull,
    InvalidRequest,
    InvariantViolation,
    NoServiceableCar,
    UnknownCar,
)
from .metrics import MetricsSnapshot
from .dispatcher import Dispatcher

__all__ = [
    "BuildingConfig",
    "Car",
    "CarBusy",
    "CarSnapshot",
    "Direction",
    "DispatchError",
    "Dispatcher",
    "FleetFull",
    "GoalQueue",
    "InvalidRequest",
    "InvariantViolation",
    "MetricsSnapshot",
    "NoServiceableCar",
    "Passenger",
    "PendingRequest",
    "PendingTable",
    "UnknownCar",
]
