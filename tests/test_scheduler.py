import pytest

from control import Direction
from scheduler import Assignment, CarView, ClosestCarScheduler, HallCall, get_scheduler


def view(car_id, floor, direction=Direction.IDLE, load=0, capacity=4):
    return CarView(car_id=car_id, floor=floor, direction=direction, load=load, capacity=capacity)


def call(origin, direction=Direction.UP, count=1):
    return HallCall(origin=origin, direction=direction, passenger_count=count)


def test_car_at_origin_boards_now():
    cars = [view(1, 2), view(2, 6)]
    assert ClosestCarScheduler().assign(cars, call(6)) == Assignment(car_id=2, board_now=True)


def test_nearest_car_is_dispatched():
    cars = [view(1, 1), view(2, 9), view(3, 5)]
    assert ClosestCarScheduler().assign(cars, call(7)) == Assignment(car_id=2, board_now=False)


def test_ties_go_to_fleet_order():
    cars = [view(4, 3), view(2, 7)]
    assert ClosestCarScheduler().assign(cars, call(5)).car_id == 4


def test_full_and_opposite_cars_are_skipped():
    cars = [
        view(1, 5, load=4),
        view(2, 5, direction=Direction.DOWN),
        view(3, 9, direction=Direction.UP, load=1),
    ]
    assert ClosestCarScheduler().assign(cars, call(5, count=3)) == Assignment(car_id=3, board_now=False)
    assert ClosestCarScheduler().assign(cars, call(5, count=4)) is None


def test_available_capacity_never_negative():
    assert view(1, 1, load=6, capacity=4).available_capacity == 0


def test_registry():
    assert isinstance(get_scheduler("Closest"), ClosestCarScheduler)
    with pytest.raises(ValueError, match="Unknown scheduler"):
        get_scheduler("scan")


def test_overloaded_car_accepts_nobody():
    cars = [view(1, 3, load=5, capacity=4)]
    assert ClosestCarScheduler().assign(cars, call(3)) is None
