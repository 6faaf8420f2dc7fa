from control import Car, Direction, Passenger


def no_waiting(car):
    return []


def test_idle_car_without_goals_stays_put():
    car = Car(car_id=1, floor=3, capacity=4)
    assert car.step(no_waiting) is None
    assert (car.floor, car.direction) == (3, Direction.IDLE)


def test_idle_car_turns_up_without_moving():
    car = Car(car_id=1, floor=3, capacity=4)
    car.add_goal(6)
    car.step(no_waiting)
    assert (car.floor, car.direction) == (3, Direction.UP)


def test_idle_car_with_goals_both_ways_heads_down():
    car = Car(car_id=1, floor=5, capacity=4)
    car.add_goal(8)
    car.add_goal(2)
    car.step(no_waiting)
    assert (car.floor, car.direction) == (5, Direction.DOWN)


def test_landing_on_goal_consumes_it_in_the_same_tick():
    car = Car(car_id=1, floor=3, capacity=4, direction=Direction.UP)
    car.board([Passenger(4)])
    stop = car.step(no_waiting)
    assert car.floor == 4
    assert stop.floor == 4 and stop.dropped == 1 and stop.boarded == 0
    assert car.direction is Direction.IDLE
    assert car.manifest == []


def test_arrival_turns_around_when_only_goals_below_remain():
    car = Car(car_id=1, floor=3, capacity=4, direction=Direction.UP)
    car.add_goal(4)
    car.add_goal(1)
    car.step(no_waiting)
    assert car.floor == 4
    assert car.direction is Direction.DOWN
    assert car.goals_below == [1]


def test_down_is_symmetric_to_up():
    car = Car(car_id=1, floor=6, capacity=4, direction=Direction.DOWN)
    car.add_goal(4)
    assert car.step(no_waiting) is None
    assert car.floor == 5
    stop = car.step(no_waiting)
    assert stop.floor == 4
    assert car.direction is Direction.IDLE


def test_arrival_boards_claimed_passengers():
    car = Car(car_id=7, floor=2, capacity=4, direction=Direction.UP)
    car.add_goal(3)
    seen = []

    def claim(arrived):
        seen.append((arrived.car_id, arrived.floor))
        return [Passenger(1), Passenger(9)]

    stop = car.step(claim)
    assert seen == [(7, 3)]
    assert stop.boarded == 2
    assert car.goals_above == [9]
    assert car.goals_below == [1]
    assert car.direction is Direction.UP


def test_drop_off_removes_every_matching_passenger():
    car = Car(car_id=1, floor=1, capacity=4)
    car.board([Passenger(3), Passenger(5), Passenger(3)])
    assert car.drop_off(3) == 2
    assert car.manifest == [Passenger(5)]
    assert car.goals_above == [3, 5]


def test_room_check():
    car = Car(car_id=1, floor=1, capacity=2)
    assert car.has_room_for(2)
    car.board([Passenger(4)])
    assert car.has_room_for(1)
    assert not car.has_room_for(2)


def test_snapshot_is_a_copy():
    car = Car(car_id=3, floor=4, capacity=4)
    car.add_goal(8)
    snapshot = car.snapshot()
    car.add_goal(9)
    assert snapshot.goals_above == [8]
    assert snapshot.id == 3 and snapshot.manifest_size == 0
