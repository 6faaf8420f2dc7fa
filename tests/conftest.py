import pytest

from control import BuildingConfig, Dispatcher


def make_dispatcher(*floors, capacity=4, **settings):
    settings.setdefault("strict", True)
    dispatcher = Dispatcher(BuildingConfig(**settings))
    for floor in floors:
        dispatcher.add_car(floor, capacity)
    return dispatcher


@pytest.fixture
def single_car():
    """Building [1, 10] with one capacity-4 car idle at floor 1."""
    return make_dispatcher(1)


@pytest.fixture
def build():
    """Factory: ``build(3, 8)`` gives a dispatcher with cars idle at floors 3 and 8."""
    return make_dispatcher
