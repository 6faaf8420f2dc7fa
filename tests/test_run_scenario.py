import json

import run_scenario
from control import Direction


SCENARIO = {
    "name": "lobby",
    "building": {"floor_min": 1, "floor_max": 10, "strict": True},
    "cars": [{"floor": 1, "capacity": 4}],
    "duration": 30,
    "stop_when_idle": True,
    "events": [
        {"time": 0, "type": "pickup", "origin": 1, "destinations": [5], "direction": "up"},
        {"time": 0, "type": "pickup", "origin": 1, "destinations": [2, 3, 4, 6, 7], "direction": "up"},
    ],
}


def test_build_dispatcher_from_config():
    dispatcher = run_scenario.build_dispatcher(SCENARIO)
    assert dispatcher.config.strict
    status = dispatcher.status(1)
    assert (status.floor, status.capacity, status.direction) == (1, 4, Direction.IDLE)


def test_run_stops_once_idle_and_reports_rejections():
    dispatcher = run_scenario.build_dispatcher(SCENARIO)
    outcome = run_scenario.run_scenario(dispatcher, SCENARIO)
    assert dispatcher.current_time == 5
    assert len(outcome["timeline"]) == 5
    assert outcome["timeline"][-1]["cars"][0]["floor"] == 5
    assert [r["error"] for r in outcome["rejected"]] == ["NoServiceableCar"]


def test_main_writes_results(tmp_path, capsys):
    config_path = tmp_path / "lobby.json"
    config_path.write_text(json.dumps(SCENARIO))
    output_path = tmp_path / "out" / "result.json"

    run_scenario.main([str(config_path), "--output", str(output_path)])

    printed = capsys.readouterr().out
    assert "Scenario: lobby" in printed
    assert "Rejected requests: 1" in printed
    results = json.loads(output_path.read_text())
    assert results["ticks"] == 5
    assert results["final_metrics"]["delivered"] == 1
    assert results["final_cars"][0]["direction"] == "idle"


def late_call_scenario(**overrides):
    scenario = {
        "name": "late_call",
        "building": {"strict": True},
        "cars": [{"floor": 1}],
        "duration": 30,
        "stop_when_idle": True,
        "events": [{"time": 5, "type": "pickup", "origin": 1, "destinations": [3], "direction": "up"}],
    }
    scenario.update(overrides)
    return scenario


def test_idle_fleet_waits_for_later_events():
    scenario = late_call_scenario()
    dispatcher = run_scenario.build_dispatcher(scenario)
    outcome = run_scenario.run_scenario(dispatcher, scenario)
    metrics = dispatcher.metrics_snapshot()
    assert metrics.pickups == 1
    assert metrics.delivered == 1
    assert outcome["rejected"] == []
    # pickup fires before tick 6, the car turns up then, and drops off at floor 3 on tick 8
    assert dispatcher.current_time == 8


def test_events_past_the_duration_are_reported():
    scenario = late_call_scenario(duration=3)
    dispatcher = run_scenario.build_dispatcher(scenario)
    outcome = run_scenario.run_scenario(dispatcher, scenario)
    assert dispatcher.current_time == 3
    assert [r["error"] for r in outcome["rejected"]] == ["NotReached"]


def test_malformed_events_are_rejected_without_aborting():
    scenario = late_call_scenario(
        events=[
            {"time": 0, "type": "teleport", "car_id": 1},
            {"time": 0, "type": "pickup", "origin": 1, "direction": "up"},
            {"time": 1, "type": "destination", "car_id": 1, "floor": 4},
        ]
    )
    dispatcher = run_scenario.build_dispatcher(scenario)
    outcome = run_scenario.run_scenario(dispatcher, scenario)
    assert [r["error"] for r in outcome["rejected"]] == ["ValueError", "MissingField"]
    assert dispatcher.status(1).floor == 4
