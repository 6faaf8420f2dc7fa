"""CLI for replaying LiftControl scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from control import BuildingConfig, DispatchError, Dispatcher

logger = logging.getLogger("run_scenario")


def build_dispatcher(config: Dict) -> Dispatcher:
    building = BuildingConfig.from_dict(config.get("building", {}))
    dispatcher = Dispatcher(building)
    for car_cfg in config.get("cars", []):
        dispatcher.add_car(car_cfg.get("floor", building.floor_min), car_cfg.get("capacity"))
    return dispatcher


def _fire(dispatcher: Dispatcher, event: Dict) -> None:
    kind = event.get("type")
    if kind == "pickup":
        dispatcher.pickup(event["origin"], event["destinations"], event["direction"])
    elif kind == "destination":
        dispatcher.select_destination(event["car_id"], event["floor"])
    else:
        raise ValueError(f"Unknown event type {kind!r}")


def _apply_scheduled_events(dispatcher: Dispatcher, events: Iterable[Dict], current_time: int) -> List[Dict]:
    """Fire every event due at ``current_time``; returns the ones that were rejected."""
    rejected: List[Dict] = []
    for event in events:
        if event.get("time", 0) != current_time:
            continue
        try:
            _fire(dispatcher, event)
        except KeyError as exc:
            logger.warning("t=%s: %s event is missing %s", current_time, event.get("type"), exc)
            rejected.append({**event, "error": "MissingField", "detail": f"missing field {exc}"})
        except (DispatchError, ValueError) as exc:
            logger.warning("t=%s: %s rejected: %s", current_time, event.get("type"), exc)
            rejected.append({**event, "error": type(exc).__name__, "detail": str(exc)})
    return rejected


def run_scenario(dispatcher: Dispatcher, config: Dict) -> Dict:
    duration = config.get("duration", 50)
    events = config.get("events", [])
    last_event = max((event.get("time", 0) for event in events), default=-1)
    timeline: List[Dict] = []
    rejected: List[Dict] = []

    for _ in range(duration):
        rejected.extend(_apply_scheduled_events(dispatcher, events, dispatcher.current_time))
        dispatcher.tick()
        timeline.append(dispatcher.snapshot())
        if config.get("stop_when_idle") and dispatcher.is_quiescent() and last_event < dispatcher.current_time:
            break

    for event in events:
        if event.get("time", 0) >= dispatcher.current_time:
            rejected.append({**event, "error": "NotReached", "detail": f"scenario ended at t={dispatcher.current_time}"})
    return {"timeline": timeline, "rejected": rejected}


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the per-tick timeline as JSON",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every assignment and stop")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = json.loads(args.config.read_text())
    dispatcher = build_dispatcher(config)
    outcome = run_scenario(dispatcher, config)

    final_metrics = asdict(dispatcher.metrics_snapshot())
    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "ticks": dispatcher.current_time,
        "final_metrics": final_metrics,
        "final_cars": dispatcher.snapshot()["cars"],
        "rejected": outcome["rejected"],
        "timeline": outcome["timeline"],
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Ticks: {results['ticks']}")
    for car in results["final_cars"]:
        print(
            f"  car {car['id']}: floor {car['floor']} {car['direction']}, "
            f"{car['manifest_size']} aboard, goals up {car['goals_above']} down {car['goals_below']}"
        )
    print("Final metrics:")
    for key, value in final_metrics.items():
        print(f"  {key}: {value}")
    if outcome["rejected"]:
        print(f"Rejected requests: {len(outcome['rejected'])}")
    if args.output:
        print(f"Saved timeline to {args.output}")


if __name__ == "__main__":
    main()
