from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MetricsSnapshot:
    time_step: int
    pickups: int
    rejected_pickups: int
    boarded: int
    delivered: int
    riding: int
    waiting: int


class FleetMetrics:
    def __init__(self) -> None:
        self.pickups: int = 0
        self.rejected_pickups: int = 0
        self.boarded: int = 0
        self.delivered: int = 0

    def record_pickup(self, accepted: bool) -> None:
        if accepted:
            self.pickups += 1
        else:
            self.rejected_pickups += 1

    def record_boarding(self, count: int) -> None:
        self.boarded += count

    def record_delivery(self, count: int) -> None:
        self.delivered += count

    def snapshot(self, time_step: int, riding: int, waiting: int) -> MetricsSnapshot:
        return MetricsSnapshot(
            time_step=time_step,
            pickups=self.pickups,
            rejected_pickups=self.rejected_pickups,
            boarded=self.boarded,
            delivered=self.delivered,
            riding=riding,
            waiting=waiting,
        )
