from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import asdict
from typing import List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from control import (
    BuildingConfig,
    CarBusy,
    Direction,
    DispatchError,
    Dispatcher,
    FleetFull,
    InvalidRequest,
    NoServiceableCar,
    UnknownCar,
)

logger = logging.getLogger(__name__)


class CarRequest(BaseModel):
    initial_floor: int
    capacity: Optional[int] = Field(default=None, gt=0)


class PickupRequest(BaseModel):
    origin_floor: int
    destinations: List[int] = Field(min_length=1)
    direction: Direction


class DestinationRequest(BaseModel):
    floor: int


class TickRequest(BaseModel):
    count: int = Field(default=1, ge=1, le=1000)


ERROR_STATUS = {
    UnknownCar: 404,
    InvalidRequest: 400,
    FleetFull: 409,
    NoServiceableCar: 409,
    CarBusy: 409,
}


def http_error(exc: DispatchError) -> HTTPException:
    status = next((code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)), 400)
    return HTTPException(status_code=status, detail=str(exc))


class DispatcherManager:
    """Serialises access to one dispatcher and streams its state to websocket clients."""

    def __init__(
        self,
        config: Optional[BuildingConfig] = None,
        initial_floors: Optional[List[int]] = None,
        tick_interval: Optional[float] = None,
    ) -> None:
        self.dispatcher = Dispatcher(config)
        for floor in initial_floors or []:
            self.dispatcher.add_car(floor)
        self.tick_interval = tick_interval
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self.tick_interval and self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        try:
            while True:
                await self.tick(1)
                await asyncio.sleep(self.tick_interval)
        except Exception:
            logger.exception("Auto-tick loop stopped at t=%s", self.dispatcher.current_time)
            raise

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        state = self.dispatcher.snapshot()
        state["metrics"] = asdict(self.dispatcher.metrics_snapshot())
        return state

    async def add_car(self, initial_floor: int, capacity: Optional[int]) -> dict:
        async with self._lock:
            car_id = self.dispatcher.add_car(initial_floor, capacity)
            return self._car_state(car_id)

    async def remove_car(self, car_id: int) -> dict:
        async with self._lock:
            self.dispatcher.remove_car(car_id)
            return self.current_state()

    async def status(self, car_id: int) -> dict:
        async with self._lock:
            return self._car_state(car_id)

    async def select_destination(self, car_id: int, floor: int) -> dict:
        async with self._lock:
            self.dispatcher.select_destination(car_id, floor)
            return self._car_state(car_id)

    async def pickup(self, origin_floor: int, destinations: List[int], direction: Direction) -> dict:
        async with self._lock:
            self.dispatcher.pickup(origin_floor, destinations, direction)
            return self.current_state()

    async def tick(self, count: int) -> dict:
        async with self._lock:
            self.dispatcher.run(count)
            payload = self.current_state()
        await self.broadcast(payload)
        return payload

    def _car_state(self, car_id: int) -> dict:
        snapshot = asdict(self.dispatcher.status(car_id))
        snapshot["direction"] = snapshot["direction"].value
        return snapshot


def create_app(manager: DispatcherManager) -> FastAPI:
    app = FastAPI(title="LiftControl Dispatcher API")
    app.state.manager = manager
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def on_startup() -> None:
        await manager.start()

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await manager.stop()

    @app.get("/state")
    async def get_state() -> dict:
        return manager.current_state()

    @app.post("/cars", status_code=201)
    async def add_car(request: CarRequest) -> dict:
        try:
            return await manager.add_car(request.initial_floor, request.capacity)
        except DispatchError as exc:
            raise http_error(exc)

    @app.get("/cars/{car_id}")
    async def get_car(car_id: int) -> dict:
        try:
            return await manager.status(car_id)
        except DispatchError as exc:
            raise http_error(exc)

    @app.delete("/cars/{car_id}")
    async def remove_car(car_id: int) -> dict:
        try:
            return await manager.remove_car(car_id)
        except DispatchError as exc:
            raise http_error(exc)

    @app.post("/cars/{car_id}/destinations")
    async def select_destination(car_id: int, request: DestinationRequest) -> dict:
        try:
            return await manager.select_destination(car_id, request.floor)
        except DispatchError as exc:
            raise http_error(exc)

    @app.post("/pickup")
    async def pickup(request: PickupRequest) -> dict:
        try:
            return await manager.pickup(request.origin_floor, request.destinations, request.direction)
        except DispatchError as exc:
            logger.info("Rejected pickup at floor %s: %s", request.origin_floor, exc)
            raise http_error(exc)

    @app.post("/tick")
    async def tick(request: Optional[TickRequest] = None) -> dict:
        return await manager.tick((request or TickRequest()).count)

    @app.websocket("/ws/stream")
    async def websocket_endpoint(websocket: WebSocket) -> None:
        await manager.register(websocket)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            await manager.unregister(websocket)

    return app


manager = DispatcherManager(initial_floors=[1])
app = create_app(manager)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
