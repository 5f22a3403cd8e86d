"""WebSocket server that turns touchpad peaks into game actions."""

from __future__ import annotations

import asyncio
import enum
import json
import logging
import queue
import socket
import threading
from dataclasses import dataclass
from typing import Any

import websockets
from websockets.exceptions import ConnectionClosed

from starfly.settings import GameSettings

log = logging.getLogger(__name__)

PORT = 3030
DEFAULT_PEAK_MIN = 500.0
WELCOME_MESSAGE = "Connected to game server"
REPLY_OK = "OK"
REPLY_UNKNOWN = "Unknown action"
REPLY_PARSE_ERROR = "Parse error"

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class ServerEventKind(enum.Enum):
    RIGHT_PEAK = enum.auto()
    LEFT_PEAK = enum.auto()
    SHOOT_PEAK = enum.auto()
    CONNECTION_ESTABLISHED = enum.auto()
    CONNECTION_LOST = enum.auto()


@dataclass(frozen=True)
class ServerEvent:
    """Something a client did; peaks carry the pressure value."""

    kind: ServerEventKind
    value: int | None = None


class GameAction(enum.Enum):
    MOVE_RIGHT = enum.auto()
    MOVE_LEFT = enum.auto()
    SHOOT = enum.auto()


_ACTION_KINDS = {
    "right": ServerEventKind.RIGHT_PEAK,
    "left": ServerEventKind.LEFT_PEAK,
    "shoot": ServerEventKind.SHOOT_PEAK,
}

_PEAK_ACTIONS = {
    ServerEventKind.RIGHT_PEAK: GameAction.MOVE_RIGHT,
    ServerEventKind.LEFT_PEAK: GameAction.MOVE_LEFT,
    ServerEventKind.SHOOT_PEAK: GameAction.SHOOT,
}


def _wrap_i32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


def parse_game_message(message: str) -> tuple[str, int]:
    """Read ``{"action": str, "value": int}``; ValueError if it does not fit."""
    try:
        data: Any = json.loads(message)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    action = data.get("action") if isinstance(data, dict) else None
    if not isinstance(action, str):
        raise ValueError("Action field not found")
    value = data.get("value")
    if isinstance(value, bool) or not isinstance(value, int) or not _I64_MIN <= value <= _I64_MAX:
        raise ValueError("Value field not found or not a number")
    return action, _wrap_i32(value)


def respond_to_message(message: str) -> tuple[ServerEvent | None, str]:
    """The event a text message stands for, if any, and the reply to send."""
    try:
        action, value = parse_game_message(message)
    except ValueError as exc:
        log.info("Parse error: %s", exc)
        return None, REPLY_PARSE_ERROR
    kind = _ACTION_KINDS.get(action)
    if kind is None:
        return None, REPLY_UNKNOWN
    return ServerEvent(kind, value), REPLY_OK


def local_ip() -> str:
    """The address of the interface used for outgoing traffic."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        # A UDP connect only picks a route; nothing is sent.
        sock.connect(("192.0.2.1", 80))
        return sock.getsockname()[0]


class GameServer:
    """Accepts WebSocket clients and queues the events they send."""

    def __init__(
        self,
        events: queue.Queue[ServerEvent] | None = None,
        host: str | None = None,
        port: int = PORT,
    ) -> None:
        self.events: queue.Queue[ServerEvent] = events if events is not None else queue.Queue()
        self.host = host
        self.port = port
        self.bound_port: int | None = None
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event: asyncio.Event | None = None
        self._stop_requested = False

    def __enter__(self) -> GameServer:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        """Serve in a background thread; OSError if no local address is found."""
        if self._thread is not None:
            raise RuntimeError("server already started")
        if self.host is None:
            self.host = local_ip()
        log.info("WebSocket game server starting on %s:%d", self.host, self.port)
        self._stop_requested = False
        self._thread = threading.Thread(target=self._run, name="game-server", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        try:
            asyncio.run(self.serve())
        except Exception:
            log.exception("Server error")

    def _wake(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()

    def stop(self) -> None:
        """Ask the server to shut down and wait for its thread, if any."""
        self._stop_requested = True
        loop = self._loop
        if loop is not None and not loop.is_closed():
            try:
                loop.call_soon_threadsafe(self._wake)
            except RuntimeError:
                pass
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=5.0)

    async def serve(self) -> None:
        """Accept clients until stop() is called."""
        host = self.host if self.host is not None else local_ip()
        self._loop = asyncio.get_running_loop()
        self._stop_event = asyncio.Event()
        if self._stop_requested:
            return
        async with websockets.serve(self.handle_client, host, self.port) as server:
            self.bound_port = next(iter(server.sockets)).getsockname()[1]
            log.info("WebSocket server listening on %s:%d", host, self.bound_port)
            await self._stop_event.wait()

    async def handle_client(self, websocket: Any) -> None:
        """Talk to one client: greet it, then answer each text message."""
        self.events.put(ServerEvent(ServerEventKind.CONNECTION_ESTABLISHED))
        try:
            await websocket.send(WELCOME_MESSAGE)
            async for message in websocket:
                if not isinstance(message, str):
                    continue
                log.debug("Received: %s", message)
                event, reply = respond_to_message(message)
                if event is not None:
                    self.events.put(event)
                await websocket.send(reply)
        except ConnectionClosed as exc:
            log.info("WebSocket error: %s", exc)
        log.info("WebSocket connection closed")
        self.events.put(ServerEvent(ServerEventKind.CONNECTION_LOST))


class ServerEventHandler:
    """Drains queued server events and turns them into game actions."""

    def __init__(self, events: queue.Queue[ServerEvent]) -> None:
        self.events = events

    def check_events(self) -> list[ServerEvent]:
        """Every event waiting in the queue, oldest first."""
        drained: list[ServerEvent] = []
        while True:
            try:
                drained.append(self.events.get_nowait())
            except queue.Empty:
                return drained

    def process_events_for_game(self, settings: GameSettings | None = None) -> GameAction | None:
        """The first action whose peak reaches the threshold; the rest are dropped."""
        peak_min = settings.peak_min if settings is not None else DEFAULT_PEAK_MIN
        for event in self.check_events():
            action = _PEAK_ACTIONS.get(event.kind)
            if action is None:
                log.debug("Connection event: %s", event.kind.name)
                continue
            if event.value is not None and event.value >= peak_min:
                return action
            log.debug("%s %s below minimum %s, ignoring", event.kind.name, event.value, peak_min)
        return None