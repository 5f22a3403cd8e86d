import asyncio
import json
import queue
from unittest import mock

import pytest
import websockets

from starfly.server import (
    PORT,
    GameAction,
    GameServer,
    ServerEvent,
    ServerEventHandler,
    ServerEventKind,
    local_ip,
    parse_game_message,
    respond_to_message,
)
from starfly.settings import GameSettings


def test_parse_valid_message():
    assert parse_game_message('{"action": "right", "value": 700}') == ("right", 700)


def test_parse_negative_value():
    assert parse_game_message('{"action": "left", "value": -3}') == ("left", -3)


def test_parse_wraps_to_32_bits():
    action, value = parse_game_message(json.dumps({"action": "shoot", "value": 2**32 + 5}))
    assert (action, value) == ("shoot", 5)


@pytest.mark.parametrize(
    "message",
    [
        "not json",
        "[1, 2]",
        '{"value": 5}',
        '{"action": 3, "value": 5}',
        '{"action": "right"}',
        '{"action": "right", "value": 1.5}',
        '{"action": "right", "value": "5"}',
        '{"action": "right", "value": true}',
        json.dumps({"action": "right", "value": 2**64}),
    ],
)
def test_parse_rejects_bad_messages(message):
    with pytest.raises(ValueError):
        parse_game_message(message)


@pytest.mark.parametrize(
    "action, kind",
    [
        ("right", ServerEventKind.RIGHT_PEAK),
        ("left", ServerEventKind.LEFT_PEAK),
        ("shoot", ServerEventKind.SHOOT_PEAK),
    ],
)
def test_respond_known_action(action, kind):
    message = json.dumps({"action": action, "value": 42})
    assert respond_to_message(message) == (ServerEvent(kind, 42), "OK")


def test_respond_unknown_action():
    assert respond_to_message('{"action": "jump", "value": 1}') == (None, "Unknown action")


def test_respond_parse_error():
    assert respond_to_message("{") == (None, "Parse error")


def test_local_ip_uses_socket_name():
    fake = mock.MagicMock()
    fake.__enter__.return_value = fake
    fake.getsockname.return_value = ("192.168.7.9", 5555)
    with mock.patch("starfly.server.socket.socket", return_value=fake):
        assert local_ip() == "192.168.7.9"
    assert fake.connect.called


def test_handler_drains_queue_in_order():
    events = queue.Queue()
    first = ServerEvent(ServerEventKind.CONNECTION_ESTABLISHED)
    second = ServerEvent(ServerEventKind.RIGHT_PEAK, 10)
    events.put(first)
    events.put(second)
    handler = ServerEventHandler(events)
    assert handler.check_events() == [first, second]
    assert handler.check_events() == []


@pytest.mark.parametrize(
    "kind, action",
    [
        (ServerEventKind.RIGHT_PEAK, GameAction.MOVE_RIGHT),
        (ServerEventKind.LEFT_PEAK, GameAction.MOVE_LEFT),
        (ServerEventKind.SHOOT_PEAK, GameAction.SHOOT),
    ],
)
def test_peak_at_threshold_becomes_action(kind, action):
    events = queue.Queue()
    events.put(ServerEvent(kind, 500))
    assert ServerEventHandler(events).process_events_for_game(GameSettings()) is action


def test_weak_peaks_are_ignored_and_first_strong_wins():
    events = queue.Queue()
    events.put(ServerEvent(ServerEventKind.CONNECTION_ESTABLISHED))
    events.put(ServerEvent(ServerEventKind.RIGHT_PEAK, 499))
    events.put(ServerEvent(ServerEventKind.SHOOT_PEAK, 800))
    events.put(ServerEvent(ServerEventKind.LEFT_PEAK, 900))
    handler = ServerEventHandler(events)
    assert handler.process_events_for_game(GameSettings()) is GameAction.SHOOT
    assert handler.check_events() == []


def test_threshold_follows_settings():
    settings = GameSettings(peak_min=750.0)
    events = queue.Queue()
    events.put(ServerEvent(ServerEventKind.LEFT_PEAK, 700))
    handler = ServerEventHandler(events)
    assert handler.process_events_for_game(settings) is None
    events.put(ServerEvent(ServerEventKind.LEFT_PEAK, 750))
    assert handler.process_events_for_game(settings) is GameAction.MOVE_LEFT


def test_default_threshold_without_settings():
    events = queue.Queue()
    events.put(ServerEvent(ServerEventKind.RIGHT_PEAK, 499))
    handler = ServerEventHandler(events)
    assert handler.process_events_for_game() is None
    events.put(ServerEvent(ServerEventKind.RIGHT_PEAK, 500))
    assert handler.process_events_for_game() is GameAction.MOVE_RIGHT


def test_server_defaults():
    server = GameServer()
    assert server.port == PORT
    assert server.events.empty()


class _FakeSocket:
    def __init__(self, incoming):
        self.incoming = list(incoming)
        self.sent = []

    async def send(self, message):
        self.sent.append(message)

    def __aiter__(self):
        return self._messages()

    async def _messages(self):
        for message in self.incoming:
            yield message


@pytest.mark.asyncio
async def test_handle_client_replies_and_queues_events():
    server = GameServer()
    fake = _FakeSocket(
        [
            '{"action": "right", "value": 600}',
            b"\x00\x01",
            '{"action": "fly", "value": 1}',
            "garbage",
        ]
    )

    await server.handle_client(fake)

    assert fake.sent == ["Connected to game server", "OK", "Unknown action", "Parse error"]
    handler = ServerEventHandler(server.events)
    assert handler.check_events() == [
        ServerEvent(ServerEventKind.CONNECTION_ESTABLISHED),
        ServerEvent(ServerEventKind.RIGHT_PEAK, 600),
        ServerEvent(ServerEventKind.CONNECTION_LOST),
    ]


@pytest.mark.asyncio
async def test_serve_end_to_end():
    server = GameServer(host="127.0.0.1", port=0)
    task = asyncio.create_task(server.serve())

    async def _bound():
        while server.bound_port is None:
            await asyncio.sleep(0.01)

    await asyncio.wait_for(_bound(), timeout=5.0)
    async with websockets.connect(f"ws://127.0.0.1:{server.bound_port}") as client:
        assert await client.recv() == "Connected to game server"
        await client.send(json.dumps({"action": "left", "value": 650}))
        assert await client.recv() == "OK"

    server.stop()
    await asyncio.wait_for(task, timeout=5.0)

    first = server.events.get(timeout=1.0)
    second = server.events.get(timeout=1.0)
    assert first == ServerEvent(ServerEventKind.CONNECTION_ESTABLISHED)
    assert second == ServerEvent(ServerEventKind.LEFT_PEAK, 650)