"""Gateway event payload registry and async pub/sub bus."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Coroutine
from uuid import uuid4

from discord_adapter.utils.logging import get_logger

log = get_logger(__name__)

DISPATCH_OPCODE = 0


# ---------------------------------------------------------------------------
# Event payload registry
# ---------------------------------------------------------------------------

_GATEWAY_EVENTS: dict[str, type[Any]] = {}


def register_gateway_event(name: str, payload_type: type[Any]) -> None:
    """Declare the payload type carried by dispatch event ``name``.

    ``payload_type`` must provide a ``from_dict`` classmethod.
    """
    existing = _GATEWAY_EVENTS.get(name)
    if existing is not None and existing is not payload_type:
        raise ValueError(f"gateway event {name} already bound to {existing.__name__}")
    _GATEWAY_EVENTS[name] = payload_type


def gateway_event_type(name: str) -> type[Any] | None:
    return _GATEWAY_EVENTS.get(name)


def gateway_event_names() -> list[str]:
    return sorted(_GATEWAY_EVENTS)


@dataclass
class GatewayEvent:
    name: str
    payload: Any = None
    sequence: int | None = None
    id: str = field(default_factory=lambda: uuid4().hex[:12])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def parse_dispatch(frame: dict[str, Any]) -> GatewayEvent:
    """Turn a raw ``{op, t, s, d}`` dispatch frame into a typed GatewayEvent.

    Unregistered event names keep the raw ``d`` dict as payload.
    """
    if frame.get("op") != DISPATCH_OPCODE:
        raise ValueError(f"not a dispatch frame (op={frame.get('op')!r})")
    name = frame.get("t")
    if not name:
        raise ValueError("dispatch frame has no event name")

    data = frame.get("d")
    payload_type = _GATEWAY_EVENTS.get(name)
    payload = payload_type.from_dict(data) if payload_type and data is not None else data
    return GatewayEvent(name=name, payload=payload, sequence=frame.get("s"))


# ---------------------------------------------------------------------------
# Bus
# ---------------------------------------------------------------------------

Handler = Callable[[GatewayEvent], Coroutine[Any, Any, None]]


class EventBus:
    def __init__(self, max_queue_size: int = 256) -> None:
        self._subscribers: dict[str, list[tuple[Handler, asyncio.Queue[GatewayEvent]]]] = {}
        self._max_queue_size = max_queue_size
        self._running = False
        self._tasks: list[asyncio.Task[None]] = []

    def subscribe(self, name: str, handler: Handler) -> None:
        queue: asyncio.Queue[GatewayEvent] = asyncio.Queue(maxsize=self._max_queue_size)
        self._subscribers.setdefault(name, []).append((handler, queue))
        if self._running:
            self._start_consumer(name, handler, queue)

    async def publish(self, event: GatewayEvent) -> None:
        handlers = self._subscribers.get(event.name, [])
        for handler, queue in handlers:
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                log.warning(
                    "event_queue_full",
                    event_name=event.name,
                    handler=handler.__qualname__,
                )

    async def start(self) -> None:
        self._running = True
        for name, handler_list in self._subscribers.items():
            for handler, queue in handler_list:
                self._start_consumer(name, handler, queue)

    def _start_consumer(
        self, name: str, handler: Handler, queue: asyncio.Queue[GatewayEvent]
    ) -> None:
        task = asyncio.create_task(
            self._consumer(handler, queue, name),
            name=f"bus-{name}-{handler.__qualname__}",
        )
        self._tasks.append(task)

    async def _consumer(
        self, handler: Handler, queue: asyncio.Queue[GatewayEvent], name: str
    ) -> None:
        while self._running:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=1.0)
            except asyncio.TimeoutError:
                continue
            try:
                await handler(event)
            except Exception:
                log.exception("handler_error", event_name=name)

    async def stop(self) -> None:
        self._running = False
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
