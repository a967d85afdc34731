"""Signals, timers and the base class for sending and receiving messages."""

from __future__ import annotations

import abc
import asyncio
from typing import Any, Callable, Optional

from .message import Message

__all__ = ["Signal", "Timer", "AbstractServer"]


class Signal:
    """A list of callables invoked, in connection order, on each emit."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        """Call ``slot`` whenever the signal is emitted."""
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove one connection of ``slot``; ValueError if it is not connected."""
        try:
            self._slots.remove(slot)
        except ValueError:
            raise ValueError("slot is not connected") from None

    def emit(self, *args: Any) -> None:
        """Call every connected slot with ``args``."""
        for slot in list(self._slots):
            slot(*args)

    def __len__(self) -> int:
        return len(self._slots)


class Timer:
    """A restartable timer on an asyncio event loop; intervals are in seconds."""

    def __init__(
        self,
        callback: Callable[[], Any],
        interval: float = 0.0,
        *,
        single_shot: bool = False,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._callback = callback
        self._interval = 0.0
        self.interval = interval
        self.single_shot = single_shot
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def interval(self) -> float:
        """Delay between start and timeout, in seconds."""
        return self._interval

    @interval.setter
    def interval(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"timer interval must not be negative: {value}")
        self._interval = float(value)

    def start(self, interval: Optional[float] = None) -> None:
        """Start or restart the timer, optionally with a new interval."""
        if interval is not None:
            self.interval = interval
        self.stop()
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        self._schedule(loop)

    def stop(self) -> None:
        """Stop the timer if it is running."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def is_active(self) -> bool:
        """Return True while a timeout is pending."""
        return self._handle is not None

    def _schedule(self, loop: asyncio.AbstractEventLoop) -> None:
        self._handle = loop.call_later(self._interval, self._fire, loop)

    def _fire(self, loop: asyncio.AbstractEventLoop) -> None:
        self._handle = None
        if not self.single_shot:
            self._schedule(loop)
        self._callback()


class AbstractServer(abc.ABC):
    """Base class for anything that can send and receive DNS messages.

    ``message_received`` is emitted with each incoming Message and
    ``error`` with a short description of any failure.
    """

    def __init__(self) -> None:
        self.message_received = Signal()
        self.error = Signal()

    @abc.abstractmethod
    def send_message(self, message: Message) -> None:
        """Send ``message`` to the address and port it names."""

    @abc.abstractmethod
    def send_message_to_all(self, message: Message) -> None:
        """Send ``message`` to the mDNS multicast groups on every interface."""