from __future__ import annotations

import asyncio
import enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from app.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ResourceState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class LazyResource(Generic[T]):
    """Initialize a handle at most once, sharing the in-flight attempt.

    Callers arriving while initialization is pending await the same task.
    A failed attempt is forgotten so the next caller starts a fresh one.
    """

    def __init__(
        self,
        name: str,
        factory: Callable[[], Awaitable[T]],
        closer: Optional[Callable[[T], Awaitable[None]]] = None,
    ):
        self.name = name
        self._factory = factory
        self._closer = closer
        self._value: Optional[T] = None
        self._pending: Optional[asyncio.Task] = None
        self._failed = False

    @property
    def state(self) -> ResourceState:
        if self._value is not None:
            return ResourceState.READY
        if self._pending is not None:
            return ResourceState.INITIALIZING
        if self._failed:
            return ResourceState.FAILED
        return ResourceState.UNINITIALIZED

    async def get(self) -> T:
        if self._value is not None:
            return self._value

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._initialize())
            self._pending.add_done_callback(self._on_done)

        # A cancelled caller must not cancel the attempt other callers share
        return await asyncio.shield(self._pending)

    def _on_done(self, task: asyncio.Task) -> None:
        if self._pending is task:
            self._pending = None
        if not task.cancelled() and task.exception() is not None:
            self._failed = True

    async def _initialize(self) -> T:
        logger.info("Initializing %s store", self.name)
        try:
            value = await self._factory()
        except Exception:
            logger.exception("Initialization of %s store failed", self.name)
            raise
        self._value = value
        self._failed = False
        return value

    async def dispose(self) -> None:
        value, self._value = self._value, None
        pending, self._pending = self._pending, None
        if pending is not None and not pending.done():
            pending.cancel()
        if value is not None and self._closer is not None:
            await self._closer(value)
