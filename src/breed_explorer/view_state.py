"""
Screen state as a tagged union: Idle | Loading | Loaded(payload) | Error(message).

`LoadableViewModel` owns one such state plus at most one in-flight load.
Subclasses only supply `_fetch()`.
"""
from __future__ import annotations
import asyncio, logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar, Union

from .errors import describe_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

@dataclass(frozen=True)
class Idle:
    pass

@dataclass(frozen=True)
class Loading:
    pass

@dataclass(frozen=True)
class Loaded(Generic[T]):
    payload: T

@dataclass(frozen=True)
class Error:
    message: str

ViewState = Union[Idle, Loading, Loaded[T], Error]

StateObserver = Callable[[ViewState], None]

class LoadHandle:
    """An in-flight load. Once cancelled, its result is never committed."""

    def __init__(self) -> None:
        self.cancelled = False
        self.task: Optional[asyncio.Task] = None

    def cancel(self) -> None:
        self.cancelled = True
        if self.task is not None and not self.task.done():
            self.task.cancel()

class LoadableViewModel(Generic[T]):

    def __init__(self) -> None:
        self._state: ViewState = Idle()
        self._observers: List[StateObserver] = []
        self._handle: Optional[LoadHandle] = None

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    @property
    def error_message(self) -> Optional[str]:
        return self._state.message if isinstance(self._state, Error) else None

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """Call `observer` on every state change; returns an unsubscribe callable."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)
        return unsubscribe

    def load(self) -> None:
        """
        Start a load unless one is already running.
        Must be called from inside the event loop that owns this view model.
        """
        if self.is_loading:
            return

        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        handle = LoadHandle()
        self._handle = handle
        self._set_state(Loading())
        handle.task = loop.create_task(self._run(handle))

    def refresh(self) -> None:
        self.load()

    def retry_loading(self) -> None:
        self.load()

    def cancel(self) -> None:
        """Drop the in-flight load (its result is discarded) and go back to Idle."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        if self.is_loading:
            self._set_state(Idle())

    async def wait(self) -> ViewState:
        """Wait for the current load, if any, and return the resulting state."""
        handle = self._handle
        if handle is not None and handle.task is not None:
            await asyncio.gather(handle.task, return_exceptions=True)
        return self._state

    async def _fetch(self) -> T:
        raise NotImplementedError

    async def _run(self, handle: LoadHandle) -> None:
        try:
            data = await self._fetch()
        except Exception as e:
            if handle.cancelled:
                return
            logger.info("%s load failed: %s", type(self).__name__, describe_error(e))
            self._set_state(Error(describe_error(e)))
            return

        if handle.cancelled:
            return
        self._set_state(Loaded(data))

    def _set_state(self, state: ViewState) -> None:
        self._state = state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception("state observer %r failed", observer)
