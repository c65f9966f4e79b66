"""Resource-loading state machine shared by the list and detail view models.

The engine knows nothing about Pokémon, pages or ids. It is parametrized by
two coroutine callables supplied by the concrete view model:

``load()``
    First fetch (first page, or the single keyed resource). Returns
    ``(data, has_more)``.
``append(data)``
    Optional next-page fetch. Receives the data accumulated so far and
    returns ``(merged_data, has_more)``.

State machine::

    Loading --ok--> Content --append ok--> Content
       |                 \\--append failed--> Content (is_appending cleared)
       \\--error--> Failed --retry--> Loading

Concurrency model:
    One loader belongs to one asyncio event loop. Every public intent
    (``load_initial``, ``load_next``, ``retry``) is a synchronous call that
    checks its in-flight slot, claims it, and only then schedules a task, so
    two near-simultaneous intents can never both issue a fetch. State is only
    mutated on the loop, after the awaited fetch resumes. ``close`` cancels
    outstanding tasks; a cancelled fetch never publishes a transition.
    Listeners may call intents from inside a callback. Transitions raised
    there are queued and delivered after the current one, so every listener
    sees states in publication order.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass, replace
from typing import (
    Any,
    Awaitable,
    Callable,
    Deque,
    Generic,
    List,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from pokedex.domain.errors import ErrorKind
from pokedex.usecases.error_mapping import classify_error, error_message

T = TypeVar("T")


@dataclass(frozen=True)
class Loading:
    """No data yet; a first fetch is pending or about to start."""


@dataclass(frozen=True)
class Content(Generic[T]):
    """Data loaded so far.

    Attributes:
        data: Accumulated items (list) or the single resource (detail).
        is_appending: A next-page fetch is in flight.
        has_more: The server reported more data after ``data``.
    """

    data: T
    is_appending: bool = False
    has_more: bool = False


@dataclass(frozen=True)
class Failed:
    """First fetch failed; ``message`` is ready for display next to a retry action."""

    error: ErrorKind
    message: str


LoaderState = Union[Loading, Content, Failed]

LoadFn = Callable[[], Awaitable[Tuple[T, bool]]]
AppendFn = Callable[[T], Awaitable[Tuple[T, bool]]]
StateListener = Callable[[LoaderState], None]
NoticeListener = Callable[[str], None]


class ResourceLoader(Generic[T]):
    """Finite-state machine with duplicate-request suppression and retry."""

    def __init__(
        self,
        load: LoadFn[T],
        *,
        append: Optional[AppendFn[T]] = None,
        name: str = "loader",
    ) -> None:
        """Create a loader in the ``Loading`` state.

        Args:
            load: Coroutine callable performing the first fetch.
            append: Coroutine callable performing a next-page fetch, or
                ``None`` for single-resource loaders.
            name: Identity used in log records.
        """
        self._load = load
        self._append = append
        self.name = name
        self._state: LoaderState = Loading()
        self._initial_task: Optional[asyncio.Task] = None
        self._append_task: Optional[asyncio.Task] = None
        self._listeners: List[StateListener] = []
        self._notice_listeners: List[NoticeListener] = []
        self._pending: Deque[LoaderState] = deque()
        self._delivering = False
        self._closed = False
        self._log = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    @property
    def state(self) -> LoaderState:
        return self._state

    @property
    def is_loading(self) -> bool:
        """``True`` while a first fetch (initial or retry) is in flight."""
        return self._initial_task is not None

    @property
    def is_appending(self) -> bool:
        return self._append_task is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener, *, replay: bool = True) -> Callable[[], None]:
        """Register ``listener`` for every state transition, in order.

        Args:
            listener: Called with each new ``LoaderState``.
            replay: Deliver the current state immediately.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)
        if replay:
            self._call(listener, self._state)
        return lambda: self._remove(self._listeners, listener)

    def subscribe_notices(self, listener: NoticeListener) -> Callable[[], None]:
        """Register ``listener`` for transient messages (failed page appends)."""
        self._notice_listeners.append(listener)
        return lambda: self._remove(self._notice_listeners, listener)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def load_initial(self) -> Optional[asyncio.Task]:
        """Full reload: drop any content and fetch from the start.

        Returns:
            The scheduled task, or ``None`` when a first fetch is already in
            flight or the loader is closed.
        """
        if self._closed or self._initial_task is not None:
            return None
        loop = asyncio.get_running_loop()
        self._cancel_append()
        task = loop.create_task(self._run_initial())
        self._initial_task = task
        self._publish(Loading())
        return task

    def load_next(self) -> Optional[asyncio.Task]:
        """Fetch the next page when content is shown and more data exists.

        Returns:
            The scheduled task, or ``None`` when the call was a no-op.
        """
        if self._closed or self._append is None:
            return None
        if self._initial_task is not None or self._append_task is not None:
            return None
        state = self._state
        if not isinstance(state, Content) or not state.has_more or state.is_appending:
            return None
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run_append(state.data))
        self._append_task = task
        self._publish(replace(state, is_appending=True))
        return task

    def retry(self) -> Optional[asyncio.Task]:
        """Re-issue the first fetch after a failure; no-op in any other state."""
        if not isinstance(self._state, Failed):
            return None
        return self.load_initial()

    def close(self) -> None:
        """Cancel in-flight fetches and ignore every later intent."""
        if self._closed:
            return
        self._closed = True
        for task in (self._initial_task, self._append_task):
            if task is not None and not task.done():
                task.cancel()
        self._initial_task = None
        self._append_task = None
        self._log.debug("%s: closed", self.name)

    async def wait_idle(self) -> None:
        """Wait until no fetch is in flight. Cancelled tasks do not raise here.

        Listeners may start new fetches from inside a transition, so the
        slots are re-checked after every wait.
        """
        while True:
            pending = [t for t in (self._initial_task, self._append_task) if t is not None]
            if not pending:
                return
            await asyncio.wait(pending)

    # ------------------------------------------------------------------
    # Task bodies
    # ------------------------------------------------------------------
    async def _run_initial(self) -> None:
        me = asyncio.current_task()
        try:
            try:
                data, has_more = await self._load()
            finally:
                self._release_initial(me)
        except Exception as exc:
            kind = classify_error(exc)
            self._log.info("%s: load failed (%s): %s", self.name, type(kind).__name__, exc)
            self._publish(Failed(error=kind, message=error_message(kind)))
            return
        self._publish(Content(data=data, is_appending=False, has_more=bool(has_more)))

    async def _run_append(self, base: T) -> None:
        me = asyncio.current_task()
        try:
            try:
                data, has_more = await self._append(base)
            finally:
                self._release_append(me)
        except Exception as exc:
            kind = classify_error(exc)
            self._log.info("%s: append failed (%s): %s", self.name, type(kind).__name__, exc)
            current = self._state
            if isinstance(current, Content):
                self._publish(replace(current, is_appending=False))
            self._notify(error_message(kind))
            return
        self._publish(Content(data=data, is_appending=False, has_more=bool(has_more)))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _release_initial(self, task: Optional[asyncio.Task]) -> None:
        if self._initial_task is task:
            self._initial_task = None

    def _release_append(self, task: Optional[asyncio.Task]) -> None:
        if self._append_task is task:
            self._append_task = None

    def _cancel_append(self) -> None:
        task = self._append_task
        self._append_task = None
        if task is not None and not task.done():
            task.cancel()

    def _publish(self, state: LoaderState) -> None:
        if self._closed or state == self._state:
            return
        self._log.debug("%s: %s -> %s", self.name, type(self._state).__name__, type(state).__name__)
        self._state = state
        self._pending.append(state)
        if self._delivering:
            # a listener published from inside a callback; the outer loop delivers it
            return
        self._delivering = True
        try:
            while self._pending:
                current = self._pending.popleft()
                for listener in list(self._listeners):
                    self._call(listener, current)
        finally:
            self._delivering = False

    def _notify(self, message: str) -> None:
        if self._closed:
            return
        for listener in list(self._notice_listeners):
            self._call(listener, message)

    def _call(self, listener: Callable[[Any], None], value: Any) -> None:
        try:
            listener(value)
        except Exception:
            self._log.exception("%s: listener %r failed", self.name, listener)

    @staticmethod
    def _remove(listeners: List[Any], listener: Any) -> None:
        try:
            listeners.remove(listener)
        except ValueError:
            pass


__all__ = [
    "Content",
    "Failed",
    "LoaderState",
    "Loading",
    "ResourceLoader",
]
