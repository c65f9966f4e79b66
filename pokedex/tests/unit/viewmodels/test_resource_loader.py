from __future__ import annotations

import asyncio
from typing import List, Tuple

import pytest

from pokedex.adapters.api_errors import ApiTimeoutError
from pokedex.domain.errors import NetworkUnavailable, Unexpected
from pokedex.viewmodels import loader as loader_module
from pokedex.viewmodels.loader import Content, Failed, Loading, ResourceLoader


class _Source:
    """Scripted fetch functions; each call pops the next outcome."""

    def __init__(self, outcomes: List[object]) -> None:
        self.outcomes = list(outcomes)
        self.calls = 0
        self.gate: asyncio.Event | None = None

    async def load(self) -> Tuple[List[int], bool]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome  # type: ignore[return-value]

    async def append(self, data: List[int]) -> Tuple[List[int], bool]:
        more, has_more = await self.load()
        return list(data) + list(more), has_more


@pytest.mark.asyncio
async def test_initial_load_publishes_content() -> None:
    source = _Source([([1, 2], True)])
    loader = ResourceLoader(source.load, name="test")
    seen: List[object] = []
    loader.subscribe(seen.append)

    await loader.load_initial()

    assert seen == [Loading(), Content(data=[1, 2], is_appending=False, has_more=True)]
    assert loader.is_loading is False


@pytest.mark.asyncio
async def test_duplicate_initial_intents_issue_one_fetch() -> None:
    source = _Source([([1], False)])
    source.gate = asyncio.Event()
    loader = ResourceLoader(source.load)

    first = loader.load_initial()
    assert loader.load_initial() is None
    await asyncio.sleep(0)
    assert loader.load_initial() is None
    source.gate.set()
    await first

    assert source.calls == 1
    assert loader.state == Content(data=[1], has_more=False)


@pytest.mark.asyncio
async def test_failure_then_retry_recovers() -> None:
    source = _Source([ApiTimeoutError("slow"), ([7], False)])
    loader = ResourceLoader(source.load)
    seen: List[object] = []
    loader.subscribe(seen.append, replay=False)

    await loader.load_initial()
    assert loader.state == Failed(
        error=NetworkUnavailable(),
        message="Network error. Please check your connection.",
    )

    await loader.retry()

    assert loader.state == Content(data=[7])
    assert [type(s) for s in seen] == [Failed, Loading, Content]


@pytest.mark.asyncio
async def test_retry_outside_failed_is_noop() -> None:
    loader = ResourceLoader(_Source([([1], False)]).load)

    assert loader.retry() is None
    await loader.load_initial()
    assert loader.retry() is None


@pytest.mark.asyncio
async def test_mapping_error_is_unexpected() -> None:
    loader = ResourceLoader(_Source([ValueError("Invalid Pokemon URL: x")]).load)

    await loader.load_initial()

    assert isinstance(loader.state, Failed)
    assert isinstance(loader.state.error, Unexpected)
    assert loader.state.message == "An unexpected error occurred."


@pytest.mark.asyncio
async def test_append_requires_content_with_more() -> None:
    source = _Source([([1], False)])
    loader = ResourceLoader(source.load, append=source.append)

    assert loader.load_next() is None
    await loader.load_initial()

    assert loader.load_next() is None
    assert source.calls == 1


@pytest.mark.asyncio
async def test_single_resource_loader_never_appends() -> None:
    loader = ResourceLoader(_Source([([1], True)]).load)
    await loader.load_initial()

    assert loader.load_next() is None


@pytest.mark.asyncio
async def test_append_failure_keeps_content_and_sends_notice() -> None:
    source = _Source([([1, 2], True), ApiTimeoutError("slow")])
    loader = ResourceLoader(source.load, append=source.append)
    notices: List[str] = []
    loader.subscribe_notices(notices.append)
    await loader.load_initial()

    await loader.load_next()

    assert loader.state == Content(data=[1, 2], is_appending=False, has_more=True)
    assert notices == ["Network error. Please check your connection."]
    assert loader.load_next() is not None
    loader.close()


@pytest.mark.asyncio
async def test_reload_cancels_running_append() -> None:
    source = _Source([([1], True), ([2], True), ([10], False)])
    loader = ResourceLoader(source.load, append=source.append)
    await loader.load_initial()
    source.gate = asyncio.Event()

    append_task = loader.load_next()
    await asyncio.sleep(0)
    reload_task = loader.load_initial()
    source.outcomes.pop(0)
    source.gate.set()
    await reload_task
    await asyncio.sleep(0)

    assert append_task.cancelled()
    assert loader.state == Content(data=[10], has_more=False)


@pytest.mark.asyncio
async def test_close_cancels_without_transition() -> None:
    source = _Source([([1], False)])
    source.gate = asyncio.Event()
    loader = ResourceLoader(source.load)
    seen: List[object] = []
    loader.subscribe(seen.append)

    task = loader.load_initial()
    await asyncio.sleep(0)
    loader.close()
    source.gate.set()
    await asyncio.gather(task, return_exceptions=True)
    await loader.wait_idle()

    assert task.cancelled()
    assert seen == [Loading()]
    assert loader.state == Loading()
    assert loader.load_initial() is None


@pytest.mark.asyncio
async def test_listener_errors_do_not_stop_delivery() -> None:
    loader = ResourceLoader(_Source([([1], False)]).load)
    seen: List[object] = []

    def _boom(_state: object) -> None:
        raise RuntimeError("listener broke")

    loader.subscribe(_boom)
    loader.subscribe(seen.append)
    await loader.load_initial()

    assert seen[-1] == Content(data=[1])


@pytest.mark.asyncio
async def test_listener_paging_from_callback_keeps_order() -> None:
    source = _Source([([1], True), ([2], False)])
    loader = ResourceLoader(source.load, append=source.append)
    seen: List[object] = []

    def _page_when_ready(state: object) -> None:
        if isinstance(state, Content) and state.has_more and not state.is_appending:
            loader.load_next()

    loader.subscribe(_page_when_ready, replay=False)
    loader.subscribe(seen.append, replay=False)
    await loader.load_initial()
    await loader.wait_idle()

    assert seen == [
        Content(data=[1], is_appending=False, has_more=True),
        Content(data=[1], is_appending=True, has_more=True),
        Content(data=[1, 2], is_appending=False, has_more=False),
    ]
    assert source.calls == 2


@pytest.mark.asyncio
async def test_slot_is_released_when_failure_handling_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    def _broken_classifier(exc: BaseException) -> object:
        raise RuntimeError("classifier broke")

    monkeypatch.setattr(loader_module, "classify_error", _broken_classifier)
    source = _Source([ApiTimeoutError("slow"), ([1], False)])
    loader = ResourceLoader(source.load)

    task = loader.load_initial()
    results = await asyncio.gather(task, return_exceptions=True)

    assert isinstance(results[0], RuntimeError)
    assert loader.is_loading is False

    monkeypatch.undo()
    again = loader.load_initial()
    assert again is not None
    await again
    assert loader.state == Content(data=[1])


@pytest.mark.asyncio
async def test_unsubscribe_stops_updates() -> None:
    loader = ResourceLoader(_Source([([1], False)]).load)
    seen: List[object] = []
    unsubscribe = loader.subscribe(seen.append)

    unsubscribe()
    await loader.load_initial()

    assert seen == [Loading()]
