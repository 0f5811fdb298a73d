"""Tests for create_promise_lock.

Straggler policy: work submitted through run() while wait() is already
pending is waited for as well.
"""

from __future__ import annotations

import asyncio

import pytest

from utilkit import create_promise_lock


async def _after(delay: float, value: object = None) -> object:
    await asyncio.sleep(delay)
    return value


async def _fail_after(delay: float) -> None:
    await asyncio.sleep(delay)
    raise ValueError("task failed")


class TestPromiseLock:
    """Tests for run/wait/is_waiting/clear."""

    @pytest.mark.asyncio
    async def test_wait_covers_slowest_task(self) -> None:
        lock = create_promise_lock()
        loop = asyncio.get_running_loop()
        start = loop.time()
        a = lock.run(lambda: _after(0.2, "a"))
        b = lock.run(lambda: _after(0.1, "b"))

        await lock.wait()

        assert a.done() and b.done()
        assert loop.time() - start >= 0.19
        assert (a.result(), b.result()) == ("a", "b")

    @pytest.mark.asyncio
    async def test_is_waiting_lifecycle(self) -> None:
        lock = create_promise_lock()
        assert not lock.is_waiting()
        future = lock.run(lambda: _after(0.01))
        assert lock.is_waiting()
        await future
        assert not lock.is_waiting()

    @pytest.mark.asyncio
    async def test_run_starts_immediately(self) -> None:
        started: list[str] = []

        async def work() -> None:
            started.append("work")

        lock = create_promise_lock()
        lock.run(work)
        await asyncio.sleep(0)
        assert started == ["work"]
        await lock.wait()

    @pytest.mark.asyncio
    async def test_run_returns_real_outcome(self) -> None:
        lock = create_promise_lock()
        assert await lock.run(lambda: _after(0, 42)) == 42
        with pytest.raises(ValueError, match="task failed"):
            await lock.run(lambda: _fail_after(0))
        assert not lock.is_waiting()

    @pytest.mark.asyncio
    async def test_wait_waits_for_stragglers(self) -> None:
        lock = create_promise_lock()
        lock.run(lambda: _after(0.05))
        waiting = asyncio.ensure_future(lock.wait())

        await asyncio.sleep(0.02)
        late = lock.run(lambda: _after(0.08, "late"))

        await asyncio.sleep(0.05)
        assert not waiting.done()

        await waiting
        assert late.done()
        assert not lock.is_waiting()

    @pytest.mark.asyncio
    async def test_failures_do_not_poison_wait(self) -> None:
        lock = create_promise_lock()
        failing = lock.run(lambda: _fail_after(0.01))
        ok = lock.run(lambda: _after(0.02, "ok"))

        await lock.wait()

        assert isinstance(failing.exception(), ValueError)
        assert ok.result() == "ok"
        assert not lock.is_waiting()

    @pytest.mark.asyncio
    async def test_clear_untracks_without_cancelling(self) -> None:
        lock = create_promise_lock()
        future = lock.run(lambda: _after(0.02, "done"))
        lock.clear()

        assert not lock.is_waiting()
        await lock.wait()
        assert not future.done()
        assert await future == "done"
        assert not lock.is_waiting()

    @pytest.mark.asyncio
    async def test_wait_on_empty_lock(self) -> None:
        await create_promise_lock().wait()

    @pytest.mark.asyncio
    async def test_instances_are_independent(self) -> None:
        one, two = create_promise_lock(), create_promise_lock()
        future = one.run(lambda: _after(0.01))
        assert one.is_waiting()
        assert not two.is_waiting()
        await future
