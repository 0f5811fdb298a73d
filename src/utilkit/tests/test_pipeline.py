"""Tests for the p() pipeline and accumulator.

Validates:
- Output order follows input order, not completion order
- Concurrency bound on in-flight stage calls
- Lazy stage recording, reduce/for_each
- Error propagation
- Accumulation mode with add()/clear()
"""

from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from utilkit import clear_settings_cache, create_controlled_promise, p
from utilkit.runtime.concurrency import FilterStage, MapStage


async def triple(i: int, _: int) -> int:
    return i * 3


async def is_even(i: int, _: int) -> bool:
    return i % 2 == 0


# ─────────────────────────────────────────────────────────────────────────────
# Collection Form
# ─────────────────────────────────────────────────────────────────────────────


class TestCollectionPipeline:
    """Tests for map/filter/reduce/for_each over a source."""

    @pytest.mark.asyncio
    async def test_map_then_filter(self) -> None:
        """Values tripled then filtered to evens, order preserved."""
        assert await p([1, 2, 3, 4, 5]).map(triple).filter(is_even) == [6, 12]

    @pytest.mark.asyncio
    async def test_output_follows_input_order(self) -> None:
        """A slow first item still comes first."""
        delays = {0: 0.05, 1: 0.0, 2: 0.02}

        async def slow(v: str, i: int) -> str:
            await asyncio.sleep(delays[i])
            return v.upper()

        assert await p(["a", "b", "c"]).map(slow) == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_concurrency_bound(self) -> None:
        """At most two stage calls are in flight with concurrency=2."""
        in_flight = peak = 0

        async def work(v: int, _: int) -> int:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.02)
            in_flight -= 1
            return v

        assert await p(range(5), concurrency=2).map(work) == [0, 1, 2, 3, 4]
        assert peak == 2

    @pytest.mark.asyncio
    async def test_filter_shares_concurrency_bound(self) -> None:
        """Predicates are limited the same way map stages are."""
        in_flight = peak = 0

        async def is_odd(v: int, _: int) -> bool:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.02)
            in_flight -= 1
            return v % 2 == 1

        assert await p(range(6), concurrency=2).filter(is_odd) == [1, 3, 5]
        assert peak == 2

    @pytest.mark.asyncio
    async def test_mixed_chain_respects_bound(self) -> None:
        in_flight = peak = 0

        async def tracked(result: object) -> object:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return result

        async def double(v: int, _: int) -> object:
            return await tracked(v * 2)

        async def over_four(v: int, _: int) -> object:
            return await tracked(v > 4)

        result = await p(range(6), concurrency=3).map(double).filter(over_four).map(double)
        assert result == [12, 16, 20]
        assert peak <= 3

    @pytest.mark.asyncio
    async def test_unbounded_runs_everything_at_once(self) -> None:
        in_flight = peak = 0

        async def work(v: int, _: int) -> int:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return v

        await p(range(5)).map(work)
        assert peak == 5

    @pytest.mark.asyncio
    async def test_stages_are_lazy(self) -> None:
        calls: list[int] = []

        async def record(v: int, _: int) -> int:
            calls.append(v)
            return v

        pipeline = p([1, 2]).map(record)
        await asyncio.sleep(0.01)
        assert calls == []
        await pipeline
        assert calls == [1, 2]

    @pytest.mark.asyncio
    async def test_index_is_source_position(self) -> None:
        """Indices passed after a filter still refer to the source."""
        result = await p([10, 20, 30]).filter(lambda v, i: i != 1).map(lambda v, i: (v, i))
        assert result == [(10, 0), (30, 2)]

    @pytest.mark.asyncio
    async def test_sync_callables(self) -> None:
        assert await p([1, 2, 3]).map(lambda v, _: v + 1).filter(lambda v, _: v > 2) == [3, 4]

    @pytest.mark.asyncio
    async def test_stage_records_are_tagged(self) -> None:
        pipeline = p([1]).map(triple).filter(is_even)
        assert [type(s) for s in pipeline.stages] == [MapStage, FilterStage]

    @pytest.mark.asyncio
    async def test_map_returns_new_instance(self) -> None:
        base = p([1, 2])
        mapped = base.map(triple)
        assert mapped is not base
        assert await base == [1, 2]
        assert await mapped == [3, 6]

    @pytest.mark.asyncio
    async def test_reduce(self) -> None:
        total = await p([1, 2, 3]).map(lambda v, _: v * 2).reduce(lambda acc, v: acc + v, 0)
        assert total == 12

    @pytest.mark.asyncio
    async def test_reduce_empty_returns_initial(self) -> None:
        assert await p([]).reduce(lambda acc, v: acc + v, 7) == 7

    @pytest.mark.asyncio
    async def test_for_each(self) -> None:
        seen: list[tuple[int, int]] = []

        async def visit(v: int, i: int) -> None:
            seen.append((v, i))

        result = await p([4, 5, 6]).filter(lambda v, _: v != 5).for_each(visit)
        assert result is None
        assert sorted(seen) == [(4, 0), (6, 2)]

    @pytest.mark.asyncio
    async def test_awaitable_source(self) -> None:
        async def load() -> list[int]:
            await asyncio.sleep(0)
            return [1, 2, 3]

        assert await p(load()).map(triple) == [3, 6, 9]

    @pytest.mark.asyncio
    async def test_awaitable_items(self) -> None:
        async def value(v: int) -> int:
            await asyncio.sleep(0.01 * (3 - v))
            return v

        assert await p([value(1), value(2)]).map(triple) == [3, 6]

    @pytest.mark.asyncio
    async def test_awaiting_twice(self) -> None:
        """Coroutine items are started once and reused."""
        calls = 0

        async def value() -> int:
            nonlocal calls
            calls += 1
            return calls

        pipeline = p([value()])
        assert await pipeline == [1]
        assert await pipeline == [1]
        assert calls == 1

    @pytest.mark.asyncio
    async def test_empty_source(self) -> None:
        assert await p([]).map(triple) == []


# ─────────────────────────────────────────────────────────────────────────────
# Errors & Options
# ─────────────────────────────────────────────────────────────────────────────


class TestPipelineErrors:
    """Tests for failure propagation and option validation."""

    @pytest.mark.asyncio
    async def test_stage_error_propagates_unwrapped(self) -> None:
        async def boom(v: int, _: int) -> int:
            if v == 2:
                raise ValueError("bad item")
            return v

        with pytest.raises(ValueError, match="bad item"):
            await p([1, 2, 3]).map(boom)

    @pytest.mark.asyncio
    async def test_first_failure_wins(self) -> None:
        async def fail(v: int, i: int) -> int:
            if i == 0:
                await asyncio.sleep(0.03)
                raise ValueError("slow")
            raise KeyError("fast")

        with pytest.raises(KeyError):
            await p([0, 1]).map(fail)
        await asyncio.sleep(0.05)

    @pytest.mark.asyncio
    async def test_predicate_error_propagates(self) -> None:
        def check(v: int, _: int) -> bool:
            raise RuntimeError("predicate failed")

        with pytest.raises(RuntimeError, match="predicate failed"):
            await p([1]).filter(check)

    def test_invalid_concurrency(self) -> None:
        with pytest.raises(ValidationError):
            p([1], concurrency=0)

    def test_default_limit_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UTILKIT_CONCURRENCY_DEFAULT_LIMIT", "3")
        clear_settings_cache()
        try:
            assert p([1]).options.concurrency == 3
            assert p([1], concurrency=5).options.concurrency == 5
        finally:
            monkeypatch.delenv("UTILKIT_CONCURRENCY_DEFAULT_LIMIT")
            clear_settings_cache()
        assert p([1]).options.concurrency is None


# ─────────────────────────────────────────────────────────────────────────────
# Accumulation Form
# ─────────────────────────────────────────────────────────────────────────────


class TestAccumulator:
    """Tests for p() with add()/clear()."""

    @pytest.mark.asyncio
    async def test_results_in_submission_order(self) -> None:
        async def value(v: str, delay: float) -> str:
            await asyncio.sleep(delay)
            return v

        acc = p()
        acc.add(value("a", 0.03), value("b", 0.0))
        acc.add(value("c", 0.01))
        assert await acc == ["a", "b", "c"]

        acc.clear()
        assert await acc == []

    @pytest.mark.asyncio
    async def test_plain_values_and_futures(self) -> None:
        promise = create_controlled_promise()
        acc = p()
        acc.add(1, promise)
        asyncio.get_running_loop().call_later(0.01, promise.resolve, 2)
        assert await acc == [1, 2]

    @pytest.mark.asyncio
    async def test_collected_items_are_discarded_after_await(self) -> None:
        acc = p()
        acc.add(asyncio.sleep(0, "x"))
        assert await acc == ["x"]
        assert await acc == []

    @pytest.mark.asyncio
    async def test_clear_drops_without_awaiting(self) -> None:
        promise = create_controlled_promise()
        acc = p()
        acc.add(promise)
        acc.clear()
        assert await acc == []
        assert not promise.done()

    @pytest.mark.asyncio
    async def test_items_added_while_awaiting_are_kept(self) -> None:
        first = create_controlled_promise()
        acc = p()
        acc.add(first)

        running = asyncio.ensure_future(_collect(acc))
        await asyncio.sleep(0)
        acc.add("late")
        first.resolve("early")

        assert await running == ["early"]
        assert await acc == ["late"]

    @pytest.mark.asyncio
    async def test_accumulator_honours_concurrency(self) -> None:
        in_flight = peak = 0

        async def work(v: int) -> int:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return v

        acc = p(concurrency=1)
        acc.add(*(work(i) for i in range(3)))
        assert await acc == [0, 1, 2]
        assert peak == 1


async def _collect(acc: object) -> list[object]:
    return await acc  # type: ignore[misc]
