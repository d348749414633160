"""Unit tests for shutdown hooks."""

import asyncio
import signal

import pytest

from envtracker.core.lifecycle import ShutdownHooks, run_with_shutdown


@pytest.mark.asyncio
async def test_hooks_run_newest_first_once() -> None:
    hooks = ShutdownHooks()
    order: list[str] = []

    async def first() -> None:
        order.append("first")

    async def second() -> None:
        order.append("second")

    hooks.register(first)
    hooks.register(second)
    await hooks.run()
    await hooks.run()

    assert order == ["second", "first"]


@pytest.mark.asyncio
async def test_removed_hook_is_skipped() -> None:
    hooks = ShutdownHooks()
    called: list[str] = []

    async def callback() -> None:
        called.append("x")

    remove = hooks.register(callback)
    remove()
    await hooks.run()

    assert called == []


@pytest.mark.asyncio
async def test_failing_hook_does_not_stop_others() -> None:
    hooks = ShutdownHooks()
    called: list[str] = []

    async def broken() -> None:
        raise RuntimeError("boom")

    async def healthy() -> None:
        called.append("healthy")

    hooks.register(healthy)
    hooks.register(broken)
    await hooks.run()

    assert called == ["healthy"]


@pytest.mark.asyncio
async def test_run_with_shutdown_returns_result_and_runs_hooks() -> None:
    hooks = ShutdownHooks()
    closed: list[bool] = []

    async def close() -> None:
        closed.append(True)

    async def main() -> str:
        return "done"

    hooks.register(close)
    assert await run_with_shutdown(main(), hooks) == "done"
    assert closed == [True]


@pytest.mark.asyncio
async def test_run_with_shutdown_runs_hooks_on_error() -> None:
    hooks = ShutdownHooks()
    closed: list[bool] = []

    async def close() -> None:
        closed.append(True)

    async def main() -> None:
        raise ValueError("failed")

    hooks.register(close)
    with pytest.raises(ValueError):
        await run_with_shutdown(main(), hooks)
    assert closed == [True]


@pytest.mark.asyncio
async def test_signal_cancels_task() -> None:
    hooks = ShutdownHooks()

    async def sleeper() -> None:
        await asyncio.sleep(10)

    task = asyncio.ensure_future(sleeper())
    hooks._on_signal(signal.SIGTERM, task)

    with pytest.raises(asyncio.CancelledError):
        await task
    assert hooks.received_signal is signal.SIGTERM
