"""
Process lifecycle hooks

Shutdown callbacks run when a command finishes or when SIGINT/SIGTERM arrives,
so that pooled connections never keep the interpreter alive.
"""

import asyncio
import logging
import signal
from typing import Awaitable, Callable, Coroutine, TypeVar

logger = logging.getLogger(__name__)

ShutdownCallback = Callable[[], Awaitable[None]]
T = TypeVar("T")

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownHooks:
    """Ordered async shutdown callbacks, executed at most once each"""

    def __init__(self) -> None:
        self._callbacks: list[ShutdownCallback] = []
        self.received_signal: signal.Signals | None = None

    def register(self, callback: ShutdownCallback) -> Callable[[], None]:
        """Add a callback; returns the function for removing it"""
        logger.debug("adding shutdown callback: %s", getattr(callback, "__qualname__", callback))
        self._callbacks.append(callback)

        def removal_func() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return removal_func

    async def run(self) -> None:
        """Run callbacks newest first; failures are logged, never raised"""
        callbacks, self._callbacks = list(reversed(self._callbacks)), []
        for callback in callbacks:
            try:
                await callback()
            except Exception as e:
                logger.warning("shutdown callback %s failed: %s", callback, e)

    def _on_signal(self, signum: signal.Signals, task: asyncio.Task) -> None:
        logger.warning("received %s, shutting down", signum.name)
        self.received_signal = signum
        task.cancel()

    def install(self, loop: asyncio.AbstractEventLoop, task: asyncio.Task) -> bool:
        """Cancel task on SIGINT/SIGTERM; False where the loop cannot handle signals"""
        try:
            for signum in HANDLED_SIGNALS:
                loop.add_signal_handler(signum, self._on_signal, signum, task)
        except (NotImplementedError, RuntimeError, ValueError):
            logger.debug("signal handlers not supported on this event loop")
            return False
        return True

    def uninstall(self, loop: asyncio.AbstractEventLoop) -> None:
        for signum in HANDLED_SIGNALS:
            try:
                loop.remove_signal_handler(signum)
            except (NotImplementedError, RuntimeError, ValueError):
                pass


async def run_with_shutdown(main: Coroutine[None, None, T], hooks: ShutdownHooks) -> T:
    """Await main with signal handlers installed, then run the shutdown hooks

    A termination signal cancels main; its finally blocks run, then the hooks.
    """
    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    installed = task is not None and hooks.install(loop, task)
    try:
        return await main
    finally:
        await hooks.run()
        if installed:
            hooks.uninstall(loop)
