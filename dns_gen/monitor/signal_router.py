"""
Responsibility: turn process signals into actions
- SIGHUP: react, as if something had changed
- SIGINT / SIGTERM: set the shutdown event every task is waiting on
- SIGQUIT and anything else: log only
"""

import asyncio
import signal

from ..context import Context, next_event
from ..logger import logger

TERMINATE_SIGNALS = (signal.SIGINT, signal.SIGTERM)
WATCHED_SIGNALS = (signal.SIGHUP, signal.SIGINT, signal.SIGQUIT, signal.SIGTERM)


class SignalRouter:
    def __init__(self, context: Context) -> None:
        self._context = context
        self._signals: asyncio.Queue[signal.Signals] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None

    def deliver(self, sig: signal.Signals):
        if sig in TERMINATE_SIGNALS:
            logger.info(f"caught {sig.name}, shutting down")
            # stop idle tasks right away, not after a pending reload finishes
            self._context.shutdown.set()
        self._signals.put_nowait(sig)

    def install(self):
        self._loop = asyncio.get_running_loop()
        for sig in WATCHED_SIGNALS:
            self._loop.add_signal_handler(sig, self.deliver, sig)

    def uninstall(self):
        if self._loop is None:
            return
        for sig in WATCHED_SIGNALS:
            self._loop.remove_signal_handler(sig)
        self._loop = None

    async def run(self):
        try:
            while True:
                sig = await next_event(self._signals, self._context.shutdown)
                if sig is None or sig in TERMINATE_SIGNALS:
                    return
                if sig == signal.SIGHUP:
                    logger.info("[CHANGE] caught SIGHUP")
                    await self._context.reactor.react()
                else:
                    logger.info(f"signal caught: {sig.name}")
        finally:
            self.uninstall()
