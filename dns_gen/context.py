"""
Responsibility: the state shared by every task
- the parsed configuration
- the reactor, which owns the one lock serializing reactions
- the shutdown event, set once when the process is asked to terminate
"""

import asyncio
from dataclasses import dataclass
from typing import Any

from .config import Config
from .reaction.reactor import Reactor


@dataclass
class Context:
    config: Config
    reactor: Reactor
    shutdown: asyncio.Event

    @property
    def debug(self) -> bool:
        return self.config.debug


async def next_event(queue: asyncio.Queue, shutdown: asyncio.Event) -> Any | None:
    """
    wait for the next item on queue or for shutdown, whichever comes first
    :return: the item, or None once shutdown is set
    """
    if shutdown.is_set():
        return None

    get = asyncio.ensure_future(queue.get())
    stop = asyncio.ensure_future(shutdown.wait())
    try:
        done, _ = await asyncio.wait({get, stop}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (get, stop):
            if not task.done():
                task.cancel()

    if get in done:
        return get.result()
    return None
