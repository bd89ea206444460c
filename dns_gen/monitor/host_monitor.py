"""
Responsibility: poll one hostname forever
- resolve it right away, then once every interval
- compare the result with the last known addresses
- if they differ, log the change, remember the new set and react

Failed lookups never count as a change: the last known addresses stay in
place until a lookup succeeds again.
"""

import asyncio
import time

from ..context import Context
from ..dns.change import equivalent
from ..dns.resolver import AddressesT, Resolver, format_addresses
from ..errors import ResolutionError, TemporaryResolutionError
from ..logger import logger


class HostMonitor:
    def __init__(self, hostname: str, context: Context, resolver: Resolver) -> None:
        self._hostname = hostname
        self._context = context
        self._resolver = resolver
        self._interval = context.config.interval.total_seconds()

        # owned by this monitor only
        self._known_addresses = AddressesT()

    @property
    def hostname(self) -> str:
        return self._hostname

    @property
    def known_addresses(self) -> AddressesT:
        return list(self._known_addresses)

    async def poll(self) -> bool:
        """
        :return: True if the addresses changed and a reaction ran
        """
        start = time.monotonic()
        try:
            addresses = await self._resolver.resolve(self._hostname)
        except TemporaryResolutionError as e:
            logger.warning(
                f"temporary error resolving hostname {self._hostname}: {e.cause}. will retry..."
            )
            return False
        except ResolutionError as e:
            logger.error(f"error resolving hostname {self._hostname}: {e.cause}")
            return False

        if self._context.debug:
            logger.debug(
                f"lookup [{self._hostname}] => {format_addresses(addresses)} in {time.monotonic() - start:.3f}s"
            )

        if equivalent(self._known_addresses, addresses):
            return False

        logger.info(
            f"[CHANGE] {self._hostname} {format_addresses(self._known_addresses)} -> {format_addresses(addresses)}"
        )
        self._known_addresses = addresses
        await self._context.reactor.react()
        return True

    async def run(self):
        loop = asyncio.get_running_loop()
        shutdown = self._context.shutdown

        next_tick = loop.time()
        while not shutdown.is_set():
            try:
                await self.poll()
            except Exception as e:
                logger.error(f"error while polling {self._hostname}: {e!r}")

            next_tick += self._interval
            now = loop.time()
            if next_tick <= now:
                # the poll overran one or more ticks, skip them like a ticker would
                missed = (now - next_tick) // self._interval + 1
                next_tick += missed * self._interval

            try:
                await asyncio.wait_for(shutdown.wait(), timeout=next_tick - now)
            except asyncio.TimeoutError:
                pass

        logger.debug(f"stopped monitoring {self._hostname}")
