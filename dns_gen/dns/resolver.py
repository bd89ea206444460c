"""
Responsibility: turn a hostname into a sorted list of addresses using the
system resolver, and classify failures as temporary or permanent
"""

import asyncio
import socket

from ..errors import ResolutionError, TemporaryResolutionError

AddressesT = list[str]

# getaddrinfo error codes meaning "try again later"
_TEMPORARY_ERRNOS = {
    getattr(socket, name)
    for name in ("EAI_AGAIN",)
    if hasattr(socket, name)
}


def format_addresses(addresses: AddressesT) -> str:
    return "[" + " ".join(addresses) + "]"


def _addresses_from_info(infos) -> AddressesT:
    return sorted({info[4][0] for info in infos})


def _classify(hostname: str, e: Exception) -> ResolutionError:
    if isinstance(e, socket.gaierror) and e.errno in _TEMPORARY_ERRNOS:
        return TemporaryResolutionError(hostname, e)
    if isinstance(e, TimeoutError):
        return TemporaryResolutionError(hostname, e)
    return ResolutionError(hostname, e)


class Resolver:
    async def resolve(self, hostname: str) -> AddressesT:
        """
        resolve hostname through the event loop's getaddrinfo
        :raises TemporaryResolutionError: if the resolver asked us to retry
        :raises ResolutionError: for any other lookup failure
        """
        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)
        except (OSError, UnicodeError) as e:
            # UnicodeError: the name cannot be IDNA-encoded, e.g. an empty label
            raise _classify(hostname, e) from e
        return _addresses_from_info(infos)

    def lookup(self, hostname: str) -> AddressesT:
        """
        blocking variant of resolve, for code that is not running on the loop
        """
        try:
            infos = socket.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)
        except (OSError, UnicodeError) as e:
            raise _classify(hostname, e) from e
        return _addresses_from_info(infos)

    def safe_lookup(self, hostname: str) -> AddressesT:
        try:
            return self.lookup(hostname)
        except ResolutionError:
            return []
