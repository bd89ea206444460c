import asyncio
from collections import defaultdict, deque
from typing import Any

import pytest

from dns_gen.config import Config
from dns_gen.context import Context
from dns_gen.dns.resolver import AddressesT, Resolver
from dns_gen.errors import ResolutionError
from dns_gen.reaction.output import OutputWriter
from dns_gen.reaction.reactor import Reactor

# a scripted answer is either an address list or an exception to raise
AnswerT = AddressesT | Exception


class DummyResolver(Resolver):
    def __init__(self, answers: dict[str, list[AnswerT]] | None = None):
        self._answers = defaultdict(deque)
        for hostname, host_answers in (answers or {}).items():
            self._answers[hostname].extend(host_answers)
        # the last answer for a host keeps being returned once the script runs out
        self._last: dict[str, AnswerT] = {}
        self.lookups = list[str]()

    def _next(self, hostname: str) -> AddressesT:
        self.lookups.append(hostname)
        if self._answers[hostname]:
            self._last[hostname] = self._answers[hostname].popleft()
        answer = self._last.get(hostname)
        if answer is None:
            raise ResolutionError(hostname, "no such host")
        if isinstance(answer, Exception):
            raise answer
        return sorted(answer)

    async def resolve(self, hostname: str) -> AddressesT:
        return self._next(hostname)

    def lookup(self, hostname: str) -> AddressesT:
        return self._next(hostname)


class CountingReactor(Reactor):
    def __init__(self):
        super().__init__(None, OutputWriter(None))
        self.reactions = 0

    async def _react(self):
        self.reactions += 1


def make_context(reactor: Reactor | None = None, **config: Any) -> Context:
    config.setdefault("hostnames", ["svc.internal"])
    return Context(
        config=Config(**config),
        reactor=reactor or CountingReactor(),
        shutdown=asyncio.Event(),
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ("INTERVAL", "EXECUTE", "TEMPLATE", "DEST", "TMP_DIR", "DEBUG", "HOSTNAMES"):
        monkeypatch.delenv(f"DNS_GEN_{name}", raising=False)
