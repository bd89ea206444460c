"""
Responsibility: validate the configuration, start every task and wait for
all of them to finish
- one HostMonitor per hostname
- one TemplateWatcher, if a template is configured
- one SignalRouter

The tasks only stop once the shutdown event is set (SIGINT / SIGTERM), so
run() returning means the process is shutting down cleanly.
"""

import asyncio
from typing import BinaryIO

from .config import Config
from .context import Context
from .dns.resolver import Resolver
from .errors import ConfigError
from .logger import logger
from .monitor.host_monitor import HostMonitor
from .monitor.signal_router import SignalRouter
from .monitor.template_watcher import TemplateWatcher
from .reaction.output import OutputWriter
from .reaction.reactor import Reactor
from .reaction.template import TemplateRenderer


def validate(config: Config):
    """
    :raises ConfigError: if there is nothing to watch or the template is missing
    """
    if not config.hostnames:
        raise ConfigError("No hostnames provided")
    if config.template is not None and not config.template.exists():
        raise ConfigError(f"template file not found: {config.template}")


class Lifecycle:
    def __init__(
        self,
        config: Config,
        resolver: Resolver | None = None,
        stdout: BinaryIO | None = None,
    ) -> None:
        self._config = config
        self._resolver = resolver or Resolver()
        self._stdout = stdout

        self.shutdown = asyncio.Event()
        self.monitors: list[HostMonitor] = []

    def build_context(self) -> Context:
        config = self._config
        renderer = (
            TemplateRenderer(config.template, self._resolver)
            if config.template is not None
            else None
        )
        writer = OutputWriter(config.dest, config.tmp_dir, self._stdout)
        reactor = Reactor(
            renderer,
            writer,
            execute=config.execute,
            debug=config.debug,
            context={"hostnames": list(config.hostnames)},
        )
        return Context(config=config, reactor=reactor, shutdown=self.shutdown)

    async def run(self) -> int:
        """
        :return: the process exit status
        :raises ConfigError: if validation fails, before anything is started
        """
        validate(self._config)
        context = self.build_context()

        logger.info(
            f"Monitoring {len(self._config.hostnames)} hosts every "
            f"{self._config.interval.total_seconds()}s: {self._config.hostnames}"
        )

        signal_router = SignalRouter(context)
        signal_router.install()

        self.monitors = [
            HostMonitor(hostname, context, self._resolver)
            for hostname in self._config.hostnames
        ]
        tasks = [
            asyncio.create_task(monitor.run(), name=f"monitor-{monitor.hostname}")
            for monitor in self.monitors
        ]
        if self._config.template is not None:
            template_watcher = TemplateWatcher(self._config.template, context)
            tasks.append(asyncio.create_task(template_watcher.run(), name="template-watcher"))
        tasks.append(asyncio.create_task(signal_router.run(), name="signal-router"))

        results = await asyncio.gather(*tasks, return_exceptions=True)
        for task, result in zip(tasks, results):
            if isinstance(result, BaseException):
                logger.error(f"task {task.get_name()} exited with error: {result!r}")

        logger.info("all tasks stopped, exiting")
        return 0
