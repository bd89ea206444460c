"""
Responsibility: the single reaction every trigger funnels into
- render the template (if configured) and hand the bytes to the output writer
- run the configured command (if any)

Reactions never overlap: they queue on one lock, in arrival order, and a
burst of triggers yields the same number of reactions, run one after another.
"""

import asyncio
import time
from typing import Any

from ..errors import CommandError, OutputWriteError, RenderError
from ..logger import logger
from .command import run_command
from .output import OutputWriter
from .template import TemplateRenderer


class Reactor:
    def __init__(
        self,
        renderer: TemplateRenderer | None,
        writer: OutputWriter,
        execute: str | None = None,
        debug: bool = False,
        context: dict[str, Any] | None = None,
    ) -> None:
        self._renderer = renderer
        self._writer = writer
        self._execute = execute
        self._debug = debug
        self._context = context or {}

        self.lock = asyncio.Lock()

    async def react(self):
        async with self.lock:
            await self._react()

    async def _react(self):
        if self._renderer is not None:
            await self._render_and_write(self._renderer)
        if self._execute:
            await self._run_command(self._execute)

    async def _render_and_write(self, renderer: TemplateRenderer):
        start = time.monotonic()
        try:
            content = await asyncio.to_thread(renderer.render, **self._context)
        except RenderError as e:
            logger.error(f"failed to execute template: {e.cause}")
            return
        if self._debug:
            logger.debug(
                f"template [{renderer.path}] generated in {time.monotonic() - start:.3f}s"
            )

        try:
            await asyncio.to_thread(self._writer.write, content)
        except OutputWriteError as e:
            logger.error(f"failed to write output file: {e}")

    async def _run_command(self, command: str):
        try:
            await run_command(command, self._debug)
        except CommandError as e:
            logger.error(f"failed to execute command: {e}")
        except OSError as e:
            logger.error(f"failed to start command [{command}]: {e}")
