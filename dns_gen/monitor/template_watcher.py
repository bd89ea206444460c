"""
Responsibility: react when the template file is written, created or renamed into place

The containing directory is watched (not recursively) so that editors
which replace the file are noticed too: writes, creates and renames onto
the template path all count. Events for other files in the same directory
are ignored.

watchdog reports attribute changes (chmod, touch) as modifications, so
those trigger a reaction as well. The output write is content-diffed, so
such a reaction leaves the destination alone.
"""

import asyncio
import os
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from ..context import Context, next_event
from ..logger import logger


class TemplateEventHandler(FileSystemEventHandler):
    def __init__(
        self, template_path: str | Path, on_change: Callable[[FileSystemEvent], None]
    ) -> None:
        self._template_path = os.path.abspath(template_path)
        self._on_change = on_change

    def _matches(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        return self._is_template(event.src_path)

    def _is_template(self, path: bytes | str) -> bool:
        return os.path.abspath(os.fsdecode(path)) == self._template_path

    def on_modified(self, event: FileSystemEvent) -> None:
        if self._matches(event):
            self._on_change(event)

    def on_created(self, event: FileSystemEvent) -> None:
        if self._matches(event):
            self._on_change(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        # a rename onto the template path is how atomic saves land
        if not event.is_directory and self._is_template(event.dest_path):
            self._on_change(event)


class TemplateWatcher:
    def __init__(
        self,
        template_path: str | Path,
        context: Context,
        observer_factory: Callable[[], BaseObserver] = Observer,
    ) -> None:
        self._template_path = Path(os.path.abspath(template_path))
        self._context = context
        self._observer_factory = observer_factory

    async def run(self):
        loop = asyncio.get_running_loop()
        events: asyncio.Queue[FileSystemEvent] = asyncio.Queue()

        def on_change(event: FileSystemEvent):
            # called from the observer thread
            loop.call_soon_threadsafe(events.put_nowait, event)

        handler = TemplateEventHandler(self._template_path, on_change)
        observer = self._observer_factory()
        try:
            observer.schedule(handler, str(self._template_path.parent), recursive=False)
            observer.start()
        except OSError as e:
            logger.error(f"error watching template file for changes: {e}")
            await self._context.shutdown.wait()
            return

        try:
            while True:
                event = await next_event(events, self._context.shutdown)
                if event is None:
                    break
                logger.info(f"[CHANGE] template changed: {event!r}")
                await self._context.reactor.react()
        finally:
            observer.stop()
            await asyncio.to_thread(observer.join)
