"""
Bus d'evenements en memoire.

Implemente IEventPublisher. Les abonnes s'inscrivent par type d'evenement ;
la publication est synchrone pour les handlers classiques. Les handlers
coroutine sont planifies sur la boucle asyncio en cours (suivis jusqu'a
drain()), ou executes jusqu'a leur terme hors boucle.

Une erreur dans un handler est journalisee et ne remonte jamais a
l'emetteur.
"""

import asyncio
import inspect
from collections import defaultdict
from typing import Any, Callable

from loguru import logger

from showsync.core.ports.events import IEventPublisher

Handler = Callable[[Any], Any]


class InMemoryEventBus(IEventPublisher):
    """
    Bus d'evenements en processus.

    Example:
        bus = InMemoryEventBus()
        bus.subscribe(SeriesAddedEvent, controller.handle_series_added)
        bus.publish(SeriesAddedEvent(series))
        await bus.drain()
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Handler]] = defaultdict(list)
        self._pending: set[asyncio.Task] = set()

    def subscribe(self, event_type: type, handler: Handler) -> None:
        """Abonne un handler a un type d'evenement (et ses sous-classes)."""
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type, handler: Handler) -> None:
        """Desabonne un handler ; sans effet s'il n'etait pas abonne."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def _handlers_for(self, event: object) -> list[Handler]:
        return [
            handler
            for event_type, handlers in self._handlers.items()
            if isinstance(event, event_type)
            for handler in handlers
        ]

    def publish(self, event: object) -> None:
        """Publie un evenement vers tous ses abonnes."""
        handlers = self._handlers_for(event)
        logger.trace(f"Publication de {type(event).__name__} ({len(handlers)} abonne(s))")
        for handler in handlers:
            if inspect.iscoroutinefunction(handler):
                self._dispatch_async(handler, event)
            else:
                self._dispatch_sync(handler, event)

    def _dispatch_sync(self, handler: Handler, event: object) -> None:
        try:
            handler(event)
        except Exception:
            logger.exception(
                f"Erreur du handler {getattr(handler, '__qualname__', handler)} "
                f"pour {type(event).__name__}"
            )

    def _dispatch_async(self, handler: Handler, event: object) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None:
            try:
                asyncio.run(handler(event))
            except Exception:
                logger.exception(
                    f"Erreur du handler {getattr(handler, '__qualname__', handler)} "
                    f"pour {type(event).__name__}"
                )
            return

        task = loop.create_task(handler(event))
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.opt(exception=error).error(
                f"Erreur d'un handler asynchrone : {task.get_coro().__qualname__}"
            )

    async def drain(self) -> None:
        """Attend la fin des handlers asynchrones en cours (y compris ceux qu'ils declenchent)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
