"""
Tests pour InMemoryEventBus.

Tests couvrant:
- Distribution par type d'evenement
- Isolation des erreurs de handlers
- Handlers coroutine dans et hors d'une boucle asyncio
"""

from unittest.mock import MagicMock

import pytest

from showsync.adapters.messaging.event_bus import InMemoryEventBus
from showsync.core.entities.media import Series
from showsync.core.events import SeriesAddedEvent, SeriesUpdatedEvent


@pytest.fixture
def bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def added_event() -> SeriesAddedEvent:
    return SeriesAddedEvent(series=Series(id="1", tvdb_id=81189))


class TestSyncHandlers:
    """Tests des handlers synchrones."""

    def test_handler_receives_matching_events_only(self, bus, added_event):
        """Un handler ne recoit que le type auquel il est abonne."""
        handler = MagicMock()
        bus.subscribe(SeriesAddedEvent, handler)

        bus.publish(added_event)
        bus.publish(SeriesUpdatedEvent(series=Series(id="1")))

        handler.assert_called_once_with(added_event)

    def test_publish_without_subscriber(self, bus, added_event):
        """Publier sans abonne est sans effet."""
        bus.publish(added_event)

    def test_handler_error_does_not_reach_publisher(self, bus, added_event):
        """Une erreur de handler est absorbee ; les autres handlers sont appeles."""
        failing = MagicMock(side_effect=RuntimeError("boom"))
        other = MagicMock()
        bus.subscribe(SeriesAddedEvent, failing)
        bus.subscribe(SeriesAddedEvent, other)

        bus.publish(added_event)

        other.assert_called_once_with(added_event)

    def test_unsubscribe(self, bus, added_event):
        """Un handler desabonne n'est plus appele."""
        handler = MagicMock()
        bus.subscribe(SeriesAddedEvent, handler)
        bus.unsubscribe(SeriesAddedEvent, handler)
        bus.unsubscribe(SeriesUpdatedEvent, handler)

        bus.publish(added_event)

        handler.assert_not_called()


class TestAsyncHandlers:
    """Tests des handlers coroutine."""

    @pytest.mark.asyncio
    async def test_coroutine_handler_scheduled_on_running_loop(self, bus, added_event):
        """Dans une boucle : le handler tourne en tache, attendue par drain()."""
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(SeriesAddedEvent, handler)

        bus.publish(added_event)
        await bus.drain()

        assert received == [added_event]

    @pytest.mark.asyncio
    async def test_drain_waits_for_cascaded_events(self, bus, added_event):
        """drain() attend aussi les handlers declenches par un handler."""
        received = []

        async def on_added(event):
            bus.publish(SeriesUpdatedEvent(series=event.series))

        async def on_updated(event):
            received.append(event)

        bus.subscribe(SeriesAddedEvent, on_added)
        bus.subscribe(SeriesUpdatedEvent, on_updated)

        bus.publish(added_event)
        await bus.drain()

        assert [type(e) for e in received] == [SeriesUpdatedEvent]

    @pytest.mark.asyncio
    async def test_coroutine_handler_error_is_absorbed(self, bus, added_event):
        """Une erreur dans un handler coroutine ne remonte pas par drain()."""

        async def handler(event):
            raise RuntimeError("TVDB indisponible")

        bus.subscribe(SeriesAddedEvent, handler)

        bus.publish(added_event)
        await bus.drain()

    def test_coroutine_handler_outside_loop_runs_to_completion(self, bus, added_event):
        """Hors boucle : le handler est execute avant le retour de publish()."""
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(SeriesAddedEvent, handler)

        bus.publish(added_event)

        assert received == [added_event]
