"""Publication et distribution des evenements en processus."""

from showsync.adapters.messaging.event_bus import InMemoryEventBus

__all__ = ["InMemoryEventBus"]
