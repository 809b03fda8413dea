"""
Interface port pour la publication d'événements.
"""

from abc import ABC, abstractmethod


class IEventPublisher(ABC):
    """Publie des événements sans attendre d'acquittement."""

    @abstractmethod
    def publish(self, event: object) -> None:
        """Publie un événement vers les abonnés."""
        ...
