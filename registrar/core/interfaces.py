"""
Core interfaces and abstract base classes for the registrar.
"""

from abc import ABC, abstractmethod
from typing import Iterable


class Schedulable(ABC):
    """Interface for anyone whose week can fill up with course meetings."""
    
    @abstractmethod
    def is_free_on(self, meetings: Iterable['WeeklyMeeting']) -> bool:
        """Check that none of the given meetings clash with the current schedule."""
        pass


class EventHandler(ABC):
    """Abstract base class for event handlers."""
    
    @abstractmethod
    def handle_event(self, event: 'Event') -> None:
        """Handle an event."""
        pass
    
    @abstractmethod
    def can_handle(self, event_type: str) -> bool:
        """Check if this handler can handle the event type."""
        pass
