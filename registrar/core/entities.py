"""
Base entity and event types shared by the academic records model.
"""

import uuid
from abc import ABC
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .enums import EntityStatus, EventType


class AbstractEntity(ABC):
    """Base abstract entity with universal ID, lifecycle, and versioning.

    Entities compare by identity: two students with the same name are still
    two students, and a course is the same course wherever it is referenced.
    """
    
    def __init__(self, entity_id: Optional[str] = None):
        self._id = entity_id or str(uuid.uuid4())
        self._created_at = datetime.now(timezone.utc)
        self._updated_at = self._created_at
        self._version = 1
        self._status = EntityStatus.ACTIVE
    
    @property
    def id(self) -> str:
        """Get the entity ID."""
        return self._id
    
    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at
    
    @property
    def updated_at(self) -> datetime:
        """Get last update timestamp."""
        return self._updated_at
    
    @property
    def version(self) -> int:
        """Get current version."""
        return self._version
    
    @property
    def status(self) -> EntityStatus:
        """Get entity status."""
        return self._status
    
    def touch(self) -> None:
        """Record a mutation."""
        self._updated_at = datetime.now(timezone.utc)
        self._version += 1
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {
            'id': self._id,
            'created_at': self._created_at.isoformat(),
            'updated_at': self._updated_at.isoformat(),
            'version': self._version,
            'status': self._status.value,
        }
    
    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"
    
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id}, status={self._status.value})"


class Event:
    """Immutable record of something that happened in a service."""
    
    def __init__(self, event_type: EventType, stream_id: str, event_data: Dict[str, Any]):
        self._event_id = str(uuid.uuid4())
        self._event_type = event_type
        self._stream_id = stream_id
        self._event_data = dict(event_data)
        self._timestamp = datetime.now(timezone.utc)
    
    @property
    def event_id(self) -> str:
        return self._event_id
    
    @property
    def event_type(self) -> EventType:
        return self._event_type
    
    @property
    def stream_id(self) -> str:
        return self._stream_id
    
    @property
    def event_data(self) -> Dict[str, Any]:
        return self._event_data.copy()
    
    @property
    def timestamp(self) -> datetime:
        return self._timestamp
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'event_id': self._event_id,
            'event_type': self._event_type.value,
            'stream_id': self._stream_id,
            'event_data': self._event_data,
            'timestamp': self._timestamp.isoformat(),
        }
