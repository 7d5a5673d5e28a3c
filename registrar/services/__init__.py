"""
Services module containing orchestration around the core model.
"""

from .enrollment_service import EnrollmentService

__all__ = [
    "EnrollmentService",
]
