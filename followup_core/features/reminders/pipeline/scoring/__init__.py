"""
Reminder scoring package.

Provides the service that turns an interaction, its contact and the
contact's history into a 0-10 priority score.
"""

from .service import PriorityService, priority_service

__all__ = ["PriorityService", "priority_service"]
