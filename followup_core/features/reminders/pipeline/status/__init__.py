"""
Reminder status package.

Classifies interactions into overdue / due-soon / upcoming / done with a
per-minute read-through cache.
"""

from .service import StatusCache, StatusClassifier, status_classifier

__all__ = ["StatusCache", "StatusClassifier", "status_classifier"]
