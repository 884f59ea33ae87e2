"""Classification and ranking engine for contact follow-up reminders."""

__version__ = "0.1.0"
