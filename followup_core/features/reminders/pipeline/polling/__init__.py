from .service import check_reminders, newly_overdue

__all__ = ["check_reminders", "newly_overdue"]
