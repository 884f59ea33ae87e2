from .service import insights

__all__ = ["insights"]
