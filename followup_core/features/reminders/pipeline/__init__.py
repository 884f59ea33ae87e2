"""
Pipeline components for reminder prioritization.

Status classification feeds scoring; ranking and insights consume the
scored records. Subpackages expose the primary services.
"""

__all__ = ["insights", "polling", "ranking", "scoring", "status"]
