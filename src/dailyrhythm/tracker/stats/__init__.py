"""Dashboard statistics."""

from .dashboard import Dashboard, DashboardStats

__all__ = [
    "Dashboard",
    "DashboardStats",
]
