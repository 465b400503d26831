"""Dashboard read projections"""
from .get_dashboard_stats import GetDashboardStats
from .get_recent_orders import GetRecentOrders

__all__ = [
    "GetDashboardStats",
    "GetRecentOrders",
]
