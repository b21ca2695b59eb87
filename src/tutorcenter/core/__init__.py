"""Core view logic.

Modules:
- views: Flat view rows built from joined ORM records
- listing: Search, filters and fixed-size pagination
- dashboard: Summary counts and calendar grouping
- export: Report CSV export
"""

__all__ = [
    "views",
    "listing",
    "dashboard",
    "export",
]
