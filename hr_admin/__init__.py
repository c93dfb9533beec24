"""HR Admin API: departments, employees and admin authentication."""

__version__ = "1.0.0"
