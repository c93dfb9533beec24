"""Routers HTTP por bounded context (departments / employees)."""
