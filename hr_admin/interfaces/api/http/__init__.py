"""Adapters HTTP (FastAPI)."""
