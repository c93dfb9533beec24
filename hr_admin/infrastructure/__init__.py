"""Adapters de infraestructura (stores, DB)."""
