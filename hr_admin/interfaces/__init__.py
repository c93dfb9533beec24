"""Interfaces de entrada (HTTP)."""
