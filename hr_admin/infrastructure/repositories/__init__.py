"""Implementaciones del Entity Store Contract."""
