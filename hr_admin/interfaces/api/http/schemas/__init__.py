"""Schemas HTTP (DTOs Pydantic) por bounded context."""
