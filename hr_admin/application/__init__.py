"""Capa de aplicación: casos de uso y seed de desarrollo."""
