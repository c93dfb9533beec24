"""Capa HTTP: app FastAPI, rutas de auth y handlers de errores."""
