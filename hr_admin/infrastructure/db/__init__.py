"""Infraestructura de base de datos (pool async psycopg)."""
