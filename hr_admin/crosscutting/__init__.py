"""Concerns transversales: config, logging, taxonomía de errores, RFC7807, middleware."""
