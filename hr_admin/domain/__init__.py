"""Dominio HR: entidades, patches parciales y contratos de store."""
