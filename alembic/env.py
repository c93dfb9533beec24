"""
============================================================
TARJETA CRC — alembic/env.py
============================================================
Responsabilidades:
  - Ejecutar las migraciones del esquema de RRHH (users, departments,
    employees) en modo online u offline (--sql).
  - Resolver la URL desde DATABASE_URL (la misma que usa la API) y
    forzar el driver psycopg 3 para SQLAlchemy.

Colaboradores:
  - alembic/versions/* (DDL escrito a mano, sin modelos ORM)
  - SQLAlchemy (solo como engine de Alembic)

Notas:
  - target_metadata = None: no hay autogenerate.
============================================================
"""

import os
import re
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

_SCHEME_RE = re.compile(r"^postgres(?:ql)?(?:\+\w+)?://")

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def database_url() -> str:
    raw = (os.environ.get("DATABASE_URL") or config.get_main_option("sqlalchemy.url") or "").strip()
    if not raw:
        raise RuntimeError("DATABASE_URL is required to run migrations")
    return _SCHEME_RE.sub("postgresql+psycopg://", raw, count=1)


def run_offline() -> None:
    context.configure(
        url=database_url(),
        target_metadata=None,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_engine(database_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, target_metadata=None)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
