"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema base: users, departments, employees.
  - Enforzar unicidad a nivel store (respaldo ante carreras check-then-write):
      * users.email
      * departments.name entre filas activas (deleted_at IS NULL)
      * employees.email entre filas activas (deleted_at IS NULL)
  - employees.department_id es referencia débil: FK ON DELETE SET NULL.

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres/* (usan este esquema como contrato)

Policy:
  - Migración BASELINE. Downgrade elimina las tablas (solo entornos locales).
  - Convención de nombres:
      pk_<tabla> | uq_<tabla>_<col>[_active] | ix_<tabla>_<col>
      fk_<tabla>_<col>__<ref_tabla> | ck_<tabla>_<regla>
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # =========================================================
    # 1) IDENTITY (users)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column(
            "role", sa.String(50), nullable=False, server_default=sa.text("'ADMIN'")
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint("role IN ('ADMIN')", name="ck_users_role"),
    )

    # =========================================================
    # 2) DEPARTMENTS
    # =========================================================
    op.create_table(
        "departments",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_departments"),
    )
    op.create_index(
        "uq_departments_name_active",
        "departments",
        ["name"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )
    op.create_index("ix_departments_created_at", "departments", ["created_at"])

    # =========================================================
    # 3) EMPLOYEES
    # =========================================================
    op.create_table(
        "employees",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("position", sa.String(100), nullable=False),
        sa.Column("salary", sa.Numeric(10, 2), nullable=False),
        sa.Column("hire_date", sa.Date, nullable=False),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'ACTIVE'"),
        ),
        sa.Column("department_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_employees"),
        sa.ForeignKeyConstraint(
            ["department_id"],
            ["departments.id"],
            name="fk_employees_department_id__departments",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint("salary >= 0", name="ck_employees_salary_non_negative"),
        sa.CheckConstraint(
            "status IN ('ACTIVE', 'INACTIVE')", name="ck_employees_status"
        ),
    )
    op.create_index(
        "uq_employees_email_active",
        "employees",
        ["email"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )
    op.create_index("ix_employees_department_id", "employees", ["department_id"])
    op.create_index("ix_employees_created_at", "employees", ["created_at"])


def downgrade() -> None:
    op.drop_table("employees")
    op.drop_table("departments")
    op.drop_table("users")
