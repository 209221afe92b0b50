"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_users (Alembic Migration)

Responsibilities:
  - Crear la tabla `users` (identidad + refresh token vigente).
  - Definir constraints e índices que usa PostgresUserRepository.

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres/user.py (contrato de columnas)

Policy:
  - Migración BASELINE. Evoluciones futuras con migraciones aditivas (002+).
  - Convención de nombres:
      pk_<tabla>, uq_<tabla>_<col>, ix_<tabla>_<col>
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_users"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column(
            "role",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'User'"),
        ),
        sa.Column(
            "is_active",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        # Un solo refresh token vigente por usuario (se reemplaza al rotar).
        sa.Column("refresh_token", sa.Text, nullable=True),
        sa.Column(
            "refresh_token_expires_at", sa.DateTime(timezone=True), nullable=True
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        # NULL hasta la primera modificación.
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_index("ix_users_refresh_token", "users", ["refresh_token"])


def downgrade() -> None:
    op.drop_index("ix_users_refresh_token", table_name="users")
    op.drop_table("users")
