"""Initial schema: people and projects.

Every entity table carries the audited-entity columns: identity key,
optimistic version, name, and created / modified / accessed as BIGINT epoch
milliseconds.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _entity_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("name", sa.Text, nullable=True),
        sa.Column("created", sa.BigInteger, nullable=False),
        sa.Column("modified", sa.BigInteger, nullable=False),
        sa.Column("accessed", sa.BigInteger, nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "people",
        *_entity_columns(),
        sa.Column("email", sa.Text, nullable=True),
        sa.UniqueConstraint("email", name="uq_people_email"),
    )

    op.create_table(
        "projects",
        *_entity_columns(),
        sa.Column("description", sa.Text, nullable=True),
    )


def downgrade() -> None:
    op.drop_table("projects")
    op.drop_table("people")
