"""Alembic environment for crudkit.

Migrations run online only, through the application's async engine, so the
target database comes from crudkit Settings (DATABASE_URL / .env).
"""

import asyncio
from logging.config import fileConfig

from alembic import context

from crudkit.infrastructure.database import Base, engine
import crudkit.infrastructure.persistence.models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def do_run_migrations(connection):  # type: ignore[no-untyped-def]
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations() -> None:
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    raise RuntimeError("crudkit migrations need a live database; --sql is not supported")

asyncio.run(run_migrations())
