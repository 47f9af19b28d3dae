# alembic/env.py
"""
Alembic environment for the RentLedger backend.

The database URL comes from config (DATABASE_URL, or the MS SQL Server URL
built from DB_*), never from alembic.ini. SQLite databases migrate in batch
mode because SQLite cannot ALTER most constraints in place.
"""
import logging
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import DATABASE_URL  # noqa: E402
from database import build_engine  # noqa: E402
from models import Base  # noqa: E402

alembic_config = context.config
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

logger = logging.getLogger("alembic.env")

target_metadata = Base.metadata
is_sqlite = DATABASE_URL.startswith("sqlite")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=is_sqlite,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of running it."""
    _configure(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    if is_sqlite:
        connectable = build_engine(DATABASE_URL)
    else:
        # No pooling for a one-shot migration run
        connectable = create_engine(DATABASE_URL, poolclass=NullPool)

    logger.info("Migrating %s", connectable.url.render_as_string(hide_password=True))
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
