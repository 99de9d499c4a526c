from __future__ import annotations

import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

# Run from backend/ or anywhere else: petcare lives one level up.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from petcare.db.base import Base  # noqa: E402
import petcare.db.models  # noqa: E402,F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_database_url() -> str:
    # Same variable the API reads; alembic.ini only covers local runs.
    return os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url")


def configure_options(is_sqlite: bool) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        # SQLite can only ALTER tables through batch copy-and-move.
        "render_as_batch": is_sqlite,
    }


def run_migrations_offline() -> None:
    url = get_database_url()
    context.configure(url=url, literal_binds=True, **configure_options(url.startswith("sqlite")))

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        {"sqlalchemy.url": get_database_url()},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            **configure_options(connection.dialect.name == "sqlite"),
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
