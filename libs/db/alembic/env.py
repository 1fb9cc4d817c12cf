# ruff: noqa: I001
"""
Alembic environment for the ledger schema.

The URL comes from ``DATABASE_URL`` (a workspace ``.env`` is honored), the
same variable the CLI reads through ``ledger_db.client``. ``sqlalchemy.url`` in
``alembic.ini`` is only a fallback. SQLite runs in batch mode because it
cannot alter constraints in place.
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from dotenv import find_dotenv, load_dotenv

import ledger_db
from ledger_db.client import resolve_database_url

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Works from the repo root and from libs/db; never overrides the real env.
if dotenv_path := find_dotenv(usecwd=True):
    load_dotenv(dotenv_path, override=False)

_INI_URL = config.get_main_option("sqlalchemy.url") or None
try:
    DB_URL = resolve_database_url()
except RuntimeError as exc:
    if _INI_URL is None:
        raise RuntimeError(f"{exc} (or set sqlalchemy.url in alembic.ini)") from None
    DB_URL = _INI_URL
config.set_main_option("sqlalchemy.url", DB_URL)


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=ledger_db.metadata,
        compare_type=True,
        compare_server_default=True,
        **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    _configure(
        url=DB_URL,
        literal_binds=True,
        render_as_batch=DB_URL.startswith("sqlite"),
    )


def run_migrations_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section) or {},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        _configure(
            connection=connection,
            render_as_batch=connection.dialect.name == "sqlite",
        )


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
