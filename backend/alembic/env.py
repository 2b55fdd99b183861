"""Alembic environment for the Tsaap notes schema (PostgreSQL)."""

import asyncio
import os
import sys
from logging.config import fileConfig
from pathlib import Path
from typing import Optional
from urllib.parse import quote_plus

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR / "src") not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR / "src"))

# variables already in the environment take precedence over backend/.env
load_dotenv(BACKEND_DIR / ".env", override=False)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from tsaap.core.models import BaseModel  # noqa: E402

target_metadata = BaseModel.metadata


def database_url() -> Optional[str]:
    """sqlalchemy.url, then DATABASE_URL, then DB_* parts."""
    url = config.get_main_option("sqlalchemy.url") or os.environ.get("DATABASE_URL")
    if url:
        if not url.startswith("postgresql"):
            raise ValueError(f"Migrations target PostgreSQL, got {url!r}")
        return url

    password = os.environ.get("DB_PASSWORD") or os.environ.get("POSTGRES_PASSWORD")
    if not password:
        return None
    user = quote_plus(os.environ.get("DB_USER", "tsaap"))
    host = os.environ.get("DB_HOST", "localhost")
    port = os.environ.get("DB_PORT", "5432")
    name = os.environ.get("DB_NAME", "tsaap")
    return f"postgresql+asyncpg://{user}:{quote_plus(password)}@{host}:{port}/{name}"


def required_url() -> str:
    url = database_url()
    if url is None:
        raise RuntimeError("Set DATABASE_URL or DB_PASSWORD (with DB_* overrides) to run migrations")
    return url


def run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations(url: str) -> None:
    engine = create_async_engine(url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(run_migrations)
    finally:
        await engine.dispose()


def run_migrations_online() -> None:
    url = required_url()
    if "+asyncpg" in url:
        asyncio.run(run_async_migrations(url))
        return

    engine = engine_from_config({"sqlalchemy.url": url}, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with engine.connect() as connection:
        run_migrations(connection)


def run_migrations_offline() -> None:
    """Emit SQL without connecting."""
    context.configure(
        url=required_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
