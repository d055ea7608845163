# alembic/env.py
from __future__ import annotations
import os
from logging.config import fileConfig
from alembic import context
from sqlalchemy import engine_from_config, pool
from dotenv import load_dotenv

HERE = os.path.dirname(__file__)                 # .../alembic
PROJECT_ROOT = os.path.abspath(os.path.join(HERE, ".."))

# 1) Carrega variáveis de ambiente antes de importar o pacote (DATABASE_URL é lido no import)
load_dotenv(dotenv_path=os.path.join(PROJECT_ROOT, ".env"))

# 2) Importe Base e os MODELOS ORM (não os schemas Pydantic)
from pyme_auth.infrastructure.database import Base, DATABASE_URL
# registra business, users e audit_log no Base.metadata
import pyme_auth.domain.entities  # noqa: F401

# 3) Config Alembic
config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

def run_migrations_offline() -> None:
    url = os.getenv("DATABASE_URL", DATABASE_URL)
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        compare_server_default=True,
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online() -> None:
    url = os.getenv("DATABASE_URL", DATABASE_URL)
    connectable = engine_from_config(
        {"sqlalchemy.url": url},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
