import argparse
import asyncio
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app import models  # noqa: F401
from app.config import settings
from app.models.base import Base
from app.utils.logger import setup_logger

logger = setup_logger("db")

if not settings.app_database_url:
    raise ValueError(
        "TASK_MANAGER_DATABASE_URL environment variable not set for Application DB"
    )

if not settings.app_database_url.startswith("postgresql+asyncpg://"):
    if settings.app_database_url.startswith("postgresql://"):
        settings.app_database_url = settings.app_database_url.replace(
            "postgresql://", "postgresql+asyncpg://", 1
        )
    else:
        raise ValueError(
            f"Unsupported settings.app_database_url prefix: {settings.app_database_url}"
        )

app_engine = create_async_engine(
    settings.app_database_url,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_recycle=300,
    echo=False,
    connect_args={"timeout": 30},
)

AppAsyncSessionLocal = async_sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=app_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# --- Dependency for FastAPI ---
async def get_app_db() -> AsyncGenerator[AsyncSession, None]:
    async with AppAsyncSessionLocal() as session:
        await session.execute(
            text(f"SET search_path TO {settings.schema_name}, public")
        )
        yield session


async def init_db():
    """Create the schema and any missing tables. Does not migrate existing ones."""
    if not Base.metadata.tables:
        logger.warning("Base.metadata.tables is EMPTY! No tables will be created.")
    else:
        logger.debug(f"Registered tables: {list(Base.metadata.tables.keys())}")

    async with app_engine.begin() as conn:
        await conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {settings.schema_name}"))
        await conn.execute(text(f"SET search_path TO {settings.schema_name}, public"))
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"Database schema '{settings.schema_name}' initialized.")


async def close_db():
    """Closes database connections."""
    logger.info("Closing database connections.")
    await app_engine.dispose()
    logger.info("Database connections closed.")


async def list_tables_in_schema(schema_name: str) -> list[str]:
    """Lists all tables in the specified schema."""
    async with app_engine.connect() as conn:
        result = await conn.execute(
            text(
                "SELECT table_name FROM information_schema.tables WHERE table_schema = :schema_name ORDER BY table_name"
            ),
            {"schema_name": schema_name},
        )
        table_names = [row[0] for row in result.fetchall()]

    if table_names:
        logger.info(f"Tables in schema '{schema_name}': {table_names}")
    else:
        logger.info(f"No tables found in schema '{schema_name}'.")
    return table_names


async def reset_db():
    logger.warning(
        f"Resetting the Application database (schema: {settings.schema_name}). THIS IS A DESTRUCTIVE OPERATION."
    )
    async with app_engine.begin() as conn:
        await conn.execute(text("SET search_path TO public"))
        await conn.execute(
            text(f"DROP SCHEMA IF EXISTS {settings.schema_name} CASCADE")
        )
        logger.info(f"Schema '{settings.schema_name}' dropped.")

    await init_db()


async def check_db_connection(engine_to_check=None, db_name="Application DB"):
    """Performs a simple query to check actual DB connectivity."""
    if engine_to_check is None:
        engine_to_check = app_engine

    session_maker = async_sessionmaker(
        bind=engine_to_check,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        try:
            result = await session.execute(text("SELECT 1"))
            if result.scalar_one() == 1:
                logger.info(
                    f"Successfully connected to {db_name} and executed a test query."
                )
                return True
            raise RuntimeError(
                f"Test query to {db_name} returned an unexpected result."
            )
        except Exception as e:
            logger.error(
                f"Failed to execute test query on {db_name}: {e}", exc_info=True
            )
            raise RuntimeError(
                f"Database connectivity check failed for {db_name}."
            ) from e


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description=f"Application Database ({settings.schema_name}) Initialization Utility"
    )
    parser.add_argument(
        "action",
        choices=["init", "reset", "list-tables"],
        help=f"'init' to create tables in schema '{settings.schema_name}', "
        f"'reset' to drop schema '{settings.schema_name}' and recreate tables, "
        f"'list-tables' to show tables in a schema.",
    )
    parser.add_argument(
        "--schema",
        type=str,
        default=settings.schema_name,
        help=f"Schema to act upon for list-tables. Defaults to '{settings.schema_name}'.",
    )
    args = parser.parse_args()

    if args.action == "init":
        asyncio.run(init_db())
    elif args.action == "reset":
        confirm = input(
            f"WARNING: This will delete all data in schema '{settings.schema_name}'. Are you sure? (yes/no): "
        )
        if confirm.lower() == "yes":
            asyncio.run(reset_db())
        else:
            logger.info("Application Database reset cancelled by user.")
    elif args.action == "list-tables":
        asyncio.run(list_tables_in_schema(args.schema))
    logger.info(f"Application Database ({settings.schema_name}) utility script finished.")
