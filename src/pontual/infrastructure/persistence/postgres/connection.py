"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool

from pontual.config import Settings


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Build the shared pool from settings. It starts closed; the ASGI lifespan opens it."""
    return AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        name="pontual",
        open=False,
    )
