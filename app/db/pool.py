"""
PostgreSQL connection pool for the hub candidate queries.

A hub request fans out into five concurrent reads (four candidate sources
and the client lookup), so the pool is sized for bursts of parallel short
queries. Sessions are read-only and autocommit.
"""

import asyncio
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from enum import StrEnum
from typing import Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from app.config import settings
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

# Utilization (percent) above which the pool is reported degraded / unhealthy
WARN_UTILIZATION = 80
UNHEALTHY_UTILIZATION = 95


class PoolState(StrEnum):
    NEW = "new"
    OPEN = "open"
    CLOSED = "closed"


class DatabasePoolManager:
    """Owns the AsyncConnectionPool across the application lifespan."""

    def __init__(self):
        self.pool: AsyncConnectionPool | None = None
        self.state = PoolState.NEW

    async def initialize(self) -> None:
        """Open the pool and prove one connection works."""
        if self.state is PoolState.OPEN:
            logger.warning("Database pool already open")
            return
        if self.state is PoolState.CLOSED:
            raise RuntimeError("Cannot reopen a closed database pool")

        pool_config = settings.get_db_pool_config()
        logger.info("Opening database pool", **pool_config)

        pool = AsyncConnectionPool(
            conninfo=settings.DATABASE_URL,
            open=False,
            configure=self._configure_connection,
            check=AsyncConnectionPool.check_connection,
            **pool_config,
        )
        try:
            await pool.open(wait=True)
            async with pool.connection() as conn:
                await self._ping(conn)
        except Exception as e:
            logger.error("Failed to open database pool", error=str(e), error_type=type(e).__name__)
            await pool.close()
            raise RuntimeError(f"Database pool initialization failed: {e}") from e

        self.pool = pool
        self.state = PoolState.OPEN
        logger.info("Database pool ready", min_size=pool.min_size, max_size=pool.max_size)

    async def _configure_connection(self, conn: psycopg.AsyncConnection) -> None:
        conn.row_factory = dict_row
        await conn.set_autocommit(True)
        await conn.execute(
            sql.SQL("SET application_name = {}").format(
                sql.Literal(f"hub-priorities-{settings.environment}")
            )
        )
        await conn.execute(
            sql.SQL("SET statement_timeout = {}").format(sql.Literal(settings.DB_STATEMENT_TIMEOUT))
        )
        await conn.execute("SET timezone = 'UTC'")
        await conn.execute("SET default_transaction_read_only = on")

    @staticmethod
    async def _ping(conn: psycopg.AsyncConnection) -> None:
        async with conn.cursor() as cur:
            await cur.execute("SELECT 1 AS ok")
            row = await cur.fetchone()
        if not row or row["ok"] != 1:
            raise RuntimeError("Database ping returned an unexpected result")

    async def close(self) -> None:
        if self.state is not PoolState.OPEN:
            return
        logger.info("Closing database pool")
        try:
            await asyncio.wait_for(self.pool.close(), timeout=10.0)
        except TimeoutError:
            logger.warning("Database pool close timed out")
        finally:
            self.state = PoolState.CLOSED
            self.pool = None

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[psycopg.AsyncConnection, None]:
        """Borrow a dict-row connection for the duration of the block."""
        if self.state is not PoolState.OPEN:
            raise RuntimeError(f"Database pool is {self.state.value}")
        async with self.pool.connection() as conn:
            yield conn

    async def health_check(self) -> dict[str, Any]:
        """Ping through the pool and report utilization."""
        if self.state is not PoolState.OPEN:
            return {"healthy": False, "service": "database_pool", "error": f"Pool is {self.state.value}"}

        started = time.time()
        try:
            async with self.connection() as conn:
                await self._ping(conn)
        except Exception as e:
            logger.error("Database ping failed", error=str(e), error_type=type(e).__name__)
            return {
                "healthy": False,
                "service": "database_pool",
                "error": f"Ping failed: {e}",
                "error_type": type(e).__name__,
            }
        ping_ms = round((time.time() - started) * 1000, 2)

        stats = self.pool.get_stats()
        size = stats.get("pool_size", 0)
        available = stats.get("pool_available", 0)
        waiting = stats.get("requests_waiting", 0)
        utilization = round((size - available) / size * 100, 2) if size else 0.0

        report: dict[str, Any] = {
            "healthy": utilization < UNHEALTHY_UTILIZATION,
            "service": "database_pool",
            "connection_time_ms": ping_ms,
            "pool_stats": {
                "pool_size": size,
                "pool_available": available,
                "pool_utilization_percent": utilization,
                "requests_waiting": waiting,
            },
        }
        warnings = []
        if utilization > WARN_UTILIZATION:
            warnings.append(f"High pool utilization: {utilization:.1f}%")
        if waiting:
            # Hub requests queue for connections in bursts of five
            warnings.append(f"{waiting} requests waiting for a connection")
        if warnings:
            report["warnings"] = warnings
        return report


db_pool = DatabasePoolManager()


async def get_db_connection():
    """Connection context manager from the shared pool."""
    return db_pool.connection()


async def db_health_check() -> dict[str, Any]:
    return await db_pool.health_check()
