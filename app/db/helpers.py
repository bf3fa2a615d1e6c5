"""
Read helper for the hub candidate queries.

Every query runs on a pooled dict-row connection; psycopg failures are
wrapped in DatabaseError carrying the repository operation that failed.
"""

from typing import Any

import psycopg

from app.db.pool import get_db_connection
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class DatabaseError(Exception):
    """A record store query failed."""

    def __init__(self, message: str, operation: str = "unknown", recoverable: bool = True):
        super().__init__(message)
        self.operation = operation
        self.recoverable = recoverable


def _is_recoverable(error: psycopg.Error) -> bool:
    # Connection drops and timeouts can succeed on the next request; bad SQL will not
    return isinstance(error, psycopg.OperationalError)


async def fetch_all(
    query: str,
    params: tuple = (),
    *,
    operation: str = "fetch_all",
) -> list[dict[str, Any]]:
    """
    Run a read query on a pooled connection and return every row.

    Args:
        query: SQL with %s placeholders
        params: Query parameters
        operation: Repository operation name used in logs and errors

    Returns:
        Rows as dicts (the pool configures dict_row)
    """
    try:
        async with await get_db_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                rows = await cur.fetchall()
    except psycopg.Error as e:
        recoverable = _is_recoverable(e)
        logger.error(
            "Candidate query failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
            recoverable=recoverable,
        )
        raise DatabaseError(
            f"{operation} failed: {e}", operation=operation, recoverable=recoverable
        ) from e

    logger.debug("Candidate query completed", operation=operation, row_count=len(rows))
    return rows

