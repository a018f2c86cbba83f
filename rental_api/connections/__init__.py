"""Database connections."""

from rental_api.connections.postgres import (
    PostgresConnection,
    close_postgres,
    get_postgres,
    store_connection,
    store_transaction,
)

__all__ = [
    "PostgresConnection",
    "get_postgres",
    "close_postgres",
    "store_connection",
    "store_transaction",
]
