#!/usr/bin/env python3
"""
Create the database schema.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --schema sql/schema.sql
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from rental_api.connections.postgres import close_postgres, get_postgres

DEFAULT_SCHEMA = Path(__file__).parent.parent / "sql" / "schema.sql"


async def main(schema_path: Path) -> None:
    """Apply the schema file."""
    sql = schema_path.read_text(encoding="utf-8")

    postgres = await get_postgres()
    try:
        async with postgres.pool.acquire() as conn:
            await conn.execute(sql)
        logger.info(f"Applied schema from {schema_path}")
    finally:
        await close_postgres()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the rental database schema")
    parser.add_argument(
        "--schema",
        type=Path,
        default=DEFAULT_SCHEMA,
        help="Path to the schema SQL file",
    )
    args = parser.parse_args()

    asyncio.run(main(args.schema))
