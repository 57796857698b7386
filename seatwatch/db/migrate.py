"""Database migration helpers."""

from __future__ import annotations

import pathlib
import sys
from typing import Iterable

from dotenv import load_dotenv
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from seatwatch.db.session import create_engine_from_env

SCHEMA_PATH = pathlib.Path(__file__).with_name("schema.sql")


def run_migrations(engine: Engine) -> None:
    """Apply schema.sql to the database."""
    statements = _load_statements(SCHEMA_PATH.read_text())
    with engine.begin() as conn:
        for stmt in statements:
            conn.execute(text(stmt))


def _load_statements(sql: str) -> Iterable[str]:
    """Split schema.sql on trailing semicolons outside $$-quoted bodies."""
    buffer: list[str] = []
    in_body = False
    for line in sql.splitlines():
        stripped = line.strip()
        if not stripped or (not in_body and stripped.startswith("--")):
            continue
        buffer.append(line)
        if stripped.count("$$") % 2:
            in_body = not in_body
        if stripped.endswith(";") and not in_body:
            yield "\n".join(buffer)
            buffer.clear()
    if buffer:
        yield "\n".join(buffer)


def main() -> None:
    load_dotenv()
    engine = create_engine_from_env()
    try:
        run_migrations(engine)
    except SQLAlchemyError as exc:
        print(f"Migration failed: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
