"""List recent scrape jobs, newest first."""

from __future__ import annotations

import argparse

from dotenv import load_dotenv
from sqlalchemy import text

from seatwatch.db.session import create_engine_from_env


def main(limit: int, status: str | None) -> None:
    load_dotenv()
    engine = create_engine_from_env()
    query = """
        SELECT j.id, e.event_name, j.status, j.started_at, j.completed_at,
               j.tickets_scraped, j.error_message
        FROM scraper_jobs j
        JOIN events e ON e.id = j.event_id
        WHERE 1=1
    """
    params: dict[str, object] = {"limit": limit}
    if status:
        query += " AND j.status = :status"
        params["status"] = status
    query += " ORDER BY j.started_at DESC LIMIT :limit"
    with engine.connect() as conn:
        rows = conn.execute(text(query), params).mappings().all()
    for row in rows:
        detail = row["error_message"] if row["status"] == "failed" else row["tickets_scraped"]
        print(f"{row['id']:>6}  {row['status']:<9}  {row['started_at']}  {row['event_name']}  {detail or ''}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--limit", type=int, default=20)
    parser.add_argument("--status", choices=["running", "completed", "failed"])
    args = parser.parse_args()
    main(args.limit, args.status)
