#!/usr/bin/env python3
# backend/init_db.py
"""
Create the journal tables straight from the ORM models.

Handy for a throwaway SQLite journal; managed databases go through
`alembic upgrade head` instead. Works from the repo root or from backend/:
    python backend/init_db.py
"""
import sys
from pathlib import Path

# journal/ lives next to this file
sys.path.insert(0, str(Path(__file__).resolve().parent))

from journal.database import engine
from journal.models import Base


def init_db() -> None:
    tables = ", ".join(sorted(Base.metadata.tables))
    print(f"Creating tables on {engine.url.render_as_string(hide_password=True)}: {tables}")
    Base.metadata.create_all(bind=engine)
    print("Done.")


if __name__ == "__main__":
    init_db()
