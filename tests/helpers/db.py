"""DB helpers for tests: bootstrap a temporary SQLite DB and seed profiles."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from ledger_db import Base
from ledger_db.client import get_engine, session_scope

from chapter_ledger import persistence
from chapter_ledger.models import CommitteeForm
from chapter_ledger.roles import Role, UserProfile

TREASURER_EMAIL = "treasurer@chapter.org"
MEMBER_EMAIL = "member@chapter.org"


def bootstrap_sqlite_db(db_file: Path) -> str:
    """Create a SQLite database file, initialize schema, and return the URL.

    Using a file-backed SQLite DB ensures multiple SQLAlchemy connections share
    the same state (in-memory DBs are per-connection by default).
    """

    url = f"sqlite+pysqlite:///{db_file}"
    db_file.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=get_engine(database_url=url))
    return url


def seed_profiles(database_url: str) -> tuple[UserProfile, UserProfile]:
    """Insert a treasurer and a member; returns ``(treasurer, member)``."""

    with session_scope(database_url=database_url) as session:
        treasurer = persistence.add_profile(
            session, email=TREASURER_EMAIL, full_name="Tess Treasurer", role=Role.TREASURER
        )
        member = persistence.add_profile(
            session, email=MEMBER_EMAIL, full_name="Max Member", role=Role.MEMBER
        )
    return treasurer, member


def seed_committee(database_url: str, name: str, budget: str) -> str:
    """Insert a committee and return its id."""

    with session_scope(database_url=database_url) as session:
        created = persistence.add_committee(
            session, CommitteeForm(name=name, annual_budget=Decimal(budget))
        )
    return created.id
