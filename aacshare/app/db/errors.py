# aacshare/app/db/errors.py
"""
Classify IntegrityError by the constraint that failed.

PostgreSQL (asyncpg) exposes the SQLSTATE on the wrapped driver error;
SQLite only reports it in the message text.
"""
from typing import Optional

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def violated_constraint(exc: IntegrityError) -> Optional[str]:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return code

    text = str(orig).upper()
    if "UNIQUE CONSTRAINT" in text:
        return UNIQUE_VIOLATION
    if "FOREIGN KEY CONSTRAINT" in text:
        return FOREIGN_KEY_VIOLATION
    return None
