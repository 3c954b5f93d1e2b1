"""
Generic table fetch.

Library and table names cannot be bound as statement parameters, so they are
checked against a strict allow pattern before they are ever put into SQL.
"""

import re

from errors import ValidationError
from log import get_logger
from services.rows import json_rows

logger = get_logger(__name__)

IDENTIFIER_RE = re.compile(r"[A-Z0-9]+", re.IGNORECASE | re.ASCII)
MAX_ROWS = 100


def validate_identifier(name: str) -> str:
    """Return ``name`` upper-cased, or raise ValidationError."""
    if not IDENTIFIER_RE.fullmatch(name or ""):
        logger.warning("Rejected identifier %r", name)
        raise ValidationError("Invalid library or table name")
    return name.upper()


def list_rows(db, library: str, table: str) -> list[dict]:
    library = validate_identifier(library)
    table = validate_identifier(table)
    return json_rows(
        db.fetch_all(f"SELECT * FROM {library}.{table} FETCH FIRST {MAX_ROWS} ROWS ONLY")
    )
