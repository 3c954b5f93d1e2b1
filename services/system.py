"""
System status and info panel.

DB queries for the dashboard's connection badge and "system status" card.
The info card merges the signed-on user's profile with their most recent
spooled files; both catalog queries run at the same time on separate pooled
connections.  BIGINT columns (storage counters) come back as strings.
"""

from concurrent.futures import ThreadPoolExecutor

from errors import QueryError
from services.rows import json_row, json_rows

STATUS_SQL = "SELECT 1 FROM SYSIBM.SYSDUMMY1"

USER_INFO_SQL = """
    SELECT AUTHORIZATION_NAME, STATUS, TEXT_DESCRIPTION, STORAGE_USED,
           MAXIMUM_ALLOWED_STORAGE, PREVIOUS_SIGNON, SIGN_ON_ATTEMPTS_NOT_VALID
    FROM QSYS2.USER_INFO
    WHERE AUTHORIZATION_NAME = ?
"""

SPOOL_SQL = """
    SELECT SPOOLED_FILE_NAME, JOB_NAME, FILE_NUMBER, CREATE_TIMESTAMP,
           STATUS, TOTAL_PAGES
    FROM QSYS2.OUTPUT_QUEUE_ENTRIES_BASIC
    WHERE USER_NAME = ?
    ORDER BY CREATE_TIMESTAMP DESC
    FETCH FIRST 5 ROWS ONLY
"""


def system_status(db) -> bool:
    try:
        db.fetch_all(STATUS_SQL)
    except QueryError:
        return False
    return True


def system_info(db, user: str) -> dict:
    with ThreadPoolExecutor(max_workers=2) as pool:
        user_future = pool.submit(db.fetch_all, USER_INFO_SQL, (user,), bigint_as_str=True)
        spool_future = pool.submit(db.fetch_all, SPOOL_SQL, (user,), bigint_as_str=True)
        user_rows = user_future.result()
        spool_rows = spool_future.result()

    return {
        "user": json_row(user_rows[0]) if user_rows else {},
        "spool": json_rows(spool_rows),
    }
