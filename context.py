"""
Application context handed to route handlers.

Holds the data source and the per-process mutable state (rate limiter
counters) so handlers never reach for module globals.  ``app.py`` stores one
instance on ``app.state.context``; tests build their own around a fake
database.
"""

from dataclasses import dataclass, field
from typing import Annotated

from fastapi import Depends, Request

import config
from db import Database
from ratelimit import RateLimiter, global_limiter, login_limiter
from services.tables import validate_identifier


@dataclass
class AppContext:
    db: Database
    library: str = config.DB_LIBRARY
    db_user: str = config.DB_USER
    admin_password: str | None = config.ADMIN_PASSWORD
    global_limiter: RateLimiter = field(default_factory=global_limiter)
    login_limiter: RateLimiter = field(default_factory=login_limiter)

    def __post_init__(self):
        self.library = validate_identifier(self.library)
        self.db_user = self.db_user.upper()


def get_context(request: Request) -> AppContext:
    return request.app.state.context


Ctx = Annotated[AppContext, Depends(get_context)]
