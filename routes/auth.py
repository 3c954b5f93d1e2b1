"""
Admin guard, login and rate-limit dependencies.

Security model
--------------
* Mutating employee/customer routes require the ``x-admin-password`` header
  to equal ADMIN_PASSWORD.  There are no accounts or sessions: the dashboard
  resends the password with every write.
* ``POST /login`` only tells the dashboard whether a password is right, so
  it can unlock its edit controls.
* Every route counts against a per-IP global limit; ``/login`` additionally
  counts against a much stricter per-IP login limit.
"""

import secrets
from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from context import Ctx
from errors import AdminNotConfigured, AuthError
from log import get_logger
from models import LoginRequest
from ratelimit import client_ip

logger = get_logger(__name__)

router = APIRouter()

ADMIN_HEADER = "x-admin-password"


def _password_matches(given: str | None, expected: str) -> bool:
    if not given:
        return False
    return secrets.compare_digest(given.encode(), expected.encode())


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def enforce_global_limit(request: Request, ctx: Ctx) -> None:
    ctx.global_limiter.hit(client_ip(request))


def enforce_login_limit(request: Request, ctx: Ctx) -> None:
    ctx.login_limiter.hit(client_ip(request))


def require_admin(
    request: Request,
    ctx: Ctx,
    x_admin_password: Annotated[str | None, Header()] = None,
) -> None:
    if not ctx.admin_password:
        raise AdminNotConfigured()
    if not _password_matches(x_admin_password, ctx.admin_password):
        logger.warning(
            "Admin check failed for %s %s from IP %s",
            request.method,
            request.url.path,
            client_ip(request),
        )
        raise AuthError("Unauthorized: invalid admin password")


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/login", dependencies=[Depends(enforce_login_limit)])
def login(body: LoginRequest, ctx: Ctx):
    if not ctx.admin_password:
        raise AdminNotConfigured()
    if not _password_matches(body.password, ctx.admin_password):
        return JSONResponse(
            status_code=401, content={"success": False, "error": "Invalid password"}
        )
    return {"success": True}
