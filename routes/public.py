"""
Public routes: liveness, DB status check, system info and the generic table fetch.

No auth.  Query work is delegated to the services layer.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from context import Ctx
from services.system import system_info, system_status
from services.tables import list_rows

router = APIRouter()


# ---------------------------------------------------------------------------
# Health / status
# ---------------------------------------------------------------------------


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/status")
def status(ctx: Ctx):
    if system_status(ctx.db):
        return {"connected": True}
    return JSONResponse(status_code=503, content={"connected": False})


@router.get("/system-info")
def api_system_info(ctx: Ctx):
    return system_info(ctx.db, ctx.db_user)


# ---------------------------------------------------------------------------
# Generic table fetch
# ---------------------------------------------------------------------------


@router.get("/tables/{library}/{table}")
def api_table_rows(library: str, table: str, ctx: Ctx):
    return list_rows(ctx.db, library, table)
