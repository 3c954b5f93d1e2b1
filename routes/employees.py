"""
Employee CRUD over EMPPF1.  Reads are open; writes need the admin password.
"""

from fastapi import APIRouter, Depends

from context import Ctx
from log import get_logger
from models import Employee, EmployeeFields
from routes.auth import require_admin
from services.records import EMPLOYEES

logger = get_logger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("")
def list_employees(ctx: Ctx):
    return EMPLOYEES.list_all(ctx.db, ctx.library)


@router.get("/{empid}")
def get_employee(empid: int, ctx: Ctx):
    return EMPLOYEES.get(ctx.db, ctx.library, empid)


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
def create_employee(employee: Employee, ctx: Ctx):
    EMPLOYEES.create(ctx.db, ctx.library, employee.model_dump())
    logger.info("Employee %s created", employee.EMPID)
    return {"success": True, "message": "Employee created"}


@router.put("/{empid}", dependencies=[Depends(require_admin)])
def update_employee(empid: int, fields: EmployeeFields, ctx: Ctx):
    EMPLOYEES.update(ctx.db, ctx.library, empid, fields.model_dump())
    logger.info("Employee %s updated", empid)
    return {"success": True, "message": "Employee updated"}


@router.delete("/{empid}", dependencies=[Depends(require_admin)])
def delete_employee(empid: int, ctx: Ctx):
    EMPLOYEES.delete(ctx.db, ctx.library, empid)
    logger.info("Employee %s deleted", empid)
    return {"success": True, "message": "Employee deleted"}
