"""
Customer CRUD over QCUSTCDT.  Same access rules as the employee routes.
"""

from fastapi import APIRouter, Depends

from context import Ctx
from log import get_logger
from models import Customer, CustomerFields
from routes.auth import require_admin
from services.records import CUSTOMERS

logger = get_logger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("")
def list_customers(ctx: Ctx):
    return CUSTOMERS.list_all(ctx.db, ctx.library)


@router.get("/{cusnum}")
def get_customer(cusnum: int, ctx: Ctx):
    return CUSTOMERS.get(ctx.db, ctx.library, cusnum)


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
def create_customer(customer: Customer, ctx: Ctx):
    CUSTOMERS.create(ctx.db, ctx.library, customer.model_dump())
    logger.info("Customer %s created", customer.CUSNUM)
    return {"success": True, "message": "Customer created"}


@router.put("/{cusnum}", dependencies=[Depends(require_admin)])
def update_customer(cusnum: int, fields: CustomerFields, ctx: Ctx):
    CUSTOMERS.update(ctx.db, ctx.library, cusnum, fields.model_dump())
    logger.info("Customer %s updated", cusnum)
    return {"success": True, "message": "Customer updated"}


@router.delete("/{cusnum}", dependencies=[Depends(require_admin)])
def delete_customer(cusnum: int, ctx: Ctx):
    CUSTOMERS.delete(ctx.db, ctx.library, cusnum)
    logger.info("Customer %s deleted", cusnum)
    return {"success": True, "message": "Customer deleted"}
