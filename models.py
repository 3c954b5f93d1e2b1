"""
Request bodies.

Field names match the IBM i column names so the dashboard can post rows back
exactly as it received them.  Unknown fields are ignored.  Every column is
required: PUT replaces the whole row, so a missing field is a 422 rather than
a silent blank.
"""

from decimal import Decimal

from pydantic import BaseModel


class LoginRequest(BaseModel):
    password: str = ""


class EmployeeFields(BaseModel):
    EMPNAME: str
    EMPCITY: str
    EMPSTATE: str


class Employee(EmployeeFields):
    EMPID: int


class CustomerFields(BaseModel):
    LSTNAM: str
    INIT: str
    STREET: str
    CITY: str
    STATE: str
    ZIPCOD: int
    CDTLMT: int
    CHGCOD: int
    BALDUE: Decimal
    CDTDUE: Decimal


class Customer(CustomerFields):
    CUSNUM: int
