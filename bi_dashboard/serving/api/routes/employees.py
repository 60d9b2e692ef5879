"""
Employees API Endpoints
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bi_dashboard.database.connection import get_db_dependency
from bi_dashboard.reporting import aggregations
from bi_dashboard.reporting.schemas import EmployeeListing, EmployeePerformance

router = APIRouter()


@router.get("", response_model=List[EmployeeListing])
async def list_employees(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[EmployeeListing]:
    """Employees with office location and number of customers managed."""
    return await aggregations.get_employees(db)


@router.get("/performance", response_model=List[EmployeePerformance])
async def get_employee_performance(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[EmployeePerformance]:
    """Customers, orders and revenue per sales rep, highest revenue first."""
    return await aggregations.get_employee_performance(db)
