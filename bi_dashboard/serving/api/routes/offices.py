"""
Offices and Sales Region API Endpoints
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from bi_dashboard.database.connection import get_db_dependency
from bi_dashboard.reporting import aggregations
from bi_dashboard.reporting.schemas import CountrySales, OfficeListing

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/offices", response_model=List[OfficeListing])
async def list_offices(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[OfficeListing]:
    """Offices by country and city with employee and customer counts."""
    return await aggregations.get_offices(db)


@router.get("/sales/by-region", response_model=List[CountrySales])
async def get_sales_by_region(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[CountrySales]:
    """Customers, orders and revenue per customer country."""
    sales = await aggregations.get_sales_by_region(db)
    logger.debug("Sales by region computed", countries=len(sales))
    return sales
