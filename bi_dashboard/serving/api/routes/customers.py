"""
Customers API Endpoints

Customer listing and top spenders.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from bi_dashboard.config import get_settings
from bi_dashboard.database.connection import get_db_dependency
from bi_dashboard.reporting import aggregations
from bi_dashboard.reporting.schemas import CustomerListing, TopCustomer

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("", response_model=List[CustomerListing])
async def list_customers(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[CustomerListing]:
    """Customers by name with order count and total payments (fixed page)."""
    page_size = get_settings().reporting.customers_page_size
    customers = await aggregations.get_customers(db, page_size)
    logger.info("Customers retrieved successfully", count=len(customers))
    return customers


@router.get("/top", response_model=List[TopCustomer])
async def get_top_customers(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[TopCustomer]:
    """Top customers by total payments."""
    return await aggregations.get_top_customers(db, get_settings().reporting.top_customers)
