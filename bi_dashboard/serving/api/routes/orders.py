"""
Orders API Endpoints

Recent orders and order status analytics.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from bi_dashboard.database.connection import get_db_dependency
from bi_dashboard.reporting import aggregations
from bi_dashboard.reporting.schemas import OrderAnalytics, RecentOrder
from bi_dashboard.serving.api.params import limit_param

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/recent", response_model=List[RecentOrder])
async def get_recent_orders(
    limit: int = Depends(limit_param("recent_orders_limit")),
    db: AsyncSession = Depends(get_db_dependency),
) -> List[RecentOrder]:
    """
    Newest orders first, with customer name and order total.

    ``limit`` caps the number of rows.
    """
    logger.info("get_recent_orders called", limit=limit)
    orders = await aggregations.get_recent_orders(db, limit)
    logger.debug("Recent orders retrieved", count=len(orders))
    return orders


@router.get("/analytics", response_model=OrderAnalytics)
async def get_order_analytics(
    limit: int = Depends(limit_param("order_analytics_limit")),
    db: AsyncSession = Depends(get_db_dependency),
) -> OrderAnalytics:
    """
    Status counts and average fulfillment days.

    ``limit`` scopes the figures to that many of the most recent orders.
    """
    logger.info("get_order_analytics called", limit=limit)
    return await aggregations.get_order_analytics(db, limit)
