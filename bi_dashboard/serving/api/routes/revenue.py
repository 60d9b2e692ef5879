"""
Revenue API Endpoints

Payment totals per day and per month.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from bi_dashboard.config import get_settings
from bi_dashboard.database.connection import get_db_dependency
from bi_dashboard.reporting import aggregations
from bi_dashboard.reporting.schemas import DailyRevenue, MonthlyRevenue
from bi_dashboard.serving.api.params import limit_param

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/daily", response_model=List[DailyRevenue])
async def get_daily_revenue(
    limit: int = Depends(limit_param("daily_revenue_limit")),
    db: AsyncSession = Depends(get_db_dependency),
) -> List[DailyRevenue]:
    """Revenue for the ``limit`` most recent payment days, oldest first."""
    logger.info("get_daily_revenue called", limit=limit)
    data = await aggregations.get_daily_revenue(db, limit)
    logger.info("Daily revenue query completed", data_points=len(data))
    return data


@router.get("/monthly", response_model=List[MonthlyRevenue])
async def get_monthly_revenue(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[MonthlyRevenue]:
    """Revenue per month for the most recent months, newest first."""
    return await aggregations.get_monthly_revenue(db, get_settings().reporting.monthly_revenue_limit)
