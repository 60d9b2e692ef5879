"""
Dashboard API Endpoints

Headline summary and the composite overview payload.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from bi_dashboard.config import get_settings
from bi_dashboard.database.connection import get_db_dependency
from bi_dashboard.reporting import aggregations
from bi_dashboard.reporting.schemas import DashboardOverview, DashboardSummary

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/summary", response_model=DashboardSummary)
async def get_dashboard_summary(
    db: AsyncSession = Depends(get_db_dependency),
) -> DashboardSummary:
    """Total customers, orders, products and payments."""
    summary = await aggregations.get_dashboard_summary(db)
    logger.info(
        "Dashboard summary returned",
        customers=summary.total_customers,
        orders=summary.total_orders,
        revenue=summary.total_revenue,
    )
    return summary


@router.get("/overview", response_model=DashboardOverview)
async def get_dashboard_overview(
    db: AsyncSession = Depends(get_db_dependency),
) -> DashboardOverview:
    """
    Composite overview.

    Bundles organisation counts, average order value, top offices, sales by
    office country, top products and top employees.
    """
    reporting = get_settings().reporting
    return await aggregations.get_dashboard_overview(
        db,
        top_offices=reporting.top_offices,
        top_products=reporting.top_products,
        top_employees=reporting.top_employees,
    )
