"""
Products API Endpoints

Product popularity, product lines and inventory value.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from bi_dashboard.config import get_settings
from bi_dashboard.database.connection import get_db_dependency
from bi_dashboard.reporting import aggregations
from bi_dashboard.reporting.schemas import (
    InventoryLine,
    ProductLineSummary,
    ProductListing,
)
from bi_dashboard.serving.api.params import limit_param

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/products", response_model=List[ProductListing])
async def list_products(
    limit: int = Depends(limit_param("products_limit")),
    db: AsyncSession = Depends(get_db_dependency),
) -> List[ProductListing]:
    """
    Most ordered products.

    ``limit`` is a recency window, not a row cap: only orders on or after the
    date of the ``limit``-th most recent order are counted. The listing itself
    is capped at a fixed page size.
    """
    logger.info("list_products called", limit=limit)
    page_size = get_settings().reporting.products_page_size
    return await aggregations.get_products(db, limit, page_size=page_size)


@router.get("/product-lines", response_model=List[ProductLineSummary])
async def list_product_lines(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[ProductLineSummary]:
    """Product lines with product count and total stock."""
    return await aggregations.get_product_lines(db)


@router.get("/inventory/analysis", response_model=List[InventoryLine])
async def get_inventory_analysis(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[InventoryLine]:
    """Stock and inventory value per product line, most valuable first."""
    lines = await aggregations.get_inventory_analysis(db)
    logger.debug("Inventory analysis computed", product_lines=len(lines))
    return lines
