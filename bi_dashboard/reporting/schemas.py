"""
Reporting Shapes

Flat records returned by the aggregation layer. Attribute names are
snake_case; JSON keys are camelCase (``MSRP`` keeps the store's spelling).
Every numeric field defaults to zero, never null.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportRecord(BaseModel):
    """Base class for reporting records: camelCase on the wire"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# DASHBOARD
# =============================================================================

class DashboardSummary(ReportRecord):
    """Headline counts and lifetime revenue"""
    total_customers: int = 0
    total_orders: int = 0
    total_revenue: float = 0.0
    total_products: int = 0


# =============================================================================
# ORDERS
# =============================================================================

class RecentOrder(ReportRecord):
    """Order header with customer name and recomputed total"""
    order_number: int
    order_date: date
    required_date: date
    shipped_date: Optional[date] = None
    status: str
    comments: Optional[str] = None
    customer_name: str
    total: float = 0.0


class OrderAnalytics(ReportRecord):
    """Status counts and fulfillment time over the most recent orders"""
    total_orders: int = 0
    shipped_orders: int = 0
    pending_orders: int = 0
    cancelled_orders: int = 0
    avg_fulfillment_time: float = 0.0


# =============================================================================
# CUSTOMERS
# =============================================================================

class CustomerListing(ReportRecord):
    customer_number: int
    customer_name: str
    city: str
    country: str
    order_count: int = 0
    total_payment: float = 0.0


class TopCustomer(ReportRecord):
    customer_number: int
    customer_name: str
    country: str
    total_spent: float = 0.0


# =============================================================================
# PRODUCTS AND INVENTORY
# =============================================================================

class ProductListing(ReportRecord):
    """Product with the number of distinct recent orders referencing it"""
    product_code: str
    product_name: str
    product_line: str
    quantity_in_stock: int
    buy_price: float
    msrp: float = Field(alias="MSRP")
    order_count: int = 0


class ProductLineSummary(ReportRecord):
    product_line: str
    text_description: Optional[str] = None
    product_count: int = 0
    total_stock: int = 0


class InventoryLine(ReportRecord):
    """Stock and inventory value per product line"""
    product_line: str
    product_count: int = 0
    total_quantity: int = 0
    avg_quantity: float = 0.0
    total_value: float = 0.0


class ProductPerformance(ReportRecord):
    product_code: str
    product_name: str
    product_line: str
    times_sold: int = 0
    total_quantity: int = 0
    total_revenue: float = 0.0


# =============================================================================
# REVENUE
# =============================================================================

class DailyRevenue(ReportRecord):
    revenue_date: date = Field(alias="date")
    revenue: float = 0.0


class MonthlyRevenue(ReportRecord):
    month: str
    revenue: float = 0.0


# =============================================================================
# EMPLOYEES AND OFFICES
# =============================================================================

class EmployeeListing(ReportRecord):
    employee_number: int
    first_name: str
    last_name: str
    job_title: str
    reports_to: Optional[int] = None
    office_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    customers_managed: int = 0


class EmployeePerformance(ReportRecord):
    """Revenue attributed to an employee through their assigned customers"""
    employee_number: int
    name: str
    job_title: str
    customers_count: int = 0
    orders_count: int = 0
    total_revenue: float = 0.0


class OfficeListing(ReportRecord):
    office_code: str
    city: str
    country: str
    postal_code: str
    phone: str
    employee_count: int = 0
    customer_count: int = 0


class TopOffice(ReportRecord):
    office_code: str
    city: str
    country: str
    customers: int = 0
    revenue: float = 0.0


# =============================================================================
# SALES BY REGION
# =============================================================================

class CountrySales(ReportRecord):
    """Sales grouped by the customer's country"""
    country: str
    customers: int = 0
    orders: int = 0
    revenue: float = 0.0


class RegionSales(ReportRecord):
    """Sales grouped by the country of the sales rep's office"""
    region: str
    customers: int = 0
    orders: int = 0
    revenue: float = 0.0


class DashboardOverview(ReportRecord):
    """Composite overview payload"""
    total_employees: int = 0
    total_offices: int = 0
    avg_order_value: float = 0.0
    top_offices: List[TopOffice] = []
    region_sales: List[RegionSales] = []
    product_performance: List[ProductPerformance] = []
    employee_performance: List[EmployeePerformance] = []
