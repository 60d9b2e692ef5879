"""
Aggregation Query Layer

Named read-only reporting queries over the classicmodels store. Each function
takes an AsyncSession plus its scope parameter and returns flat records in a
deterministic order.

Fan-out rules followed throughout:
- An order total is summed over its own details before it meets any other
  table.
- Payments and orders are aggregated per customer on separate paths and only
  then joined (``_customer_facts``). Every roll-up above customer level
  (employee, office, country) sums those one-row-per-customer facts, so no
  payment is ever counted once per order.
"""

from typing import List, Optional

import structlog
from sqlalchemy import Date, case, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bi_dashboard.database.functions import days_between
from bi_dashboard.database.models import (
    Customer,
    Employee,
    Office,
    Order,
    OrderDetail,
    OrderStatus,
    Payment,
    Product,
    ProductLine,
)
from bi_dashboard.reporting.schemas import (
    CountrySales,
    CustomerListing,
    DailyRevenue,
    DashboardOverview,
    DashboardSummary,
    EmployeeListing,
    EmployeePerformance,
    InventoryLine,
    MonthlyRevenue,
    OfficeListing,
    OrderAnalytics,
    ProductLineSummary,
    ProductListing,
    ProductPerformance,
    RecentOrder,
    RegionSales,
    TopCustomer,
    TopOffice,
)

logger = structlog.get_logger(__name__)


# =============================================================================
# SHARED SUBQUERIES
# =============================================================================

def _line_amount():
    return OrderDetail.quantity_ordered * OrderDetail.price_each


def _order_totals():
    """One row per order: Σ quantity × price, 0 for orders without details."""
    return (
        select(
            Order.order_number.label("order_number"),
            func.coalesce(func.sum(_line_amount()), 0).label("total"),
        )
        .outerjoin(OrderDetail, OrderDetail.order_number == Order.order_number)
        .group_by(Order.order_number)
        .subquery("order_totals")
    )


def _order_counts_by_customer():
    return (
        select(
            Order.customer_number.label("customer_number"),
            func.count(func.distinct(Order.order_number)).label("order_count"),
        )
        .group_by(Order.customer_number)
        .subquery("customer_orders")
    )


def _payments_by_customer():
    return (
        select(
            Payment.customer_number.label("customer_number"),
            func.sum(Payment.amount).label("total_payment"),
        )
        .group_by(Payment.customer_number)
        .subquery("customer_payments")
    )


def _customer_facts():
    """One row per customer with order count and payment total."""
    orders = _order_counts_by_customer()
    payments = _payments_by_customer()
    return (
        select(
            Customer.customer_number.label("customer_number"),
            Customer.country.label("country"),
            Customer.sales_rep_employee_number.label("employee_number"),
            func.coalesce(orders.c.order_count, 0).label("order_count"),
            func.coalesce(payments.c.total_payment, 0).label("total_payment"),
        )
        .outerjoin(orders, orders.c.customer_number == Customer.customer_number)
        .outerjoin(payments, payments.c.customer_number == Customer.customer_number)
        .subquery("customer_facts")
    )


def _records(model, rows) -> list:
    return [model.model_validate(dict(row._mapping)) for row in rows]


# =============================================================================
# DASHBOARD
# =============================================================================

async def get_dashboard_summary(db: AsyncSession) -> DashboardSummary:
    """Counts of customers, orders and products plus total payments."""
    result = await db.execute(
        select(
            select(func.count()).select_from(Customer).scalar_subquery().label("total_customers"),
            select(func.count()).select_from(Order).scalar_subquery().label("total_orders"),
            select(func.coalesce(func.sum(Payment.amount), 0)).scalar_subquery().label("total_revenue"),
            select(func.count()).select_from(Product).scalar_subquery().label("total_products"),
        )
    )
    row = result.one()

    logger.debug("Dashboard summary computed", orders=row.total_orders, customers=row.total_customers)

    return DashboardSummary(
        total_customers=row.total_customers or 0,
        total_orders=row.total_orders or 0,
        total_revenue=float(row.total_revenue or 0),
        total_products=row.total_products or 0,
    )


# =============================================================================
# ORDERS
# =============================================================================

async def get_recent_orders(db: AsyncSession, limit: int) -> List[RecentOrder]:
    """
    Most recent orders, newest first, with customer name and total.

    The total is a correlated aggregate over the order's own details.
    """
    order_total = (
        select(func.coalesce(func.sum(_line_amount()), 0))
        .where(OrderDetail.order_number == Order.order_number)
        .correlate(Order)
        .scalar_subquery()
    )

    result = await db.execute(
        select(
            Order.order_number.label("order_number"),
            Order.order_date.label("order_date"),
            Order.required_date.label("required_date"),
            Order.shipped_date.label("shipped_date"),
            Order.status.label("status"),
            Order.comments.label("comments"),
            Customer.customer_name.label("customer_name"),
            order_total.label("total"),
        )
        .join(Customer, Customer.customer_number == Order.customer_number)
        .order_by(Order.order_date.desc(), Order.order_number.desc())
        .limit(limit)
    )
    return _records(RecentOrder, result.all())


async def get_order_analytics(db: AsyncSession, limit: int) -> OrderAnalytics:
    """
    Status counts and average fulfillment days over the ``limit`` newest orders.

    Orders without a shipped date are left out of the average entirely.
    """
    scoped = (
        select(
            Order.order_number.label("order_number"),
            Order.status.label("status"),
            Order.order_date.label("order_date"),
            Order.shipped_date.label("shipped_date"),
        )
        .order_by(Order.order_date.desc(), Order.order_number.desc())
        .limit(limit)
        .subquery("scoped_orders")
    )

    def status_count(status: OrderStatus):
        return func.coalesce(func.sum(case((scoped.c.status == status.value, 1), else_=0)), 0)

    result = await db.execute(
        select(
            func.count(scoped.c.order_number).label("total_orders"),
            status_count(OrderStatus.SHIPPED).label("shipped_orders"),
            status_count(OrderStatus.PENDING).label("pending_orders"),
            status_count(OrderStatus.CANCELLED).label("cancelled_orders"),
            func.avg(days_between(scoped.c.order_date, scoped.c.shipped_date)).label("avg_days"),
        )
    )
    row = result.one()

    return OrderAnalytics(
        total_orders=row.total_orders or 0,
        shipped_orders=row.shipped_orders or 0,
        pending_orders=row.pending_orders or 0,
        cancelled_orders=row.cancelled_orders or 0,
        avg_fulfillment_time=round(float(row.avg_days), 2) if row.avg_days is not None else 0.0,
    )


async def get_average_order_value(db: AsyncSession) -> float:
    """Mean of per-order totals, rounded to cents."""
    totals = _order_totals()
    value = (await db.execute(select(func.avg(totals.c.total)))).scalar()
    return round(float(value), 2) if value is not None else 0.0


# =============================================================================
# CUSTOMERS
# =============================================================================

async def get_customers(db: AsyncSession, limit: int = 20) -> List[CustomerListing]:
    """Customers by name with distinct order count and lifetime payments."""
    facts = _customer_facts()
    result = await db.execute(
        select(
            Customer.customer_number.label("customer_number"),
            Customer.customer_name.label("customer_name"),
            Customer.city.label("city"),
            Customer.country.label("country"),
            facts.c.order_count.label("order_count"),
            facts.c.total_payment.label("total_payment"),
        )
        .join(facts, facts.c.customer_number == Customer.customer_number)
        .order_by(Customer.customer_name, Customer.customer_number)
        .limit(limit)
    )
    return _records(CustomerListing, result.all())


async def get_top_customers(db: AsyncSession, limit: int = 10) -> List[TopCustomer]:
    facts = _customer_facts()
    result = await db.execute(
        select(
            Customer.customer_number.label("customer_number"),
            Customer.customer_name.label("customer_name"),
            Customer.country.label("country"),
            facts.c.total_payment.label("total_spent"),
        )
        .join(facts, facts.c.customer_number == Customer.customer_number)
        .order_by(facts.c.total_payment.desc(), Customer.customer_number)
        .limit(limit)
    )
    return _records(TopCustomer, result.all())


# =============================================================================
# PRODUCTS AND INVENTORY
# =============================================================================

async def get_order_cutoff_date(db: AsyncSession, depth: int):
    """
    Order date of the ``depth``-th most recent order.

    Falls back to the oldest order when fewer exist; None without orders.
    """
    recent = (
        select(Order.order_date.label("order_date"))
        .order_by(Order.order_date.desc())
        .limit(depth)
        .subquery("recent_orders")
    )
    return (await db.execute(select(func.min(recent.c.order_date)))).scalar()


async def get_products(
    db: AsyncSession,
    limit: int,
    page_size: int = 20,
) -> List[ProductListing]:
    """
    Most ordered products within a recency window.

    ``limit`` picks the window: only orders placed on or after the date of
    the ``limit``-th most recent order are counted. Products with no order in
    the window stay listed with an order count of zero.
    """
    cutoff = await get_order_cutoff_date(db, limit)
    logger.debug("Product order cutoff resolved", depth=limit, cutoff=str(cutoff))

    ordered = (
        select(
            OrderDetail.product_code.label("product_code"),
            func.count(func.distinct(OrderDetail.order_number)).label("order_count"),
        )
        .join(Order, Order.order_number == OrderDetail.order_number)
    )
    if cutoff is not None:
        ordered = ordered.where(Order.order_date >= cutoff)
    ordered = ordered.group_by(OrderDetail.product_code).subquery("product_orders")

    order_count = func.coalesce(ordered.c.order_count, 0)
    result = await db.execute(
        select(
            Product.product_code.label("product_code"),
            Product.product_name.label("product_name"),
            Product.product_line.label("product_line"),
            Product.quantity_in_stock.label("quantity_in_stock"),
            Product.buy_price.label("buy_price"),
            Product.msrp.label("msrp"),
            order_count.label("order_count"),
        )
        .outerjoin(ordered, ordered.c.product_code == Product.product_code)
        .order_by(order_count.desc(), Product.product_code)
        .limit(page_size)
    )
    return _records(ProductListing, result.all())


async def get_product_lines(db: AsyncSession) -> List[ProductLineSummary]:
    """Every product line, including empty ones, with product and stock totals."""
    result = await db.execute(
        select(
            ProductLine.product_line.label("product_line"),
            ProductLine.text_description.label("text_description"),
            func.count(Product.product_code).label("product_count"),
            func.coalesce(func.sum(Product.quantity_in_stock), 0).label("total_stock"),
        )
        .outerjoin(Product, Product.product_line == ProductLine.product_line)
        .group_by(ProductLine.product_line, ProductLine.text_description)
        .order_by(ProductLine.product_line)
    )
    return _records(ProductLineSummary, result.all())


async def get_inventory_analysis(db: AsyncSession) -> List[InventoryLine]:
    """Per product line stock totals and inventory value (stock × buy price)."""
    total_value = func.coalesce(func.sum(Product.quantity_in_stock * Product.buy_price), 0)
    result = await db.execute(
        select(
            Product.product_line.label("product_line"),
            func.count(Product.product_code).label("product_count"),
            func.coalesce(func.sum(Product.quantity_in_stock), 0).label("total_quantity"),
            func.coalesce(func.avg(Product.quantity_in_stock), 0).label("avg_quantity"),
            total_value.label("total_value"),
        )
        .group_by(Product.product_line)
        .order_by(total_value.desc(), Product.product_line)
    )
    return _records(InventoryLine, result.all())


async def get_product_performance(db: AsyncSession, limit: int = 10) -> List[ProductPerformance]:
    """Best selling products by revenue over all order lines."""
    total_revenue = func.coalesce(func.sum(_line_amount()), 0)
    result = await db.execute(
        select(
            Product.product_code.label("product_code"),
            Product.product_name.label("product_name"),
            Product.product_line.label("product_line"),
            func.count(OrderDetail.order_number).label("times_sold"),
            func.coalesce(func.sum(OrderDetail.quantity_ordered), 0).label("total_quantity"),
            total_revenue.label("total_revenue"),
        )
        .outerjoin(OrderDetail, OrderDetail.product_code == Product.product_code)
        .group_by(Product.product_code, Product.product_name, Product.product_line)
        .order_by(total_revenue.desc(), Product.product_code)
        .limit(limit)
    )
    return _records(ProductPerformance, result.all())


# =============================================================================
# REVENUE
# =============================================================================

async def get_daily_revenue(db: AsyncSession, limit: int) -> List[DailyRevenue]:
    """
    Payments per calendar day for the ``limit`` most recent days.

    Selected newest-first, returned oldest-first.
    """
    day = func.date(Payment.payment_date, type_=Date)
    result = await db.execute(
        select(
            day.label("revenue_date"),
            func.sum(Payment.amount).label("revenue"),
        )
        .group_by(day)
        .order_by(day.desc())
        .limit(limit)
    )
    records = _records(DailyRevenue, result.all())
    records.reverse()
    return records


async def get_monthly_revenue(db: AsyncSession, limit: int = 12) -> List[MonthlyRevenue]:
    """Payments per calendar month (YYYY-MM), newest month first."""
    year = extract("year", Payment.payment_date)
    month = extract("month", Payment.payment_date)
    result = await db.execute(
        select(
            year.label("year"),
            month.label("month"),
            func.sum(Payment.amount).label("revenue"),
        )
        .group_by(year, month)
        .order_by(year.desc(), month.desc())
        .limit(limit)
    )
    return [
        MonthlyRevenue(
            month=f"{int(row.year):04d}-{int(row.month):02d}",
            revenue=float(row.revenue or 0),
        )
        for row in result.all()
    ]


# =============================================================================
# EMPLOYEES AND OFFICES
# =============================================================================

async def get_employees(db: AsyncSession) -> List[EmployeeListing]:
    """Employees by first name with office location and assigned customers."""
    managed = (
        select(
            Customer.sales_rep_employee_number.label("employee_number"),
            func.count(Customer.customer_number).label("customers_managed"),
        )
        .group_by(Customer.sales_rep_employee_number)
        .subquery("managed_customers")
    )
    result = await db.execute(
        select(
            Employee.employee_number.label("employee_number"),
            Employee.first_name.label("first_name"),
            Employee.last_name.label("last_name"),
            Employee.job_title.label("job_title"),
            Employee.reports_to.label("reports_to"),
            Office.office_code.label("office_code"),
            Office.city.label("city"),
            Office.country.label("country"),
            func.coalesce(managed.c.customers_managed, 0).label("customers_managed"),
        )
        .outerjoin(Office, Office.office_code == Employee.office_code)
        .outerjoin(managed, managed.c.employee_number == Employee.employee_number)
        .order_by(Employee.first_name, Employee.employee_number)
    )
    return _records(EmployeeListing, result.all())


async def get_employee_performance(
    db: AsyncSession,
    limit: Optional[int] = None,
) -> List[EmployeePerformance]:
    """Customers, orders and payments attributed to each sales rep."""
    facts = _customer_facts()
    revenue = func.coalesce(func.sum(facts.c.total_payment), 0)
    query = (
        select(
            Employee.employee_number.label("employee_number"),
            (Employee.first_name + " " + Employee.last_name).label("name"),
            Employee.job_title.label("job_title"),
            func.count(facts.c.customer_number).label("customers_count"),
            func.coalesce(func.sum(facts.c.order_count), 0).label("orders_count"),
            revenue.label("total_revenue"),
        )
        .outerjoin(facts, facts.c.employee_number == Employee.employee_number)
        .group_by(
            Employee.employee_number,
            Employee.first_name,
            Employee.last_name,
            Employee.job_title,
        )
        .order_by(revenue.desc(), Employee.employee_number)
    )
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return _records(EmployeePerformance, result.all())


async def get_offices(db: AsyncSession) -> List[OfficeListing]:
    """Offices by country and city with headcount and customer count."""
    facts = _customer_facts()
    result = await db.execute(
        select(
            Office.office_code.label("office_code"),
            Office.city.label("city"),
            Office.country.label("country"),
            Office.postal_code.label("postal_code"),
            Office.phone.label("phone"),
            func.count(func.distinct(Employee.employee_number)).label("employee_count"),
            func.count(func.distinct(facts.c.customer_number)).label("customer_count"),
        )
        .outerjoin(Employee, Employee.office_code == Office.office_code)
        .outerjoin(facts, facts.c.employee_number == Employee.employee_number)
        .group_by(
            Office.office_code,
            Office.city,
            Office.country,
            Office.postal_code,
            Office.phone,
        )
        .order_by(Office.country, Office.city, Office.office_code)
    )
    return _records(OfficeListing, result.all())


async def get_top_offices(db: AsyncSession, limit: int = 5) -> List[TopOffice]:
    """Offices ranked by payments from customers of their employees."""
    facts = _customer_facts()
    revenue = func.coalesce(func.sum(facts.c.total_payment), 0)
    result = await db.execute(
        select(
            Office.office_code.label("office_code"),
            Office.city.label("city"),
            Office.country.label("country"),
            func.count(facts.c.customer_number).label("customers"),
            revenue.label("revenue"),
        )
        .outerjoin(Employee, Employee.office_code == Office.office_code)
        .outerjoin(facts, facts.c.employee_number == Employee.employee_number)
        .group_by(Office.office_code, Office.city, Office.country)
        .order_by(revenue.desc(), Office.office_code)
        .limit(limit)
    )
    return _records(TopOffice, result.all())


# =============================================================================
# SALES BY REGION
# =============================================================================

async def get_sales_by_region(db: AsyncSession) -> List[CountrySales]:
    """Customers, orders and payments grouped by the customer's country."""
    facts = _customer_facts()
    revenue = func.coalesce(func.sum(facts.c.total_payment), 0)
    result = await db.execute(
        select(
            facts.c.country.label("country"),
            func.count(facts.c.customer_number).label("customers"),
            func.coalesce(func.sum(facts.c.order_count), 0).label("orders"),
            revenue.label("revenue"),
        )
        .group_by(facts.c.country)
        .order_by(revenue.desc(), facts.c.country)
    )
    return _records(CountrySales, result.all())


async def get_office_region_sales(db: AsyncSession) -> List[RegionSales]:
    """
    Customers, orders and payments grouped by office country.

    Customers are attributed through their sales rep's office; customers
    without a rep are not counted.
    """
    facts = _customer_facts()
    revenue = func.coalesce(func.sum(facts.c.total_payment), 0)
    result = await db.execute(
        select(
            Office.country.label("region"),
            func.count(facts.c.customer_number).label("customers"),
            func.coalesce(func.sum(facts.c.order_count), 0).label("orders"),
            revenue.label("revenue"),
        )
        .outerjoin(Employee, Employee.office_code == Office.office_code)
        .outerjoin(facts, facts.c.employee_number == Employee.employee_number)
        .group_by(Office.country)
        .order_by(revenue.desc(), Office.country)
    )
    return _records(RegionSales, result.all())


# =============================================================================
# COMPOSITE
# =============================================================================

async def get_dashboard_overview(
    db: AsyncSession,
    top_offices: int = 5,
    top_products: int = 10,
    top_employees: int = 10,
) -> DashboardOverview:
    """Bundle of organisation counts and leaderboards for the overview page."""
    counts = (
        await db.execute(
            select(
                select(func.count()).select_from(Employee).scalar_subquery().label("employees"),
                select(func.count()).select_from(Office).scalar_subquery().label("offices"),
            )
        )
    ).one()

    overview = DashboardOverview(
        total_employees=counts.employees or 0,
        total_offices=counts.offices or 0,
        avg_order_value=await get_average_order_value(db),
        top_offices=await get_top_offices(db, top_offices),
        region_sales=await get_office_region_sales(db),
        product_performance=await get_product_performance(db, top_products),
        employee_performance=await get_employee_performance(db, top_employees),
    )

    logger.info(
        "Dashboard overview computed",
        employees=overview.total_employees,
        offices=overview.total_offices,
        regions=len(overview.region_sales),
    )
    return overview
