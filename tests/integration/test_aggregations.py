"""
Integration Tests - Aggregation Query Layer
"""
from datetime import date

import pytest

from bi_dashboard.reporting import aggregations


class TestDashboardSummary:
    """Tests for the headline summary"""

    async def test_counts_and_revenue(self, seeded_db):
        summary = await aggregations.get_dashboard_summary(seeded_db)

        assert summary.total_customers == 3
        assert summary.total_orders == 4
        assert summary.total_products == 4
        assert summary.total_revenue == pytest.approx(215.5)

    async def test_revenue_is_zero_without_payments(self, test_db):
        summary = await aggregations.get_dashboard_summary(test_db)

        assert summary.total_revenue == 0
        assert summary.total_customers == 0


class TestRecentOrders:
    """Tests for recent orders"""

    async def test_newest_first_with_totals(self, seeded_db):
        orders = await aggregations.get_recent_orders(seeded_db, 10)

        assert [o.order_number for o in orders] == [10103, 10102, 10101, 10100]
        totals = {o.order_number: o.total for o in orders}
        assert totals[10100] == pytest.approx(20.0)
        assert totals[10101] == pytest.approx(5.0)
        assert totals[10102] == pytest.approx(137.5)

    async def test_order_without_details_totals_zero(self, seeded_db):
        orders = await aggregations.get_recent_orders(seeded_db, 10)

        cancelled = next(o for o in orders if o.order_number == 10103)
        assert cancelled.total == 0
        assert cancelled.shipped_date is None
        assert cancelled.customer_name == "Atelier graphique"

    async def test_limit_caps_rows(self, seeded_db):
        orders = await aggregations.get_recent_orders(seeded_db, 2)

        assert [o.order_number for o in orders] == [10103, 10102]


class TestOrderAnalytics:
    """Tests for order status analytics"""

    async def test_all_orders(self, seeded_db):
        analytics = await aggregations.get_order_analytics(seeded_db, 10000)

        assert analytics.total_orders == 4
        assert analytics.shipped_orders == 2
        assert analytics.pending_orders == 1
        assert analytics.cancelled_orders == 1
        # (4 + 2) / 2: unshipped orders are not in the denominator
        assert analytics.avg_fulfillment_time == pytest.approx(3.0)

    async def test_scope_is_most_recent_orders(self, seeded_db):
        analytics = await aggregations.get_order_analytics(seeded_db, 3)

        assert analytics.total_orders == 3
        assert analytics.shipped_orders == 1
        assert analytics.avg_fulfillment_time == pytest.approx(2.0)

    async def test_no_shipped_orders_gives_zero_average(self, seeded_db):
        analytics = await aggregations.get_order_analytics(seeded_db, 2)

        assert analytics.total_orders == 2
        assert analytics.shipped_orders == 0
        assert analytics.avg_fulfillment_time == 0


class TestCustomers:
    """Tests for customer listings"""

    async def test_payments_not_multiplied_by_orders(self, seeded_db):
        customers = await aggregations.get_customers(seeded_db)
        by_number = {c.customer_number: c for c in customers}

        assert by_number[112].order_count == 2
        assert by_number[112].total_payment == pytest.approx(45.0)
        # two orders and three payments; a flat join would report 341.0
        assert by_number[103].order_count == 2
        assert by_number[103].total_payment == pytest.approx(170.5)

    async def test_customer_without_activity_reports_zeros(self, seeded_db):
        customers = await aggregations.get_customers(seeded_db)
        idle = next(c for c in customers if c.customer_number == 119)

        assert idle.order_count == 0
        assert idle.total_payment == 0

    async def test_ordered_by_name_and_capped(self, seeded_db):
        customers = await aggregations.get_customers(seeded_db, limit=2)

        assert [c.customer_name for c in customers] == ["Atelier graphique", "La Rochelle Gifts"]

    async def test_top_customers_by_spend(self, seeded_db):
        top = await aggregations.get_top_customers(seeded_db)

        assert [c.customer_number for c in top] == [103, 112, 119]
        assert top[0].total_spent == pytest.approx(170.5)
        assert top[2].total_spent == 0


class TestProducts:
    """Tests for product popularity and inventory"""

    async def test_unordered_product_is_listed_with_zero(self, seeded_db):
        products = await aggregations.get_products(seeded_db, 10000)

        assert [p.product_code for p in products] == ["S10_1678", "S10_1949", "S12_1099", "S18_0001"]
        assert products[0].order_count == 2
        assert products[-1].order_count == 0

    async def test_cutoff_counts_only_recent_orders(self, seeded_db):
        # the 2nd most recent order was placed 2005-03-05
        products = await aggregations.get_products(seeded_db, 2)
        counts = {p.product_code: p.order_count for p in products}

        assert counts == {"S10_1678": 1, "S12_1099": 1, "S10_1949": 0, "S18_0001": 0}
        assert [p.product_code for p in products][:2] == ["S10_1678", "S12_1099"]

    async def test_cutoff_date(self, seeded_db):
        assert await aggregations.get_order_cutoff_date(seeded_db, 2) == date(2005, 3, 5)
        assert await aggregations.get_order_cutoff_date(seeded_db, 100) == date(2005, 1, 10)

    async def test_cutoff_without_orders(self, test_db):
        assert await aggregations.get_order_cutoff_date(test_db, 10) is None

    async def test_page_size(self, seeded_db):
        products = await aggregations.get_products(seeded_db, 10000, page_size=1)

        assert len(products) == 1

    async def test_inventory_analysis(self, seeded_db):
        lines = await aggregations.get_inventory_analysis(seeded_db)

        assert [line.product_line for line in lines] == ["Classic Cars", "Motorcycles", "Trains"]
        classic = lines[0]
        assert classic.product_count == 2
        assert classic.total_quantity == 225
        assert classic.avg_quantity == pytest.approx(112.5)
        assert classic.total_value == pytest.approx(75 * 98.58 + 150 * 95.34)
        assert lines[2].total_value == 0

    async def test_product_lines_include_empty_lines(self, seeded_db):
        lines = await aggregations.get_product_lines(seeded_db)
        by_name = {line.product_line: line for line in lines}

        assert [line.product_line for line in lines] == ["Classic Cars", "Motorcycles", "Planes", "Trains"]
        assert by_name["Planes"].product_count == 0
        assert by_name["Planes"].total_stock == 0
        assert by_name["Classic Cars"].total_stock == 225

    async def test_product_performance(self, seeded_db):
        performance = await aggregations.get_product_performance(seeded_db)

        assert [p.product_code for p in performance] == ["S12_1099", "S10_1678", "S10_1949", "S18_0001"]
        chopper = performance[1]
        assert chopper.times_sold == 2
        assert chopper.total_quantity == 5
        assert chopper.total_revenue == pytest.approx(57.5)


class TestRevenue:
    """Tests for revenue time series"""

    async def test_daily_revenue_is_chronological(self, seeded_db):
        revenue = await aggregations.get_daily_revenue(seeded_db, 365)

        assert [r.revenue_date for r in revenue] == [date(2005, 1, 15), date(2005, 3, 10), date(2005, 4, 2)]
        assert revenue[1].revenue == pytest.approx(150.5)

    async def test_daily_revenue_keeps_most_recent_days(self, seeded_db):
        revenue = await aggregations.get_daily_revenue(seeded_db, 2)

        assert [r.revenue_date for r in revenue] == [date(2005, 3, 10), date(2005, 4, 2)]

    async def test_monthly_revenue(self, seeded_db):
        revenue = await aggregations.get_monthly_revenue(seeded_db)

        assert [r.month for r in revenue] == ["2005-04", "2005-03", "2005-01"]
        assert revenue[1].revenue == pytest.approx(150.5)


class TestEmployeesAndOffices:
    """Tests for employee and office roll-ups"""

    async def test_employees_listing(self, seeded_db):
        employees = await aggregations.get_employees(seeded_db)

        assert [e.first_name for e in employees] == ["Diane", "Leslie", "Loui"]
        managed = {e.employee_number: e.customers_managed for e in employees}
        assert managed == {1002: 0, 1165: 1, 1337: 2}
        assert employees[0].reports_to is None
        assert employees[2].city == "Paris"

    async def test_employee_performance(self, seeded_db):
        performance = await aggregations.get_employee_performance(seeded_db)

        assert [p.employee_number for p in performance] == [1337, 1165, 1002]
        loui = performance[0]
        assert loui.name == "Loui Bondur"
        assert loui.customers_count == 2
        assert loui.orders_count == 2
        assert loui.total_revenue == pytest.approx(170.5)
        assert performance[1].orders_count == 2
        assert performance[1].total_revenue == pytest.approx(45.0)
        assert performance[2].total_revenue == 0

    async def test_offices_listing(self, seeded_db):
        offices = await aggregations.get_offices(seeded_db)

        assert [o.city for o in offices] == ["Paris", "Tokyo", "San Francisco"]
        counts = {o.office_code: (o.employee_count, o.customer_count) for o in offices}
        assert counts == {"1": (2, 1), "2": (1, 2), "3": (0, 0)}

    async def test_top_offices(self, seeded_db):
        offices = await aggregations.get_top_offices(seeded_db, limit=2)

        assert [o.city for o in offices] == ["Paris", "San Francisco"]
        assert offices[0].customers == 2
        assert offices[0].revenue == pytest.approx(170.5)


class TestSalesByRegion:
    """Tests for the two region roll-ups"""

    async def test_customer_country_sales(self, seeded_db):
        sales = await aggregations.get_sales_by_region(seeded_db)

        assert [(s.country, s.customers, s.orders) for s in sales] == [("France", 2, 2), ("USA", 1, 2)]
        assert sales[0].revenue == pytest.approx(170.5)

    async def test_office_and_customer_paths_agree(self, seeded_db):
        # every sample customer is served from an office in their own country
        by_customer = {
            s.country: (s.customers, s.orders, s.revenue)
            for s in await aggregations.get_sales_by_region(seeded_db)
        }
        by_office = {
            r.region: (r.customers, r.orders, r.revenue)
            for r in await aggregations.get_office_region_sales(seeded_db)
        }

        for country, figures in by_customer.items():
            assert by_office[country] == pytest.approx(figures)
        for region in set(by_office) - set(by_customer):
            assert by_office[region] == (0, 0, 0)


class TestDashboardOverview:
    """Tests for the composite overview"""

    async def test_overview(self, seeded_db):
        overview = await aggregations.get_dashboard_overview(seeded_db)

        assert overview.total_employees == 3
        assert overview.total_offices == 3
        # per-order totals 20, 5, 137.5 and 0
        assert overview.avg_order_value == pytest.approx(40.625, abs=0.01)
        assert [o.city for o in overview.top_offices] == ["Paris", "San Francisco", "Tokyo"]
        assert overview.region_sales[0].region == "France"
        assert overview.product_performance[0].product_code == "S12_1099"
        assert overview.employee_performance[0].name == "Loui Bondur"

    async def test_overview_on_empty_store(self, test_db):
        overview = await aggregations.get_dashboard_overview(test_db)

        assert overview.avg_order_value == 0
        assert overview.top_offices == []
        assert overview.employee_performance == []
