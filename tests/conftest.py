"""
Test Suite Configuration

Integration tests run against an in-memory SQLite database built from the
ORM metadata and seeded with a small classicmodels sample.
"""
from datetime import date
from decimal import Decimal
from typing import AsyncGenerator, List

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bi_dashboard.database.connection import check_database_health, get_db_dependency
from bi_dashboard.database.models import (
    Base,
    Customer,
    Employee,
    Office,
    Order,
    OrderDetail,
    Payment,
    Product,
    ProductLine,
)
from bi_dashboard.serving.api import create_api_app
from bi_dashboard.serving.api.routes.health import database_health


def _office(code: str, city: str, country: str) -> Office:
    return Office(
        office_code=code,
        city=city,
        phone="+1 650 219 4782",
        address_line1="100 Market Street",
        country=country,
        postal_code="94080",
        territory="NA",
    )


def _employee(number: int, first: str, last: str, title: str, office: str, reports_to=None) -> Employee:
    return Employee(
        employee_number=number,
        first_name=first,
        last_name=last,
        extension="x5800",
        email=f"{first.lower()}@classicmodelcars.com",
        office_code=office,
        reports_to=reports_to,
        job_title=title,
    )


def _customer(number: int, name: str, city: str, country: str, rep) -> Customer:
    return Customer(
        customer_number=number,
        customer_name=name,
        contact_last_name="Schmitt",
        contact_first_name="Carine",
        phone="40.32.2555",
        address_line1="54, rue Royale",
        city=city,
        country=country,
        sales_rep_employee_number=rep,
        credit_limit=Decimal("21000.00"),
    )


def _order(number: int, customer: int, ordered: date, status: str, shipped=None) -> Order:
    return Order(
        order_number=number,
        order_date=ordered,
        required_date=ordered.replace(day=28),
        shipped_date=shipped,
        status=status,
        customer_number=customer,
    )


def _product(code: str, name: str, line: str, stock: int, buy: str, msrp: str) -> Product:
    return Product(
        product_code=code,
        product_name=name,
        product_line=line,
        quantity_in_stock=stock,
        buy_price=Decimal(buy),
        msrp=Decimal(msrp),
    )


def sample_rows() -> List[Base]:
    """
    Sample data used by the integration tests.

    Customer 112 has two orders (2 × 10 and 1 × 5) and one payment of 45.
    Customer 103 has two orders (one without details) and three payments.
    Customer 119 has neither. Product S18_0001 was never ordered and the
    Planes line has no products.
    """
    return [
        _office("1", "San Francisco", "USA"),
        _office("2", "Paris", "France"),
        _office("3", "Tokyo", "Japan"),
        _employee(1002, "Diane", "Murphy", "President", "1"),
        _employee(1165, "Leslie", "Jennings", "Sales Rep", "1", reports_to=1002),
        _employee(1337, "Loui", "Bondur", "Sales Rep", "2", reports_to=1002),
        _customer(103, "Atelier graphique", "Nantes", "France", 1337),
        _customer(112, "Signal Gift Stores", "Las Vegas", "USA", 1165),
        _customer(119, "La Rochelle Gifts", "Nantes", "France", 1337),
        ProductLine(product_line="Classic Cars", text_description="Classic car models"),
        ProductLine(product_line="Motorcycles", text_description="Motorcycle models"),
        ProductLine(product_line="Planes", text_description="Plane models"),
        ProductLine(product_line="Trains", text_description="Train models"),
        _product("S10_1678", "1969 Harley Davidson Ultimate Chopper", "Motorcycles", 30, "48.81", "95.70"),
        _product("S10_1949", "1952 Alpine Renault 1300", "Classic Cars", 75, "98.58", "214.30"),
        _product("S12_1099", "1968 Ford Mustang", "Classic Cars", 150, "95.34", "194.57"),
        _product("S18_0001", "1950 Steam Locomotive", "Trains", 0, "10.00", "20.00"),
        _order(10100, 112, date(2005, 1, 10), "Shipped", shipped=date(2005, 1, 14)),
        _order(10101, 112, date(2005, 2, 1), "Shipped", shipped=date(2005, 2, 3)),
        _order(10102, 103, date(2005, 3, 5), "Pending"),
        _order(10103, 103, date(2005, 4, 1), "Cancelled"),
        OrderDetail(order_number=10100, product_code="S10_1678", quantity_ordered=2, price_each=Decimal("10.00")),
        OrderDetail(order_number=10101, product_code="S10_1949", quantity_ordered=1, price_each=Decimal("5.00")),
        OrderDetail(order_number=10102, product_code="S10_1678", quantity_ordered=3, price_each=Decimal("12.50")),
        OrderDetail(order_number=10102, product_code="S12_1099", quantity_ordered=1, price_each=Decimal("100.00"),
                    order_line_number=2),
        Payment(customer_number=112, check_number="HQ336336", payment_date=date(2005, 1, 15), amount=Decimal("45.00")),
        Payment(customer_number=103, check_number="HQ100", payment_date=date(2005, 3, 10), amount=Decimal("100.00")),
        Payment(customer_number=103, check_number="HQ101", payment_date=date(2005, 3, 10), amount=Decimal("50.50")),
        Payment(customer_number=103, check_number="HQ102", payment_date=date(2005, 4, 2), amount=Decimal("20.00")),
    ]


@pytest.fixture
async def test_engine():
    """In-memory SQLite engine with the classicmodels schema"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Empty database session"""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded_db(test_db) -> AsyncSession:
    """Database session over the sample data"""
    test_db.add_all(sample_rows())
    await test_db.commit()
    return test_db


def _app_with_sessions(session_factory):
    app = create_api_app(use_lifespan=False)

    async def override_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    async def override_health():
        return await check_database_health(session_factory)

    app.dependency_overrides[get_db_dependency] = override_db
    app.dependency_overrides[database_health] = override_health
    return app


@pytest.fixture
def seeded_app(session_factory, seeded_db):
    """API app over the sample data"""
    return _app_with_sessions(session_factory)


@pytest.fixture
async def client(seeded_app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the API over the sample data"""
    async with AsyncClient(transport=ASGITransport(app=seeded_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def empty_client(session_factory, test_db) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the API over an empty schema"""
    app = _app_with_sessions(session_factory)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
