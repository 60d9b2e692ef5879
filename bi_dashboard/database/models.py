"""
Database Models - classicmodels Schema

Read-only mappings of the classicmodels sample database. Attribute names are
snake_case; column names keep the store's original camelCase spelling so the
models map an existing database without migration.

Entities:
- Office / Employee: sales organisation (employees report to employees)
- Customer: assigned to a sales rep employee
- Order / OrderDetail: order headers and their line items
- Payment: customer payments (no order linkage)
- ProductLine / Product: catalog and stock
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, List

from sqlalchemy import (
    Date,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


# =============================================================================
# ENUMERATIONS
# =============================================================================

class OrderStatus(str, Enum):
    """Order status enumeration (stored as plain strings)"""
    SHIPPED = "Shipped"
    IN_PROCESS = "In Process"
    PENDING = "Pending"
    CANCELLED = "Cancelled"
    DISPUTED = "Disputed"
    ON_HOLD = "On Hold"


# =============================================================================
# SALES ORGANISATION
# =============================================================================

class Office(Base):
    """Sales office"""
    __tablename__ = "offices"

    office_code: Mapped[str] = mapped_column("officeCode", String(10), primary_key=True)
    city: Mapped[str] = mapped_column(String(50), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    address_line1: Mapped[str] = mapped_column("addressLine1", String(50), nullable=False)
    address_line2: Mapped[Optional[str]] = mapped_column("addressLine2", String(50))
    state: Mapped[Optional[str]] = mapped_column(String(50))
    country: Mapped[str] = mapped_column(String(50), nullable=False)
    postal_code: Mapped[str] = mapped_column("postalCode", String(15), nullable=False)
    territory: Mapped[str] = mapped_column(String(10), nullable=False)

    employees: Mapped[List["Employee"]] = relationship(back_populates="office")


class Employee(Base):
    """
    Employee

    reportsTo is a nullable self-reference; the top of the hierarchy has none.
    """
    __tablename__ = "employees"

    employee_number: Mapped[int] = mapped_column("employeeNumber", Integer, primary_key=True)
    last_name: Mapped[str] = mapped_column("lastName", String(50), nullable=False)
    first_name: Mapped[str] = mapped_column("firstName", String(50), nullable=False)
    extension: Mapped[str] = mapped_column(String(10), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    office_code: Mapped[str] = mapped_column("officeCode", ForeignKey("offices.officeCode"), nullable=False)
    reports_to: Mapped[Optional[int]] = mapped_column("reportsTo", ForeignKey("employees.employeeNumber"))
    job_title: Mapped[str] = mapped_column("jobTitle", String(50), nullable=False)

    office: Mapped["Office"] = relationship(back_populates="employees")
    customers: Mapped[List["Customer"]] = relationship(back_populates="sales_rep")


# =============================================================================
# CUSTOMERS, ORDERS AND PAYMENTS
# =============================================================================

class Customer(Base):
    """Customer, optionally assigned to a sales rep"""
    __tablename__ = "customers"

    customer_number: Mapped[int] = mapped_column("customerNumber", Integer, primary_key=True)
    customer_name: Mapped[str] = mapped_column("customerName", String(50), nullable=False)
    contact_last_name: Mapped[str] = mapped_column("contactLastName", String(50), nullable=False)
    contact_first_name: Mapped[str] = mapped_column("contactFirstName", String(50), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    address_line1: Mapped[str] = mapped_column("addressLine1", String(50), nullable=False)
    address_line2: Mapped[Optional[str]] = mapped_column("addressLine2", String(50))
    city: Mapped[str] = mapped_column(String(50), nullable=False)
    state: Mapped[Optional[str]] = mapped_column(String(50))
    postal_code: Mapped[Optional[str]] = mapped_column("postalCode", String(15))
    country: Mapped[str] = mapped_column(String(50), nullable=False)
    sales_rep_employee_number: Mapped[Optional[int]] = mapped_column(
        "salesRepEmployeeNumber", ForeignKey("employees.employeeNumber")
    )
    credit_limit: Mapped[Optional[Decimal]] = mapped_column("creditLimit", Numeric(10, 2))

    sales_rep: Mapped[Optional["Employee"]] = relationship(back_populates="customers")
    orders: Mapped[List["Order"]] = relationship(back_populates="customer")
    payments: Mapped[List["Payment"]] = relationship(back_populates="customer")


class Order(Base):
    """
    Order header

    The monetary total is never stored; it is Σ quantityOrdered × priceEach
    over the order's details.
    """
    __tablename__ = "orders"

    order_number: Mapped[int] = mapped_column("orderNumber", Integer, primary_key=True)
    order_date: Mapped[date] = mapped_column("orderDate", Date, nullable=False)
    required_date: Mapped[date] = mapped_column("requiredDate", Date, nullable=False)
    shipped_date: Mapped[Optional[date]] = mapped_column("shippedDate", Date)
    status: Mapped[str] = mapped_column(String(15), nullable=False)
    comments: Mapped[Optional[str]] = mapped_column(Text)
    customer_number: Mapped[int] = mapped_column(
        "customerNumber", ForeignKey("customers.customerNumber"), nullable=False
    )

    customer: Mapped["Customer"] = relationship(back_populates="orders")
    details: Mapped[List["OrderDetail"]] = relationship(back_populates="order")

    __table_args__ = (
        Index("ix_orders_order_date", "orderDate"),
    )


class OrderDetail(Base):
    """Order line item, keyed by (orderNumber, productCode)"""
    __tablename__ = "orderdetails"

    order_number: Mapped[int] = mapped_column(
        "orderNumber", ForeignKey("orders.orderNumber"), primary_key=True
    )
    product_code: Mapped[str] = mapped_column(
        "productCode", ForeignKey("products.productCode"), primary_key=True
    )
    quantity_ordered: Mapped[int] = mapped_column("quantityOrdered", Integer, nullable=False)
    price_each: Mapped[Decimal] = mapped_column("priceEach", Numeric(10, 2), nullable=False)
    order_line_number: Mapped[int] = mapped_column("orderLineNumber", SmallInteger, nullable=False, default=1)

    order: Mapped["Order"] = relationship(back_populates="details")
    product: Mapped["Product"] = relationship(back_populates="order_details")


class Payment(Base):
    """Customer payment, keyed by (customerNumber, checkNumber)"""
    __tablename__ = "payments"

    customer_number: Mapped[int] = mapped_column(
        "customerNumber", ForeignKey("customers.customerNumber"), primary_key=True
    )
    check_number: Mapped[str] = mapped_column("checkNumber", String(50), primary_key=True)
    payment_date: Mapped[date] = mapped_column("paymentDate", Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    customer: Mapped["Customer"] = relationship(back_populates="payments")


# =============================================================================
# CATALOG
# =============================================================================

class ProductLine(Base):
    """Product line grouping products"""
    __tablename__ = "productlines"

    product_line: Mapped[str] = mapped_column("productLine", String(50), primary_key=True)
    text_description: Mapped[Optional[str]] = mapped_column("textDescription", String(4000))
    html_description: Mapped[Optional[str]] = mapped_column("htmlDescription", Text)

    products: Mapped[List["Product"]] = relationship(back_populates="line")


class Product(Base):
    """Catalog product with stock level and prices"""
    __tablename__ = "products"

    product_code: Mapped[str] = mapped_column("productCode", String(15), primary_key=True)
    product_name: Mapped[str] = mapped_column("productName", String(70), nullable=False)
    product_line: Mapped[str] = mapped_column(
        "productLine", ForeignKey("productlines.productLine"), nullable=False
    )
    product_scale: Mapped[str] = mapped_column("productScale", String(10), nullable=False, default="1:10")
    product_vendor: Mapped[str] = mapped_column("productVendor", String(50), nullable=False, default="")
    product_description: Mapped[str] = mapped_column("productDescription", Text, nullable=False, default="")
    quantity_in_stock: Mapped[int] = mapped_column("quantityInStock", SmallInteger, nullable=False)
    buy_price: Mapped[Decimal] = mapped_column("buyPrice", Numeric(10, 2), nullable=False)
    msrp: Mapped[Decimal] = mapped_column("MSRP", Numeric(10, 2), nullable=False)

    line: Mapped["ProductLine"] = relationship(back_populates="products")
    order_details: Mapped[List["OrderDetail"]] = relationship(back_populates="product")
