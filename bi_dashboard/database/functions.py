"""
Portable SQL Functions

SQL constructs whose spelling differs between the stores the API runs on
(MySQL in production, SQLite in tests, PostgreSQL where configured).
"""

from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import FunctionElement
from sqlalchemy.types import Float


class days_between(FunctionElement):
    """
    Whole days from ``start`` to ``end`` (``end - start``).

    NULL when either side is NULL, so AVG() skips the row.

    Example:
        days_between(Order.order_date, Order.shipped_date)
    """
    type = Float()
    inherit_cache = True
    name = "days_between"


@compiles(days_between)
def _days_between_default(element, compiler, **kw):
    start, end = list(element.clauses)
    return "(%s - %s)" % (compiler.process(end, **kw), compiler.process(start, **kw))


@compiles(days_between, "mysql")
def _days_between_mysql(element, compiler, **kw):
    start, end = list(element.clauses)
    return "DATEDIFF(%s, %s)" % (compiler.process(end, **kw), compiler.process(start, **kw))


@compiles(days_between, "sqlite")
def _days_between_sqlite(element, compiler, **kw):
    start, end = list(element.clauses)
    return "(julianday(%s) - julianday(%s))" % (
        compiler.process(end, **kw),
        compiler.process(start, **kw),
    )
