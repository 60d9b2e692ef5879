"""
Reporting Module

Aggregation queries over the classicmodels store, their record shapes and
the display statistics derived from them.
"""
from . import aggregations, derived
from .schemas import ReportRecord

__all__ = [
    "aggregations",
    "derived",
    "ReportRecord",
]
