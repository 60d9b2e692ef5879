"""
Classicmodels BI Dashboard

Read-only reporting API over the classicmodels sample database.
"""

__version__ = "1.0.0"
