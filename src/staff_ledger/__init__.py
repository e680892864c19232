"""Staff Ledger package.

This package is organized by feature modules (users, income, tickets, reports, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""

__version__ = "0.1.0"
