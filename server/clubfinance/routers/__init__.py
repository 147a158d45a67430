"""API routers for the club finance application."""

from clubfinance.routers import (
    audit,
    auth,
    closures,
    dashboard,
    expenses,
    fees,
    members,
    vaquinhas,
)  # noqa: F401
