"""HTTP API routers."""

from .credit_routes import build_credit_router

__all__ = ["build_credit_router"]
