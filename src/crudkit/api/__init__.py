"""REST layer: generic CRUD resources, representations and error mapping."""

from .app import create_app
from .router import build_crud_router

__all__ = ["build_crud_router", "create_app"]
