"""
Resource Handlers

Each module exposes its chains (list_all, create, read, update, ...) built
from the shared validation stages in ``restaurant_api.core``.
"""

from restaurant_api.handlers import dishes, orders

__all__ = ["dishes", "orders"]
