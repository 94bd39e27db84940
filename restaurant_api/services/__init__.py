"""
                        Services Module

Leaf services used by the resource handlers.

Services:
    - ids: id allocation (sequential counter or uuid)
"""

from restaurant_api.services.ids import create_id_generator

__all__ = ["create_id_generator"]
