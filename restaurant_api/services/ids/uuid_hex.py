"""
UUID Id Generator

Random ids in the same 32-character hex shape as ``uuid4().hex``.
"""

import uuid

from restaurant_api.services.ids.base import BaseIdGenerator


class UuidIdGenerator(BaseIdGenerator):
    """Random hex id generator."""

    @property
    def strategy_name(self) -> str:
        return "uuid"

    def next_id(self) -> str:
        return uuid.uuid4().hex
