"""
Id Generator Factory

Provides a single entry point for obtaining an id generator.
The factory keeps the store agnostic about which strategy is in use.

Usage:
    from restaurant_api.services.ids import create_id_generator

    generator = create_id_generator(settings.id_strategy)
    new_id = generator.next_id()

Strategy Switching:
    - ID_STRATEGY=sequential → SequentialIdGenerator ("1", "2", ...)
    - ID_STRATEGY=uuid → UuidIdGenerator (32-char hex)
"""

import logging

from restaurant_api.core.config import IdStrategy
from restaurant_api.services.ids.base import BaseIdGenerator
from restaurant_api.services.ids.sequential import SequentialIdGenerator
from restaurant_api.services.ids.uuid_hex import UuidIdGenerator

logger = logging.getLogger(__name__)


def create_id_generator(strategy: IdStrategy = IdStrategy.SEQUENTIAL) -> BaseIdGenerator:
    """
    Build the configured id generator.

    Not cached: each store owns its own generator, so a fresh application
    (or test) starts counting from the beginning.

    Args:
        strategy: Allocation strategy from settings

    Returns:
        BaseIdGenerator: Configured generator instance

    Raises:
        ValueError: If the strategy is unknown
    """
    strategy = IdStrategy(strategy)

    if strategy == IdStrategy.SEQUENTIAL:
        generator: BaseIdGenerator = SequentialIdGenerator()
    elif strategy == IdStrategy.UUID:
        generator = UuidIdGenerator()
    else:
        raise ValueError(f"Unsupported id strategy: {strategy}")

    logger.info(f"Id Generator: Using {type(generator).__name__}")
    return generator


__all__ = [
    "create_id_generator",
    "BaseIdGenerator",
    "SequentialIdGenerator",
    "UuidIdGenerator",
]
