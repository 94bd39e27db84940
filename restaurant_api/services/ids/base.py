"""
Id Generator Abstract Base Class

Defines the interface contract for id allocation. The only guarantee callers
rely on is uniqueness for the lifetime of the process; the format of the id
is not part of the API contract.

Design Pattern: Strategy Pattern
    - SequentialIdGenerator: short counter-based ids, easy to read in demos
    - UuidIdGenerator: random 32-char hex ids
"""

from abc import ABC, abstractmethod


class BaseIdGenerator(ABC):
    """
    Abstract base class for id generators.

    Example:
        >>> generator = create_id_generator(IdStrategy.SEQUENTIAL)
        >>> generator.next_id()
        '1'
    """

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """
        Return the name of the allocation strategy.

        Returns:
            str: Strategy name (e.g., "sequential", "uuid")
        """
        pass

    @abstractmethod
    def next_id(self) -> str:
        """
        Allocate a new id.

        Returns:
            str: An id never returned before by this generator
        """
        pass
