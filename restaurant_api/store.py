"""
In-Memory Store Module

Holds the dish and order collections for the lifetime of the process.
The store is created by the application lifespan and reached from routes
through the ``get_store`` dependency; nothing here is module-global.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, Protocol, TypeVar

from fastapi import Request

from restaurant_api.core.errors import validation_error
from restaurant_api.models import Dish, Order
from restaurant_api.services.ids import BaseIdGenerator

logger = logging.getLogger(__name__)


class Record(Protocol):
    id: str


T = TypeVar("T", bound=Record)


class Repository(ABC, Generic[T]):
    """
    Keyed, insertion-ordered collection of records.

    ``lock`` is held by a chain for its whole run, so a request sees and
    mutates its record atomically.
    """

    def __init__(self, name: str):
        self.name = name
        self.lock = threading.RLock()

    @abstractmethod
    def all(self) -> list[T]:
        """Return every record in insertion order."""
        pass

    @abstractmethod
    def get(self, record_id: str) -> Optional[T]:
        pass

    @abstractmethod
    def add(self, record: T) -> T:
        """
        Append a record.

        Raises:
            ValueError: If a record with the same id already exists
        """
        pass

    @abstractmethod
    def remove(self, record_id: str) -> Optional[T]:
        """Remove and return a record, or None if it is unknown."""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def has_held(self, record_id: str) -> bool:
        """True if a record with this id was ever added, even if since removed."""
        pass

    def __contains__(self, record_id: object) -> bool:
        return isinstance(record_id, str) and self.get(record_id) is not None


class InMemoryRepository(Repository[T]):
    """Repository over a plain dict (dicts keep insertion order)."""

    def __init__(self, name: str):
        super().__init__(name)
        self._records: dict[str, T] = {}
        self._held_ids: set[str] = set()

    def all(self) -> list[T]:
        with self.lock:
            return list(self._records.values())

    def get(self, record_id: str) -> Optional[T]:
        return self._records.get(record_id)

    def add(self, record: T) -> T:
        with self.lock:
            if record.id in self._records:
                raise ValueError(f"Duplicate {self.name} id: {record.id}")
            self._records[record.id] = record
            self._held_ids.add(record.id)
        return record

    def remove(self, record_id: str) -> Optional[T]:
        with self.lock:
            return self._records.pop(record_id, None)

    def clear(self) -> None:
        with self.lock:
            self._records.clear()

    def has_held(self, record_id: str) -> bool:
        return record_id in self._held_ids

    def __len__(self) -> int:
        return len(self._records)


class Store:
    """
    Process-wide state: both collections plus the id generator.

    Example:
        >>> store = Store(create_id_generator())
        >>> store.dishes.add(Dish.from_payload(store.next_id(), payload))
    """

    def __init__(self, id_generator: BaseIdGenerator):
        self.ids = id_generator
        self.dishes: Repository[Dish] = InMemoryRepository("dish")
        self.orders: Repository[Order] = InMemoryRepository("order")
        self._allocated: set[str] = set()
        self._allocate_lock = threading.Lock()

    def repository(self, name: str) -> Repository:
        """Look up a collection by its attribute name ("dishes"/"orders")."""
        if name == "dishes":
            return self.dishes
        if name == "orders":
            return self.orders
        raise KeyError(f"Unknown collection: {name}")

    def next_id(self) -> str:
        """
        Allocate an id never handed out or held by any record in this process.

        Ids of deleted records stay taken, so an old URL never resolves to a
        different record.
        """
        with self._allocate_lock:
            while True:
                candidate = self.ids.next_id()
                if not self._is_taken(candidate):
                    self._allocated.add(candidate)
                    return candidate
                logger.debug(f"Id {candidate} already taken, skipping")

    def seed_id(self, supplied: Any, resource: str) -> str:
        """Id for a seed record: the supplied one, or a fresh one when absent."""
        if supplied is None:
            return self.next_id()
        if not isinstance(supplied, str) or not supplied:
            raise validation_error(f"{resource} id must be a non-empty string")
        if supplied in self._allocated:
            raise validation_error(f"{resource} id already issued: {supplied}")
        return supplied

    def _is_taken(self, record_id: str) -> bool:
        return (
            record_id in self._allocated
            or self.dishes.has_held(record_id)
            or self.orders.has_held(record_id)
        )

    def clear(self) -> None:
        self.dishes.clear()
        self.orders.clear()


def get_store(request: Request) -> Store:
    """
    Dependency injection for FastAPI routes.
    Returns the store created by the application lifespan.
    """
    return request.app.state.store
