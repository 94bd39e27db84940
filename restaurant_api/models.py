"""
In-Memory Record Models

Dishes and orders are plain mutable dataclasses. Updates overwrite fields on
the stored instance; the id never changes after creation.

Wire names: orders use camelCase (deliverTo, mobileNumber), dishes keep
image_url as-is.
"""

import copy
import enum
from dataclasses import dataclass, field
from typing import Any


class OrderStatus(str, enum.Enum):
    """Order status workflow (suggested order, not enforced)."""
    PENDING = "pending"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


@dataclass
class Dish:
    """A menu dish."""
    id: str
    name: str
    description: str
    price: int
    image_url: str

    @classmethod
    def from_payload(cls, dish_id: str, payload: dict[str, Any]) -> "Dish":
        """Build a dish from an already validated request payload."""
        return cls(
            id=dish_id,
            name=payload["name"],
            description=payload["description"],
            price=int(payload["price"]),
            image_url=payload["image_url"],
        )

    def apply(self, payload: dict[str, Any]) -> None:
        """Overwrite the editable fields in place."""
        self.name = payload["name"]
        self.description = payload["description"]
        self.price = int(payload["price"])
        self.image_url = payload["image_url"]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image_url": self.image_url,
        }

    def __repr__(self):
        return f"<Dish {self.id} - {self.name} - {self.price}>"


@dataclass
class Order:
    """
    A delivery order.

    Line items in ``dishes`` are stored as submitted; each one carries at
    least a positive integer ``quantity``.
    """
    id: str
    deliver_to: str
    mobile_number: str
    status: OrderStatus = OrderStatus.PENDING
    dishes: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_payload(cls, order_id: str, payload: dict[str, Any]) -> "Order":
        """Build an order from an already validated request payload."""
        status = payload.get("status") or OrderStatus.PENDING
        return cls(
            id=order_id,
            deliver_to=payload["deliverTo"],
            mobile_number=payload["mobileNumber"],
            status=OrderStatus(status),
            dishes=copy.deepcopy(payload["dishes"]),
        )

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    @property
    def is_delivered(self) -> bool:
        return self.status == OrderStatus.DELIVERED

    def apply(self, payload: dict[str, Any]) -> None:
        """Overwrite the editable fields in place."""
        self.deliver_to = payload["deliverTo"]
        self.mobile_number = payload["mobileNumber"]
        self.status = OrderStatus(payload["status"])
        self.dishes = copy.deepcopy(payload["dishes"])

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "deliverTo": self.deliver_to,
            "mobileNumber": self.mobile_number,
            "status": self.status.value,
            "dishes": copy.deepcopy(self.dishes),
        }

    def __repr__(self):
        return f"<Order {self.id} - {self.deliver_to} - {self.status.value}>"
