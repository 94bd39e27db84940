"""
Pydantic Schemas for Response Serialization

Request bodies are validated by the chain stages (which own the exact error
messages); these schemas describe and serialize what the API sends back.
"""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from restaurant_api.models import OrderStatus


# =============================================================================
# RECORD SCHEMAS
# =============================================================================

class DishSchema(BaseModel):
    """A dish as returned by the API."""
    id: str
    name: str = Field(..., examples=["Dolcelatte and chickpea spaghetti"])
    description: str
    price: int = Field(..., gt=0, examples=[19])
    image_url: str


class OrderSchema(BaseModel):
    """An order as returned by the API (camelCase on the wire)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    deliver_to: str = Field(..., alias="deliverTo", examples=["308 Negra Arroyo Lane"])
    mobile_number: str = Field(..., alias="mobileNumber", examples=["(505) 143-3369"])
    status: OrderStatus
    dishes: List[dict[str, Any]] = Field(..., min_length=1)


# =============================================================================
# ENVELOPES
# =============================================================================

class DishEnvelope(BaseModel):
    data: DishSchema


class DishListEnvelope(BaseModel):
    data: List[DishSchema]


class OrderEnvelope(BaseModel):
    data: OrderSchema


class OrderListEnvelope(BaseModel):
    data: List[OrderSchema]


class ErrorResponse(BaseModel):
    """Standard error response."""
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    dishes: int
    orders: int
    id_strategy: str
    timestamp: datetime
