"""
Order Handler

Chains for the order resource:

    list_all : list
    create   : 3 presence + 3 validity stages, create
    read     : order_exists, read
    update   : order_exists, 4 presence + 4 validity stages, update
    delete   : order_exists, delete (pending orders only)
    seed     : same stages as create, keeps a supplied id (startup data)

Status may move between any of the four values; the only enforced rules are
that delivered orders cannot be edited and only pending orders can be
deleted.
"""

import logging
from typing import Any, Optional

from restaurant_api.core.chain import Chain, Outcome, RequestContext
from restaurant_api.core.errors import validation_error
from restaurant_api.core.validation import (
    FieldRule,
    body_data_has,
    field_is_valid,
    is_non_empty_string,
    is_positive_integer,
    one_of,
    record_exists,
    require,
)
from restaurant_api.models import Order, OrderStatus

logger = logging.getLogger(__name__)

RESOURCE = "Order"
COLLECTION = "orders"

STATUS_MESSAGE = (
    "Order must have a status of pending, preparing, out-for-delivery, delivered"
)


def check_dishes(value: Any) -> Optional[str]:
    """Dishes must be a non-empty list of line items with positive quantities."""
    if not isinstance(value, list) or not value:
        return "Order must include at least one dish"
    for index, line in enumerate(value):
        quantity = line.get("quantity") if isinstance(line, dict) else None
        if isinstance(quantity, float) or not is_positive_integer(quantity):
            return f"Dish {index} must have a quantity that is an integer greater than 0"
    return None


DELIVER_TO_RULE = FieldRule(
    "deliverTo", require(is_non_empty_string, "Order must include a deliverTo")
)
MOBILE_NUMBER_RULE = FieldRule(
    "mobileNumber", require(is_non_empty_string, "Order must include a mobileNumber")
)
DISHES_RULE = FieldRule("dishes", check_dishes)
STATUS_RULE = FieldRule("status", one_of(OrderStatus.values(), STATUS_MESSAGE))

order_exists = record_exists(RESOURCE, COLLECTION, "orderId")

create_validators = (
    body_data_has(RESOURCE, "deliverTo"),
    body_data_has(RESOURCE, "mobileNumber"),
    body_data_has(RESOURCE, "dishes"),
    field_is_valid(DELIVER_TO_RULE),
    field_is_valid(MOBILE_NUMBER_RULE),
    field_is_valid(DISHES_RULE),
)

update_validators = (
    body_data_has(RESOURCE, "deliverTo"),
    body_data_has(RESOURCE, "mobileNumber"),
    body_data_has(RESOURCE, "status"),
    body_data_has(RESOURCE, "dishes"),
    field_is_valid(DELIVER_TO_RULE),
    field_is_valid(MOBILE_NUMBER_RULE),
    field_is_valid(DISHES_RULE),
    field_is_valid(STATUS_RULE),
)


def _check_optional_status(payload: dict[str, Any]) -> None:
    if payload.get("status") is not None:
        message = STATUS_RULE.validate(payload)
        if message is not None:
            raise validation_error(message)


# =============================================================================
# TERMINAL ACTIONS
# =============================================================================

def list_orders(context: RequestContext) -> Outcome:
    return Outcome(data=[order.to_dict() for order in context.store.orders.all()])


def create_order(context: RequestContext) -> Outcome:
    """Create an order; status defaults to pending when not supplied."""
    _check_optional_status(context.payload)

    store = context.store
    order = store.orders.add(Order.from_payload(store.next_id(), context.payload))
    logger.info(
        f"Order {order.id} created: {len(order.dishes)} line(s), status {order.status.value}"
    )
    return Outcome(status=201, data=order.to_dict())


def seed_order(context: RequestContext) -> Outcome:
    _check_optional_status(context.payload)

    store = context.store
    order_id = store.seed_id(context.payload.get("id"), RESOURCE)
    order = store.orders.add(Order.from_payload(order_id, context.payload))
    return Outcome(status=201, data=order.to_dict())


def read_order(context: RequestContext) -> Outcome:
    return Outcome(data=context.locals["order"].to_dict())


def update_order(context: RequestContext) -> Outcome:
    """
    Overwrite the order in place.

    Rejected when the payload id does not match the route, when the
    submitted status is "delivered", or when the order is already delivered.
    """
    order: Order = context.locals["order"]
    payload = context.payload
    payload_id = payload.get("id")
    order_id = context.params["orderId"]

    if payload_id and str(payload_id) != order_id:
        raise validation_error(
            f"Order id does not match route id. Order: {payload_id}, Route: {order_id}"
        )
    if payload["status"] == OrderStatus.DELIVERED.value or order.is_delivered:
        raise validation_error("A delivered order cannot be changed")

    order.apply(payload)
    logger.info(f"Order {order.id} updated: status {order.status.value}")
    return Outcome(data=order.to_dict())


def delete_order(context: RequestContext) -> Outcome:
    order: Order = context.locals["order"]

    if not order.is_pending:
        raise validation_error("An order cannot be deleted unless it is pending")

    context.store.orders.remove(order.id)
    logger.info(f"Order {order.id} deleted")
    return Outcome(status=204)


# =============================================================================
# CHAINS
# =============================================================================

list_all = Chain(action=list_orders, collection=COLLECTION)
create = Chain(*create_validators, action=create_order, collection=COLLECTION)
read = Chain(order_exists, action=read_order, collection=COLLECTION)
update = Chain(order_exists, *update_validators, action=update_order, collection=COLLECTION)
delete = Chain(order_exists, action=delete_order, collection=COLLECTION)
seed = Chain(*create_validators, action=seed_order, collection=COLLECTION)
