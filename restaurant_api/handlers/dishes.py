"""
Dish Handler

Chains for the dish resource. Each public chain is an ordered list of
stages ending in one terminal action:

    list_all : list
    create   : 4 presence + 4 validity stages, create
    read     : dish_exists, read
    update   : dish_exists, 4 presence + 4 validity stages, update
    seed     : same stages as create, keeps a supplied id (startup data)

Dishes are never deleted.
"""

import logging

from restaurant_api.core.chain import Chain, Outcome, RequestContext
from restaurant_api.core.errors import validation_error
from restaurant_api.core.validation import (
    FieldRule,
    body_data_has,
    field_is_valid,
    is_non_empty_string,
    is_positive_integer,
    record_exists,
    require,
)
from restaurant_api.models import Dish

logger = logging.getLogger(__name__)

RESOURCE = "Dish"
COLLECTION = "dishes"

DISH_FIELDS = ("name", "description", "price", "image_url")

DISH_RULES = (
    FieldRule("name", require(is_non_empty_string, "Dish must include a name")),
    FieldRule("description", require(is_non_empty_string, "Dish must include a description")),
    FieldRule(
        "price",
        require(is_positive_integer, "Dish must have a price that is an integer greater than 0"),
    ),
    FieldRule("image_url", require(is_non_empty_string, "Dish must include a image_url")),
)

dish_exists = record_exists(RESOURCE, COLLECTION, "dishId")

validators = (
    *(body_data_has(RESOURCE, name) for name in DISH_FIELDS),
    *(field_is_valid(rule) for rule in DISH_RULES),
)


# =============================================================================
# TERMINAL ACTIONS
# =============================================================================

def list_dishes(context: RequestContext) -> Outcome:
    return Outcome(data=[dish.to_dict() for dish in context.store.dishes.all()])


def create_dish(context: RequestContext) -> Outcome:
    store = context.store
    dish = store.dishes.add(Dish.from_payload(store.next_id(), context.payload))
    logger.info(f"Dish {dish.id} created: {dish.name}")
    return Outcome(status=201, data=dish.to_dict())


def seed_dish(context: RequestContext) -> Outcome:
    store = context.store
    dish_id = store.seed_id(context.payload.get("id"), RESOURCE)
    dish = store.dishes.add(Dish.from_payload(dish_id, context.payload))
    return Outcome(status=201, data=dish.to_dict())


def read_dish(context: RequestContext) -> Outcome:
    return Outcome(data=context.locals["dish"].to_dict())


def update_dish(context: RequestContext) -> Outcome:
    """
    Overwrite the dish in place.

    A payload id is optional, but when given it must match the route id.
    """
    dish: Dish = context.locals["dish"]
    payload_id = context.payload.get("id")
    dish_id = context.params["dishId"]

    if payload_id and str(payload_id) != dish_id:
        raise validation_error(
            f"Dish id does not match route id. Dish: {payload_id}, Route: {dish_id}"
        )

    dish.apply(context.payload)
    logger.info(f"Dish {dish.id} updated")
    return Outcome(data=dish.to_dict())


# =============================================================================
# CHAINS
# =============================================================================

list_all = Chain(action=list_dishes, collection=COLLECTION)
create = Chain(*validators, action=create_dish, collection=COLLECTION)
read = Chain(dish_exists, action=read_dish, collection=COLLECTION)
update = Chain(dish_exists, *validators, action=update_dish, collection=COLLECTION)
seed = Chain(*validators, action=seed_dish, collection=COLLECTION)
