"""
Validation Stages

Reusable stage factories for request chains:

    - body_data_has: field presence ("<Resource> must include a <field>")
    - field_is_valid: runs one declarative FieldRule against the payload
    - record_exists: id lookup that attaches the found record to the context

Field rules are declared per resource as (field, check) pairs, where the
check returns an error message or None.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from restaurant_api.core.chain import RequestContext, Stage
from restaurant_api.core.errors import not_found, validation_error

Check = Callable[[Any], Optional[str]]


# =============================================================================
# PREDICATES
# =============================================================================

def is_present(value: Any) -> bool:
    """
    A field is present unless it is missing, null or the empty string.

    Narrower than a plain truthiness test: ``0``, ``False`` and ``[]`` count
    as present, so they fail the field's validity rule with its own message
    (e.g. the price message) rather than "must include".
    """
    return value is not None and value != ""


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def is_positive_integer(value: Any) -> bool:
    """
    True for ints > 0 and integral floats > 0 (JSON ``5.0``).

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return value.is_integer() and value > 0
    return isinstance(value, int) and value > 0


# =============================================================================
# FIELD RULES
# =============================================================================

@dataclass(frozen=True)
class FieldRule:
    """
    Declarative validity rule for one payload field.

    Attributes:
        field: Payload key
        check: Returns the failure message, or None when the value is valid
    """
    field: str
    check: Check

    def validate(self, payload: dict[str, Any]) -> Optional[str]:
        return self.check(payload.get(self.field))


def require(predicate: Callable[[Any], bool], message: str) -> Check:
    """Turn a predicate into a check that fails with a fixed message."""
    def check(value: Any) -> Optional[str]:
        return None if predicate(value) else message
    return check


def one_of(choices: Iterable[str], message: str) -> Check:
    allowed = frozenset(choices)

    def check(value: Any) -> Optional[str]:
        return None if isinstance(value, str) and value in allowed else message
    return check


# =============================================================================
# STAGE FACTORIES
# =============================================================================

def body_data_has(resource: str, field_name: str) -> Stage:
    """
    Presence stage for one payload field.

    Args:
        resource: Display name used in the message ("Dish", "Order")
        field_name: Payload key that must be present
    """
    def stage(context: RequestContext) -> None:
        if not is_present(context.payload.get(field_name)):
            raise validation_error(f"{resource} must include a {field_name}")

    stage.__name__ = f"body_data_has_{field_name}"
    return stage


def field_is_valid(rule: FieldRule) -> Stage:
    """Validity stage running a single field rule."""
    def stage(context: RequestContext) -> None:
        message = rule.validate(context.payload)
        if message is not None:
            raise validation_error(message)

    stage.__name__ = f"{rule.field}_is_valid"
    return stage


def record_exists(resource: str, collection: str, param: str) -> Stage:
    """
    Existence stage: look up ``params[param]`` in a store collection.

    On a hit the record is attached as ``context.locals[resource.lower()]``.

    Args:
        resource: Display name used in the message ("Dish", "Order")
        collection: Store collection name ("dishes", "orders")
        param: Path parameter holding the id ("dishId", "orderId")
    """
    key = resource.lower()

    def stage(context: RequestContext) -> None:
        record_id = context.params.get(param, "")
        found = context.store.repository(collection).get(record_id)
        if found is None:
            raise not_found(f"{resource} id not found: {record_id}")
        context.locals[key] = found

    stage.__name__ = f"{key}_exists"
    return stage
