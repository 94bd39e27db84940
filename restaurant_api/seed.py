"""
Seed Data Loader

Loads initial dishes and orders from a JSON file at startup:

    {
        "dishes": [{"id": "...", "name": "...", ...}],
        "orders": [{"id": "...", "deliverTo": "...", ...}]
    }

Every record goes through the same stages as an API create, so seed data
obeys the same invariants. Ids given in the file are kept; missing ids are
allocated from the store's generator.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from restaurant_api.core.chain import Chain, RequestContext
from restaurant_api.handlers import dishes, orders
from restaurant_api.store import Store

logger = logging.getLogger(__name__)


class SeedDataError(ValueError):
    """Raised when the seed file cannot be read or holds invalid records."""


def _load_records(store: Store, chain: Chain, resource: str, records: Any) -> int:
    if not isinstance(records, list):
        raise SeedDataError(f"'{resource}' must be a list")

    for index, record in enumerate(records):
        context = RequestContext.from_body(store, {"data": record})
        result = chain.run(context)
        if not result.ok:
            raise SeedDataError(f"{resource}[{index}]: {result.failure.message}")

    return len(records)


def load_seed_data(store: Store, data: dict[str, Any]) -> dict[str, int]:
    """
    Load already-decoded seed data into the store.

    Returns:
        Counts of loaded records per collection

    Raises:
        SeedDataError: If a record fails validation or an id is duplicated
    """
    try:
        loaded = {
            "dishes": _load_records(store, dishes.seed, "dishes", data.get("dishes", [])),
            "orders": _load_records(store, orders.seed, "orders", data.get("orders", [])),
        }
    except ValueError as e:
        if isinstance(e, SeedDataError):
            raise
        raise SeedDataError(str(e)) from e

    logger.info(f"Seed data loaded: {loaded['dishes']} dishes, {loaded['orders']} orders")
    return loaded


def load_seed_file(store: Store, path: Union[str, Path]) -> dict[str, int]:
    """Read a JSON seed file and load it into the store."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SeedDataError(f"Could not read seed file {path}: {e}") from e

    if not isinstance(data, dict):
        raise SeedDataError(f"Seed file {path} must contain a JSON object")

    return load_seed_data(store, data)
