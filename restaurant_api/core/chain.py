"""
Validation Chain

A chain is an ordered list of stages followed by a single terminal action.
Every stage receives the same ``RequestContext`` and either returns (pass)
or raises ``ChainFailure``. The runner stops at the first failure and hands
back a tagged ``ChainResult``; only the terminal action reads or mutates the
store to produce a success ``Outcome``.

Usage:
    create = Chain(
        body_data_has("Dish", "name"),
        field_is_valid(NAME_RULE),
        action=create_dish,
        collection="dishes",
    )
    result = create.run(RequestContext.from_body(store, body))
    if result.ok:
        return result.outcome.envelope()
"""

import logging
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TYPE_CHECKING

from restaurant_api.core.errors import ChainFailure

if TYPE_CHECKING:
    from restaurant_api.store import Store

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """
    Request-scoped values shared by every stage of a chain.

    Attributes:
        store: Application store
        params: Path parameters (e.g. {"dishId": "3"})
        payload: The ``data`` object of the request body, or {} if absent
        locals: Values attached by stages for later stages (found records)
    """
    store: "Store"
    params: dict[str, str] = field(default_factory=dict)
    payload: dict[str, Any] = field(default_factory=dict)
    locals: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_body(cls, store: "Store", body: Any = None, **params: str) -> "RequestContext":
        """
        Build a context from a decoded JSON body.

        Anything other than ``{"data": {...}}`` yields an empty payload, so a
        missing body is reported by the presence stages instead of crashing.
        """
        data = body.get("data") if isinstance(body, dict) else None
        return cls(
            store=store,
            params=dict(params),
            payload=data if isinstance(data, dict) else {},
        )


@dataclass
class Outcome:
    """Success produced by a terminal action."""
    status: int = 200
    data: Any = None

    def envelope(self) -> Optional[dict[str, Any]]:
        """Wrap the data in the response envelope; 204 has no body."""
        if self.status == 204:
            return None
        return {"data": self.data}


@dataclass
class ChainResult:
    """Tagged result: exactly one of ``outcome`` or ``failure`` is set."""
    context: RequestContext
    outcome: Optional[Outcome] = None
    failure: Optional[ChainFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> Outcome:
        """Return the outcome, or raise the failure for the app handler."""
        if self.failure is not None:
            raise self.failure
        return self.outcome


Stage = Callable[[RequestContext], None]
Action = Callable[[RequestContext], Outcome]


class Chain:
    """
    Ordered stages plus one terminal action.

    Args:
        *stages: Validation/existence stages, run in declaration order
        action: Terminal action producing the success outcome
        collection: Store collection whose lock is held for the whole run
        name: Label used in log lines
    """

    def __init__(
        self,
        *stages: Stage,
        action: Action,
        collection: Optional[str] = None,
        name: Optional[str] = None,
    ):
        self.stages = tuple(stages)
        self.action = action
        self.collection = collection
        self.name = name or getattr(action, "__name__", "chain")

    def __len__(self) -> int:
        return len(self.stages) + 1

    def run(self, context: RequestContext) -> ChainResult:
        """
        Execute the chain against a context.

        ``ChainFailure`` from any stage or the action is captured in the
        result; any other exception propagates to the caller.
        """
        if self.collection is not None:
            lock = context.store.repository(self.collection).lock
        else:
            lock = nullcontext()

        with lock:
            try:
                for stage in self.stages:
                    stage(context)
                outcome = self.action(context)
            except ChainFailure as failure:
                logger.debug(f"{self.name}: rejected with {failure.status} - {failure.message}")
                return ChainResult(context=context, failure=failure)

        return ChainResult(context=context, outcome=outcome)

    def __repr__(self):
        return f"<Chain {self.name} ({len(self)} steps)>"
