"""
Chain Failures

A single structured failure type carries the HTTP status and message that a
validation stage or terminal action rejects a request with. Two constructors
cover the kinds clients can see: validation (400) and not-found (404).
"""

from typing import Any


class ChainFailure(Exception):
    """
    Structured failure raised by a stage to halt its chain.

    Attributes:
        status: HTTP status code sent to the client
        message: Human-readable reason, returned verbatim
    """

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Convert to the client-facing error body."""
        return {"message": self.message}

    def __repr__(self) -> str:
        return f"<ChainFailure {self.status}: {self.message}>"


def validation_error(message: str) -> ChainFailure:
    """Missing/invalid field, mismatched id or illegal state change."""
    return ChainFailure(400, message)


def not_found(message: str) -> ChainFailure:
    return ChainFailure(404, message)
