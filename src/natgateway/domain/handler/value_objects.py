"""Handler value objects - operation status, error kinds and callback context."""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Action(str, Enum):
    """Lifecycle operations a handler can perform."""
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LIST = "LIST"


class OperationStatus(str, Enum):
    """Outcome of a single handler invocation."""
    SUCCESS = "SUCCESS"
    IN_PROGRESS = "IN_PROGRESS"
    FAILED = "FAILED"


class HandlerErrorCode(str, Enum):
    """Classified error kinds surfaced to the orchestrating caller."""
    INVALID_REQUEST = "InvalidRequest"
    NOT_FOUND = "NotFound"
    SERVICE_LIMIT_EXCEEDED = "ServiceLimitExceeded"
    ACCESS_DENIED = "AccessDenied"
    SERVICE_INTERNAL_ERROR = "ServiceInternalError"
    GENERAL_SERVICE_ERROR = "GeneralServiceError"
    NOT_STABILIZED = "NotStabilized"


class CallbackContext(BaseModel):
    """
    Resumption token for a handler that has not stabilized yet.

    A context is returned with every IN_PROGRESS event and must be passed back
    unchanged on the next invocation. It is never mutated; every step produces
    a new instance.
    """
    model_config = ConfigDict(frozen=True)

    nat_gateway_id: Optional[str] = None
    mutation_issued: bool = False
    stabilization_attempts: int = 0
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def with_mutation(self, nat_gateway_id: str) -> 'CallbackContext':
        """Record that the mutating call went through for the given gateway."""
        return self.model_copy(update={
            'nat_gateway_id': nat_gateway_id,
            'mutation_issued': True,
        })

    def next_attempt(self) -> 'CallbackContext':
        """Return a context advanced by one stabilization poll."""
        return self.model_copy(update={
            'stabilization_attempts': self.stabilization_attempts + 1,
        })

    def elapsed_seconds(self, now: Optional[datetime] = None) -> float:
        """Seconds since the operation was first invoked."""
        now = now or datetime.now(timezone.utc)
        return (now - self.started_at).total_seconds()
