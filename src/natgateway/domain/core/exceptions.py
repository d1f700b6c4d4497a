# src/natgateway/domain/core/exceptions.py
from typing import Any, List, Optional

from natgateway.domain.handler.value_objects import HandlerErrorCode


class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    pass


class HandlerError(DomainException):
    """
    A classified failure of a lifecycle operation.

    Carries the outcome kind reported to the caller, the raw remote error
    code it was classified from (if any) and whether the remote side was
    throttling the request.
    """
    error_code: HandlerErrorCode = HandlerErrorCode.GENERAL_SERVICE_ERROR

    def __init__(self, message: str, remote_code: Optional[str] = None,
                 throttled: bool = False, details: Any = None):
        super().__init__(message)
        self.message = message
        self.remote_code = remote_code
        self.throttled = throttled
        self.details = details


class InvalidRequestError(HandlerError):
    """Raised when the request or one of its parameters is malformed."""
    error_code = HandlerErrorCode.INVALID_REQUEST


class NotFoundError(HandlerError):
    """Raised when the gateway or a resource it references does not exist."""
    error_code = HandlerErrorCode.NOT_FOUND


class ServiceLimitExceededError(HandlerError):
    """Raised when an account or resource quota would be exceeded."""
    error_code = HandlerErrorCode.SERVICE_LIMIT_EXCEEDED


class AccessDeniedError(HandlerError):
    """Raised when the caller is not authorized for the operation."""
    error_code = HandlerErrorCode.ACCESS_DENIED


class ServiceInternalError(HandlerError):
    """Raised for internal or unavailable errors; retryable by the caller."""
    error_code = HandlerErrorCode.SERVICE_INTERNAL_ERROR


class GeneralServiceError(HandlerError):
    """Raised for any remote failure that has no more specific kind."""
    error_code = HandlerErrorCode.GENERAL_SERVICE_ERROR


class StabilizationFailedError(GeneralServiceError):
    """Raised when the gateway reaches a failure-terminal state."""
    def __init__(self, nat_gateway_id: str, state: str, failure_message: Optional[str]):
        super().__init__(
            f"NatGateway {nat_gateway_id} is in state {state} and hence failed to stabilize. "
            f"Detailed failure message: {failure_message}"
        )
        self.nat_gateway_id = nat_gateway_id
        self.state = state
        self.failure_message = failure_message


class NotStabilizedError(HandlerError):
    """Raised by the caller-side scheduler when stabilization times out."""
    error_code = HandlerErrorCode.NOT_STABILIZED

    def __init__(self, nat_gateway_id: Optional[str], timeout_seconds: float, attempts: int):
        super().__init__(
            f"NatGateway {nat_gateway_id} did not stabilize within "
            f"{timeout_seconds:g} seconds after {attempts} attempts"
        )
        self.nat_gateway_id = nat_gateway_id
        self.timeout_seconds = timeout_seconds
        self.attempts = attempts


class ConfigurationError(DomainException):
    """Raised when there's an issue with configuration."""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []
