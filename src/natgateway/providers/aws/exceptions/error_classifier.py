"""
EC2 error classification.

Every ``ClientError`` raised by the EC2 API is classified exactly once, at
the point where it is caught, into one of the handler error kinds. The
mapping is a static table with a single default so that every handler
classifies identically and unknown codes never escape as raw exceptions.
"""
import logging
from typing import Dict, FrozenSet, Optional, Type

from botocore.exceptions import ClientError

from natgateway.domain.core.exceptions import (
    AccessDeniedError,
    GeneralServiceError,
    HandlerError,
    InvalidRequestError,
    NotFoundError,
    ServiceInternalError,
    ServiceLimitExceededError,
)
from natgateway.domain.handler.value_objects import HandlerErrorCode

logger = logging.getLogger(__name__)

# Codes EC2 uses when the gateway identifier itself is unknown or malformed
NAT_GATEWAY_NOT_FOUND_CODES: FrozenSet[str] = frozenset({
    "InvalidNatGatewayID.NotFound",
    "NatGatewayNotFound",
})

NAT_GATEWAY_MALFORMED_ID_CODES: FrozenSet[str] = frozenset({
    "InvalidNatGatewayId.Malformed",
    "InvalidNatGatewayID.Malformed",
    "NatGatewayMalformed",
})

THROTTLING_CODES: FrozenSet[str] = frozenset({
    "RequestLimitExceeded",
    "Throttling",
    "ThrottlingException",
})

ERROR_CODE_MAPPING: Dict[str, HandlerErrorCode] = {
    # Malformed or missing parameters
    "InvalidParameter": HandlerErrorCode.INVALID_REQUEST,
    "InvalidParameterValue": HandlerErrorCode.INVALID_REQUEST,
    "InvalidParameterCombination": HandlerErrorCode.INVALID_REQUEST,
    "MissingParameter": HandlerErrorCode.INVALID_REQUEST,
    "InvalidSubnet": HandlerErrorCode.INVALID_REQUEST,
    "InvalidSubnetID.Malformed": HandlerErrorCode.INVALID_REQUEST,
    "InvalidElasticIpID.Malformed": HandlerErrorCode.INVALID_REQUEST,
    "InvalidAllocationID.Malformed": HandlerErrorCode.INVALID_REQUEST,
    **{code: HandlerErrorCode.INVALID_REQUEST for code in NAT_GATEWAY_MALFORMED_ID_CODES},

    # The gateway or one of its dependencies does not exist
    "InvalidSubnetID.NotFound": HandlerErrorCode.NOT_FOUND,
    "InvalidElasticIpID.NotFound": HandlerErrorCode.NOT_FOUND,
    "InvalidAllocationID.NotFound": HandlerErrorCode.NOT_FOUND,
    **{code: HandlerErrorCode.NOT_FOUND for code in NAT_GATEWAY_NOT_FOUND_CODES},

    # Quotas
    "NatGatewayLimitExceeded": HandlerErrorCode.SERVICE_LIMIT_EXCEEDED,
    "TagLimitExceeded": HandlerErrorCode.SERVICE_LIMIT_EXCEEDED,
    "FilterLimitExceeded": HandlerErrorCode.SERVICE_LIMIT_EXCEEDED,
    "ResourceLimitExceeded": HandlerErrorCode.SERVICE_LIMIT_EXCEEDED,
    "AddressLimitExceeded": HandlerErrorCode.SERVICE_LIMIT_EXCEEDED,

    # Authorization
    "UnauthorizedOperation": HandlerErrorCode.ACCESS_DENIED,
    "AccessDenied": HandlerErrorCode.ACCESS_DENIED,
    "AuthFailure": HandlerErrorCode.ACCESS_DENIED,

    # Internal, unavailable or throttled; retryable by the caller
    "InternalError": HandlerErrorCode.SERVICE_INTERNAL_ERROR,
    "InternalFailure": HandlerErrorCode.SERVICE_INTERNAL_ERROR,
    "ServiceUnavailable": HandlerErrorCode.SERVICE_INTERNAL_ERROR,
    "Unavailable": HandlerErrorCode.SERVICE_INTERNAL_ERROR,
    **{code: HandlerErrorCode.SERVICE_INTERNAL_ERROR for code in THROTTLING_CODES},
}

DEFAULT_ERROR_CODE = HandlerErrorCode.GENERAL_SERVICE_ERROR

_EXCEPTION_TYPES: Dict[HandlerErrorCode, Type[HandlerError]] = {
    HandlerErrorCode.INVALID_REQUEST: InvalidRequestError,
    HandlerErrorCode.NOT_FOUND: NotFoundError,
    HandlerErrorCode.SERVICE_LIMIT_EXCEEDED: ServiceLimitExceededError,
    HandlerErrorCode.ACCESS_DENIED: AccessDeniedError,
    HandlerErrorCode.SERVICE_INTERNAL_ERROR: ServiceInternalError,
    HandlerErrorCode.GENERAL_SERVICE_ERROR: GeneralServiceError,
}


def classify_error_code(code: Optional[str]) -> HandlerErrorCode:
    """
    Map a remote error code to a handler error kind.

    Total and deterministic: unknown, empty or missing codes all map to
    GeneralServiceError.
    """
    if not code:
        return DEFAULT_ERROR_CODE
    return ERROR_CODE_MAPPING.get(code, DEFAULT_ERROR_CODE)


def is_throttling_code(code: Optional[str]) -> bool:
    return code in THROTTLING_CODES


def get_error_code(error: ClientError) -> Optional[str]:
    """Extract the machine-readable code from a botocore ClientError."""
    return error.response.get('Error', {}).get('Code')


def convert_client_error(error: ClientError, operation_name: str = "unknown",
                         resource_id: Optional[str] = None) -> HandlerError:
    """
    Convert an EC2 ClientError to a classified handler error.

    Args:
        error: The error raised by boto3
        operation_name: EC2 operation that failed, for the message
        resource_id: Gateway identifier, included in the message when known

    Returns:
        HandlerError subclass matching the classified kind
    """
    code = get_error_code(error)
    remote_message = error.response.get('Error', {}).get('Message', str(error))
    kind = classify_error_code(code)

    subject = f"NatGateway {resource_id}" if resource_id else "NatGateway"
    message = f"{subject}: {operation_name} failed with {code}: {remote_message}"

    logger.debug("Classified %s error code %s as %s", operation_name, code, kind.value)
    return _EXCEPTION_TYPES[kind](
        message,
        remote_code=code,
        throttled=is_throttling_code(code),
        details=error.response.get('ResponseMetadata'),
    )
