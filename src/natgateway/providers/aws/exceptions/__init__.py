"""AWS provider exceptions."""

from natgateway.providers.aws.exceptions.error_classifier import (
    DEFAULT_ERROR_CODE,
    ERROR_CODE_MAPPING,
    NAT_GATEWAY_MALFORMED_ID_CODES,
    NAT_GATEWAY_NOT_FOUND_CODES,
    THROTTLING_CODES,
    classify_error_code,
    convert_client_error,
    get_error_code,
    is_throttling_code,
)

__all__: list[str] = [
    "DEFAULT_ERROR_CODE",
    "ERROR_CODE_MAPPING",
    "NAT_GATEWAY_MALFORMED_ID_CODES",
    "NAT_GATEWAY_NOT_FOUND_CODES",
    "THROTTLING_CODES",
    "classify_error_code",
    "convert_client_error",
    "get_error_code",
    "is_throttling_code",
]
