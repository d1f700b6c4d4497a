"""Tests for EC2 error classification."""
import pytest

from natgateway.domain.core.exceptions import (
    AccessDeniedError,
    GeneralServiceError,
    InvalidRequestError,
    NotFoundError,
    ServiceInternalError,
    ServiceLimitExceededError,
)
from natgateway.domain.handler import HandlerErrorCode
from natgateway.providers.aws.exceptions import (
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


@pytest.mark.unit
@pytest.mark.aws
class TestClassifyErrorCode:
    """Classification is total and deterministic."""

    @pytest.mark.parametrize("code,expected", [
        ("InvalidParameter", HandlerErrorCode.INVALID_REQUEST),
        ("InvalidParameterValue", HandlerErrorCode.INVALID_REQUEST),
        ("MissingParameter", HandlerErrorCode.INVALID_REQUEST),
        ("InvalidSubnetID.Malformed", HandlerErrorCode.INVALID_REQUEST),
        ("InvalidNatGatewayID.Malformed", HandlerErrorCode.INVALID_REQUEST),
        ("InvalidSubnetID.NotFound", HandlerErrorCode.NOT_FOUND),
        ("InvalidAllocationID.NotFound", HandlerErrorCode.NOT_FOUND),
        ("InvalidNatGatewayID.NotFound", HandlerErrorCode.NOT_FOUND),
        ("NatGatewayNotFound", HandlerErrorCode.NOT_FOUND),
        ("NatGatewayLimitExceeded", HandlerErrorCode.SERVICE_LIMIT_EXCEEDED),
        ("TagLimitExceeded", HandlerErrorCode.SERVICE_LIMIT_EXCEEDED),
        ("UnauthorizedOperation", HandlerErrorCode.ACCESS_DENIED),
        ("AccessDenied", HandlerErrorCode.ACCESS_DENIED),
        ("InternalError", HandlerErrorCode.SERVICE_INTERNAL_ERROR),
        ("ServiceUnavailable", HandlerErrorCode.SERVICE_INTERNAL_ERROR),
        ("RequestLimitExceeded", HandlerErrorCode.SERVICE_INTERNAL_ERROR),
        ("Throttling", HandlerErrorCode.SERVICE_INTERNAL_ERROR),
        ("ThrottlingException", HandlerErrorCode.SERVICE_INTERNAL_ERROR),
    ])
    def test_known_codes(self, code, expected):
        assert classify_error_code(code) == expected

    @pytest.mark.parametrize("code", [None, "", "SomethingNew", "invalidparameter", "Gateway.NotAttached"])
    def test_unknown_codes_use_default(self, code):
        assert classify_error_code(code) == DEFAULT_ERROR_CODE == HandlerErrorCode.GENERAL_SERVICE_ERROR

    def test_every_mapped_code_is_deterministic(self):
        for code, expected in ERROR_CODE_MAPPING.items():
            assert classify_error_code(code) == expected
            assert classify_error_code(code) == classify_error_code(code)

    def test_gateway_code_sets_are_mapped(self):
        for code in NAT_GATEWAY_NOT_FOUND_CODES:
            assert classify_error_code(code) == HandlerErrorCode.NOT_FOUND
        for code in NAT_GATEWAY_MALFORMED_ID_CODES:
            assert classify_error_code(code) == HandlerErrorCode.INVALID_REQUEST

    def test_throttling_codes(self):
        for code in THROTTLING_CODES:
            assert is_throttling_code(code)
        assert not is_throttling_code("InternalError")
        assert not is_throttling_code(None)


@pytest.mark.unit
@pytest.mark.aws
class TestConvertClientError:

    @pytest.mark.parametrize("code,exception_type", [
        ("InvalidParameterValue", InvalidRequestError),
        ("InvalidSubnetID.NotFound", NotFoundError),
        ("NatGatewayLimitExceeded", ServiceLimitExceededError),
        ("UnauthorizedOperation", AccessDeniedError),
        ("InternalError", ServiceInternalError),
        ("NoSuchThing", GeneralServiceError),
    ])
    def test_exception_type(self, make_client_error, code, exception_type):
        error = convert_client_error(make_client_error(code), "CreateNatGateway")
        assert type(error) is exception_type
        assert error.remote_code == code

    def test_message_includes_identifier_and_operation(self, make_client_error):
        error = convert_client_error(
            make_client_error("InvalidNatGatewayID.NotFound", "The gateway does not exist"),
            "DescribeNatGateways", "nat-1")
        assert error.message == ("NatGateway nat-1: DescribeNatGateways failed with "
                                 "InvalidNatGatewayID.NotFound: The gateway does not exist")
        assert error.details['RequestId'] == 'req-1'

    @pytest.mark.parametrize("code", ["RequestLimitExceeded", "Throttling", "ThrottlingException"])
    def test_throttling_flag(self, make_client_error, code):
        error = convert_client_error(make_client_error(code), "DescribeNatGateways")
        assert error.error_code == HandlerErrorCode.SERVICE_INTERNAL_ERROR
        assert error.throttled

    def test_get_error_code(self, make_client_error):
        assert get_error_code(make_client_error("AuthFailure")) == "AuthFailure"
