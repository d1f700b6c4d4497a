"""Base NAT gateway handler with common functionality."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, TypeVar

from botocore.exceptions import ClientError

from natgateway.config.schemas import HandlerConfig
from natgateway.domain.core.exceptions import HandlerError, NotFoundError
from natgateway.domain.handler import (
    Action,
    CallbackContext,
    HandlerErrorCode,
    ProgressEvent,
    ResourceHandlerRequest,
)
from natgateway.domain.nat_gateway import ResourceModel
from natgateway.infrastructure.aws.aws_client import AWSClient
from natgateway.providers.aws.exceptions import convert_client_error
from natgateway.providers.aws.infrastructure import translator
from natgateway.providers.aws.infrastructure.handlers.components import TagReconciler

T = TypeVar('T')

logger = logging.getLogger(__name__)


class BaseNatGatewayHandler(ABC):
    """
    Base class for the NAT gateway lifecycle handlers.

    Subclasses implement ``_handle``; this class turns the classified errors
    it raises into FAILED progress events so that every handler reports
    failures identically.
    """

    action: Action

    def __init__(self, aws_client: AWSClient, handler_config: Optional[HandlerConfig] = None) -> None:
        """
        Initialize handler with common dependencies.

        Args:
            aws_client: EC2 client wrapper
            handler_config: Polling and tagging settings (defaults if omitted)
        """
        self.aws_client = aws_client
        self.handler_config = handler_config or HandlerConfig()
        self.tag_reconciler = TagReconciler(self.handler_config.reserved_tag_prefix)
        self._logger = logger

    def handle_request(self, request: ResourceHandlerRequest,
                       callback_context: Optional[CallbackContext] = None) -> ProgressEvent:
        """
        Run one invocation of the operation.

        Args:
            request: The caller's request
            callback_context: Context returned by the previous IN_PROGRESS event,
                              or None on the first invocation

        Returns:
            ProgressEvent describing success, progress or a classified failure
        """
        context = callback_context or CallbackContext()
        model = request.desired_resource_state
        self._logger.debug("%s %s invoked (attempt %s)", ResourceModel.TYPE_NAME,
                           self.action.value, context.stabilization_attempts)
        try:
            return self._handle(request, context)
        except HandlerError as e:
            self._logger.error("%s %s failed with %s: %s", ResourceModel.TYPE_NAME,
                               self.action.value, e.error_code.value, e.message)
            return ProgressEvent.from_error(self._failure_model(model, context), e)
        except Exception as e:
            self._logger.exception("Unexpected error during %s %s", ResourceModel.TYPE_NAME, self.action.value)
            return ProgressEvent.failed(self._failure_model(model, context),
                                        HandlerErrorCode.SERVICE_INTERNAL_ERROR,
                                        f"Unexpected error during {self.action.value}: {str(e)}")

    @abstractmethod
    def _handle(self, request: ResourceHandlerRequest, context: CallbackContext) -> ProgressEvent:
        """Perform the operation; raise HandlerError on classified failures."""

    def _call(self, operation_name: str, func: Callable[..., T], *args: Any,
              resource_id: Optional[str] = None, **kwargs: Any) -> T:
        """Invoke an EC2 call, classifying any ClientError it raises."""
        try:
            return func(*args, **kwargs)
        except ClientError as e:
            raise convert_client_error(e, operation_name, resource_id)

    def _describe(self, nat_gateway_id: str) -> Dict[str, Any]:
        """
        Describe a gateway by identifier.

        Raises:
            NotFoundError: If EC2 returns no record for the identifier
            HandlerError: For classified EC2 errors
        """
        nat_gateway = self._call("DescribeNatGateways", self.aws_client.describe_nat_gateway,
                                 nat_gateway_id, resource_id=nat_gateway_id)
        if nat_gateway is None:
            raise NotFoundError(f"{ResourceModel.TYPE_NAME} with ID {nat_gateway_id} not found")
        return nat_gateway

    def read_resource(self, nat_gateway_id: str) -> ResourceModel:
        """
        Read the current model of a gateway.

        A gateway in the deleted state is reported as not found; EC2 keeps
        returning deleted gateways for a while after deletion.
        """
        nat_gateway = self._describe(nat_gateway_id)
        state = translator.get_state(nat_gateway)
        if state is not None and state.is_deleted:
            raise NotFoundError(f"{ResourceModel.TYPE_NAME} with ID {nat_gateway_id} not found")

        visible_tags = self.tag_reconciler.filter_reserved(translator.from_sdk_tags(nat_gateway.get('Tags')))
        model = translator.translate_from_read_response(nat_gateway, visible_tags)
        self._logger.info("%s %s has successfully been read.", ResourceModel.TYPE_NAME, nat_gateway_id)
        return model

    @staticmethod
    def _require_identifier(model: Optional[ResourceModel]) -> str:
        if model is None or not model.nat_gateway_id:
            raise NotFoundError("Nat Gateway ID cannot be empty")
        return model.nat_gateway_id

    def _in_progress(self, model: Optional[ResourceModel], context: CallbackContext) -> ProgressEvent:
        return ProgressEvent.in_progress(model, context, self.handler_config.callback_delay_seconds)

    @staticmethod
    def _failure_model(model: Optional[ResourceModel], context: CallbackContext) -> Optional[ResourceModel]:
        """The model to report on failure, carrying the identifier once known."""
        if model is not None and context.nat_gateway_id and not model.nat_gateway_id:
            return model.with_identifier(context.nat_gateway_id)
        return model
