"""NAT gateway create handler.

Creates the gateway, then polls DescribeNatGateways once per invocation until
the gateway is available. The identifier is carried in the callback context
so a re-invocation resumes polling without issuing another create call.
"""
from natgateway.domain.core.exceptions import (
    HandlerError,
    InvalidRequestError,
    StabilizationFailedError,
)
from natgateway.domain.handler import (
    Action,
    CallbackContext,
    HandlerErrorCode,
    ProgressEvent,
    ResourceHandlerRequest,
)
from natgateway.domain.nat_gateway import NatGatewayState, ResourceModel
from natgateway.providers.aws.infrastructure import translator
from natgateway.providers.aws.infrastructure.handlers.base_handler import BaseNatGatewayHandler


class CreateHandler(BaseNatGatewayHandler):
    """Handler for NAT gateway creation."""

    action = Action.CREATE

    def _handle(self, request: ResourceHandlerRequest, context: CallbackContext) -> ProgressEvent:
        model = request.desired_resource_state
        if model is None:
            raise InvalidRequestError("Desired resource state is required to create a NAT gateway")

        if not context.mutation_issued:
            if model.has_identifier:
                raise InvalidRequestError(
                    f"NatGatewayId is a read-only property and cannot be set on create "
                    f"(got {model.nat_gateway_id})"
                )
            nat_gateway_id = self.create_resource(request, model)
            context = context.with_mutation(nat_gateway_id)
        elif not context.nat_gateway_id:
            raise InvalidRequestError("Callback context records a create call but no NatGatewayId")

        model = model.with_identifier(context.nat_gateway_id)

        try:
            if not self.is_create_stabilized(context.nat_gateway_id):
                return self._in_progress(model, context.next_attempt())
            return ProgressEvent.success(self.read_resource(context.nat_gateway_id))
        except HandlerError as e:
            self._logger.error("%s %s failed to stabilize: %s", ResourceModel.TYPE_NAME,
                               context.nat_gateway_id, e.message)
            return ProgressEvent.from_error(model, e)
        except Exception as e:
            self._logger.exception("Unexpected error while stabilizing %s %s", ResourceModel.TYPE_NAME,
                                   context.nat_gateway_id)
            return ProgressEvent.failed(model, HandlerErrorCode.SERVICE_INTERNAL_ERROR,
                                        f"Unexpected error during {self.action.value}: {str(e)}")

    def create_resource(self, request: ResourceHandlerRequest, model: ResourceModel) -> str:
        """
        Create the NAT gateway by calling the CreateNatGateway API.

        Args:
            request: Caller request, supplying tags and the idempotency token
            model: Desired resource model

        Returns:
            The identifier EC2 assigned to the new gateway
        """
        tags = self.tag_reconciler.desired_tags(request)
        create_request = translator.translate_to_create_request(model, tags, request.client_request_token)
        nat_gateway = self._call("CreateNatGateway", self.aws_client.create_nat_gateway, **create_request)

        nat_gateway_id = nat_gateway['NatGatewayId']
        self._logger.info("%s %s has been created in state %s", ResourceModel.TYPE_NAME,
                          nat_gateway_id, nat_gateway.get('State'))
        return nat_gateway_id

    def is_create_stabilized(self, nat_gateway_id: str) -> bool:
        """
        Check whether the gateway has become available.

        Returns:
            True when available, False while pending, not yet visible or throttled

        Raises:
            StabilizationFailedError: If the gateway failed or was deleted
            HandlerError: For any other classified describe error
        """
        try:
            nat_gateway = self._describe(nat_gateway_id)
        except HandlerError as e:
            if e.error_code == HandlerErrorCode.NOT_FOUND or e.throttled:
                self._logger.info("DescribeNatGateways for %s not ready yet (%s), will retry",
                                  nat_gateway_id, e.remote_code or e.error_code.value)
                return False
            self._logger.error("DescribeNatGateways API call during stabilization failed with exception: %s",
                               e.message)
            raise

        state = translator.get_state(nat_gateway)
        if state is NatGatewayState.AVAILABLE:
            self._logger.info("%s %s has stabilized and is fully available.", ResourceModel.TYPE_NAME,
                              nat_gateway_id)
            return True
        if state is not None and state.is_in_progress:
            self._logger.debug("%s %s is still %s", ResourceModel.TYPE_NAME, nat_gateway_id, state.value)
            return False
        if state is not None and (state.is_failure_terminal or state.is_deleted):
            raise StabilizationFailedError(nat_gateway_id, nat_gateway.get('State'),
                                           nat_gateway.get('FailureMessage'))
        self._logger.warning("%s %s reported unrecognized state %s", ResourceModel.TYPE_NAME, nat_gateway_id,
                             nat_gateway.get('State'))
        return False
