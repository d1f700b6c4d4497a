"""NAT gateway delete handler.

Deleting a gateway that is already gone succeeds without calling EC2's
delete API. After the delete call the gateway is polled until it reports
the deleted state or disappears.
"""
from natgateway.domain.core.exceptions import (
    HandlerError,
    NotFoundError,
    StabilizationFailedError,
)
from natgateway.domain.handler import (
    Action,
    CallbackContext,
    HandlerErrorCode,
    ProgressEvent,
    ResourceHandlerRequest,
)
from natgateway.domain.nat_gateway import ResourceModel
from natgateway.providers.aws.exceptions import NAT_GATEWAY_MALFORMED_ID_CODES
from natgateway.providers.aws.infrastructure import translator
from natgateway.providers.aws.infrastructure.handlers.base_handler import BaseNatGatewayHandler

MESSAGE_STABILIZED = "Nat Gateway operation has stabilized"
MESSAGE_DID_NOT_STABILIZE = "Nat Gateway delete operation did not stabilize"


class DeleteHandler(BaseNatGatewayHandler):
    """Handler for NAT gateway deletion."""

    action = Action.DELETE

    def _handle(self, request: ResourceHandlerRequest, context: CallbackContext) -> ProgressEvent:
        model = request.desired_resource_state

        if not context.mutation_issued:
            nat_gateway_id = self._require_identifier(model)
            try:
                self.read_resource(nat_gateway_id)
            except NotFoundError:
                self._logger.info("%s %s does not exist, nothing to delete", ResourceModel.TYPE_NAME,
                                  nat_gateway_id)
                return ProgressEvent.success()

            self._call("DeleteNatGateway", self.aws_client.delete_nat_gateway,
                       nat_gateway_id, resource_id=nat_gateway_id)
            self._logger.info("Delete requested for %s %s", ResourceModel.TYPE_NAME, nat_gateway_id)
            context = context.with_mutation(nat_gateway_id)

        if self.is_delete_stabilized(context.nat_gateway_id):
            return ProgressEvent.success()
        return self._in_progress(model, context.next_attempt())

    def is_delete_stabilized(self, nat_gateway_id: str) -> bool:
        """
        Check whether the gateway is gone.

        A describe error saying the gateway is unknown or its identifier is
        malformed means it no longer exists, which is the desired outcome.

        Raises:
            StabilizationFailedError: If the gateway reports the failed state
            HandlerError: For any other classified describe error
        """
        try:
            nat_gateway = self._describe(nat_gateway_id)
        except HandlerError as e:
            if e.error_code == HandlerErrorCode.NOT_FOUND or e.remote_code in NAT_GATEWAY_MALFORMED_ID_CODES:
                self._logger.info(MESSAGE_STABILIZED)
                return True
            if e.throttled:
                self._logger.info("DescribeNatGateways throttled while deleting %s, will retry", nat_gateway_id)
                return False
            raise

        state = translator.get_state(nat_gateway)
        if state is not None and state.is_deleted:
            self._logger.info(MESSAGE_STABILIZED)
            return True
        if state is not None and state.is_failure_terminal:
            raise StabilizationFailedError(nat_gateway_id, nat_gateway.get('State'),
                                           nat_gateway.get('FailureMessage'))
        if state is not None and state.is_in_progress:
            self._logger.info("%s (state %s)", MESSAGE_DID_NOT_STABILIZE, state.value)
        else:
            self._logger.warning("%s (unrecognized state %s)", MESSAGE_DID_NOT_STABILIZE,
                                 nat_gateway.get('State'))
        return False
