"""NAT gateway read handler."""
from natgateway.domain.handler import Action, CallbackContext, ProgressEvent, ResourceHandlerRequest
from natgateway.providers.aws.infrastructure.handlers.base_handler import BaseNatGatewayHandler


class ReadHandler(BaseNatGatewayHandler):
    """Handler returning the current model of an existing gateway."""

    action = Action.READ

    def _handle(self, request: ResourceHandlerRequest, context: CallbackContext) -> ProgressEvent:
        nat_gateway_id = self._require_identifier(request.desired_resource_state)
        return ProgressEvent.success(self.read_resource(nat_gateway_id))
