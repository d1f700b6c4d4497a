"""NAT gateway list handler."""
from natgateway.domain.handler import Action, CallbackContext, ProgressEvent, ResourceHandlerRequest
from natgateway.domain.nat_gateway import ResourceModel
from natgateway.providers.aws.infrastructure import translator
from natgateway.providers.aws.infrastructure.handlers.base_handler import BaseNatGatewayHandler


class ListHandler(BaseNatGatewayHandler):
    """
    Handler enumerating gateways one page at a time.

    Deleted gateways are dropped from the page; each returned model carries
    only its identifier. The continuation token is passed through unchanged.
    """

    action = Action.LIST

    def _handle(self, request: ResourceHandlerRequest, context: CallbackContext) -> ProgressEvent:
        page = self._call("DescribeNatGateways", self.aws_client.list_nat_gateways,
                          request.next_token, self.handler_config.list_page_size)

        live = []
        for nat_gateway in page['NatGateways']:
            state = translator.get_state(nat_gateway)
            if state is not None and state.is_deleted:
                continue
            live.append(nat_gateway)

        self._logger.info("%s has successfully been listed (%s of %s on this page).",
                          ResourceModel.TYPE_NAME, len(live), len(page['NatGateways']))
        return ProgressEvent.success_list(translator.translate_from_list_response(live),
                                          page.get('NextToken'))
