"""NAT gateway update handler.

Tags are the only mutable property of a NAT gateway, so an update is a tag
reconciliation: tags missing from the gateway are created first, stale tags
are deleted afterwards, and the converged model is read back. Creating
before deleting means a renamed key never leaves the gateway untagged.
"""
from typing import Dict

from natgateway.domain.handler import Action, CallbackContext, ProgressEvent, ResourceHandlerRequest
from natgateway.domain.nat_gateway import ResourceModel, TagDelta
from natgateway.providers.aws.infrastructure.handlers.base_handler import BaseNatGatewayHandler


class UpdateHandler(BaseNatGatewayHandler):
    """Handler for NAT gateway tag updates."""

    action = Action.UPDATE

    def _handle(self, request: ResourceHandlerRequest, context: CallbackContext) -> ProgressEvent:
        nat_gateway_id = self._require_identifier(request.desired_resource_state)
        current = self.read_resource(nat_gateway_id)

        delta = self.compute_tag_delta(request, current)
        if delta.is_empty:
            self._logger.info("Tags of %s %s are already up to date", ResourceModel.TYPE_NAME, nat_gateway_id)
        else:
            self.apply_tag_delta(nat_gateway_id, delta)

        return ProgressEvent.success(self.read_resource(nat_gateway_id))

    def compute_tag_delta(self, request: ResourceHandlerRequest, current: ResourceModel) -> TagDelta:
        """
        Diff the previous tags against the desired tags.

        When the request carries no previous state at all, the tags observed
        on the gateway are used as the previous set.
        """
        desired = self.tag_reconciler.desired_tags(request)
        if self._has_previous_tags(request):
            previous = self.tag_reconciler.previous_tags(request)
        else:
            previous = current.tags

        return self.tag_reconciler.compute_delta(previous, desired)

    @staticmethod
    def _has_previous_tags(request: ResourceHandlerRequest) -> bool:
        return (request.previous_resource_state is not None
                or request.previous_resource_tags is not None
                or request.previous_system_tags is not None)

    def apply_tag_delta(self, nat_gateway_id: str, delta: TagDelta) -> None:
        """Create added tags, then delete removed ones. Any error aborts."""
        if delta.to_add:
            tags_to_add: Dict[str, str] = self.tag_reconciler.as_map(delta.to_add)
            self._call("CreateTags", self.aws_client.create_tags, [nat_gateway_id], tags_to_add,
                       resource_id=nat_gateway_id)
            self._logger.info("Added tags %s to %s", sorted(tags_to_add), nat_gateway_id)

        if delta.to_remove:
            tags_to_remove: Dict[str, str] = self.tag_reconciler.as_map(delta.to_remove)
            self._call("DeleteTags", self.aws_client.delete_tags, [nat_gateway_id], tags_to_remove,
                       resource_id=nat_gateway_id)
            self._logger.info("Removed tags %s from %s", sorted(tags_to_remove), nat_gateway_id)
