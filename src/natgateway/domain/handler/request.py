"""Handler request - what the orchestrating caller submits for one operation."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from natgateway.domain.nat_gateway.aggregate import ResourceModel


class ResourceHandlerRequest(BaseModel):
    """
    Input to a lifecycle handler.

    Tag maps are optional; ``None`` is treated as an empty map everywhere.
    ``system_tags`` are tags the orchestrating caller manages on behalf of the
    user (for example stack-level tags).
    """
    model_config = ConfigDict(populate_by_name=True)

    desired_resource_state: Optional[ResourceModel] = Field(None, alias="desiredResourceState")
    previous_resource_state: Optional[ResourceModel] = Field(None, alias="previousResourceState")
    desired_resource_tags: Optional[Dict[str, str]] = Field(None, alias="desiredResourceTags")
    previous_resource_tags: Optional[Dict[str, str]] = Field(None, alias="previousResourceTags")
    system_tags: Optional[Dict[str, str]] = Field(None, alias="systemTags")
    previous_system_tags: Optional[Dict[str, str]] = Field(None, alias="previousSystemTags")
    client_request_token: Optional[str] = Field(None, alias="clientRequestToken")
    next_token: Optional[str] = Field(None, alias="nextToken")
    region: Optional[str] = None
    aws_account_id: Optional[str] = Field(None, alias="awsAccountId")

    @classmethod
    def for_model(cls, model: Optional[ResourceModel], **kwargs: Any) -> 'ResourceHandlerRequest':
        """Build a request whose desired state is the given model."""
        return cls(desired_resource_state=model, **kwargs)

    def with_desired_state(self, model: Optional[ResourceModel]) -> 'ResourceHandlerRequest':
        """Return a copy of this request targeting a different model."""
        return self.model_copy(update={'desired_resource_state': model})
