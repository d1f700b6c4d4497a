"""NAT gateway resource model - the caller-facing view of a gateway."""
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from natgateway.domain.nat_gateway.value_objects import ConnectivityType


class ResourceModel(BaseModel):
    """
    Desired or observed state of a NAT gateway.

    Field aliases follow the AWS::EC2::NatGateway property names so that
    models can be read from and written to CloudFormation-style JSON.
    ``nat_gateway_id`` is assigned by EC2 on create and never changes.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        use_enum_values=True,
    )

    TYPE_NAME: ClassVar[str] = "AWS::EC2::NatGateway"

    nat_gateway_id: Optional[str] = Field(None, alias="NatGatewayId")

    # Creation parameters (immutable once the gateway exists)
    subnet_id: Optional[str] = Field(None, alias="SubnetId")
    allocation_id: Optional[str] = Field(None, alias="AllocationId")
    connectivity_type: Optional[ConnectivityType] = Field(None, alias="ConnectivityType")
    private_ip_address: Optional[str] = Field(None, alias="PrivateIpAddress")

    # Read-only
    vpc_id: Optional[str] = Field(None, alias="VpcId")

    tags: Dict[str, str] = Field(default_factory=dict, alias="Tags")

    @field_validator('tags', mode='before')
    @classmethod
    def normalize_tags(cls, value: Any) -> Dict[str, str]:
        """Accept either a key/value map or a list of {"Key", "Value"} entries."""
        if value is None:
            return {}
        if isinstance(value, list):
            tags = {}
            for tag in value:
                key = tag.get('Key', tag.get('key'))
                if key is None:
                    raise ValueError(f"Tag entry without a key: {tag}")
                tags[key] = tag.get('Value', tag.get('value', ''))
            return tags
        return value

    @property
    def has_identifier(self) -> bool:
        return bool(self.nat_gateway_id)

    def with_identifier(self, nat_gateway_id: str) -> 'ResourceModel':
        """Return a copy of this model carrying the given identifier."""
        return self.model_copy(update={'nat_gateway_id': nat_gateway_id})

    def primary_identifier(self) -> 'ResourceModel':
        """Return a minimal model carrying only the identifier."""
        return ResourceModel(nat_gateway_id=self.nat_gateway_id)

    def tag_list(self) -> List[Dict[str, str]]:
        """Tags in the list form used by CloudFormation templates."""
        return [{'Key': k, 'Value': v} for k, v in sorted(self.tags.items())]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using property names, omitting unset values."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        if self.tags:
            data['Tags'] = self.tag_list()
        else:
            data.pop('Tags', None)
        return data
