"""
Translation between the NAT gateway resource model and EC2 API shapes.

Centralized place for:
    - EC2 request construction
    - conversion of EC2 records into resource models for read/list
    - tag format conversion
"""
from typing import Any, Dict, List, Optional

from natgateway.domain.nat_gateway.aggregate import ResourceModel
from natgateway.domain.nat_gateway.value_objects import NatGatewayState

NAT_GATEWAY_RESOURCE_TYPE = "natgateway"


def to_sdk_tags(tags: Optional[Dict[str, str]]) -> List[Dict[str, str]]:
    """Convert a tag map to the EC2 ``[{'Key', 'Value'}]`` form."""
    return [{'Key': k, 'Value': v} for k, v in sorted((tags or {}).items())]


def from_sdk_tags(sdk_tags: Optional[List[Dict[str, str]]]) -> Dict[str, str]:
    """Convert EC2 tags to a tag map."""
    return {tag['Key']: tag.get('Value', '') for tag in (sdk_tags or [])}


def translate_to_create_request(model: ResourceModel, tags: Dict[str, str],
                                client_token: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the CreateNatGateway parameters.

    Args:
        model: Desired resource model
        tags: Initial tags, already stripped of reserved keys
        client_token: Idempotency token for the create call

    Returns:
        Keyword arguments for ``create_nat_gateway``
    """
    request: Dict[str, Any] = {'SubnetId': model.subnet_id}
    if model.allocation_id:
        request['AllocationId'] = model.allocation_id
    if model.connectivity_type:
        request['ConnectivityType'] = model.connectivity_type
    if model.private_ip_address:
        request['PrivateIpAddress'] = model.private_ip_address
    if client_token:
        request['ClientToken'] = client_token
    if tags:
        request['TagSpecifications'] = [{
            'ResourceType': NAT_GATEWAY_RESOURCE_TYPE,
            'Tags': to_sdk_tags(tags),
        }]
    return request


def get_state(nat_gateway: Dict[str, Any]) -> Optional[NatGatewayState]:
    return NatGatewayState.from_remote(nat_gateway.get('State'))


def translate_from_read_response(nat_gateway: Dict[str, Any],
                                 visible_tags: Dict[str, str]) -> ResourceModel:
    """
    Build a resource model from a DescribeNatGateways record.

    The first address entry supplies the allocation and private IP; private
    gateways carry no allocation.
    """
    addresses = nat_gateway.get('NatGatewayAddresses') or []
    first_address = addresses[0] if addresses else {}

    return ResourceModel(
        nat_gateway_id=nat_gateway.get('NatGatewayId'),
        subnet_id=nat_gateway.get('SubnetId'),
        vpc_id=nat_gateway.get('VpcId'),
        connectivity_type=nat_gateway.get('ConnectivityType'),
        allocation_id=first_address.get('AllocationId'),
        private_ip_address=first_address.get('PrivateIp'),
        tags=visible_tags,
    )


def translate_from_list_response(nat_gateways: List[Dict[str, Any]]) -> List[ResourceModel]:
    """Minimal models (identifier only) for the given records."""
    return [translate_from_read_response(nat, {}).primary_identifier() for nat in nat_gateways]
