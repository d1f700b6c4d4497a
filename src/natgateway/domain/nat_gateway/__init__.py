"""NAT gateway domain - resource model and value objects."""

from .aggregate import ResourceModel
from .value_objects import ConnectivityType, NatGatewayState, TagDelta, TagPair

__all__ = [
    "ResourceModel",
    "ConnectivityType",
    "NatGatewayState",
    "TagDelta",
    "TagPair",
]
