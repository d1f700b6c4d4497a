import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config

logger = logging.getLogger(__name__)


class AWSClient:
    """
    EC2 client management for the NAT gateway handlers.

    Wraps the boto3 EC2 client and exposes the calls the lifecycle handlers
    need. Errors are raised as ``botocore.exceptions.ClientError`` untouched;
    the handlers classify them.
    """

    def __init__(self, region_name: str, config: Optional[Dict[str, Any]] = None,
                 session: Optional[boto3.session.Session] = None,
                 ec2_client: Optional[Any] = None):
        """
        Initialize AWS client with configuration.

        Args:
            region_name: AWS region name
            config: Optional configuration dictionary
            session: Optional boto3 session carrying the caller's credentials
            ec2_client: Optional pre-built EC2 client, used as-is
        """
        config = config or {}
        self.region_name = region_name
        self.config = Config(
            region_name=region_name,
            retries={
                'max_attempts': config.get('AWS_REQUEST_RETRY_ATTEMPTS', 3),
                'mode': 'standard'
            },
            connect_timeout=config.get('AWS_CONNECTION_TIMEOUT_MS', 1000) / 1000
        )

        if ec2_client is not None:
            self.ec2_client = ec2_client
        else:
            session = session or boto3.session.Session()
            endpoint_url = config.get('AWS_ENDPOINT_URL') or None
            self.ec2_client = session.client('ec2', config=self.config, endpoint_url=endpoint_url)
        logger.debug(f"Initialized EC2 client for region {region_name}")

    def create_nat_gateway(self, **request: Any) -> Dict[str, Any]:
        """Create a NAT gateway and return the ``NatGateway`` record."""
        response = self.ec2_client.create_nat_gateway(**request)
        return response['NatGateway']

    def describe_nat_gateways(self, nat_gateway_ids: List[str]) -> List[Dict[str, Any]]:
        """Describe NAT gateways by identifier."""
        response = self.ec2_client.describe_nat_gateways(NatGatewayIds=nat_gateway_ids)
        return response.get('NatGateways', [])

    def describe_nat_gateway(self, nat_gateway_id: str) -> Optional[Dict[str, Any]]:
        """Describe a single NAT gateway, or None if EC2 returns no record."""
        gateways = self.describe_nat_gateways([nat_gateway_id])
        return gateways[0] if gateways else None

    def delete_nat_gateway(self, nat_gateway_id: str) -> str:
        """Delete a NAT gateway and return the identifier EC2 acknowledged."""
        response = self.ec2_client.delete_nat_gateway(NatGatewayId=nat_gateway_id)
        return response.get('NatGatewayId', nat_gateway_id)

    def create_tags(self, resource_ids: List[str], tags: Dict[str, str]) -> None:
        """Create or overwrite tags on AWS resources."""
        self.ec2_client.create_tags(
            Resources=resource_ids,
            Tags=[{'Key': k, 'Value': v} for k, v in tags.items()]
        )

    def delete_tags(self, resource_ids: List[str], tags: Dict[str, str]) -> None:
        """Delete tags whose key and value both match."""
        self.ec2_client.delete_tags(
            Resources=resource_ids,
            Tags=[{'Key': k, 'Value': v} for k, v in tags.items()]
        )

    def list_nat_gateways(self, next_token: Optional[str] = None,
                          max_results: Optional[int] = None) -> Dict[str, Any]:
        """
        Describe one page of NAT gateways.

        Returns:
            Dict with ``NatGateways`` and, if more pages exist, ``NextToken``
        """
        kwargs: Dict[str, Any] = {}
        if next_token:
            kwargs['NextToken'] = next_token
        if max_results:
            kwargs['MaxResults'] = max_results
        response = self.ec2_client.describe_nat_gateways(**kwargs)
        return {
            'NatGateways': response.get('NatGateways', []),
            'NextToken': response.get('NextToken'),
        }
