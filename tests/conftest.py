import os
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from natgateway.config.schemas import HandlerConfig
from natgateway.infrastructure.aws.aws_client import AWSClient


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')
    for name in list(os.environ):
        if name.startswith('NATGW_') or name in ('AWS_REGION', 'AWS_ENDPOINT_URL', 'AWS_PROFILE'):
            monkeypatch.delenv(name)


@pytest.fixture
def make_client_error():
    """Factory for botocore ClientErrors with a given EC2 error code."""
    def _make(code: str, message: str = "error", operation: str = "DescribeNatGateways") -> ClientError:
        return ClientError(
            {
                'Error': {'Code': code, 'Message': message},
                'ResponseMetadata': {'RequestId': 'req-1', 'HTTPStatusCode': 400},
            },
            operation,
        )
    return _make


@pytest.fixture
def make_nat_record():
    """Factory for DescribeNatGateways records."""
    def _make(nat_gateway_id: str = 'nat-1', state: str = 'available',
              tags: Optional[Dict[str, str]] = None, failure_message: Optional[str] = None,
              **extra: Any) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            'NatGatewayId': nat_gateway_id,
            'SubnetId': 'subnet-1',
            'VpcId': 'vpc-1',
            'State': state,
            'ConnectivityType': 'public',
            'NatGatewayAddresses': [{'AllocationId': 'eipalloc-1', 'PrivateIp': '10.0.0.5',
                                     'PublicIp': '203.0.113.10'}],
            'Tags': [{'Key': k, 'Value': v} for k, v in (tags or {}).items()],
        }
        if failure_message:
            record['FailureMessage'] = failure_message
        record.update(extra)
        return record
    return _make


@pytest.fixture
def ec2():
    """Scripted EC2 client; tests set return values and side effects."""
    return Mock()


@pytest.fixture
def aws_client(ec2):
    """AWSClient wrapping the scripted EC2 client."""
    return AWSClient(region_name='us-east-1', ec2_client=ec2)


@pytest.fixture
def handler_config():
    return HandlerConfig(callback_delay_seconds=5)


def describe_responses(*records: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """DescribeNatGateways responses, one per record; None means an empty result."""
    return [{'NatGateways': [r] if r else []} for r in records]


@pytest.fixture
def describe():
    return describe_responses


@pytest.fixture
def moto_network():
    """Emulated VPC, subnet and Elastic IP allocation."""
    with mock_aws():
        ec2_client = boto3.client('ec2', region_name='us-east-1')

        vpc = ec2_client.create_vpc(CidrBlock='10.0.0.0/16')
        vpc_id = vpc['Vpc']['VpcId']

        subnet = ec2_client.create_subnet(
            VpcId=vpc_id,
            CidrBlock='10.0.0.0/24',
            AvailabilityZone='us-east-1a'
        )
        subnet_id = subnet['Subnet']['SubnetId']

        allocation = ec2_client.allocate_address(Domain='vpc')

        yield {
            'ec2_client': ec2_client,
            'vpc_id': vpc_id,
            'subnet_id': subnet_id,
            'allocation_id': allocation['AllocationId'],
            'aws_client': AWSClient(region_name='us-east-1', ec2_client=ec2_client),
        }
