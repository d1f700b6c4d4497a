"""AWS EC2 NAT Gateway Resource Provider - Root Package.

This package reconciles the desired state of an EC2 NAT gateway against its
actual state in the EC2 control plane. Each lifecycle operation (create,
read, update, delete, list) is a handler that issues its API calls, polls
the gateway until it stabilizes and reports progress back to the caller.

Key Components:
    - domain: Resource model, handler request/progress types and exceptions
    - providers: EC2 handlers, error classification and model translation
    - infrastructure: boto3 client management
    - application: Caller-side scheduling loop that drives re-invocations
    - config: Configuration defaults, loading and validation
    - cli: Command-line interface

Usage:
    >>> natgw create --data '{"SubnetId": "subnet-1", "AllocationId": "eipalloc-1"}'
    >>> natgw read --data '{"NatGatewayId": "nat-0123456789abcdef0"}'
"""

__version__ = "0.1.0"
__author__ = "AWS Professional Services"
