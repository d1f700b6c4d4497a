"""AWS provider - EC2 NAT gateway handlers."""
