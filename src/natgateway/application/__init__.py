"""Application layer."""
from .service import NatGatewayService

__all__ = ["NatGatewayService"]
