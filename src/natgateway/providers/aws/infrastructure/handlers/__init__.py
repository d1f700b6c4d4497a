"""NAT gateway lifecycle handlers, one per action."""
from typing import Dict, Optional, Type

from natgateway.config.schemas import HandlerConfig
from natgateway.domain.handler import Action
from natgateway.infrastructure.aws.aws_client import AWSClient

from .base_handler import BaseNatGatewayHandler
from .create_handler import CreateHandler
from .delete_handler import DeleteHandler
from .list_handler import ListHandler
from .read_handler import ReadHandler
from .update_handler import UpdateHandler

HANDLERS: Dict[Action, Type[BaseNatGatewayHandler]] = {
    Action.CREATE: CreateHandler,
    Action.READ: ReadHandler,
    Action.UPDATE: UpdateHandler,
    Action.DELETE: DeleteHandler,
    Action.LIST: ListHandler,
}


def get_handler(action: Action, aws_client: AWSClient,
                handler_config: Optional[HandlerConfig] = None) -> BaseNatGatewayHandler:
    """
    Build the handler for an action.

    Raises:
        ValueError: If no handler is registered for the action
    """
    try:
        handler_class = HANDLERS[Action(action)]
    except (KeyError, ValueError):
        raise ValueError(f"No handler registered for action: {action}")
    return handler_class(aws_client, handler_config)


__all__ = [
    "BaseNatGatewayHandler",
    "CreateHandler",
    "DeleteHandler",
    "HANDLERS",
    "ListHandler",
    "ReadHandler",
    "UpdateHandler",
    "get_handler",
]
