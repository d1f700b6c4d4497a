"""
Application service - drives a handler to completion.

Handlers perform one bounded step per invocation and hand back a callback
context. This service plays the role of the caller: it re-invokes the
handler with that context after the requested delay, and enforces the
overall stabilization timeout.
"""
import time
from typing import Callable, Optional

import structlog

from natgateway.config.defaults import ConfigurationManager
from natgateway.config.schemas import AppConfig
from natgateway.domain.core.exceptions import NotStabilizedError
from natgateway.domain.handler import Action, ProgressEvent, ResourceHandlerRequest
from natgateway.infrastructure.aws.aws_client import AWSClient
from natgateway.providers.aws.infrastructure.handlers import get_handler


class NatGatewayService:
    """Runs NAT gateway lifecycle actions against EC2."""

    def __init__(self,
                 aws_client: AWSClient,
                 app_config: Optional[AppConfig] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the service.

        Args:
            aws_client: EC2 client wrapper shared by all handlers
            app_config: Typed configuration (defaults if omitted)
            sleep: Function used to wait between invocations
            clock: Monotonic clock used for the stabilization timeout
        """
        self.aws_client = aws_client
        self.app_config = app_config or AppConfig()
        self._sleep = sleep
        self._clock = clock
        self._logger = structlog.get_logger(__name__)

    @classmethod
    def from_config(cls, config_manager: ConfigurationManager) -> 'NatGatewayService':
        """Build the service and its EC2 client from loaded configuration."""
        app_config = config_manager.get_app_config()
        aws_client = AWSClient(region_name=app_config.aws.region,
                               config=app_config.aws.to_client_config())
        return cls(aws_client, app_config)

    def execute(self, action: Action, request: ResourceHandlerRequest, wait: bool = True) -> ProgressEvent:
        """
        Run an action.

        Args:
            action: Lifecycle action to run
            request: Caller request
            wait: Keep re-invoking while the handler reports IN_PROGRESS.
                  When False, the first event is returned as is.

        Returns:
            The final progress event. A wait exceeding the configured
            stabilization timeout yields a FAILED NotStabilized event.
        """
        action = Action(action)
        handler = get_handler(action, self.aws_client, self.app_config.handler)
        log = self._logger.bind(action=action.value,
                                nat_gateway_id=request.desired_resource_state.nat_gateway_id
                                if request.desired_resource_state else None)

        timeout = self.app_config.handler.stabilization_timeout_seconds
        started = self._clock()
        event = handler.handle_request(request)

        while wait and event.is_in_progress:
            context = event.callback_context
            elapsed = self._clock() - started
            if elapsed >= timeout:
                error = NotStabilizedError(context.nat_gateway_id, timeout, context.stabilization_attempts)
                log.error("Stabilization timed out", elapsed_seconds=round(elapsed, 1),
                          attempts=context.stabilization_attempts)
                return ProgressEvent.from_error(event.resource_model, error)

            log.info("Waiting for stabilization", nat_gateway_id=context.nat_gateway_id,
                     attempt=context.stabilization_attempts, delay_seconds=event.callback_delay_seconds,
                     operation_age_seconds=round(context.elapsed_seconds(), 1))
            if event.callback_delay_seconds:
                self._sleep(event.callback_delay_seconds)
            event = handler.handle_request(request, event.callback_context)

        log.info("Action finished", status=event.status.value,
                 error_code=event.error_code.value if event.error_code else None)
        return event
