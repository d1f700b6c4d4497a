"""Progress events returned by every handler invocation."""
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel

from natgateway.domain.handler.value_objects import (
    CallbackContext,
    HandlerErrorCode,
    OperationStatus,
)
from natgateway.domain.nat_gateway.aggregate import ResourceModel

if TYPE_CHECKING:
    from natgateway.domain.core.exceptions import HandlerError


class ProgressEvent(BaseModel):
    """
    Result of one handler invocation.

    Exactly one of three shapes is produced:

    - SUCCESS with ``resource_model`` (absent for delete) or, for list,
      ``resource_models`` and an optional ``next_token``
    - IN_PROGRESS with the ``callback_context`` to resume with and the delay
      the caller should wait before re-invoking
    - FAILED with ``error_code`` and a human-readable ``message``
    """
    status: OperationStatus
    resource_model: Optional[ResourceModel] = None
    resource_models: Optional[List[ResourceModel]] = None
    callback_context: Optional[CallbackContext] = None
    callback_delay_seconds: int = 0
    error_code: Optional[HandlerErrorCode] = None
    message: Optional[str] = None
    next_token: Optional[str] = None

    # Factory methods

    @classmethod
    def success(cls, model: Optional[ResourceModel] = None) -> 'ProgressEvent':
        return cls(status=OperationStatus.SUCCESS, resource_model=model)

    @classmethod
    def success_list(cls, models: List[ResourceModel],
                     next_token: Optional[str] = None) -> 'ProgressEvent':
        return cls(status=OperationStatus.SUCCESS, resource_models=models, next_token=next_token)

    @classmethod
    def in_progress(cls, model: Optional[ResourceModel], context: CallbackContext,
                    delay_seconds: int = 0) -> 'ProgressEvent':
        return cls(
            status=OperationStatus.IN_PROGRESS,
            resource_model=model,
            callback_context=context,
            callback_delay_seconds=delay_seconds,
        )

    @classmethod
    def failed(cls, model: Optional[ResourceModel], error_code: HandlerErrorCode,
               message: str) -> 'ProgressEvent':
        return cls(
            status=OperationStatus.FAILED,
            resource_model=model,
            error_code=error_code,
            message=message,
        )

    @classmethod
    def from_error(cls, model: Optional[ResourceModel], error: 'HandlerError') -> 'ProgressEvent':
        return cls.failed(model, error.error_code, error.message)

    # Status checks

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @property
    def is_in_progress(self) -> bool:
        return self.status == OperationStatus.IN_PROGRESS

    @property
    def is_failed(self) -> bool:
        return self.status == OperationStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for output, using resource property names for models."""
        data: Dict[str, Any] = {'status': self.status.value}
        if self.resource_model is not None:
            data['resourceModel'] = self.resource_model.to_dict()
        if self.resource_models is not None:
            data['resourceModels'] = [m.to_dict() for m in self.resource_models]
        if self.next_token:
            data['nextToken'] = self.next_token
        if self.callback_context is not None:
            data['callbackContext'] = self.callback_context.model_dump(mode='json')
            data['callbackDelaySeconds'] = self.callback_delay_seconds
        if self.error_code is not None:
            data['errorCode'] = self.error_code.value
        if self.message:
            data['message'] = self.message
        return data
