"""Handler contracts - requests, progress events and callback context."""

from .progress import ProgressEvent
from .request import ResourceHandlerRequest
from .value_objects import Action, CallbackContext, HandlerErrorCode, OperationStatus

__all__ = [
    "Action",
    "CallbackContext",
    "HandlerErrorCode",
    "OperationStatus",
    "ProgressEvent",
    "ResourceHandlerRequest",
]
