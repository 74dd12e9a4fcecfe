# =============================================================================
# Lambda Entry Point
# =============================================================================
# Thin adapter between the Lambda runtime and an action function:
# event -> ActionContext -> action -> formatted response.
# =============================================================================

import logging
from functools import wraps
from typing import Any, Callable, Dict
import requests
from action_sdk.client import error_message_from
from action_sdk.responses import prepare_error_response, prepare_success_response
from action_sdk.runtime.context import ActionContext
from action_sdk.runtime.parse_event import initialize

logger = logging.getLogger(__name__)

ActionFunc = Callable[[ActionContext], Any]
LambdaHandler = Callable[[Dict[str, Any], Any], Dict[str, Any]]


def action_handler(func: ActionFunc) -> LambdaHandler:
    """
    Decorator that turns an action function into a Lambda handler.
    
    The wrapped function receives the ActionContext built from the event and
    returns an action response (dataclass or dict). Data service failures
    (requests exceptions) are converted into an error response; any other
    exception propagates to the Lambda runtime.
    
    Usage:
        @action_handler
        def handler(ctx):
            order = get_object(ctx, "order", ctx.param("orderKey"))
            return SingleValueActionResponse(value=order["total"])
    """
    @wraps(func)
    def wrapper(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
        ctx = initialize(event)
        
        try:
            result = func(ctx)
        except requests.RequestException as e:
            logger.exception(f"Action {func.__name__} failed calling the data service: {e}")
            return prepare_error_response(ctx, error_message_from(e))
        
        return prepare_success_response(ctx, result)
    
    return wrapper
